"""Backup Service Orchestrator

Runs backup jobs one after another. Each job moves through
verifying -> checking volume -> archiving -> (copying history) -> done,
and stops at the first failing stage.
"""

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from cicd_backup.backup.archive import DirectoryArchiver
from cicd_backup.backup.exceptions import JobFailedError, VolumeNotFoundError
from cicd_backup.backup.history import HistoryKeeper, primary_archive_name
from cicd_backup.backup.progress import NullProgressReporter, ProgressReporter
from cicd_backup.backup.registry import DockerContainerRegistry
from cicd_backup.backup.types import REQUIRED_STATE, BackupJob, JobStage
from cicd_backup.backup.verify import ContainerStateVerifier
from cicd_backup.exceptions import BackupToolError
from cicd_backup.logger import Logger, get_logger


@dataclass(frozen=True)
class RunOptions:
    """Per-run settings shared by every job"""

    backup_directory: Path
    history_directory: Optional[Path] = None
    skip_docker_check: bool = False
    keep_going: bool = False


@dataclass
class JobResult:
    """Outcome of one job"""

    job: BackupJob
    stage: JobStage = JobStage.PENDING
    archive_path: Optional[Path] = None
    history_path: Optional[Path] = None
    failed_stage: Optional[JobStage] = None
    error: Optional[BackupToolError] = None

    @property
    def succeeded(self) -> bool:
        return self.stage is JobStage.DONE


@dataclass
class RunReport:
    """Outcome of every job attempted in a run"""

    results: List[JobResult] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return all(r.succeeded for r in self.results)

    @property
    def failures(self) -> List[JobResult]:
        return [r for r in self.results if not r.succeeded]


class BackupService:
    """Main backup orchestrator"""

    def __init__(
        self,
        options: RunOptions,
        verifier: Optional[ContainerStateVerifier] = None,
        archiver: Optional[DirectoryArchiver] = None,
        progress_factory: Optional[Callable[[BackupJob], ProgressReporter]] = None,
        today: Callable[[], date] = date.today,
        logger: Optional[Logger] = None,
    ):
        self.options = options
        self.logger = logger or get_logger()
        self.verifier = verifier or ContainerStateVerifier(DockerContainerRegistry, logger=self.logger)
        self.archiver = archiver or DirectoryArchiver(logger=self.logger)
        self.progress_factory = progress_factory or (lambda job: NullProgressReporter())
        self.history = (
            HistoryKeeper(options.history_directory, today=today, logger=self.logger)
            if options.history_directory
            else None
        )

    def run_job(self, job: BackupJob) -> JobResult:
        """Back up one service volume

        Returns:
            The JobResult, with stage DONE

        Raises:
            JobFailedError: wrapping the error of the stage that failed
        """
        result = self._execute(job)
        if not result.succeeded:
            raise self._job_error(job, result.failed_stage, result.error) from result.error
        return result

    def run(self, jobs: Sequence[BackupJob]) -> RunReport:
        """Run jobs in order

        By default the first failure stops the run and is raised. With
        ``keep_going`` every job is attempted and failures are only reported.

        Raises:
            JobFailedError: On the first failure, unless keep_going is set
        """
        report = RunReport()
        for job in jobs:
            result = self._execute(job)
            report.results.append(result)
            if not result.succeeded and not self.options.keep_going:
                raise self._job_error(job, result.failed_stage, result.error) from result.error

        if report.failures:
            self.logger.error(
                f"{len(report.failures)} of {len(report.results)} backup(s) failed: "
                f"{[r.job.service.value for r in report.failures]}"
            )
        else:
            self.logger.info(f"Completed {len(report.results)} backup(s)")
        return report

    def _execute(self, job: BackupJob) -> JobResult:
        result = JobResult(job=job)
        self.logger.info(
            f"Backing up container '{job.container_name}' with volume '{job.volume_path}' "
            f"to '{self.options.backup_directory}'...",
            service=job.service.value,
        )
        try:
            result.stage = JobStage.VERIFYING
            self.verifier.verify(job.container_name, REQUIRED_STATE, self.options.skip_docker_check)

            result.stage = JobStage.CHECKING_VOLUME
            if not job.volume_path.exists():
                raise VolumeNotFoundError(job.volume_path)

            result.stage = JobStage.ARCHIVING
            backup_path = self.options.backup_directory / primary_archive_name(job.volume_name)
            self.archiver.archive(job.volume_path, backup_path, self.progress_factory(job))
            result.archive_path = backup_path

            if self.history is not None:
                result.stage = JobStage.COPYING_HISTORY
                copy = self.history.copy(backup_path, job.volume_name)
                result.history_path = copy.history_destination_path
            else:
                self.logger.debug(
                    "Skipping copy of historical zip due to absence of "
                    "BACKUP_HISTORY_DIRECTORY environment variable."
                )
        except BackupToolError as e:
            result.failed_stage = result.stage
            result.stage = JobStage.FAILED
            result.error = e
            self.logger.error(
                f"Backup of '{job.service.value}' failed while {result.failed_stage.value}: {e}",
                service=job.service.value,
                code=e.code,
            )
            return result

        result.stage = JobStage.DONE
        self.logger.info(f"Backup of '{job.service.value}' complete: {result.archive_path}")
        return result

    @staticmethod
    def _job_error(job: BackupJob, failed_stage: JobStage, error: BackupToolError) -> JobFailedError:
        return JobFailedError(
            job.service.value,
            failed_stage.value,
            error,
            container=job.container_name,
        )
