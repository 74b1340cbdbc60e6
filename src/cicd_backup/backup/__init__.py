"""Backup pipeline for service container volumes.

Usage:
    from cicd_backup.backup import BackupService, RunOptions, select_jobs

    options = RunOptions(backup_directory=Path("/backups"))
    service = BackupService(options)
    service.run(select_jobs(settings.jobs(), ["nexus"]))
"""

from cicd_backup.backup.archive import DirectoryArchiver, directory_size
from cicd_backup.backup.exceptions import (
    AmbiguousContainerError,
    ArchiveIOError,
    HistoryCopyError,
    HistoryDirectoryMissingError,
    JobFailedError,
    RegistryUnavailableError,
    SourceNotFoundError,
    StatePreconditionError,
    UnknownContainerStateError,
    VolumeNotFoundError,
)
from cicd_backup.backup.history import HistoryKeeper, historical_archive_name, primary_archive_name
from cicd_backup.backup.progress import NullProgressReporter, ProgressReporter, TqdmProgressReporter
from cicd_backup.backup.registry import ContainerRegistry, ContainerSummary, DockerContainerRegistry
from cicd_backup.backup.selector import select_jobs
from cicd_backup.backup.service import BackupService, JobResult, RunOptions, RunReport
from cicd_backup.backup.types import (
    REQUIRED_STATE,
    ArchiveTask,
    BackupJob,
    ContainerState,
    HistoricalCopyTask,
    JobStage,
    ServiceName,
)
from cicd_backup.backup.verify import ContainerStateVerifier

__all__ = [
    # Types
    "ServiceName",
    "ContainerState",
    "REQUIRED_STATE",
    "JobStage",
    "BackupJob",
    "ArchiveTask",
    "HistoricalCopyTask",
    # Registry and verification
    "ContainerRegistry",
    "ContainerSummary",
    "DockerContainerRegistry",
    "ContainerStateVerifier",
    # Archiving
    "DirectoryArchiver",
    "directory_size",
    "ProgressReporter",
    "NullProgressReporter",
    "TqdmProgressReporter",
    # History
    "HistoryKeeper",
    "primary_archive_name",
    "historical_archive_name",
    # Orchestration
    "select_jobs",
    "BackupService",
    "RunOptions",
    "JobResult",
    "RunReport",
    # Errors
    "RegistryUnavailableError",
    "AmbiguousContainerError",
    "UnknownContainerStateError",
    "StatePreconditionError",
    "SourceNotFoundError",
    "VolumeNotFoundError",
    "ArchiveIOError",
    "HistoryDirectoryMissingError",
    "HistoryCopyError",
    "JobFailedError",
]
