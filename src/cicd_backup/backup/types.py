"""Value types for the backup pipeline."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class ServiceName(str, Enum):
    """Services whose volumes can be backed up."""

    JENKINS = "jenkins"
    NEXUS = "nexus"


class ContainerState(str, Enum):
    """Container lifecycle phase as reported by the runtime at query time."""

    CREATED = "created"
    RUNNING = "running"
    PAUSED = "paused"
    RESTARTING = "restarting"
    REMOVING = "removing"
    EXITED = "exited"
    DEAD = "dead"


# The volume is only safe to read once nothing can write to it.
REQUIRED_STATE = ContainerState.EXITED


class JobStage(str, Enum):
    """Where a backup job is (or stopped) in its run."""

    PENDING = "pending"
    VERIFYING = "verifying"
    CHECKING_VOLUME = "checking volume"
    ARCHIVING = "archiving"
    COPYING_HISTORY = "copying history"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class BackupJob:
    """One service volume to back up."""

    service: ServiceName
    container_name: str
    volume_path: Path

    @property
    def volume_name(self) -> str:
        return self.volume_path.name


@dataclass(frozen=True)
class ArchiveTask:
    """An archive operation.

    total_bytes is the pre-scan estimate used for progress only; None when
    the scan failed.
    """

    source_path: Path
    output_path: Path
    total_bytes: Optional[int] = None


@dataclass(frozen=True)
class HistoricalCopyTask:
    """Dated copy of a finished primary archive."""

    primary_artifact_path: Path
    history_destination_path: Path
