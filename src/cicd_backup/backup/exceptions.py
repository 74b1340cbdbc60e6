"""Backup pipeline exceptions.

Every failure in a job is terminal for that job. Each class fixes its error
code and builds its details from the identifiers the operator needs.

Hierarchy:
    BackupToolError
    ├── RegistryError
    │   ├── RegistryUnavailableError      REGISTRY_UNAVAILABLE
    │   ├── AmbiguousContainerError       AMBIGUOUS_CONTAINER
    │   └── UnknownContainerStateError    UNKNOWN_CONTAINER_STATE
    ├── PreconditionError
    │   └── StatePreconditionError        STATE_PRECONDITION_FAILED
    ├── ResourceNotFoundError
    │   ├── SourceNotFoundError           SOURCE_NOT_FOUND
    │   ├── VolumeNotFoundError           VOLUME_NOT_FOUND
    │   └── HistoryDirectoryMissingError  HISTORY_DIRECTORY_MISSING
    ├── ArtifactError
    │   ├── ArchiveIOError                ARCHIVE_IO_ERROR
    │   └── HistoryCopyError              HISTORY_COPY_FAILED
    └── JobFailedError                    JOB_FAILED
"""

from pathlib import Path
from typing import Iterable, Optional

from cicd_backup.exceptions import (
    ArtifactError,
    BackupToolError,
    PreconditionError,
    RegistryError,
    ResourceNotFoundError,
)


# =============================================================================
# Registry Errors
# =============================================================================


class RegistryUnavailableError(RegistryError):
    """Raised when the container runtime cannot be reached."""

    def __init__(self, cause: object):
        super().__init__(
            "Cannot communicate with docker. Make sure docker daemon is running.",
            code="REGISTRY_UNAVAILABLE",
            details={"cause": str(cause)},
        )


class AmbiguousContainerError(RegistryError):
    """Raised when more than one container carries the requested name."""

    def __init__(self, container_name: str, matches: Iterable[Iterable[str]]):
        self.container_name = container_name
        self.matches = [sorted(names) for names in matches]
        super().__init__(
            f"Found multiple containers with name '{container_name}'",
            code="AMBIGUOUS_CONTAINER",
            details={"container": container_name, "matches": self.matches},
        )


class UnknownContainerStateError(RegistryError):
    """Raised when the registry reports a lifecycle state we do not model."""

    def __init__(self, container_name: str, state: str):
        super().__init__(
            f"Container '{container_name}' reported unknown state '{state}'",
            code="UNKNOWN_CONTAINER_STATE",
            details={"container": container_name, "state": state},
        )


# =============================================================================
# Precondition Errors
# =============================================================================


class StatePreconditionError(PreconditionError):
    """Raised when a container is not in the state required for a backup."""

    def __init__(self, container_name: str, observed: str, required: str):
        self.container_name = container_name
        self.observed = observed
        self.required = required
        super().__init__(
            code="STATE_PRECONDITION_FAILED",
            message=(
                f"Container '{container_name}' state of '{observed}' "
                f"is not in the required state of '{required}'"
            ),
            details={"container": container_name, "observed": observed, "required": required},
        )


# =============================================================================
# Missing Resources
# =============================================================================


class SourceNotFoundError(ResourceNotFoundError):
    """Raised when the directory to archive doesn't exist or can't be read."""

    def __init__(self, path: Path):
        self.path = Path(path)
        super().__init__(
            code="SOURCE_NOT_FOUND",
            message=f"Source path of '{path}' does not exist or is not readable.",
            details={"path": str(path)},
        )


class VolumeNotFoundError(ResourceNotFoundError):
    """Raised when a configured volume path is absent."""

    def __init__(self, path: Path):
        self.path = Path(path)
        super().__init__(
            code="VOLUME_NOT_FOUND",
            message=f"Volume path of '{path}' does not exist.",
            details={"path": str(path)},
        )


class HistoryDirectoryMissingError(ResourceNotFoundError):
    """Raised when the configured history directory is absent."""

    def __init__(self, path: Path):
        self.path = Path(path)
        super().__init__(
            code="HISTORY_DIRECTORY_MISSING",
            message=(
                f"Path '{path}' specified in BACKUP_HISTORY_DIRECTORY does not exist. "
                "Must be a valid directory or unset."
            ),
            details={"path": str(path)},
        )


# =============================================================================
# Artifact Errors
# =============================================================================


class ArchiveIOError(ArtifactError):
    """Raised when reading the source or writing the archive fails."""

    def __init__(self, source: Path, output: Path, cause: BaseException):
        self.cause = cause
        super().__init__(
            code="ARCHIVE_IO_ERROR",
            message=f"Failed to archive '{source}' to '{output}': {cause}",
            details={"source": str(source), "output": str(output), "cause": repr(cause)},
        )


class HistoryCopyError(ArtifactError):
    """Raised when the dated historical copy can't be written."""

    def __init__(self, source: Path, destination: Path, cause: BaseException):
        self.cause = cause
        super().__init__(
            code="HISTORY_COPY_FAILED",
            message=f"Failed to copy '{source}' to '{destination}': {cause}",
            details={"source": str(source), "destination": str(destination), "cause": repr(cause)},
        )


# =============================================================================
# Job Errors
# =============================================================================


class JobFailedError(BackupToolError):
    """Raised when a backup job stops at any stage.

    The stage error is kept as ``error`` and chained as ``__cause__``.
    """

    def __init__(self, service: str, stage: str, error: BackupToolError, container: Optional[str] = None):
        self.service = service
        self.stage = stage
        self.error = error
        super().__init__(
            code="JOB_FAILED",
            message=f"Backup of service '{service}' failed while {stage}: {error.message}",
            details={
                "service": service,
                "container": container,
                "stage": stage,
                "error": error.to_dict(),
            },
        )


__all__ = [
    "RegistryUnavailableError",
    "AmbiguousContainerError",
    "UnknownContainerStateError",
    "StatePreconditionError",
    "SourceNotFoundError",
    "VolumeNotFoundError",
    "HistoryDirectoryMissingError",
    "ArchiveIOError",
    "HistoryCopyError",
    "JobFailedError",
]
