"""CI/CD Backup - point-in-time backups of service container volumes.

This package provides:
- backup: container state check, volume archiving, history copies, orchestration
- config: typed settings loaded from the environment and .env files
- logger: leveled logging with session tracking and JSON support
- exceptions: common exception classes with structured error info
"""

__version__ = "1.0.0"

from cicd_backup.exceptions import (
    ArtifactError,
    BackupToolError,
    ConfigurationError,
    PreconditionError,
    RegistryError,
    ResourceNotFoundError,
)

from cicd_backup.logger import (
    Logger,
    StructuredLogger,
    create_logger,
    get_logger,
)

from cicd_backup.config import BackupSettings

from cicd_backup.backup import (
    BackupJob,
    BackupService,
    ContainerState,
    RunOptions,
    ServiceName,
    select_jobs,
)

__all__ = [
    "__version__",
    # Logger
    "Logger",
    "StructuredLogger",
    "get_logger",
    "create_logger",
    # Config
    "BackupSettings",
    # Backup
    "BackupJob",
    "BackupService",
    "ContainerState",
    "RunOptions",
    "ServiceName",
    "select_jobs",
    # Exceptions
    "BackupToolError",
    "ResourceNotFoundError",
    "ConfigurationError",
    "RegistryError",
    "PreconditionError",
    "ArtifactError",
]
