"""Common exceptions for the backup tool.

All exceptions include structured error information:
- code: Machine-readable error identifier
- message: Human-readable error description
- details: Additional context for debugging/recovery

Usage:
    from cicd_backup.exceptions import (
        BackupToolError,
        ResourceNotFoundError,
        ConfigurationError,
        RegistryError,
    )
"""

from cicd_backup.exceptions.base import (
    ArtifactError,
    BackupToolError,
    ConfigurationError,
    PreconditionError,
    RegistryError,
    ResourceNotFoundError,
)

__all__ = [
    # Base exceptions
    "BackupToolError",
    "ResourceNotFoundError",
    "ConfigurationError",
    "RegistryError",
    "PreconditionError",
    "ArtifactError",
]
