"""Base exception classes for the CI/CD volume backup tool.

All errors include structured information:
- code: Machine-readable error identifier
- message: Human-readable error description
- details: Additional context (container name, paths, states) for the operator
"""

from typing import Any, Dict, Optional


class BackupToolError(Exception):
    """Base exception for all backup tool errors.

    Attributes:
        code: Machine-readable error code (e.g., "VOLUME_NOT_FOUND")
        message: Human-readable error message
        details: Optional additional context for debugging/recovery
    """

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize error with structured information.

        Args:
            code: Machine-readable error code (e.g., "VOLUME_NOT_FOUND")
            message: Human-readable error message
            details: Optional additional context
        """
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return formatted error string."""
        if self.details:
            return f"{self.code}: {self.message} (details: {self.details})"
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON serialization.

        Returns:
            Dictionary with code, message, and details keys.
        """
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ResourceNotFoundError(BackupToolError):
    """Base for missing filesystem resources.

    Used when a volume, source directory or history directory doesn't exist.
    """

    pass


class ConfigurationError(BackupToolError):
    """Base for configuration and setup errors.

    Used when required environment values are missing or invalid.
    """

    pass


class RegistryError(BackupToolError):
    """Base exception for container registry operations.

    The message parameter can be passed as the first positional argument,
    so `raise RegistryError("message")` works.
    """

    def __init__(
        self, message: str, code: str = "REGISTRY_ERROR", details: Optional[Dict[str, Any]] = None
    ):
        """Initialize registry error.

        Args:
            message: Error message
            code: Error code (default: "REGISTRY_ERROR")
            details: Additional context
        """
        super().__init__(code=code, message=message, details=details)


class PreconditionError(BackupToolError):
    """Base for checks that must hold before a backup may start."""

    pass


class ArtifactError(BackupToolError):
    """Base for failures producing or placing backup archives."""

    pass
