"""Backup settings loaded from the environment.

Values are read once at startup through EnvLoader (.env file, then OS
environment, then explicit overrides). The resulting BackupSettings is
immutable and is passed explicitly to the selector and the orchestrator.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from cicd_backup.backup.types import BackupJob, ServiceName
from cicd_backup.config.env_loader import EnvLoader
from cicd_backup.exceptions import ConfigurationError
from cicd_backup.logger import LEVELS

# env var -> (field, description); None description marks an optional value
ENV_FIELDS: Dict[str, tuple[str, Optional[str]]] = {
    "CICD_JENKINS_VOLUME": (
        "jenkins_volume",
        'The path to where the Jenkins "jenkins_home" directory resides on the local filesystem.',
    ),
    "CICD_NEXUS_VOLUME": (
        "nexus_volume",
        'The path to where the Nexus "nexus-data" directory resides on the local filesystem.',
    ),
    "BACKUP_DIRECTORY": (
        "backup_directory",
        "The path to where the backup zips should be stored.",
    ),
    "BACKUP_HISTORY_DIRECTORY": ("history_directory", None),
    "LOG_LEVEL": ("log_level", None),
    "CICD_JENKINS_CONTAINER": ("jenkins_container", None),
    "CICD_NEXUS_CONTAINER": ("nexus_container", None),
}


class BackupSettings(BaseModel):
    """Resolved configuration for one backup run."""

    model_config = ConfigDict(frozen=True)

    jenkins_volume: Path = Field(description="Jenkins home directory on the host")
    nexus_volume: Path = Field(description="Nexus data directory on the host")
    backup_directory: Path = Field(description="Directory receiving <volume>-backup.zip files")
    history_directory: Optional[Path] = Field(
        default=None,
        description="Directory receiving dated copies of each backup; unset disables them",
    )
    log_level: str = Field(
        default="info",
        description="The most granular log level to output (all < trace < debug < info < warn < error < fatal < mark < off)",
    )
    jenkins_container: str = Field(default="cicd_jenkins_1")
    nexus_container: str = Field(default="cicd_nexus_1")

    @field_validator("history_directory", mode="before")
    @classmethod
    def blank_history_is_unset(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate against the supported level names"""
        if v.lower() not in LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of: {', '.join(LEVELS)}")
        return v.lower()

    def jobs(self) -> List[BackupJob]:
        """Backup jobs in run order (nexus, then jenkins)."""
        return [
            BackupJob(
                service=ServiceName.NEXUS,
                container_name=self.nexus_container,
                volume_path=self.nexus_volume,
            ),
            BackupJob(
                service=ServiceName.JENKINS,
                container_name=self.jenkins_container,
                volume_path=self.jenkins_volume,
            ),
        ]

    @classmethod
    def from_env(
        cls,
        env_file: Optional[Path | str] = None,
        overrides: Optional[Mapping[str, str]] = None,
    ) -> "BackupSettings":
        """Create settings from .env, environment variables and overrides

        Raises:
            ConfigurationError: If required variables are missing or a value is invalid
        """
        env_data = EnvLoader(env_file).load(overrides)

        missing = {
            name: description
            for name, (_, description) in ENV_FIELDS.items()
            if description is not None and not env_data.get(name, "").strip()
        }
        if missing:
            lines = "\n".join(f"    {name}: {desc}" for name, desc in missing.items())
            raise ConfigurationError(
                "MISSING_ENVIRONMENT",
                f"Missing required environment variables:\n{lines}",
                details={"missing": list(missing)},
            )

        values = {
            field: env_data[name]
            for name, (field, _) in ENV_FIELDS.items()
            if name in env_data
        }
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(
                "INVALID_ENVIRONMENT",
                f"Invalid backup configuration: {e}",
                details={"errors": [err["msg"] for err in e.errors()]},
            ) from e
