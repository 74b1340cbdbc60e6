"""Configuration Module for the backup tool

Example:
    from cicd_backup.config import BackupSettings

    settings = BackupSettings.from_env()
    jobs = settings.jobs()
"""

from cicd_backup.config.env_loader import EnvLoader
from cicd_backup.config.settings import ENV_FIELDS, BackupSettings

__all__ = [
    "BackupSettings",
    "ENV_FIELDS",
    "EnvLoader",
]
