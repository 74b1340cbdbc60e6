"""Environment loading for the backup tool.

Values are merged in deterministic order (low -> high):
1) .env file (the given path, or ./.env when present)
2) OS environment variables
3) Explicit overrides
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, MutableMapping, Optional

from dotenv import dotenv_values

from cicd_backup.exceptions import ConfigurationError


class EnvLoader:
    """Merges a .env file, the process environment and overrides."""

    def __init__(self, env_file: Optional[Path | str] = None) -> None:
        self.env_file = Path(env_file) if env_file else None

    @property
    def env_path(self) -> Path:
        return self.env_file or Path.cwd() / ".env"

    def load(self, overrides: Optional[Mapping[str, str]] = None) -> MutableMapping[str, str]:
        """Return the merged key/value pairs.

        Raises:
            ConfigurationError: If an explicitly given env file does not exist
        """
        data: MutableMapping[str, str] = {}

        env_path = self.env_path
        if env_path.is_file():
            data.update({k: v for k, v in dotenv_values(env_path).items() if v is not None})
        elif self.env_file is not None:
            raise ConfigurationError(
                "ENV_FILE_NOT_FOUND",
                f"Environment file '{env_path}' does not exist",
                details={"path": str(env_path)},
            )

        data.update(os.environ)

        if overrides:
            data.update({k: str(v) for k, v in overrides.items()})

        return data


__all__ = ["EnvLoader"]
