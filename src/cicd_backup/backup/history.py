"""Dated historical copies of backup archives."""

import shutil
from datetime import date
from pathlib import Path
from typing import Callable, Optional

from cicd_backup.backup.exceptions import HistoryCopyError, HistoryDirectoryMissingError
from cicd_backup.backup.types import HistoricalCopyTask
from cicd_backup.logger import Logger, get_logger

DATE_FORMAT = "%Y-%m-%d"


def primary_archive_name(volume_name: str) -> str:
    return f"{volume_name}-backup.zip"


def historical_archive_name(volume_name: str, day: date) -> str:
    return f"{volume_name}-backup-{day.strftime(DATE_FORMAT)}.zip"


class HistoryKeeper:
    """Copies finished archives into the history directory, one file per volume per day.

    A same-day re-run overwrites that day's file.
    """

    def __init__(
        self,
        history_dir: Path,
        today: Callable[[], date] = date.today,
        logger: Optional[Logger] = None,
    ):
        self.history_dir = Path(history_dir)
        self.today = today
        self.logger = logger or get_logger()

    def plan(self, primary_artifact: Path, volume_name: str) -> HistoricalCopyTask:
        destination = self.history_dir / historical_archive_name(volume_name, self.today())
        return HistoricalCopyTask(
            primary_artifact_path=Path(primary_artifact),
            history_destination_path=destination,
        )

    def copy(self, primary_artifact: Path, volume_name: str) -> HistoricalCopyTask:
        """Copy ``primary_artifact`` to its dated name in the history directory

        Raises:
            HistoryDirectoryMissingError: If the history directory doesn't exist
            HistoryCopyError: If the copy fails
        """
        if not self.history_dir.is_dir():
            raise HistoryDirectoryMissingError(self.history_dir)

        task = self.plan(primary_artifact, volume_name)
        self.logger.info(
            f"Copying zip '{task.primary_artifact_path}' to "
            f"'{task.history_destination_path}' for historical purposes..."
        )
        try:
            shutil.copy2(task.primary_artifact_path, task.history_destination_path)
        except OSError as e:
            raise HistoryCopyError(task.primary_artifact_path, task.history_destination_path, e) from e
        return task
