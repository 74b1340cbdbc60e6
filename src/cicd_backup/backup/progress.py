"""Archive progress reporting.

The archiver only reports cumulative byte counts; a ProgressReporter decides
how (and whether) to show them.
"""

import sys
from abc import ABC, abstractmethod
from typing import Optional, TextIO

from tqdm import tqdm


class ProgressReporter(ABC):
    """Receives progress events for one archive operation."""

    @abstractmethod
    def start(self, total: Optional[int]) -> None:
        """Called once before any data is read; total is None when unknown."""
        pass

    @abstractmethod
    def update(self, processed: int) -> None:
        """Called with the cumulative number of source bytes read so far."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Called once when the archive operation ends, successfully or not."""
        pass


class NullProgressReporter(ProgressReporter):
    """Discards all progress events."""

    def start(self, total: Optional[int]) -> None:
        pass

    def update(self, processed: int) -> None:
        pass

    def close(self) -> None:
        pass


class TqdmProgressReporter(ProgressReporter):
    """Renders progress as a byte-scaled tqdm bar with ETA and rate."""

    def __init__(self, description: str = "", stream: Optional[TextIO] = None, disable: Optional[bool] = False):
        self.description = description
        self.stream = stream or sys.stderr
        self.disable = disable
        self._bar: Optional[tqdm] = None
        self._last = 0

    def start(self, total: Optional[int]) -> None:
        self._last = 0
        self._bar = tqdm(
            total=total,
            desc=self.description,
            unit="B",
            unit_scale=True,
            unit_divisor=1024,
            file=self.stream,
            disable=self.disable,
            leave=True,
        )

    def update(self, processed: int) -> None:
        if self._bar is None:
            return
        # tqdm takes increments, events carry running totals
        delta = processed - self._last
        if delta > 0:
            self._bar.update(delta)
            self._last = processed

    def close(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None


__all__ = [
    "ProgressReporter",
    "NullProgressReporter",
    "TqdmProgressReporter",
]
