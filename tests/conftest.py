"""Shared test doubles for the backup pipeline tests."""

from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from cicd_backup.backup import ContainerRegistry, ContainerState, ContainerSummary, ProgressReporter
from cicd_backup.backup.exceptions import RegistryUnavailableError
from cicd_backup.logger import Logger


class RecordingLogger(Logger):
    """Logger that keeps (level, message, kwargs) tuples in memory."""

    def __init__(self):
        self.records: List[tuple] = []

    def _log(self, level: str, message: str, **kwargs: Any) -> None:
        self.records.append((level, message, kwargs))

    def trace(self, message: str, **kwargs: Any) -> None:
        self._log("TRACE", message, **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log("DEBUG", message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log("INFO", message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log("WARNING", message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log("ERROR", message, **kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._log("CRITICAL", message, **kwargs)

    def get_session_id(self) -> str:
        return "test"

    def messages(self, level: Optional[str] = None) -> List[str]:
        return [m for lvl, m, _ in self.records if level is None or lvl == level]


class FakeRegistry(ContainerRegistry):
    """In-memory registry; the name filter is a substring match like docker's."""

    def __init__(self, containers: Optional[Dict[str, ContainerState]] = None, reachable: bool = True):
        self.containers = containers or {}
        self.reachable = reachable
        self.pings = 0
        self.queries: List[str] = []

    def ping(self) -> None:
        self.pings += 1
        if not self.reachable:
            raise RegistryUnavailableError("connection refused")

    def list_containers(self, name: str) -> List[ContainerSummary]:
        self.queries.append(name)
        return [
            ContainerSummary(identifiers=frozenset({f"/{cname}"}), state=state)
            for cname, state in self.containers.items()
            if name in cname
        ]


class RecordingProgress(ProgressReporter):
    """Keeps every progress event."""

    def __init__(self):
        self.total: Optional[int] = None
        self.started = False
        self.closed = False
        self.events: List[int] = []

    def start(self, total: Optional[int]) -> None:
        self.started = True
        self.total = total

    def update(self, processed: int) -> None:
        self.events.append(processed)

    def close(self) -> None:
        self.closed = True


def write_tree(root: Path, files: Dict[str, bytes]) -> Path:
    """Create files (relative posix paths -> content) under root."""
    root.mkdir(parents=True, exist_ok=True)
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    return root


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def volume(tmp_path: Path) -> Path:
    """A small volume directory named like a real Nexus data volume."""
    return write_tree(
        tmp_path / "volumes" / "nexus-data",
        {
            "etc/nexus.properties": b"application-port=8081\n",
            "blobs/default/content/vol-01/chap-02/blob.bytes": b"\x00\x01\x02" * 5000,
            "db/config/0.pcl": b"config" * 100,
        },
    )


@pytest.fixture
def backup_dir(tmp_path: Path) -> Path:
    path = tmp_path / "backups"
    path.mkdir()
    return path
