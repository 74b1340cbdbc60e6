"""Directory archiving

Streams a directory tree into a maximum-compression zip file, reporting the
cumulative number of source bytes read to a ProgressReporter.
"""

import os
import stat
import sys
import time
import zipfile
from pathlib import Path
from typing import Iterator, Optional, Tuple

from cicd_backup.backup.exceptions import ArchiveIOError, SourceNotFoundError
from cicd_backup.backup.progress import NullProgressReporter, ProgressReporter
from cicd_backup.backup.types import ArchiveTask
from cicd_backup.logger import Logger, get_logger

COMPRESS_LEVEL = 9
CHUNK_SIZE = 64 * 1024


def _raise(error: OSError) -> None:
    raise error


def _zip_date_time(mtime: float) -> Tuple[int, int, int, int, int, int]:
    # zip timestamps start at 1980
    date_time = time.localtime(mtime)[:6]
    if date_time[0] < 1980:
        return (1980, 1, 1, 0, 0, 0)
    return date_time


def directory_size(path: Path) -> int:
    """Sum the sizes of regular files under ``path`` (symlinks not followed).

    Raises:
        OSError: If any part of the tree can't be read
    """
    total = 0
    for root, _dirs, files in os.walk(path, onerror=_raise):
        for name in files:
            st = os.lstat(os.path.join(root, name))
            if stat.S_ISREG(st.st_mode):
                total += st.st_size
    return total


class DirectoryArchiver:
    """Archives directory contents into zip files"""

    def __init__(
        self,
        logger: Optional[Logger] = None,
        compress_level: int = COMPRESS_LEVEL,
        chunk_size: int = CHUNK_SIZE,
    ):
        self.logger = logger or get_logger()
        self.compress_level = compress_level
        self.chunk_size = chunk_size

    def scan_total(self, source_path: Path) -> Optional[int]:
        """Size estimate for progress display; None if the scan fails"""
        try:
            return directory_size(source_path)
        except OSError as e:
            self.logger.warning(
                f"Could not compute size of '{source_path}', progress total unknown: {e}"
            )
            return None

    def archive(
        self,
        source_path: Path,
        output_path: Path,
        reporter: Optional[ProgressReporter] = None,
    ) -> ArchiveTask:
        """Write the contents of ``source_path`` to the zip file ``output_path``

        Entries are relative to ``source_path`` (its own name is not included).
        ``output_path`` is truncated if it exists. On success the archive is
        finalized and closed before this returns.

        Args:
            source_path: Directory to archive
            output_path: Zip file to write
            reporter: Receives cumulative processed-byte counts

        Returns:
            The ArchiveTask that was carried out

        Raises:
            SourceNotFoundError: If source_path is not a readable directory
            ArchiveIOError: If reading or writing fails; output_path is removed
        """
        source = Path(source_path)
        output = Path(output_path)
        if not source.is_dir() or not os.access(source, os.R_OK | os.X_OK):
            raise SourceNotFoundError(source)

        reporter = reporter or NullProgressReporter()
        task = ArchiveTask(source_path=source, output_path=output, total_bytes=self.scan_total(source))
        self.logger.debug(
            f"Zipping directory '{source}' to '{output}'...",
            total_bytes=task.total_bytes,
        )

        reporter.start(task.total_bytes)
        processed = 0
        try:
            with zipfile.ZipFile(
                output,
                "w",
                compression=zipfile.ZIP_DEFLATED,
                compresslevel=self.compress_level,
                strict_timestamps=False,
            ) as zf:
                for path, arcname, st in self._entries(source, output):
                    if stat.S_ISLNK(st.st_mode):
                        self._add_symlink(zf, path, arcname, st)
                    elif stat.S_ISDIR(st.st_mode):
                        zf.write(path, arcname)
                    else:
                        processed = self._add_file(zf, path, arcname, processed, reporter)
        except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile) as e:
            self._discard(output)
            raise ArchiveIOError(source, output, e) from e
        finally:
            reporter.close()

        self.logger.debug(
            f"Archive '{output}' written",
            processed_bytes=processed,
            size_bytes=output.stat().st_size,
        )
        return task

    def _entries(self, source: Path, output: Path) -> Iterator[Tuple[Path, str, os.stat_result]]:
        """Regular files, symlinks and empty directories under source.

        Yields (path, archive name, lstat result). Symlinks are never
        followed; sockets, FIFOs and device files are skipped.
        """
        skip = output.resolve()
        for root, dirs, files in os.walk(source, onerror=_raise):
            dirs.sort()
            root_path = Path(root)
            linked_dirs = [d for d in dirs if (root_path / d).is_symlink()]
            for name in linked_dirs:
                dirs.remove(name)
            if not dirs and not files and not linked_dirs and root_path != source:
                yield root_path, root_path.relative_to(source).as_posix(), os.lstat(root_path)
            for name in sorted(files + linked_dirs):
                path = root_path / name
                st = os.lstat(path)
                if stat.S_ISREG(st.st_mode):
                    if path.resolve() == skip:
                        continue
                elif not stat.S_ISLNK(st.st_mode):
                    self.logger.warning(f"Skipping special file '{path}'")
                    continue
                yield path, path.relative_to(source).as_posix(), st

    def _add_symlink(self, zf: zipfile.ZipFile, path: Path, arcname: str, st: os.stat_result) -> None:
        """Store the link itself; its target may be missing or outside the volume"""
        zinfo = zipfile.ZipInfo(arcname, date_time=_zip_date_time(st.st_mtime))
        zinfo.create_system = 3
        zinfo.external_attr = (stat.S_IFLNK | 0o777) << 16
        zinfo.compress_type = zipfile.ZIP_STORED
        zf.writestr(zinfo, os.readlink(path))

    def _add_file(
        self,
        zf: zipfile.ZipFile,
        path: Path,
        arcname: str,
        processed: int,
        reporter: ProgressReporter,
    ) -> int:
        zinfo = zipfile.ZipInfo.from_file(path, arcname, strict_timestamps=False)
        zinfo.compress_type = zipfile.ZIP_DEFLATED
        # ZipFile.open() only applies the archive-wide level to entries it names itself
        if sys.version_info >= (3, 13):
            zinfo.compress_level = self.compress_level
        else:
            zinfo._compresslevel = self.compress_level
        with open(path, "rb") as src, zf.open(zinfo, "w") as dest:
            for chunk in iter(lambda: src.read(self.chunk_size), b""):
                dest.write(chunk)
                processed += len(chunk)
                reporter.update(processed)
        return processed

    def _discard(self, output: Path) -> None:
        try:
            output.unlink(missing_ok=True)
        except OSError as e:
            self.logger.warning(f"Could not remove partial archive '{output}': {e}")
