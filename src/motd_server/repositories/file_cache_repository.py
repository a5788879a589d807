"""Filesystem implementation of cache entry storage.

Entries live as flat files directly under the cache directory. Writes are
staged in a hidden subdirectory, fsynced and renamed into place, so a
reader listing the directory only ever sees complete entries. Listing
ignores subdirectories, which keeps the staging area invisible.

All methods here block; CacheService runs them in a worker thread.
"""

import logging
import os
import secrets
from pathlib import Path

from motd_server.entities import CacheEntryEntity, TrimResult
from motd_server.exceptions import EmptyCacheError, StorageError

logger = logging.getLogger(__name__)

STAGING_DIR_NAME = ".incoming"


class FileCacheRepository:
    """Flat-directory store of rendered cache entries.

    Cache structure:
    cache_dir/
    ├── .incoming/                      (staging, never listed)
    ├── 1718000000000000000_aHR0cHM6...
    └── ...
    """

    def __init__(self, cache_dir: str | Path) -> None:
        """Initialize the repository, creating the directory if needed.

        Args:
            cache_dir: Directory holding the cache entries.

        Raises:
            StorageError: If the directory cannot be created
        """
        self._cache_dir = Path(cache_dir)
        self._staging_dir = self._cache_dir / STAGING_DIR_NAME

        try:
            self._staging_dir.mkdir(mode=0o700, parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(
                "failed to create cache directory",
                {"stage": "mkdir", "path": str(self._cache_dir), "error": str(e)},
            ) from e

        logger.info("cache directory: %s", self._cache_dir)

    @classmethod
    def create(cls, cache_dir: str | Path) -> "FileCacheRepository":
        """Factory method to create a FileCacheRepository.

        Args:
            cache_dir: Directory holding the cache entries.

        Returns:
            Configured FileCacheRepository
        """
        return cls(cache_dir=cache_dir)

    def store(self, entry: CacheEntryEntity) -> Path:
        """Write one entry and make it visible atomically.

        Args:
            entry: The entry to persist

        Returns:
            Path of the new cache file

        Raises:
            StorageError: With ``stage`` set to create, write, sync or rename
        """
        target = self._cache_dir / entry.filename
        staging = self._staging_dir / entry.filename

        try:
            exists = target.exists()
            if not exists:
                f = open(staging, "x", encoding="utf-8", newline="")
        except OSError as e:
            raise StorageError(
                "failed to create cache file", {"stage": "create", "path": str(staging), "error": str(e)}
            ) from e
        if exists:
            raise StorageError("cache file already exists", {"stage": "create", "path": str(target)})

        stage = "write"
        try:
            with f:
                f.write(entry.render())
                f.flush()
                stage = "sync"
                os.fsync(f.fileno())
            stage = "rename"
            os.replace(staging, target)
        except OSError as e:
            self._discard(staging)
            raise StorageError(
                f"failed to {stage} cache file", {"stage": stage, "path": str(target), "error": str(e)}
            ) from e

        logger.debug("stored cache file %s (%d bytes)", target.name, len(entry.payload))
        return target

    def _discard(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("failed to remove staging file %s: %s", path, e)

    def list_entries(self) -> list[Path]:
        """List regular files directly under the cache directory.

        Raises:
            StorageError: If the directory cannot be read
        """
        try:
            with os.scandir(self._cache_dir) as it:
                return [Path(e.path) for e in it if e.is_file()]
        except OSError as e:
            raise StorageError(
                "failed to list cache directory",
                {"stage": "list", "path": str(self._cache_dir), "error": str(e)},
            ) from e

    def read_random(self) -> bytes:
        """Read one uniformly chosen entry.

        The index comes from the OS entropy source, so concurrent requests
        do not correlate with each other or with wall-clock time.

        Returns:
            Full contents of the chosen file

        Raises:
            EmptyCacheError: If there are no entries
            StorageError: If listing fails or the file vanished before reading
        """
        files = self.list_entries()
        if not files:
            raise EmptyCacheError("no cached files found", {"path": str(self._cache_dir)})

        chosen = files[secrets.randbelow(len(files))]
        try:
            return chosen.read_bytes()
        except OSError as e:
            raise StorageError(
                "failed to read cached file", {"stage": "read", "path": str(chosen), "error": str(e)}
            ) from e

    def trim(self, max_files: int) -> TrimResult:
        """Delete the oldest entries beyond ``max_files``.

        Entries are ordered by modification time, oldest first, with the
        filename as tie-break. Deletion is best effort: a file that cannot
        be removed is logged and recorded, and the sweep carries on.

        Args:
            max_files: Retention ceiling

        Returns:
            TrimResult describing the pass

        Raises:
            ValueError: If max_files is not positive
            StorageError: If the directory cannot be listed
        """
        if max_files <= 0:
            raise ValueError("max_files must be a positive integer")

        files = self.list_entries()
        if len(files) < max_files:
            return TrimResult(total=len(files))

        dated: list[tuple[int, str, Path]] = []
        for path in files:
            try:
                dated.append((path.stat().st_mtime_ns, path.name, path))
            except FileNotFoundError:
                # Removed by someone else since listing
                continue
        dated.sort()

        removed: list[Path] = []
        failed: list[Path] = []
        for _, _, path in dated[: max(len(dated) - max_files, 0)]:
            try:
                os.remove(path)
                removed.append(path)
            except OSError as e:
                logger.error("failed to remove old cache file %s: %s", path, e)
                failed.append(path)

        if removed:
            logger.info("trimmed %d cache file(s), %d remaining", len(removed), len(dated) - len(removed))

        return TrimResult(total=len(dated), removed=removed, failed=failed)

    def get_stats(self) -> dict:
        """Get repository statistics.

        Returns:
            Dictionary with entry count and size on disk
        """
        total_bytes = 0
        files = self.list_entries()
        for path in files:
            try:
                total_bytes += path.stat().st_size
            except FileNotFoundError:
                continue

        return {
            "cache_dir": str(self._cache_dir),
            "total_entries": len(files),
            "total_bytes": total_bytes,
        }

    @property
    def cache_dir(self) -> Path:
        """Get the cache directory."""
        return self._cache_dir
