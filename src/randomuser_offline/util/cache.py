from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
import threading
import time
from typing import Protocol

from randomuser_offline.util.logging import get_logger

LOG = get_logger(__name__)

DEFAULT_DIRECTORY_NAME = "UsersCache"
DEFAULT_MAXIMUM_BYTES = 50 * 1024 * 1024
DEFAULT_MAXIMUM_FILE_COUNT = 300
DEFAULT_TIME_TO_LIVE = 7 * 24 * 60 * 60.0

ENTRY_SUFFIX = ".json"
TEMP_SUFFIX = ".tmp"


class UsersCache(Protocol):
    def write(self, key: str, data: bytes) -> None: ...

    def read(self, key: str) -> bytes | None: ...

    def touch(self, key: str) -> None: ...


@dataclass(frozen=True)
class CacheEntry:
    path: Path
    size: int
    modified_at: float

    @property
    def key(self) -> str:
        return self.path.name[: -len(ENTRY_SUFFIX)]

    def is_expired(self, cutoff: float) -> bool:
        return self.modified_at < cutoff


@dataclass(frozen=True)
class CacheStats:
    entries: int
    total_bytes: int


def default_cache_root() -> Path:
    xdg = os.getenv("XDG_CACHE_HOME")
    if xdg:
        return Path(xdg)
    return Path.home() / ".cache"


class DiskUsersCache:
    """Bounded key -> bytes store, one ``<key>.json`` file per entry.

    File modification time is the recency signal for both LRU eviction and
    TTL expiry. Every public method runs under the instance lock, so a write
    and its two maintenance passes are never interleaved with another call.
    """

    def __init__(
        self,
        directory_name: str = DEFAULT_DIRECTORY_NAME,
        maximum_bytes: int = DEFAULT_MAXIMUM_BYTES,
        maximum_file_count: int = DEFAULT_MAXIMUM_FILE_COUNT,
        time_to_live: float | None = DEFAULT_TIME_TO_LIVE,
        base_dir: Path | None = None,
    ) -> None:
        self.maximum_bytes = maximum_bytes
        self.maximum_file_count = maximum_file_count
        self.time_to_live = time_to_live
        self.directory = (base_dir or default_cache_root()) / directory_name
        self._lock = threading.Lock()
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            LOG.warning("Cache directory setup failed for %s: %s", self.directory, exc)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}{ENTRY_SUFFIX}"

    def write(self, key: str, data: bytes) -> None:
        path = self.path_for(key)
        if path.parent != self.directory:
            LOG.warning("Refusing cache key outside %s: %r", self.directory, key)
            return
        with self._lock:
            self._prune(pending_bytes=len(data))
            tmp = path.with_name(path.name + TEMP_SUFFIX)
            try:
                tmp.write_bytes(data)
                os.replace(tmp, path)
                os.utime(path, None)
            except OSError as exc:
                LOG.warning("Cache write failed for %s: %s", path.name, exc)
                _unlink(tmp)
            self._prune(pending_bytes=0)

    def read(self, key: str) -> bytes | None:
        path = self.path_for(key)
        if path.parent != self.directory:
            return None
        with self._lock:
            try:
                modified_at = path.stat().st_mtime
            except FileNotFoundError:
                return None
            except OSError as exc:
                LOG.warning("Cache stat failed for %s: %s", path.name, exc)
                return None

            cutoff = self._cutoff()
            if cutoff is not None and modified_at < cutoff:
                LOG.debug("Cache entry expired: %s", key)
                _unlink(path)
                return None

            try:
                data = path.read_bytes()
            except OSError as exc:
                LOG.warning("Cache read failed for %s: %s", path.name, exc)
                return None
            self._bump(path)
            return data

    def touch(self, key: str) -> None:
        path = self.path_for(key)
        if path.parent != self.directory:
            return
        with self._lock:
            if path.exists():
                self._bump(path)

    def stats(self) -> CacheStats:
        with self._lock:
            entries = self._entries()
        return CacheStats(entries=len(entries), total_bytes=sum(e.size for e in entries))

    def clear(self) -> int:
        with self._lock:
            entries = self._entries()
            for entry in entries:
                _unlink(entry.path)
        return len(entries)

    def _cutoff(self) -> float | None:
        if self.time_to_live is None:
            return None
        return time.time() - self.time_to_live

    def _entries(self) -> list[CacheEntry]:
        """Entries sorted oldest first; ties keep name order."""
        try:
            paths = sorted(self.directory.iterdir())
        except OSError:
            return []
        entries: list[CacheEntry] = []
        for path in paths:
            if not path.name.endswith(ENTRY_SUFFIX):
                continue
            try:
                st = path.stat()
            except OSError:
                continue
            if not path.is_file():
                continue
            entries.append(CacheEntry(path=path, size=st.st_size, modified_at=st.st_mtime))
        entries.sort(key=lambda e: e.modified_at)
        return entries

    def _prune(self, pending_bytes: int) -> None:
        # Under the lock no write is in flight, so any temp file is a leftover.
        for tmp in self.directory.glob(f"*{ENTRY_SUFFIX}{TEMP_SUFFIX}"):
            LOG.debug("Removing stale temp file: %s", tmp.name)
            _unlink(tmp)

        entries = self._entries()

        cutoff = self._cutoff()
        if cutoff is not None:
            for entry in entries:
                if entry.is_expired(cutoff):
                    LOG.debug("Evicting expired entry: %s", entry.key)
                    _unlink(entry.path)
            entries = self._entries()

        total_bytes = sum(e.size for e in entries)
        while entries and total_bytes + pending_bytes > self.maximum_bytes:
            oldest = entries.pop(0)
            LOG.debug("Evicting %s (size limit)", oldest.key)
            _unlink(oldest.path)
            total_bytes -= oldest.size

        while entries and len(entries) > self.maximum_file_count:
            oldest = entries.pop(0)
            LOG.debug("Evicting %s (count limit)", oldest.key)
            _unlink(oldest.path)

    @staticmethod
    def _bump(path: Path) -> None:
        try:
            os.utime(path, None)
        except OSError as exc:
            LOG.warning("Cache touch failed for %s: %s", path.name, exc)


class InMemoryUsersCache:
    def __init__(self) -> None:
        self._storage: dict[str, bytes] = {}
        self._lock = threading.Lock()

    def write(self, key: str, data: bytes) -> None:
        with self._lock:
            self._storage[key] = bytes(data)

    def read(self, key: str) -> bytes | None:
        with self._lock:
            return self._storage.get(key)

    def touch(self, key: str) -> None:
        return None

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                entries=len(self._storage),
                total_bytes=sum(len(v) for v in self._storage.values()),
            )

    def clear(self) -> int:
        with self._lock:
            count = len(self._storage)
            self._storage.clear()
        return count


def _unlink(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        LOG.warning("Cache delete failed for %s: %s", path.name, exc)
