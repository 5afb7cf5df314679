"""Filesystem implementations a ``Locker`` can be bound to.

Design principles:
- The filesystem owns every atomicity guarantee; lockers add no mutex.
- "Not found" is always reported as ``FileNotFoundError`` so callers can tell
  absence apart from other storage failures.
- Files are opened in binary mode; encoding is the caller's concern.
"""

from __future__ import annotations

import errno
import io
import os
import stat
import threading
from dataclasses import dataclass
from typing import IO, Protocol

StrPath = str | os.PathLike


def _not_found(path: str) -> FileNotFoundError:
    return FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)


def _already_exists(path: str) -> FileExistsError:
    return FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), path)


class Filesystem(Protocol):
    """Capability set consumed by ``Locker``."""

    def stat(self, path: StrPath) -> os.stat_result:
        """Return metadata for path. Raises FileNotFoundError when absent."""

    def open_write(self, path: StrPath, mode: int) -> IO[bytes]:
        """Create or open path for read/write without truncating it."""

    def create_exclusive(self, path: StrPath, mode: int) -> IO[bytes]:
        """Create path atomically. Raises FileExistsError when present."""

    def open_read(self, path: StrPath) -> IO[bytes]:
        """Open path for reading. Raises FileNotFoundError when absent."""

    def remove(self, path: StrPath) -> None:
        """Delete path. Raises FileNotFoundError when absent."""


class OsFilesystem:
    """The host operating system's filesystem."""

    def stat(self, path: StrPath) -> os.stat_result:
        return os.stat(path)

    def open_write(self, path: StrPath, mode: int) -> IO[bytes]:
        return self._open_fd(path, os.O_RDWR | os.O_CREAT, mode)

    def create_exclusive(self, path: StrPath, mode: int) -> IO[bytes]:
        return self._open_fd(path, os.O_RDWR | os.O_CREAT | os.O_EXCL, mode)

    def open_read(self, path: StrPath) -> IO[bytes]:
        return open(path, "rb")

    def remove(self, path: StrPath) -> None:
        os.remove(path)

    @staticmethod
    def _open_fd(path: StrPath, flags: int, mode: int) -> IO[bytes]:
        fd = os.open(path, flags, mode)
        try:
            # fdopen on an existing descriptor never truncates
            return os.fdopen(fd, "wb")
        except Exception:
            os.close(fd)
            raise

    def __repr__(self) -> str:
        return "OsFilesystem()"


@dataclass
class _MemoryEntry:
    data: bytes
    mode: int


class _MemoryWriter(io.BytesIO):
    """Writable buffer that publishes its contents back to the filesystem on flush."""

    def __init__(self, fs: MemoryFilesystem, key: str, initial: bytes):
        super().__init__(initial)
        self._fs = fs
        self._key = key

    def flush(self) -> None:
        super().flush()
        if not self.closed:
            self._fs._commit(self._key, self.getvalue())

    def close(self) -> None:
        if not self.closed:
            self.flush()
        super().close()


class MemoryFilesystem:
    """Thread-safe in-memory filesystem for tests and ephemeral locks.

    Paths are plain keys: there are no directories, so any path can be
    created without its parents existing.
    """

    def __init__(self) -> None:
        self._entries: dict[str, _MemoryEntry] = {}
        self._lock = threading.RLock()

    @staticmethod
    def _key(path: StrPath) -> str:
        return os.fspath(path)

    def stat(self, path: StrPath) -> os.stat_result:
        key = self._key(path)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                raise _not_found(key)
            return os.stat_result((stat.S_IFREG | entry.mode, 0, 0, 1, 0, 0, len(entry.data), 0, 0, 0))

    def open_write(self, path: StrPath, mode: int) -> IO[bytes]:
        key = self._key(path)
        with self._lock:
            entry = self._entries.setdefault(key, _MemoryEntry(data=b"", mode=mode))
            return _MemoryWriter(self, key, entry.data)

    def create_exclusive(self, path: StrPath, mode: int) -> IO[bytes]:
        key = self._key(path)
        with self._lock:
            if key in self._entries:
                raise _already_exists(key)
            self._entries[key] = _MemoryEntry(data=b"", mode=mode)
            return _MemoryWriter(self, key, b"")

    def open_read(self, path: StrPath) -> IO[bytes]:
        key = self._key(path)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                raise _not_found(key)
            return io.BytesIO(entry.data)

    def remove(self, path: StrPath) -> None:
        key = self._key(path)
        with self._lock:
            if self._entries.pop(key, None) is None:
                raise _not_found(key)

    def _commit(self, key: str, data: bytes) -> None:
        with self._lock:
            entry = self._entries.get(key)
            # Writes to a removed file are lost, as with an unlinked descriptor
            if entry is not None:
                entry.data = data

    # Helpers for fixtures and diagnostics

    def exists(self, path: StrPath) -> bool:
        with self._lock:
            return self._key(path) in self._entries

    def read_bytes(self, path: StrPath) -> bytes:
        with self.open_read(path) as f:
            return f.read()

    def write_bytes(self, path: StrPath, data: bytes, mode: int = 0o644) -> None:
        with self._lock:
            self._entries[self._key(path)] = _MemoryEntry(data=bytes(data), mode=mode)

    def __repr__(self) -> str:
        with self._lock:
            return f"MemoryFilesystem(files={len(self._entries)})"
