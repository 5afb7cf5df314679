"""Marker-file lock handle.

A ``Locker`` binds a filesystem, a marker path and a content value. Lock state
is never cached: the marker's presence on the filesystem is the lock.
"""

from __future__ import annotations

import atexit
import inspect
import logging
import os
import threading
from collections.abc import Callable
from typing import IO, Any, Protocol, TypeVar

from pathlocker.core.config import LockerConfig
from pathlocker.core.constants import SHUTDOWN_THREAD_PREFIX
from pathlocker.core.exceptions import AlreadyLockedError
from pathlocker.core.locks.content import decode_content, encode_content
from pathlocker.core.locks.filesystems import Filesystem, OsFilesystem, StrPath
from pathlocker.core.logging import bind_lock_path

T = TypeVar("T")


class CancellationSignal(Protocol):
    """Anything whose ``wait()`` blocks until cancellation, e.g. ``threading.Event``."""

    def wait(self) -> Any: ...


class ShutdownWatcher:
    """Background thread that unlocks once its cancellation signal fires.

    The unlock outcome is never raised. A failure is logged and kept on
    ``error`` for callers that want to inspect it.
    """

    def __init__(self, locker: Locker, signal: CancellationSignal):
        wait = getattr(signal, "wait", None)
        if not callable(wait):
            raise TypeError(f"cancellation signal must provide wait(), got {type(signal).__name__}")
        # A coroutine wait() returns immediately when called from a thread
        if inspect.iscoroutinefunction(wait):
            raise TypeError(
                f"cancellation signal {type(signal).__name__} has an async wait(); use a threading.Event"
            )
        self.locker = locker
        self.signal = signal
        self.error: BaseException | None = None
        self._thread = threading.Thread(
            target=self._run,
            daemon=True,
            name=f"{SHUTDOWN_THREAD_PREFIX}-{os.path.basename(locker.path)}",
        )

    def start(self) -> ShutdownWatcher:
        self._thread.start()
        return self

    @property
    def done(self) -> bool:
        return self._thread.ident is not None and not self._thread.is_alive()

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the watcher to finish; returns whether it has."""
        self._thread.join(timeout)
        return self.done

    def _run(self) -> None:
        self.signal.wait()
        try:
            self.locker.unlock()
        except Exception as e:
            self.error = e
            self.locker.logger.warning("Shutdown unlock failed for %s: %s", self.locker.path, e)


class Locker:
    """Advisory lock backed by the existence of a marker file.

    Args:
        path: Marker file location
        content: Value serialized into the marker on every ``lock()``
        fs: Filesystem to operate on (default: the host filesystem)
        config: Marker mode and encoding options
        logger: Logger to report through (default: this module's logger)
    """

    def __init__(
        self,
        path: StrPath,
        content: Any,
        *,
        fs: Filesystem | None = None,
        config: LockerConfig | None = None,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ):
        self.fs: Filesystem = fs if fs is not None else OsFilesystem()
        self.path = os.fspath(path)
        self.content = content
        self.config = config or LockerConfig()
        self.logger = bind_lock_path(logger or logging.getLogger(__name__), self.path)
        self._exit_hook_registered = False

    @classmethod
    def with_filesystem(cls, fs: Filesystem, path: StrPath, content: Any, **kwargs: Any) -> Locker:
        return cls(path, content, fs=fs, **kwargs)

    def exists(self) -> bool:
        """Report whether the marker is present.

        Only a definite "not found" counts as absent. Any other stat failure,
        including a path the filesystem rejects outright, is reported as present.
        """
        try:
            self.fs.stat(self.path)
        except FileNotFoundError:
            return False
        except (OSError, ValueError) as e:
            self.logger.debug("Stat failed for %s, treating as locked: %s", self.path, e)
        return True

    is_locked = exists

    def lock(self) -> None:
        """Claim the marker, writing the JSON-encoded content into it.

        Raises:
            AlreadyLockedError: The marker already exists.
            SerializationError: Content cannot be encoded; the created marker
                is left behind empty.
            OSError: Creating or writing the marker failed.
        """
        if self.exists():
            raise AlreadyLockedError(self.path)

        marker = self._open_marker()
        with marker:
            marker.write(encode_content(self.content, self.config, self.path))
        self.logger.debug("Locked %s", self.path)

    def _open_marker(self) -> IO[bytes]:
        if not self.config.exclusive_create:
            # Check-then-create: another claimant can slip in between stat and open
            return self.fs.open_write(self.path, self.config.mode)
        try:
            return self.fs.create_exclusive(self.path, self.config.mode)
        except FileExistsError as e:
            raise AlreadyLockedError(self.path, details=f"{self.path} created concurrently") from e

    def unlock(self) -> None:
        """Remove the marker. Unlocking an absent marker is a no-op."""
        try:
            self.fs.remove(self.path)
        except FileNotFoundError:
            self.logger.debug("Unlock of %s: marker already absent", self.path)
            return
        self.logger.debug("Unlocked %s", self.path)

    def read(self, factory: Callable[[Any], T] | None = None) -> Any:
        """Return the decoded content of the marker.

        Args:
            factory: Optional converter applied to the decoded JSON value,
                e.g. ``LockInfo.from_dict`` or a dataclass constructor.

        Raises:
            FileNotFoundError: No marker exists.
            SerializationError: The marker is not valid JSON or factory rejected it.
            OSError: Opening or reading the marker failed.
        """
        with self.fs.open_read(self.path) as marker:
            data = marker.read()
        return decode_content(data, self.config, self.path, factory)

    def shutdown_context(self, signal: CancellationSignal) -> ShutdownWatcher:
        """Unlock in the background once signal fires.

        Returns immediately. Each call starts its own watcher thread.
        """
        return ShutdownWatcher(self, signal).start()

    def release_at_exit(self) -> None:
        """Unlock when the interpreter exits normally. Registers at most once."""
        if self._exit_hook_registered:
            return
        atexit.register(self._release_quietly)
        self._exit_hook_registered = True

    def _release_quietly(self) -> None:
        try:
            self.unlock()
        except Exception as e:
            self.logger.warning("Exit unlock failed for %s: %s", self.path, e)

    def __enter__(self) -> Locker:
        self.lock()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unlock()

    def __repr__(self) -> str:
        return f"Locker(path={self.path!r}, fs={type(self.fs).__name__})"
