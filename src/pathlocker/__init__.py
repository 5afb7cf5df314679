"""
pathlocker - advisory locks backed by marker files

A process claims a resource by creating a marker file at an agreed path and
releases it by deleting that file. Cooperating callers on the same host use
the same path to serialize their work.
"""

from pathlocker.core import (
    AlreadyLockedError,
    ConfigurationError,
    LockerConfig,
    LockerError,
    SerializationError,
    __version__,
)
from pathlocker.core.locks import (
    CancellationSignal,
    Filesystem,
    LockInfo,
    Locker,
    MemoryFilesystem,
    OsFilesystem,
    ShutdownWatcher,
)
from pathlocker.core.logging import setup_logging

__all__ = [
    "__version__",
    "AlreadyLockedError",
    "CancellationSignal",
    "ConfigurationError",
    "Filesystem",
    "LockInfo",
    "Locker",
    "LockerConfig",
    "LockerError",
    "MemoryFilesystem",
    "OsFilesystem",
    "SerializationError",
    "ShutdownWatcher",
    "setup_logging",
]
