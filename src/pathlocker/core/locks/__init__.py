"""Marker-file locking.

The lock handle lives in ``locker``; the storage it talks to is abstracted
behind the ``Filesystem`` protocol so tests can run fully in memory.
"""

from pathlocker.core.locks.content import LockInfo
from pathlocker.core.locks.filesystems import Filesystem, MemoryFilesystem, OsFilesystem
from pathlocker.core.locks.locker import CancellationSignal, Locker, ShutdownWatcher

__all__ = [
    "CancellationSignal",
    "Filesystem",
    "LockInfo",
    "Locker",
    "MemoryFilesystem",
    "OsFilesystem",
    "ShutdownWatcher",
]
