"""Core module - version, exceptions, configuration, logging and locks."""

from pathlocker.core.version import __version__

from pathlocker.core.exceptions import (
    LockerError,
    AlreadyLockedError,
    SerializationError,
    ConfigurationError,
)

from pathlocker.core.config import LockerConfig

from pathlocker.core.constants import (
    DEFAULT_LOCK_MODE,
    DEFAULT_ENCODING,
    LOCK_INFO_VERSION,
    SHUTDOWN_THREAD_PREFIX,
    LOG_FILE_MAX_BYTES,
    LOG_FILE_BACKUP_COUNT,
)

__all__ = [
    # Version
    '__version__',
    # Exceptions
    'LockerError',
    'AlreadyLockedError',
    'SerializationError',
    'ConfigurationError',
    # Config dataclasses
    'LockerConfig',
    # Constants
    'DEFAULT_LOCK_MODE',
    'DEFAULT_ENCODING',
    'LOCK_INFO_VERSION',
    'SHUTDOWN_THREAD_PREFIX',
    'LOG_FILE_MAX_BYTES',
    'LOG_FILE_BACKUP_COUNT',
]
