"""Constants and default values for pathlocker.

This module centralizes the defaults used when a marker file is created,
encoded and watched.
"""

# ==================== MARKER FILE DEFAULTS ====================

# Owner rwx, group/other r-x
DEFAULT_LOCK_MODE: int = 0o744
DEFAULT_ENCODING: str = "utf-8"

# Version stamped into LockInfo records
LOCK_INFO_VERSION: int = 1

# ==================== WATCHER DEFAULTS ====================

# Name prefix for shutdown watcher threads
SHUTDOWN_THREAD_PREFIX: str = "pathlocker-shutdown"

# ==================== LOGGING DEFAULTS ====================

LOG_FILE_MAX_BYTES: int = 10 * 1024 * 1024  # 10MB max per log file
LOG_FILE_BACKUP_COUNT: int = 5  # Number of backup log files to keep
LOG_TEXT_FORMAT: str = "%(asctime)s - %(levelname)s - %(message)s"
VALID_LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
