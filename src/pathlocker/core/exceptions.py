"""Custom exceptions for pathlocker.

All exception classes carry a short message plus optional details so callers
get an actionable description of which marker file was involved.

Storage failures are not wrapped: they surface as the ``OSError`` subclass the
filesystem raised (``FileNotFoundError``, ``PermissionError``, ...).
"""


class LockerError(Exception):
    """Base exception for all pathlocker errors."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class AlreadyLockedError(LockerError):
    """Raised by ``Locker.lock`` when the marker file already exists.

    This is the expected signal that someone else holds the lock. Callers
    decide on their own retry or backoff policy.

    Attributes:
        path: Marker path that is already present
    """

    def __init__(self, path: str, details: str | None = None):
        self.path = path
        super().__init__("LockPath is already locked", details or path)


class SerializationError(LockerError, ValueError):
    """Raised when lock content cannot be encoded to or decoded from JSON.

    Examples:
        - Content holds a value JSON cannot represent (a set, an open file)
        - The marker file contains bytes that are not valid JSON

    Attributes:
        path: Marker path being written or read
        operation: "encode" or "decode"
        original_error: The underlying json/codec exception
    """

    def __init__(
        self,
        path: str,
        operation: str,
        original_error: Exception | None = None,
        details: str | None = None,
    ):
        self.path = path
        self.operation = operation
        self.original_error = original_error
        if details is None and original_error is not None:
            details = str(original_error)
        super().__init__(f"Failed to {operation} lock content for '{path}'", details)


class ConfigurationError(LockerError):
    """Exception raised for invalid locker configuration.

    Attributes:
        field: Name of the offending configuration field, if known
    """

    def __init__(self, message: str, field: str | None = None, details: str | None = None):
        self.field = field
        super().__init__(message, details)
