"""JSON encoding of lock content.

Content is whatever the caller handed to ``Locker``: JSON scalars and
containers, dataclass instances, or objects exposing ``to_dict()``.
"""

from __future__ import annotations

import dataclasses
import json
import os
import socket
from collections.abc import Callable
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from typing import Any, TypeVar

from pathlocker.core.config import LockerConfig
from pathlocker.core.constants import LOCK_INFO_VERSION
from pathlocker.core.exceptions import SerializationError

T = TypeVar("T")


def _json_default(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_content(content: Any, config: LockerConfig, path: str) -> bytes:
    """Serialize content to the bytes stored in the marker file."""
    try:
        text = json.dumps(
            content,
            default=_json_default,
            allow_nan=False,
            indent=config.indent,
            sort_keys=config.sort_keys,
        )
        return text.encode(config.encoding)
    except (TypeError, ValueError, RecursionError, LookupError) as e:
        raise SerializationError(path, "encode", original_error=e) from e


def decode_content(
    data: bytes,
    config: LockerConfig,
    path: str,
    factory: Callable[[Any], T] | None = None,
) -> Any:
    """Decode marker bytes, optionally converting the result with factory."""
    try:
        value = json.loads(data.decode(config.encoding))
    except (ValueError, LookupError) as e:
        raise SerializationError(path, "decode", original_error=e) from e

    if factory is None:
        return value
    try:
        return factory(value)
    except (TypeError, ValueError, KeyError) as e:
        raise SerializationError(path, "decode", original_error=e) from e


def _utcnow_iso() -> str:
    return datetime.now(UTC).isoformat()


@dataclass(frozen=True)
class LockInfo:
    """Serializable description of the process holding a lock."""

    pid: int
    host: str
    owner: str
    started_at: str
    version: int = LOCK_INFO_VERSION

    @classmethod
    def current(cls, owner: str = "") -> LockInfo:
        """Describe the running process."""
        return cls(
            pid=os.getpid(),
            host=socket.gethostname(),
            owner=owner,
            started_at=_utcnow_iso(),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Any) -> LockInfo | None:
        if not isinstance(data, dict):
            return None
        try:
            return cls(
                pid=int(data["pid"]),
                host=str(data["host"]),
                owner=str(data.get("owner", "")),
                started_at=str(data["started_at"]),
                version=int(data.get("version", LOCK_INFO_VERSION)),
            )
        except (KeyError, TypeError, ValueError):
            return None
