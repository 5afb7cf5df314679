"""Configuration dataclasses for pathlocker.

These dataclasses centralize the knobs a ``Locker`` honours so they can be
built in code, loaded from a mapping, or swapped out in tests.
"""

from __future__ import annotations

import codecs
from dataclasses import asdict, dataclass, fields
from typing import Any

from pathlocker.core.constants import DEFAULT_ENCODING, DEFAULT_LOCK_MODE
from pathlocker.core.exceptions import ConfigurationError


@dataclass(frozen=True)
class LockerConfig:
    """Configuration for marker creation and content encoding.

    Attributes:
        mode: Permission bits for a newly created marker (default: 0o744)
        exclusive_create: Claim with an atomic create-if-absent instead of
            check-then-create (default: False)
        encoding: Text encoding of the JSON payload (default: "utf-8")
        indent: ``json.dumps`` indent, None for compact output
        sort_keys: Sort object keys when encoding (default: False)
    """

    mode: int = DEFAULT_LOCK_MODE
    exclusive_create: bool = False
    encoding: str = DEFAULT_ENCODING
    indent: int | None = None
    sort_keys: bool = False

    def __post_init__(self) -> None:
        try:
            codecs.lookup(self.encoding)
        except (LookupError, TypeError) as e:
            raise ConfigurationError("Invalid value for 'encoding'", field="encoding", details=str(e)) from e

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LockerConfig:
        """Create configuration from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}

        expected_types: dict[str, tuple[type, ...]] = {
            "mode": (int,),
            "exclusive_create": (bool,),
            "encoding": (str,),
            "indent": (int, type(None)),
            "sort_keys": (bool,),
        }
        for name, value in values.items():
            allowed = expected_types[name]
            # bool is an int subclass; reject it for numeric fields
            if isinstance(value, bool) and bool not in allowed:
                raise ConfigurationError(f"Invalid value for '{name}'", field=name, details=repr(value))
            if not isinstance(value, allowed):
                raise ConfigurationError(f"Invalid value for '{name}'", field=name, details=repr(value))

        mode = values.get("mode")
        if mode is not None and not 0 <= mode <= 0o7777:
            raise ConfigurationError("Invalid value for 'mode'", field="mode", details=oct(mode))

        return cls(**values)
