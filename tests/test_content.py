"""Tests for lock content encoding and LockInfo records."""

import json
import os
import socket
from dataclasses import dataclass

import pytest

from pathlocker import LockerConfig, LockInfo, SerializationError
from pathlocker.core.locks.content import decode_content, encode_content


@dataclass
class _Job:
    name: str
    shards: list


class _Ticket:
    def __init__(self, number: int):
        self.number = number

    def to_dict(self) -> dict:
        return {"number": self.number}


class TestEncodeContent:
    """Serializing content into marker bytes"""

    def test_scalar_is_compact_json(self):
        assert encode_content(1, LockerConfig(), "/lock") == b"1"

    def test_config_controls_layout(self):
        config = LockerConfig(indent=2, sort_keys=True)
        payload = encode_content({"b": 1, "a": 2}, config, "/lock")
        assert payload == b'{\n  "a": 2,\n  "b": 1\n}'

    def test_dataclasses_and_to_dict_objects(self):
        payload = encode_content({"job": _Job("sync", [1, 2]), "ticket": _Ticket(7)}, LockerConfig(), "/lock")
        assert json.loads(payload) == {"job": {"name": "sync", "shards": [1, 2]}, "ticket": {"number": 7}}

    def test_non_ascii_respects_encoding(self):
        payload = encode_content("verrou é", LockerConfig(encoding="utf-8"), "/lock")
        assert json.loads(payload.decode("utf-8")) == "verrou é"

    def test_unsupported_type_raises(self):
        with pytest.raises(SerializationError) as exc_info:
            encode_content(object(), LockerConfig(), "/lock")

        error = exc_info.value
        assert error.path == "/lock"
        assert error.operation == "encode"
        assert isinstance(error.original_error, TypeError)
        assert str(error).startswith("Failed to encode lock content for '/lock'")

    def test_circular_content_raises(self):
        content: list = []
        content.append(content)
        with pytest.raises(SerializationError):
            encode_content(content, LockerConfig(), "/lock")


    def test_non_text_codec_raises(self):
        # rot13 is a registered codec but str.encode refuses it
        with pytest.raises(SerializationError) as exc_info:
            encode_content("x", LockerConfig(encoding="rot13"), "/lock")
        assert isinstance(exc_info.value.original_error, LookupError)


class TestDecodeContent:
    """Turning marker bytes back into values"""

    def test_decode_plain(self):
        assert decode_content(b'{"a": [1, 2]}', LockerConfig(), "/lock") == {"a": [1, 2]}

    def test_decode_with_factory(self):
        assert decode_content(b'{"number": 3}', LockerConfig(), "/lock", lambda d: d["number"]) == 3

    def test_invalid_encoding_raises(self):
        with pytest.raises(SerializationError) as exc_info:
            decode_content(b"\xff\xfe", LockerConfig(), "/lock")
        assert exc_info.value.operation == "decode"

    def test_non_text_codec_raises(self):
        with pytest.raises(SerializationError) as exc_info:
            decode_content(b"1", LockerConfig(encoding="rot13"), "/lock")
        assert exc_info.value.operation == "decode"
        assert isinstance(exc_info.value.original_error, LookupError)

    def test_factory_key_error_raises(self):
        with pytest.raises(SerializationError):
            decode_content(b"{}", LockerConfig(), "/lock", lambda d: d["missing"])


class TestLockInfo:
    """LockInfo records"""

    def test_current_describes_process(self):
        info = LockInfo.current(owner="backup")

        assert info.pid == os.getpid()
        assert info.host == socket.gethostname()
        assert info.owner == "backup"
        assert info.version == 1
        assert "T" in info.started_at

    def test_from_dict_fills_defaults(self):
        info = LockInfo.from_dict({"pid": "42", "host": "box", "started_at": "2026-01-01T00:00:00+00:00"})

        assert info == LockInfo(pid=42, host="box", owner="", started_at="2026-01-01T00:00:00+00:00")

    @pytest.mark.parametrize(
        "data",
        [None, 1, [], {"host": "box"}, {"pid": "not-a-number", "host": "box", "started_at": "x"}],
    )
    def test_from_dict_rejects_malformed(self, data):
        assert LockInfo.from_dict(data) is None

    def test_to_dict_round_trip(self):
        info = LockInfo.current()
        assert LockInfo.from_dict(info.to_dict()) == info
