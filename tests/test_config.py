"""Tests for locker configuration."""

import pytest

from pathlocker import ConfigurationError, LockerConfig
from pathlocker.core.constants import DEFAULT_ENCODING, DEFAULT_LOCK_MODE


class TestLockerConfig:
    """LockerConfig defaults and parsing"""

    def test_defaults(self):
        config = LockerConfig()

        assert config.mode == DEFAULT_LOCK_MODE == 0o744
        assert config.exclusive_create is False
        assert config.encoding == DEFAULT_ENCODING
        assert config.indent is None
        assert config.sort_keys is False

    def test_from_dict_ignores_unknown_keys(self):
        config = LockerConfig.from_dict({"mode": 0o600, "exclusive_create": True, "retries": 5})

        assert config == LockerConfig(mode=0o600, exclusive_create=True)

    def test_to_dict_round_trip(self):
        config = LockerConfig(indent=2, sort_keys=True)
        assert LockerConfig.from_dict(config.to_dict()) == config

    @pytest.mark.parametrize(
        ("data", "field"),
        [
            ({"mode": "0744"}, "mode"),
            ({"mode": True}, "mode"),
            ({"mode": 0o17777}, "mode"),
            ({"mode": -1}, "mode"),
            ({"exclusive_create": "yes"}, "exclusive_create"),
            ({"encoding": 8}, "encoding"),
            ({"encoding": "no-such-codec"}, "encoding"),
            ({"indent": 1.5}, "indent"),
        ],
    )
    def test_from_dict_rejects_bad_values(self, data, field):
        with pytest.raises(ConfigurationError) as exc_info:
            LockerConfig.from_dict(data)

        assert exc_info.value.field == field
        assert f"'{field}'" in str(exc_info.value)

    def test_constructor_rejects_unknown_encoding(self):
        with pytest.raises(ConfigurationError) as exc_info:
            LockerConfig(encoding="no-such-codec")

        assert exc_info.value.field == "encoding"
        assert isinstance(exc_info.value.__cause__, LookupError)

    def test_config_is_immutable(self):
        config = LockerConfig()
        with pytest.raises(AttributeError):
            config.mode = 0o600
