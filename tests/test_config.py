"""Tests for configuration module."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from netlify_ddns.config import Config, load_config, read_environ
from netlify_ddns.errors import ConfigValidationError, DDNSError


class TestConfig:
    """Tests for Config model."""

    def test_default_values(self):
        config = Config(access_token="token", zone="example.com")
        assert config.record == "home"
        assert config.log_level == "INFO"

    @pytest.mark.parametrize(
        ("zone", "record", "zone_id", "hostname"),
        [
            ("example.com", "home", "example_com", "home.example.com"),
            ("example.co.uk", "nas", "example_co_uk", "nas.example.co.uk"),
            ("localhost", "box", "localhost", "box.localhost"),
            ("my.example.com", "a.b", "my_example_com", "a.b.my.example.com"),
        ],
    )
    def test_derived_values(self, zone, record, zone_id, hostname):
        config = Config(access_token="token", zone=zone, record=record)
        assert config.zone_id == zone_id
        assert config.record_hostname == hostname

    def test_frozen(self):
        config = Config(access_token="token", zone="example.com")
        with pytest.raises(ValidationError):
            config.zone = "example.org"

    def test_log_level_normalized(self):
        config = Config(access_token="token", zone="example.com", log_level="debug")
        assert config.log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Config(access_token="token", zone="example.com", log_level="LOUD")


class TestReadEnviron:
    """Tests for read_environ function."""

    def test_reads_prefixed_variables(self):
        data = read_environ(
            {
                "NETLIFY_ACCESSTOKEN": "token",
                "NETLIFY_ZONE": "example.com",
                "NETLIFY_RECORD": "nas",
                "NETLIFY_LOG_LEVEL": "DEBUG",
                "OTHER": "ignored",
            },
        )
        assert data == {
            "access_token": "token",
            "zone": "example.com",
            "record": "nas",
            "log_level": "DEBUG",
        }

    def test_empty_values_skipped(self):
        data = read_environ({"NETLIFY_ACCESSTOKEN": "", "NETLIFY_ZONE": "example.com"})
        assert data == {"zone": "example.com"}

    def test_defaults_to_os_environ(self, monkeypatch):
        monkeypatch.setenv("NETLIFY_ZONE", "example.org")
        assert read_environ()["zone"] == "example.org"


class TestLoadConfig:
    """Tests for load_config function."""

    def test_minimal(self):
        config = load_config(
            {"NETLIFY_ACCESSTOKEN": "token", "NETLIFY_ZONE": "example.com"},
        )
        assert config.access_token == "token"
        assert config.zone_id == "example_com"
        assert config.record_hostname == "home.example.com"

    def test_empty_record_uses_default(self):
        config = load_config(
            {
                "NETLIFY_ACCESSTOKEN": "token",
                "NETLIFY_ZONE": "example.com",
                "NETLIFY_RECORD": "",
            },
        )
        assert config.record == "home"

    def test_missing_token(self):
        with pytest.raises(ConfigValidationError) as exc_info:
            load_config({"NETLIFY_ZONE": "example.com"})
        assert "[NETLIFY_ACCESSTOKEN]" in str(exc_info.value)
        assert "[NETLIFY_ZONE]" not in str(exc_info.value)

    def test_missing_everything(self):
        with pytest.raises(ConfigValidationError) as exc_info:
            load_config({})
        message = str(exc_info.value)
        assert message.startswith("Configuration error:")
        assert "[NETLIFY_ACCESSTOKEN]: Required variable is missing or empty." in message
        assert "[NETLIFY_ZONE]: Required variable is missing or empty." in message

    def test_empty_zone(self):
        with pytest.raises(ConfigValidationError, match="NETLIFY_ZONE"):
            load_config({"NETLIFY_ACCESSTOKEN": "token", "NETLIFY_ZONE": ""})

    def test_invalid_log_level(self):
        with pytest.raises(ConfigValidationError, match="NETLIFY_LOG_LEVEL"):
            load_config(
                {
                    "NETLIFY_ACCESSTOKEN": "token",
                    "NETLIFY_ZONE": "example.com",
                    "NETLIFY_LOG_LEVEL": "LOUD",
                },
            )

    def test_error_is_ddns_error(self):
        with pytest.raises(DDNSError):
            load_config({})
