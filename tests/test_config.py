"""Tests for Config validation."""

import pytest

from app.config import Config, _parse_int_env
from core.exceptions import ConfigurationError


@pytest.fixture
def valid_config(monkeypatch):
    """Patch Config with a complete CLI-backend configuration."""
    values = {
        "AZURE_STORAGE_CONNECTION_STRING": "DefaultEndpointsProtocol=https;AccountName=a;AccountKey=k",
        "STORAGE_ACCOUNT_NAME": "",
        "STORAGE_ACCOUNT_KEY": "",
        "CUSTOM_SPEECH_MODEL_KIND": "Language",
        "SPEECH_BACKEND": "cli",
        "SPEECH_PROJECT_NAME": "proj",
        "SPEECH_SUBSCRIPTION_KEY": "key",
        "SPEECH_RESOURCE_REGION": "westus2",
    }
    for name, value in values.items():
        monkeypatch.setattr(Config, name, value)
    return Config


@pytest.mark.unit
class TestConfigValidate:
    def test_valid(self, valid_config) -> None:
        valid_config.validate()

    def test_account_key_instead_of_connection_string(self, valid_config, monkeypatch) -> None:
        monkeypatch.setattr(Config, "AZURE_STORAGE_CONNECTION_STRING", "")
        monkeypatch.setattr(Config, "STORAGE_ACCOUNT_NAME", "acct")
        monkeypatch.setattr(Config, "STORAGE_ACCOUNT_KEY", "key==")

        valid_config.validate()
        assert valid_config.storage_account_url() == "https://acct.blob.core.windows.net"

    def test_missing_storage_credentials(self, valid_config, monkeypatch) -> None:
        monkeypatch.setattr(Config, "AZURE_STORAGE_CONNECTION_STRING", "")

        with pytest.raises(ConfigurationError, match="STORAGE"):
            valid_config.validate(require_speech=False)

    def test_bootstrap_skips_speech_settings(self, valid_config, monkeypatch) -> None:
        monkeypatch.setattr(Config, "SPEECH_SUBSCRIPTION_KEY", "")

        valid_config.validate(require_speech=False)

    def test_invalid_model_kind(self, valid_config, monkeypatch) -> None:
        monkeypatch.setattr(Config, "CUSTOM_SPEECH_MODEL_KIND", "language")

        with pytest.raises(ConfigurationError, match="CUSTOM_SPEECH_MODEL_KIND"):
            valid_config.validate()

    def test_invalid_backend(self, valid_config, monkeypatch) -> None:
        monkeypatch.setattr(Config, "SPEECH_BACKEND", "grpc")

        with pytest.raises(ConfigurationError, match="SPEECH_BACKEND"):
            valid_config.validate()

    def test_missing_speech_key(self, valid_config, monkeypatch) -> None:
        monkeypatch.setattr(Config, "SPEECH_RESOURCE_REGION", "")

        with pytest.raises(ConfigurationError, match="SPEECH_RESOURCE_REGION"):
            valid_config.validate()

    def test_project_name_only_required_for_cli(self, valid_config, monkeypatch) -> None:
        monkeypatch.setattr(Config, "SPEECH_PROJECT_NAME", "")

        with pytest.raises(ConfigurationError, match="SPEECH_PROJECT_NAME"):
            valid_config.validate()

        monkeypatch.setattr(Config, "SPEECH_BACKEND", "rest")
        valid_config.validate()


@pytest.mark.unit
class TestParseIntEnv:
    @pytest.mark.parametrize(
        "raw, expected",
        [("45", 45), ("SPEECH_HTTP_TIMEOUT=12", 12), ('"7"', 7), ("abc", 30), ("", 30)],
    )
    def test_parse(self, monkeypatch, raw, expected) -> None:
        monkeypatch.setenv("SPEECH_HTTP_TIMEOUT", raw)

        assert _parse_int_env("SPEECH_HTTP_TIMEOUT", 30) == expected

    def test_unset(self, monkeypatch) -> None:
        monkeypatch.delenv("SPEECH_HTTP_TIMEOUT", raising=False)

        assert _parse_int_env("SPEECH_HTTP_TIMEOUT", 30) == 30
