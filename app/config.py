"""Application configuration and environment variables."""

from __future__ import annotations

import os
from dotenv import load_dotenv

from core.exceptions import ConfigurationError

# Load environment variables
load_dotenv()


def _parse_int_env(name: str, default: int) -> int:
    """Parse int from env safely, tolerating values like 'NAME=123' or quoted strings.
    Returns default on any parsing issue.
    """
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    # Accept accidental 'KEY=VALUE' format
    if "=" in raw:
        raw = raw.split("=", 1)[1]
    raw = raw.strip().strip("'").strip('"')
    try:
        return int(raw)
    except ValueError:
        return default


MODEL_KINDS = ("Acoustic", "Language")
SPEECH_BACKENDS = ("cli", "rest")


class Config:
    """Application configuration class."""

    # Custom Speech model
    # V2 Custom Speech models are either "Acoustic" or "Language" models.
    CUSTOM_SPEECH_MODEL_KIND: str = os.getenv("CUSTOM_SPEECH_MODEL_KIND", "Language")
    SPEECH_LOCALE: str = os.getenv("SPEECH_LOCALE", "en-us")

    # Testing data
    TEST_TRANS_FILE: str = os.getenv("TEST_TRANS_FILE", "trans.txt")
    TEST_ZIP_SOURCE_PATH: str = os.getenv("TEST_ZIP_SOURCE_PATH", "testing/audio-and-trans.zip")
    TEST_AUDIO_ZIP_FILE: str = os.getenv("TEST_AUDIO_ZIP_FILE", "test-audio.zip")
    TEST_BUILD_FOLDER_PATH: str = os.getenv("TEST_BUILD_FOLDER_PATH", "build-speech-test")

    # Azure Speech Service
    # 'cli' drives the Azure Speech CLI, 'rest' calls the Custom Speech REST API
    SPEECH_BACKEND: str = os.getenv("SPEECH_BACKEND", "cli").lower()
    SPEECH_CLI_PATH: str = os.getenv("SPEECH_CLI_PATH", "speech")
    # Seconds per CLI command; 0 means no timeout
    SPEECH_CLI_TIMEOUT: int = _parse_int_env("SPEECH_CLI_TIMEOUT", 0)
    SPEECH_PROJECT_NAME: str = os.getenv("SPEECH_PROJECT_NAME", "")
    SPEECH_SUBSCRIPTION_KEY: str = os.getenv("SPEECH_SUBSCRIPTION_KEY", "")
    SPEECH_RESOURCE_REGION: str = os.getenv("SPEECH_RESOURCE_REGION", "")
    SPEECH_API_VERSION: str = os.getenv("SPEECH_API_VERSION", "v3.1")
    SPEECH_HTTP_TIMEOUT: int = _parse_int_env("SPEECH_HTTP_TIMEOUT", 30)
    SPEECH_POLL_INTERVAL_SECONDS: int = _parse_int_env("SPEECH_POLL_INTERVAL_SECONDS", 10)
    SPEECH_MAX_WAIT_SECONDS: int = _parse_int_env("SPEECH_MAX_WAIT_SECONDS", 3600)

    # Azure Blob Storage
    # Option 1: connection string
    AZURE_STORAGE_CONNECTION_STRING: str = os.getenv("AZURE_STORAGE_CONNECTION_STRING", "")
    # Option 2: account name + key (used if connection string not provided)
    STORAGE_ACCOUNT_NAME: str = os.getenv("STORAGE_ACCOUNT_NAME", "")
    STORAGE_ACCOUNT_KEY: str = os.getenv("STORAGE_ACCOUNT_KEY", "")
    TEST_RESULTS_CONTAINER: str = os.getenv("TEST_RESULTS_CONTAINER", "test-results")
    CONFIGURATION_CONTAINER: str = os.getenv("CONFIGURATION_CONTAINER", "configuration")
    BENCHMARK_BLOB_NAME: str = os.getenv("BENCHMARK_BLOB_NAME", "benchmark-test.txt")

    # Results download
    RESULTS_HTTP_TIMEOUT: int = _parse_int_env("RESULTS_HTTP_TIMEOUT", 60)

    # Trigger payload (set by the CI runner)
    GITHUB_REF: str = os.getenv("GITHUB_REF", "")
    GITHUB_SHA: str = os.getenv("GITHUB_SHA", "")

    @classmethod
    def storage_account_url(cls) -> str:
        """Blob endpoint for the configured storage account."""
        return f"https://{cls.STORAGE_ACCOUNT_NAME}.blob.core.windows.net"

    @classmethod
    def validate(cls, require_speech: bool = True) -> None:
        """Validate required configuration.

        Storage credentials are always required. Speech credentials are only
        required by the test pipeline, not by the environment bootstrap.
        """
        if not cls.AZURE_STORAGE_CONNECTION_STRING:
            if not cls.STORAGE_ACCOUNT_NAME or not cls.STORAGE_ACCOUNT_KEY:
                raise ConfigurationError(
                    "Missing AZURE_STORAGE_CONNECTION_STRING or "
                    "STORAGE_ACCOUNT_NAME/STORAGE_ACCOUNT_KEY"
                )

        if not require_speech:
            return

        if cls.CUSTOM_SPEECH_MODEL_KIND not in MODEL_KINDS:
            raise ConfigurationError(
                f"CUSTOM_SPEECH_MODEL_KIND must be one of {', '.join(MODEL_KINDS)}, "
                f"got '{cls.CUSTOM_SPEECH_MODEL_KIND}'"
            )
        if cls.SPEECH_BACKEND not in SPEECH_BACKENDS:
            raise ConfigurationError(
                f"SPEECH_BACKEND must be one of {', '.join(SPEECH_BACKENDS)}, "
                f"got '{cls.SPEECH_BACKEND}'"
            )
        if not cls.SPEECH_SUBSCRIPTION_KEY or not cls.SPEECH_RESOURCE_REGION:
            raise ConfigurationError("Missing SPEECH_SUBSCRIPTION_KEY or SPEECH_RESOURCE_REGION")
        # The CLI stores the project name in its local config; REST does not need it
        if cls.SPEECH_BACKEND == "cli" and not cls.SPEECH_PROJECT_NAME:
            raise ConfigurationError("Missing SPEECH_PROJECT_NAME for the speech CLI backend")
