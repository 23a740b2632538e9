"""Dependencies - Builds repositories and services from Config."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from app.config import Config
from repositories.azure import AzureBlobRepository, AzureSpeechRestRepository, SpeechCliRepository
from repositories.http import ResultsRepository
from repositories.interfaces import IBlobRepository, ISpeechRepository
from services.benchmark_pointer import BenchmarkPointer
from services.bootstrap_service import BootstrapService
from services.dataset_uploader import DatasetUploader
from services.model_resolver import ModelResolver
from services.result_archiver import ResultArchiver
from services.test_pipeline_service import TestPipelineService
from services.test_runner import TestRunner

logger = logging.getLogger(__name__)


@lru_cache()
def get_blob_repository() -> IBlobRepository:
    """Get Azure Blob repository instance."""
    if Config.AZURE_STORAGE_CONNECTION_STRING:
        return AzureBlobRepository.from_connection_string(Config.AZURE_STORAGE_CONNECTION_STRING)
    return AzureBlobRepository.from_account_key(Config.storage_account_url(), Config.STORAGE_ACCOUNT_KEY)


@lru_cache()
def get_speech_repository() -> ISpeechRepository:
    """Get the speech repository for the configured backend."""
    if Config.SPEECH_BACKEND == "rest":
        repo: ISpeechRepository = AzureSpeechRestRepository(
            subscription_key=Config.SPEECH_SUBSCRIPTION_KEY,
            region=Config.SPEECH_RESOURCE_REGION,
            locale=Config.SPEECH_LOCALE,
            api_version=Config.SPEECH_API_VERSION,
            timeout=Config.SPEECH_HTTP_TIMEOUT,
            poll_interval=Config.SPEECH_POLL_INTERVAL_SECONDS,
            max_wait=Config.SPEECH_MAX_WAIT_SECONDS,
        )
    else:
        repo = SpeechCliRepository(
            project_name=Config.SPEECH_PROJECT_NAME,
            subscription_key=Config.SPEECH_SUBSCRIPTION_KEY,
            region=Config.SPEECH_RESOURCE_REGION,
            executable=Config.SPEECH_CLI_PATH,
            timeout=Config.SPEECH_CLI_TIMEOUT or None,
        )
    logger.info(f"Using speech backend: {repo.get_provider_name()}")
    return repo


def get_bootstrap_service() -> BootstrapService:
    return BootstrapService(
        blob_repo=get_blob_repository(),
        results_container=Config.TEST_RESULTS_CONTAINER,
        configuration_container=Config.CONFIGURATION_CONTAINER,
    )


def get_test_pipeline_service() -> TestPipelineService:
    """Wire the test pipeline from configuration."""
    build_folder = Path(Config.TEST_BUILD_FOLDER_PATH)
    speech_repo = get_speech_repository()
    blob_repo = get_blob_repository()
    return TestPipelineService(
        speech_repo=speech_repo,
        uploader=DatasetUploader(
            speech_repo,
            build_folder=build_folder,
            transcript_file=Config.TEST_TRANS_FILE,
            audio_zip_file=Config.TEST_AUDIO_ZIP_FILE,
            locale=Config.SPEECH_LOCALE,
        ),
        resolver=ModelResolver(
            speech_repo,
            model_kind=Config.CUSTOM_SPEECH_MODEL_KIND,
            locale=Config.SPEECH_LOCALE,
        ),
        runner=TestRunner(speech_repo),
        archiver=ResultArchiver(
            speech_repo,
            blob_repo,
            ResultsRepository(timeout=Config.RESULTS_HTTP_TIMEOUT),
            build_folder=build_folder,
            container=Config.TEST_RESULTS_CONTAINER,
        ),
        pointer=BenchmarkPointer(
            blob_repo,
            container=Config.CONFIGURATION_CONTAINER,
            blob_name=Config.BENCHMARK_BLOB_NAME,
            build_folder=build_folder,
        ),
    )
