"""Tests for AzureBlobRepository."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from azure.core.exceptions import AzureError, ResourceExistsError, ResourceNotFoundError

from core.exceptions import BlobStorageError
from repositories.azure.blob_repository import AzureBlobRepository


@pytest.fixture
def service_client() -> MagicMock:
    return MagicMock()


@pytest.fixture
def repo(service_client) -> AzureBlobRepository:
    return AzureBlobRepository(service_client)


@pytest.mark.unit
class TestAzureBlobRepository:
    """Test cases for AzureBlobRepository."""

    def test_from_connection_string(self) -> None:
        with patch("repositories.azure.blob_repository.BlobServiceClient") as mock_cls:
            repo = AzureBlobRepository.from_connection_string("UseDevelopmentStorage=true")

        mock_cls.from_connection_string.assert_called_once_with("UseDevelopmentStorage=true")
        assert repo.blob_service_client is mock_cls.from_connection_string.return_value

    def test_invalid_connection_string(self) -> None:
        with patch("repositories.azure.blob_repository.BlobServiceClient") as mock_cls:
            mock_cls.from_connection_string.side_effect = ValueError("Connection string is either blank or malformed.")
            with pytest.raises(BlobStorageError, match="malformed"):
                AzureBlobRepository.from_connection_string("garbage")

    def test_from_account_key(self) -> None:
        with patch("repositories.azure.blob_repository.BlobServiceClient") as mock_cls:
            AzureBlobRepository.from_account_key("https://acct.blob.core.windows.net", "key==")

        mock_cls.assert_called_once_with(account_url="https://acct.blob.core.windows.net", credential="key==")

    def test_container_exists(self, repo, service_client) -> None:
        service_client.get_container_client.return_value.exists.return_value = True

        assert repo.container_exists("test-results") is True
        service_client.get_container_client.assert_called_with("test-results")

    def test_create_container_with_public_access(self, repo, service_client) -> None:
        repo.create_container("configuration", public_access="blob")

        service_client.create_container.assert_called_once_with("configuration", public_access="blob")

    def test_create_container_already_exists(self, repo, service_client) -> None:
        service_client.create_container.side_effect = ResourceExistsError("exists")

        repo.create_container("test-results")

    def test_create_container_error(self, repo, service_client) -> None:
        service_client.create_container.side_effect = AzureError("forbidden")

        with pytest.raises(BlobStorageError, match="test-results"):
            repo.create_container("test-results")

    def test_upload_file_sets_content_type(self, repo, service_client, tmp_path: Path) -> None:
        path = tmp_path / "summary.json"
        path.write_text("{}", encoding="utf-8")
        blob_client = service_client.get_blob_client.return_value
        blob_client.url = "https://acct.blob.core.windows.net/test-results/summary.json"

        url = repo.upload_file("test-results", "summary.json", path)

        assert url == blob_client.url
        service_client.get_blob_client.assert_called_with(container="test-results", blob="summary.json")
        kwargs = blob_client.upload_blob.call_args.kwargs
        assert kwargs["overwrite"] is True
        assert kwargs["content_settings"].content_type == "application/json"

    def test_upload_file_error(self, repo, service_client, tmp_path: Path) -> None:
        path = tmp_path / "results.txt"
        path.write_text("x", encoding="utf-8")
        service_client.get_blob_client.return_value.upload_blob.side_effect = AzureError("boom")

        with pytest.raises(BlobStorageError):
            repo.upload_file("test-results", "results.txt", path)

    def test_upload_text_encodes_utf8(self, repo, service_client) -> None:
        blob_client = service_client.get_blob_client.return_value

        repo.upload_text("configuration", "benchmark-test.txt", "summary.json\n")

        assert blob_client.upload_blob.call_args.args[0] == b"summary.json\n"
        assert blob_client.upload_blob.call_args.kwargs["content_settings"].content_type == "text/plain"

    def test_download_text(self, repo, service_client) -> None:
        blob_client = service_client.get_blob_client.return_value
        blob_client.download_blob.return_value.readall.return_value = b"summary.json\n"

        assert repo.download_text("configuration", "benchmark-test.txt") == "summary.json\n"

    def test_download_missing_blob(self, repo, service_client) -> None:
        service_client.get_blob_client.return_value.download_blob.side_effect = ResourceNotFoundError("nope")

        assert repo.download_text("configuration", "benchmark-test.txt") is None

    def test_blob_exists_error(self, repo, service_client) -> None:
        service_client.get_blob_client.return_value.exists.side_effect = AzureError("down")

        with pytest.raises(BlobStorageError):
            repo.blob_exists("configuration", "benchmark-test.txt")
