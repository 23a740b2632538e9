"""Tests for BootstrapService."""

import pytest

from services.bootstrap_service import BootstrapService


@pytest.mark.unit
class TestBootstrapService:
    """Test cases for container bootstrap."""

    def test_creates_missing_containers(self, blob_repo) -> None:
        created = BootstrapService(blob_repo).ensure_containers()

        assert created == ["test-results", "configuration"]
        assert blob_repo.calls == [
            ("create_container", "test-results", None),
            ("create_container", "configuration", "blob"),
        ]

    def test_is_idempotent(self, blob_repo) -> None:
        service = BootstrapService(blob_repo)
        service.ensure_containers()

        assert service.ensure_containers() == []
        assert len(blob_repo.calls) == 2

    def test_creates_only_missing_container(self, blob_repo) -> None:
        blob_repo.create_container("test-results")
        blob_repo.calls.clear()

        created = BootstrapService(blob_repo).ensure_containers()

        assert created == ["configuration"]

    def test_custom_container_names(self, blob_repo) -> None:
        created = BootstrapService(
            blob_repo, results_container="results", configuration_container="config"
        ).ensure_containers()

        assert created == ["results", "config"]
