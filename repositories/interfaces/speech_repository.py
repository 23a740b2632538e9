"""Speech Repository Interface - Custom Speech management operations."""

from __future__ import annotations
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List

from repositories.models.speech_entities import SpeechDataset, SpeechModel, SpeechTest, TestSummary


class ISpeechRepository(ABC):
    """Interface for Custom Speech dataset, model and test operations.

    Implemented by the Azure Speech CLI wrapper and by the REST client.
    Every blocking operation returns only once the service finished it.
    """

    @abstractmethod
    def configure(self) -> None:
        """Authenticate against the speech service."""
        pass

    @abstractmethod
    def create_dataset(
        self,
        name: str,
        audio_zip: Path,
        transcript: Path,
        locale: str,
    ) -> SpeechDataset:
        """Upload an audio archive and its transcript, waiting for processing.

        The returned id is NOT validated here; callers check it.
        """
        pass

    @abstractmethod
    def delete_dataset(self, dataset_id: str) -> None:
        pass

    @abstractmethod
    def list_models(self) -> List[SpeechModel]:
        """List custom models, oldest first."""
        pass

    @abstractmethod
    def list_baseline_models(self, locale: str) -> List[SpeechModel]:
        """List vendor-provided baseline models for a locale, latest first."""
        pass

    @abstractmethod
    def create_test(
        self,
        name: str,
        dataset_id: str,
        model_id: str,
        language_model_id: str,
    ) -> SpeechTest:
        """Create a test and wait for it to complete."""
        pass

    @abstractmethod
    def show_test(self, test_id: str) -> TestSummary:
        pass

    @abstractmethod
    def delete_test(self, test_id: str) -> None:
        pass

    def get_provider_name(self) -> str:
        """Get name of this speech provider."""
        return "unknown"
