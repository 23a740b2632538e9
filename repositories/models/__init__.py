"""Repository models - Data classes for speech service entities."""

from repositories.models.speech_entities import (
    SpeechDataset,
    SpeechModel,
    SpeechTest,
    TestSummary,
)

__all__ = [
    "SpeechDataset",
    "SpeechModel",
    "SpeechTest",
    "TestSummary",
]
