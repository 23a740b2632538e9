"""Repository interfaces for dependency inversion."""

from repositories.interfaces.blob_repository import IBlobRepository
from repositories.interfaces.speech_repository import ISpeechRepository

__all__ = [
    "IBlobRepository",
    "ISpeechRepository",
]
