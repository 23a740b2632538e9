"""Azure repositories - Azure Blob Storage and Azure Speech (CLI and REST)."""

from repositories.azure.blob_repository import AzureBlobRepository
from repositories.azure.speech_cli_repository import SpeechCliRepository
from repositories.azure.speech_repository import AzureSpeechRestRepository

__all__ = [
    "AzureBlobRepository",
    "SpeechCliRepository",
    "AzureSpeechRestRepository",
]
