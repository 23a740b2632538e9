"""Repositories - Data access layer."""

# Azure repositories
from repositories.azure import AzureBlobRepository, AzureSpeechRestRepository, SpeechCliRepository

# HTTP repositories
from repositories.http import ResultsRepository

# Interfaces
from repositories.interfaces import IBlobRepository, ISpeechRepository

# Models
from repositories.models import SpeechDataset, SpeechModel, SpeechTest, TestSummary

__all__ = [
    # Azure
    "AzureBlobRepository",
    "AzureSpeechRestRepository",
    "SpeechCliRepository",
    # HTTP
    "ResultsRepository",
    # Interfaces
    "IBlobRepository",
    "ISpeechRepository",
    # Models
    "SpeechDataset",
    "SpeechModel",
    "SpeechTest",
    "TestSummary",
]
