"""Blob Repository Interface."""

from __future__ import annotations
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional


class IBlobRepository(ABC):
    """Interface for blob container and blob operations."""

    @abstractmethod
    def container_exists(self, container: str) -> bool:
        pass

    @abstractmethod
    def create_container(self, container: str, public_access: Optional[str] = None) -> None:
        """Create a container.

        Args:
            container: Container name (lowercase)
            public_access: None for private, "blob" for anonymous blob reads
        """
        pass

    @abstractmethod
    def blob_exists(self, container: str, blob_name: str) -> bool:
        pass

    @abstractmethod
    def upload_file(self, container: str, blob_name: str, file_path: Path) -> str:
        """Upload a local file, overwriting any existing blob. Returns the blob URL."""
        pass

    @abstractmethod
    def upload_text(self, container: str, blob_name: str, text: str) -> str:
        """Upload text content, overwriting any existing blob. Returns the blob URL."""
        pass

    @abstractmethod
    def download_text(self, container: str, blob_name: str) -> Optional[str]:
        """Download blob content as text, or None if the blob does not exist."""
        pass
