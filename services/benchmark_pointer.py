"""Benchmark Pointer - Tracks which test summary is the current benchmark."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from repositories.interfaces.blob_repository import IBlobRepository

logger = logging.getLogger(__name__)


def should_update_pointer(is_baseline: bool, pointer_exists: bool, initial_model_exists: bool) -> bool:
    """Decide whether this run becomes the new benchmark.

    Only a baseline test run while both a pointer and a custom model already
    exist leaves the pointer untouched.
    """
    return not is_baseline or not pointer_exists or not initial_model_exists


class BenchmarkPointer:
    """The ``configuration/benchmark-test.txt`` blob naming the benchmark summary."""

    def __init__(
        self,
        blob_repo: IBlobRepository,
        container: str = "configuration",
        blob_name: str = "benchmark-test.txt",
        build_folder: Optional[Path] = None,
    ) -> None:
        self.blob_repo = blob_repo
        self.container = container
        self.blob_name = blob_name
        self.build_folder = Path(build_folder) if build_folder else None

    def exists(self) -> bool:
        return self.blob_repo.blob_exists(self.container, self.blob_name)

    def read(self) -> Optional[str]:
        """Current benchmark summary blob name, or None if no pointer is stored."""
        content = self.blob_repo.download_text(self.container, self.blob_name)
        if content is None:
            return None
        return content.strip() or None

    def write(self, summary_blob: str) -> None:
        content = f"{summary_blob}\n"
        if self.build_folder is not None:
            self.build_folder.mkdir(parents=True, exist_ok=True)
            (self.build_folder / self.blob_name).write_text(content, encoding="utf-8")
        self.blob_repo.upload_text(self.container, self.blob_name, content)
        logger.info(f"Updated benchmark pointer | blob={self.container}/{self.blob_name} | value={summary_blob}")

    def update_if_needed(self, summary_blob: str, is_baseline: bool, initial_model_exists: bool) -> bool:
        """Write the pointer when this run should become the benchmark. Returns True if written."""
        pointer_exists = self.exists()
        if not should_update_pointer(is_baseline, pointer_exists, initial_model_exists):
            logger.info(
                f"Benchmark pointer unchanged | is_baseline={is_baseline} | "
                f"pointer_exists={pointer_exists} | initial_model_exists={initial_model_exists}"
            )
            return False
        self.write(summary_blob)
        return True
