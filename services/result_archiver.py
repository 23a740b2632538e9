"""Result Archiver - Stores test summaries and raw results in Azure Blob Storage."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from core.exceptions import MalformedOutputError
from repositories.http.results_repository import ResultsRepository
from repositories.interfaces.blob_repository import IBlobRepository
from repositories.interfaces.speech_repository import ISpeechRepository
from repositories.models.speech_entities import TestSummary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArchivedResults:
    summary_blob: str
    results_blob: str
    results_url: str


class ResultArchiver:
    """Archives the summary and raw results of a test.

    Must run before the test is deleted: the summary's ``resultsUrl`` is only
    valid while the test exists.
    """

    def __init__(
        self,
        speech_repo: ISpeechRepository,
        blob_repo: IBlobRepository,
        results_repo: ResultsRepository,
        build_folder: Path,
        container: str = "test-results",
    ) -> None:
        self.speech_repo = speech_repo
        self.blob_repo = blob_repo
        self.results_repo = results_repo
        self.build_folder = Path(build_folder)
        self.container = container

    def archive(self, test_id: str, summary_blob: str, results_blob: str) -> ArchivedResults:
        """Upload the JSON summary, then download and upload the raw results.

        Raises:
            MalformedOutputError: If the summary has no results URL
        """
        self.build_folder.mkdir(parents=True, exist_ok=True)

        summary: TestSummary = self.speech_repo.show_test(test_id)
        summary_path = self.build_folder / summary_blob
        summary_path.write_text(summary.raw_json, encoding="utf-8")
        self.blob_repo.upload_file(self.container, summary_blob, summary_path)
        logger.info(f"Saved test summary | blob={self.container}/{summary_blob} | status={summary.status}")

        results_url = summary.results_url
        if not results_url:
            raise MalformedOutputError(f"Test summary for {test_id} has no resultsUrl")

        results_path = self.build_folder / results_blob
        results_path.write_bytes(self.results_repo.fetch(results_url))
        self.blob_repo.upload_file(self.container, results_blob, results_path)
        logger.info(f"Saved test results | blob={self.container}/{results_blob}")

        return ArchivedResults(
            summary_blob=summary_blob,
            results_blob=results_blob,
            results_url=results_url,
        )
