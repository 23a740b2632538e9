"""Results Repository - Downloads raw test results from the summary's resultsUrl."""

from __future__ import annotations

import logging
from typing import Optional

import requests

from core.exceptions import SpeechServiceError

logger = logging.getLogger(__name__)


class ResultsRepository:
    """Repository for fetching test result files over HTTP."""

    def __init__(self, timeout: int = 60, session: Optional[requests.Session] = None) -> None:
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self, url: str) -> bytes:
        """Download the content behind a results URL.

        The URL is only valid while the test exists on the speech service.
        """
        # Results URLs carry a SAS token; log the path only
        safe_url = url.split("?", 1)[0]
        try:
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Results download failed | url={safe_url} | error={e}")
            raise SpeechServiceError(f"Failed to download test results from {safe_url}: {e}") from e

        logger.info(f"Downloaded test results | url={safe_url} | bytes={len(resp.content)}")
        return resp.content
