"""Trigger resolution - Derives run identity and mode from the CI trigger."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Optional

from core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

TAG_REF_PREFIX = "refs/tags/"
BASELINE_TAG_PREFIX = "BASELINE"
SHORT_SHA_LENGTH = 7


@dataclass(frozen=True)
class TriggerContext:
    """Identity of one pipeline run.

    All artifact names derive from ``event_id`` and the event names, so they
    are unique per commit (data update) or per tag (baseline test).
    """

    event_id: str
    is_baseline: bool
    hyphen_event_name: str
    underscore_event_name: str

    @property
    def dataset_name(self) -> str:
        return f"audio_trans_test_{self.event_id}"

    @property
    def test_name(self) -> str:
        return f"test_from_{self.underscore_event_name}_{self.event_id}"

    @property
    def summary_blob_name(self) -> str:
        return f"test-summary-from-{self.hyphen_event_name}-{self.event_id}.json"

    @property
    def results_blob_name(self) -> str:
        return f"test-results-from-{self.hyphen_event_name}-{self.event_id}.txt"


def git_short_sha(cwd: Optional[str] = None) -> Optional[str]:
    """Return ``git rev-parse --short HEAD``, or None when git is unavailable."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            capture_output=True,
            text=True,
            cwd=cwd,
        )
    except FileNotFoundError:
        return None
    if result.returncode != 0:
        logger.debug(f"git rev-parse failed | stderr={result.stderr.strip()}")
        return None
    return result.stdout.strip() or None


def tag_name(ref: str) -> str:
    """Strip the ``refs/tags/`` prefix, leaving other refs untouched."""
    return ref[len(TAG_REF_PREFIX):] if ref.startswith(TAG_REF_PREFIX) else ref


def resolve_trigger(ref: str, short_sha: Optional[str] = None, full_sha: str = "") -> TriggerContext:
    """Determine event id and mode from the triggering ref.

    Args:
        ref: Git ref of the trigger (e.g. "refs/tags/BASELINE001", "refs/heads/master")
        short_sha: Short commit hash; looked up with git when None
        full_sha: Full commit hash used when git is unavailable

    Raises:
        ConfigurationError: If a data-update run has no commit hash
    """
    name = tag_name(ref or "")
    if name.startswith(BASELINE_TAG_PREFIX):
        logger.info(f"Workflow triggered by a baseline tag | tag={name}")
        return TriggerContext(
            event_id=name,
            is_baseline=True,
            hyphen_event_name="baseline-tag",
            underscore_event_name="baseline_tag",
        )

    sha = short_sha or git_short_sha() or (full_sha[:SHORT_SHA_LENGTH] if full_sha else None)
    if not sha:
        raise ConfigurationError("Cannot determine the commit hash: git is unavailable and GITHUB_SHA is not set")

    logger.info(f"Workflow triggered by a test data update | commit={sha}")
    return TriggerContext(
        event_id=sha,
        is_baseline=False,
        hyphen_event_name="test-data-update",
        underscore_event_name="test_data_update",
    )
