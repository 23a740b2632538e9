"""Model Resolver - Picks the benchmark model, falling back to the latest baseline model."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from core.exceptions import BaselineModelError
from core.guid import is_valid_guid
from repositories.interfaces.speech_repository import ISpeechRepository

logger = logging.getLogger(__name__)

BASELINE_FAILED_MESSAGE = "Failed to get the latest baseline model. Possibly re-run all jobs."


@dataclass(frozen=True)
class ModelResolution:
    """Outcome of model resolution.

    ``is_baseline_test`` is True when a baseline model was tested, either
    because the trigger asked for it or because no benchmark model exists.
    """

    model_id: str
    is_baseline_test: bool
    initial_model_exists: bool


class ModelResolver:
    """Two-phase resolution: benchmark model first, baseline model as fallback."""

    def __init__(self, speech_repo: ISpeechRepository, model_kind: str, locale: str) -> None:
        self.speech_repo = speech_repo
        self.model_kind = model_kind
        self.locale = locale

    def find_benchmark_model(self) -> Optional[str]:
        """Phase 1: id of the most recent custom model of the configured kind, if valid."""
        models = [m for m in self.speech_repo.list_models() if m.matches_kind(self.model_kind)]
        if not models:
            return None
        candidate = models[-1].id
        return candidate if is_valid_guid(candidate) else None

    def find_baseline_model(self) -> str:
        """Phase 2: id of the latest baseline model for the locale.

        Raises:
            BaselineModelError: If no valid baseline model is listed
        """
        models = self.speech_repo.list_baseline_models(self.locale)
        candidate = models[0].id if models else ""
        if not is_valid_guid(candidate):
            logger.error(f"Invalid baseline model id | locale={self.locale} | id={candidate!r}")
            raise BaselineModelError(BASELINE_FAILED_MESSAGE)
        return candidate

    def resolve(self, baseline_requested: bool) -> ModelResolution:
        """Resolve the model to test.

        An explicit baseline request, or the absence of any benchmark model,
        always wins over reusing a previous benchmark.
        """
        benchmark_id = self.find_benchmark_model()
        initial_model_exists = benchmark_id is not None
        if initial_model_exists:
            logger.info(
                f"Benchmark model found | kind={self.model_kind} | id={benchmark_id} | "
                f"used={not baseline_requested}"
            )
        else:
            logger.info(f"No existing {self.model_kind} model, testing the latest baseline model")

        if initial_model_exists and not baseline_requested:
            return ModelResolution(
                model_id=benchmark_id,
                is_baseline_test=False,
                initial_model_exists=True,
            )

        baseline_id = self.find_baseline_model()
        logger.info(f"Testing the latest baseline model | locale={self.locale} | id={baseline_id}")
        return ModelResolution(
            model_id=baseline_id,
            is_baseline_test=True,
            initial_model_exists=initial_model_exists,
        )
