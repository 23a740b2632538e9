"""Speech service entities - Provider-agnostic records for datasets, models and tests."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class SpeechDataset:
    """Uploaded audio + human-labeled transcript bundle."""

    id: str
    name: str = ""
    status: str = ""


@dataclass
class SpeechModel:
    """Custom or baseline speech recognition model."""

    id: str
    name: str = ""
    kind: str = ""  # "Acoustic", "Language" or "" when the service does not say
    locale: str = ""
    created: str = ""
    # Free text the service printed for the model (a CLI listing row)
    description: str = ""

    def matches_kind(self, kind: str) -> bool:
        """Whether this model can serve as a ``kind`` model.

        A reported kind must match exactly. Without one, a model whose listing
        text mentions ``kind`` matches. A model with neither is unified and
        serves every kind.
        """
        if self.kind:
            return self.kind == kind
        if self.description:
            return kind in self.description
        return True


@dataclass
class SpeechTest:
    """Benchmark run pairing a dataset with a model."""
    __test__ = False  # not a pytest test class

    id: str
    name: str = ""
    status: str = ""


@dataclass
class TestSummary:
    """JSON summary of a completed test.

    ``raw_json`` is what gets archived; ``data`` is the parsed document.
    """
    __test__ = False

    raw_json: str
    data: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_json(cls, raw_json: str) -> "TestSummary":
        """Parse a summary document. Raises ValueError if it is not a JSON object."""
        data = json.loads(raw_json)
        if not isinstance(data, dict):
            raise ValueError("Test summary is not a JSON object")
        return cls(raw_json=raw_json, data=data)

    @property
    def results_url(self) -> Optional[str]:
        url = self.data.get("resultsUrl")
        return url.strip() if isinstance(url, str) and url.strip() else None

    @property
    def status(self) -> str:
        return str(self.data.get("status", ""))
