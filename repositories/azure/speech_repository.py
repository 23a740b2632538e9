"""Azure Speech Repository - Custom Speech REST API client.

Uses structured JSON responses instead of positional CLI output. Entity ids are
the last path segment of each entity's ``self`` URL.
"""

from __future__ import annotations

import io
import json
import logging
import time
import zipfile
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional

import requests

from core.exceptions import SpeechServiceError
from repositories.interfaces.speech_repository import ISpeechRepository
from repositories.models.speech_entities import SpeechDataset, SpeechModel, SpeechTest, TestSummary

logger = logging.getLogger(__name__)

TERMINAL_STATUSES = ("Succeeded", "Failed")
# Result file kinds, most detailed first
RESULT_FILE_KINDS = ("EvaluationDetails", "Evaluation")


def entity_id(entity: Dict[str, Any]) -> str:
    """Extract the id from an entity's ``self`` URL."""
    self_url = entity.get("self") or ""
    return self_url.rstrip("/").rsplit("/", 1)[-1] if self_url else ""


def normalize_locale(locale: str) -> str:
    """'en-us' -> 'en-US', the casing the service uses."""
    parts = locale.split("-")
    if len(parts) < 2:
        return locale
    return "-".join([parts[0].lower(), *[p.upper() for p in parts[1:]]])


def build_dataset_archive(audio_zip: Path, transcript: Path) -> bytes:
    """Combine the audio archive and the transcript into one upload bundle.

    Acoustic datasets are a single zip holding the audio files and the
    transcript at the archive root.
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(audio_zip) as src, zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as dst:
        for info in src.infolist():
            if info.is_dir():
                continue
            dst.writestr(info.filename, src.read(info))
        dst.write(transcript, arcname=transcript.name)
    return buffer.getvalue()


class AzureSpeechRestRepository(ISpeechRepository):
    """Speech repository backed by the Custom Speech REST API."""

    def __init__(
        self,
        subscription_key: str,
        region: str,
        locale: str,
        api_version: str = "v3.1",
        timeout: int = 30,
        poll_interval: float = 10.0,
        max_wait: float = 3600.0,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Args:
            subscription_key: Speech resource key
            region: Speech resource region
            locale: Locale used for datasets and tests
            api_version: REST API version segment
            timeout: Per-request timeout in seconds
            poll_interval: Seconds between status polls of long-running entities
            max_wait: Maximum seconds to wait for an entity to finish
            session: Optional requests session (tests inject a mock)
            sleep: Sleep function used while polling
        """
        self.region = region
        self.locale = normalize_locale(locale)
        self.base_url = f"https://{region}.api.cognitive.microsoft.com/speechtotext/{api_version}"
        self.timeout = timeout
        self.poll_interval = poll_interval
        self.max_wait = max_wait
        self._sleep = sleep
        self.session = session or requests.Session()
        self.session.headers.update({"Ocp-Apim-Subscription-Key": subscription_key})
        # id -> self URL, so tests can reference base and custom models alike
        self._model_urls: Dict[str, str] = {}

    def get_provider_name(self) -> str:
        return "azure-speech-rest"

    # ------------------------------------------------------------------
    # HTTP helpers
    # ------------------------------------------------------------------

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        if not url.startswith("http"):
            url = f"{self.base_url}/{url.lstrip('/')}"
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
            resp.raise_for_status()
            return resp
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            body = e.response.text[:500] if e.response is not None else ""
            logger.error(f"Speech API error | method={method} | url={url} | status={status} | body={body}")
            raise SpeechServiceError(f"Speech API {method} {url} failed with status {status}") from e
        except requests.RequestException as e:
            logger.error(f"Speech API request failed | method={method} | url={url} | error={e}")
            raise SpeechServiceError(f"Speech API {method} {url} failed: {e}") from e

    def _get_json(self, url: str, **kwargs: Any) -> Dict[str, Any]:
        return self._request("GET", url, **kwargs).json()

    def _paginate(self, url: str, params: Optional[Dict[str, Any]] = None) -> Iterator[Dict[str, Any]]:
        """Yield entities from a paginated collection, following ``@nextLink``."""
        page = self._get_json(url, params=params)
        while True:
            yield from page.get("values", [])
            next_link = page.get("@nextLink")
            if not next_link:
                return
            page = self._get_json(next_link)

    def _wait_for(self, entity: Dict[str, Any], what: str) -> Dict[str, Any]:
        """Poll an entity until it reaches a terminal status."""
        waited = 0.0
        while entity.get("status") not in TERMINAL_STATUSES:
            if waited >= self.max_wait:
                raise SpeechServiceError(
                    f"Timed out after {self.max_wait:.0f}s waiting for {what} {entity_id(entity)}"
                )
            self._sleep(self.poll_interval)
            waited += self.poll_interval
            entity = self._get_json(entity["self"])
            logger.debug(f"Polled {what} | id={entity_id(entity)} | status={entity.get('status')}")
        return entity

    # ------------------------------------------------------------------
    # ISpeechRepository
    # ------------------------------------------------------------------

    def configure(self) -> None:
        """Verify the key and region with a cheap authenticated call."""
        self._get_json("models/base", params={"top": 1})
        logger.info(f"Speech REST API reachable | region={self.region}")

    def create_dataset(
        self,
        name: str,
        audio_zip: Path,
        transcript: Path,
        locale: str,
    ) -> SpeechDataset:
        bundle = build_dataset_archive(audio_zip, transcript)
        form = {
            "displayName": name,
            "locale": normalize_locale(locale),
            "kind": "Acoustic",
        }
        files = {"data": (f"{name}.zip", bundle, "application/zip")}
        dataset = self._request("POST", "datasets/upload", data=form, files=files).json()
        logger.info(f"Dataset submitted | id={entity_id(dataset)} | name={name}")

        dataset = self._wait_for(dataset, "dataset")
        status = dataset.get("status", "")
        if status != "Succeeded":
            logger.error(f"Dataset processing failed | id={entity_id(dataset)} | status={status}")
            return SpeechDataset(id="", name=name, status=status)
        return SpeechDataset(id=entity_id(dataset), name=name, status=status)

    def delete_dataset(self, dataset_id: str) -> None:
        self._request("DELETE", f"datasets/{dataset_id}")

    def _to_model(self, entity: Dict[str, Any]) -> SpeechModel:
        # v3.x custom models are unified; no kind means the model serves either kind
        model = SpeechModel(
            id=entity_id(entity),
            name=entity.get("displayName", ""),
            kind=(entity.get("customProperties") or {}).get("modelKind", ""),
            locale=entity.get("locale", ""),
            created=entity.get("createdDateTime", ""),
        )
        if model.id and entity.get("self"):
            self._model_urls[model.id] = entity["self"]
        return model

    def list_models(self) -> List[SpeechModel]:
        models = [self._to_model(e) for e in self._paginate("models")]
        # ISO-8601 timestamps sort lexically
        models.sort(key=lambda m: m.created)
        return models

    def list_baseline_models(self, locale: str) -> List[SpeechModel]:
        locale = normalize_locale(locale)
        params = {"filter": f"locale eq '{locale}'"}
        models = [
            self._to_model(e)
            for e in self._paginate("models/base", params=params)
            if e.get("locale", "").lower() == locale.lower()
        ]
        models.sort(key=lambda m: m.created, reverse=True)
        return models

    def _model_url(self, model_id: str) -> str:
        return self._model_urls.get(model_id, f"{self.base_url}/models/{model_id}")

    def create_test(
        self,
        name: str,
        dataset_id: str,
        model_id: str,
        language_model_id: str,
    ) -> SpeechTest:
        body = {
            "displayName": name,
            "locale": self.locale,
            "dataset": {"self": f"{self.base_url}/datasets/{dataset_id}"},
            "model1": {"self": self._model_url(model_id)},
            "model2": {"self": self._model_url(language_model_id)},
        }
        evaluation = self._request("POST", "evaluations", json=body).json()
        logger.info(f"Test submitted | id={entity_id(evaluation)} | name={name}")

        evaluation = self._wait_for(evaluation, "test")
        status = evaluation.get("status", "")
        if status != "Succeeded":
            logger.error(f"Test failed | id={entity_id(evaluation)} | status={status}")
            return SpeechTest(id="", name=name, status=status)
        return SpeechTest(id=entity_id(evaluation), name=name, status=status)

    def _results_url(self, test_id: str) -> Optional[str]:
        files = list(self._paginate(f"evaluations/{test_id}/files"))
        for kind in RESULT_FILE_KINDS:
            for f in files:
                if f.get("kind") == kind:
                    return (f.get("links") or {}).get("contentUrl")
        if files:
            return (files[0].get("links") or {}).get("contentUrl")
        return None

    def show_test(self, test_id: str) -> TestSummary:
        data = self._get_json(f"evaluations/{test_id}")
        if not data.get("resultsUrl"):
            results_url = self._results_url(test_id)
            if results_url:
                data["resultsUrl"] = results_url
        return TestSummary(raw_json=json.dumps(data, indent=2), data=data)

    def delete_test(self, test_id: str) -> None:
        self._request("DELETE", f"evaluations/{test_id}")
