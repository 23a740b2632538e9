"""Shared fixtures and in-memory fakes for the speech and blob services."""

from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest

from repositories.interfaces.blob_repository import IBlobRepository
from repositories.interfaces.speech_repository import ISpeechRepository
from repositories.models.speech_entities import SpeechDataset, SpeechModel, SpeechTest, TestSummary

DATASET_ID = "11111111-2222-3333-4444-555555555555"
CUSTOM_MODEL_ID = "aaaaaaaa-bbbb-cccc-dddd-eeeeeeeeeeee"
BASELINE_MODEL_ID = "0123456789abcdef0123456789abcdef"
TEST_ID = "99999999-8888-7777-6666-555555555555"
RESULTS_URL = "https://results.example.com/test-results.txt?sig=secret"


class FakeSpeechRepository(ISpeechRepository):
    """Records every call in order and returns canned entities."""

    def __init__(
        self,
        models: Optional[List[SpeechModel]] = None,
        baseline_models: Optional[List[SpeechModel]] = None,
        dataset_id: str = DATASET_ID,
        test_id: str = TEST_ID,
        summary_json: Optional[str] = None,
    ) -> None:
        self.models = models if models is not None else []
        self.baseline_models = (
            baseline_models if baseline_models is not None else [SpeechModel(id=BASELINE_MODEL_ID)]
        )
        self.dataset_id = dataset_id
        self.test_id = test_id
        self.summary_json = summary_json or (
            '{\n  "status": "Succeeded",\n  "wordErrorRate": 0.12,\n'
            f'  "resultsUrl": "{RESULTS_URL}"\n}}'
        )
        self.calls: List[Tuple] = []

    def configure(self) -> None:
        self.calls.append(("configure",))

    def create_dataset(self, name: str, audio_zip: Path, transcript: Path, locale: str) -> SpeechDataset:
        self.calls.append(("create_dataset", name, Path(audio_zip).name, Path(transcript).name, locale))
        return SpeechDataset(id=self.dataset_id, name=name)

    def delete_dataset(self, dataset_id: str) -> None:
        self.calls.append(("delete_dataset", dataset_id))

    def list_models(self) -> List[SpeechModel]:
        self.calls.append(("list_models",))
        return list(self.models)

    def list_baseline_models(self, locale: str) -> List[SpeechModel]:
        self.calls.append(("list_baseline_models", locale))
        return list(self.baseline_models)

    def create_test(self, name: str, dataset_id: str, model_id: str, language_model_id: str) -> SpeechTest:
        self.calls.append(("create_test", name, dataset_id, model_id, language_model_id))
        return SpeechTest(id=self.test_id, name=name)

    def show_test(self, test_id: str) -> TestSummary:
        self.calls.append(("show_test", test_id))
        return TestSummary.from_json(self.summary_json)

    def delete_test(self, test_id: str) -> None:
        self.calls.append(("delete_test", test_id))

    def call_names(self) -> List[str]:
        return [c[0] for c in self.calls]


class InMemoryBlobRepository(IBlobRepository):
    """Blob storage kept in dictionaries."""

    def __init__(self) -> None:
        self.containers: Dict[str, Optional[str]] = {}
        self.blobs: Dict[Tuple[str, str], bytes] = {}
        self.calls: List[Tuple] = []

    def container_exists(self, container: str) -> bool:
        return container in self.containers

    def create_container(self, container: str, public_access: Optional[str] = None) -> None:
        self.calls.append(("create_container", container, public_access))
        self.containers[container] = public_access

    def blob_exists(self, container: str, blob_name: str) -> bool:
        return (container, blob_name) in self.blobs

    def upload_file(self, container: str, blob_name: str, file_path: Path) -> str:
        self.calls.append(("upload_file", container, blob_name))
        self.blobs[(container, blob_name)] = Path(file_path).read_bytes()
        return f"https://account.blob.core.windows.net/{container}/{blob_name}"

    def upload_text(self, container: str, blob_name: str, text: str) -> str:
        self.calls.append(("upload_text", container, blob_name))
        self.blobs[(container, blob_name)] = text.encode("utf-8")
        return f"https://account.blob.core.windows.net/{container}/{blob_name}"

    def download_text(self, container: str, blob_name: str) -> Optional[str]:
        data = self.blobs.get((container, blob_name))
        return data.decode("utf-8") if data is not None else None

    def text(self, container: str, blob_name: str) -> str:
        return self.blobs[(container, blob_name)].decode("utf-8")


class FakeResultsRepository:
    def __init__(self, content: bytes = b"utterance\trecognized\nfile1.wav\thello world\n") -> None:
        self.content = content
        self.urls: List[str] = []

    def fetch(self, url: str) -> bytes:
        self.urls.append(url)
        return self.content


def make_testing_zip(path: Path, transcript_name: str = "trans.txt", with_transcript: bool = True) -> Path:
    """Write a small testing archive: two wav files plus a transcript."""
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr("file1.wav", b"RIFF....WAVEfmt ")
        zf.writestr("file2.wav", b"RIFF....WAVEfmt ")
        if with_transcript:
            zf.writestr(transcript_name, "file1.wav\thello world\nfile2.wav\tgood morning\n")
    return path


@pytest.fixture
def speech_repo() -> FakeSpeechRepository:
    return FakeSpeechRepository()


@pytest.fixture
def blob_repo() -> InMemoryBlobRepository:
    return InMemoryBlobRepository()


@pytest.fixture
def results_repo() -> FakeResultsRepository:
    return FakeResultsRepository()


@pytest.fixture
def testing_zip(tmp_path: Path) -> Path:
    return make_testing_zip(tmp_path / "audio-and-trans.zip")


@pytest.fixture
def build_folder(tmp_path: Path) -> Path:
    return tmp_path / "build-speech-test"
