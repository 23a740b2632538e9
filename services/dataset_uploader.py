"""Dataset Uploader - Packages and uploads audio + human-labeled transcript testing data."""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import List, Optional

from core.exceptions import DatasetUploadError
from core.guid import is_valid_guid
from repositories.interfaces.speech_repository import ISpeechRepository
from repositories.models.speech_entities import SpeechDataset

logger = logging.getLogger(__name__)

UPLOAD_FAILED_MESSAGE = (
    "Failed to upload audio and human-labeled transcript testing data. "
    "Check that the correct paths are defined in environment variables or re-run all jobs."
)


class DatasetUploader:
    """Repackages the testing archive and registers it with the speech service."""

    def __init__(
        self,
        speech_repo: ISpeechRepository,
        build_folder: Path,
        transcript_file: str = "trans.txt",
        audio_zip_file: str = "test-audio.zip",
        locale: str = "en-us",
    ) -> None:
        self.speech_repo = speech_repo
        self.build_folder = Path(build_folder)
        self.transcript_file = transcript_file
        self.audio_zip_file = audio_zip_file
        self.locale = locale

    def _extract(self, source_zip: Path) -> List[str]:
        """Unzip the source archive into the build folder; return member names."""
        self.build_folder.mkdir(parents=True, exist_ok=True)
        try:
            with zipfile.ZipFile(source_zip) as zf:
                zf.extractall(self.build_folder)
                return [info.filename for info in zf.infolist() if not info.is_dir()]
        except zipfile.BadZipFile as e:
            raise DatasetUploadError(f"{source_zip} is not a valid zip archive") from e

    def _find_transcript(self) -> Optional[Path]:
        direct = self.build_folder / self.transcript_file
        if direct.is_file():
            return direct
        # Tolerate archives that wrap everything in a top-level folder
        return next((p for p in sorted(self.build_folder.rglob(self.transcript_file)) if p.is_file()), None)

    def package_audio(self, members: List[str]) -> Path:
        """Zip every extracted file except text files into the audio archive."""
        audio_zip = self.build_folder / self.audio_zip_file
        count = 0
        with zipfile.ZipFile(audio_zip, "w", zipfile.ZIP_DEFLATED) as zf:
            for name in members:
                if name.lower().endswith(".txt"):
                    continue
                zf.write(self.build_folder / name, arcname=name)
                count += 1
        logger.info(f"Packaged testing audio | archive={audio_zip} | files={count}")
        return audio_zip

    def upload(self, source_zip: Path, dataset_name: str) -> SpeechDataset:
        """Upload the testing data and return the created dataset.

        Raises:
            DatasetUploadError: If the archive is unusable or the returned id is not a GUID
        """
        source_zip = Path(source_zip)
        if not source_zip.is_file():
            logger.error(f"Testing archive not found | path={source_zip}")
            raise DatasetUploadError(UPLOAD_FAILED_MESSAGE)

        members = self._extract(source_zip)
        transcript = self._find_transcript()
        if transcript is None:
            logger.error(f"Transcript not found in testing archive | file={self.transcript_file}")
            raise DatasetUploadError(UPLOAD_FAILED_MESSAGE)

        audio_zip = self.package_audio(members)
        dataset = self.speech_repo.create_dataset(
            name=dataset_name,
            audio_zip=audio_zip,
            transcript=transcript,
            locale=self.locale,
        )
        if not is_valid_guid(dataset.id):
            logger.error(f"Dataset upload returned an invalid id | id={dataset.id!r}")
            raise DatasetUploadError(UPLOAD_FAILED_MESSAGE)

        logger.info(f"Uploaded testing data | dataset_id={dataset.id} | name={dataset_name}")
        return dataset
