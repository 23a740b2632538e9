"""Azure Speech CLI Repository - Wraps the `speech` command-line tool.

The CLI prints human-readable text. Identifiers are read at fixed positions:

- ``dataset create`` / ``test create``: the third output line
- ``model list``: first column of the last line mentioning the model kind
- ``model list-scenarios --simple``: one id per line, latest first
- ``test show``: a log line followed by the JSON summary
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from core.exceptions import MalformedOutputError, SpeechServiceError
from repositories.interfaces.speech_repository import ISpeechRepository
from repositories.models.speech_entities import SpeechDataset, SpeechModel, SpeechTest, TestSummary

logger = logging.getLogger(__name__)


def output_line(output: str, number: int) -> str:
    """Return line ``number`` (1-based) of ``output`` stripped, or "" if absent."""
    lines = output.splitlines()
    if number < 1 or number > len(lines):
        return ""
    return lines[number - 1].strip()


def strip_first_line(output: str) -> str:
    """Drop the leading log line printed before JSON payloads."""
    _, _, rest = output.partition("\n")
    return rest


def parse_model_line(line: str) -> Optional[SpeechModel]:
    """Parse one ``speech model list`` row into a model record.

    The row layout is not fixed, so no kind is assigned. The whole row is kept
    as the description and a model matches every kind the row mentions.
    """
    tokens = line.split()
    if not tokens:
        return None
    return SpeechModel(id=tokens[0], name=" ".join(tokens[1:]), description=line.strip())


class SpeechCliRepository(ISpeechRepository):
    """Speech repository backed by the Azure Speech CLI (azurespeechcli)."""

    def __init__(
        self,
        project_name: str,
        subscription_key: str,
        region: str,
        executable: str = "speech",
        timeout: Optional[float] = None,
    ) -> None:
        """
        Args:
            project_name: Speech project name stored in the CLI config
            subscription_key: Speech resource key
            region: Speech resource region (e.g. "westus2")
            executable: Path or name of the CLI executable
            timeout: Optional subprocess timeout in seconds; None relies on --wait
        """
        self.project_name = project_name
        self.subscription_key = subscription_key
        self.region = region
        self.executable = executable
        self.timeout = timeout

    def get_provider_name(self) -> str:
        return "azure-speech-cli"

    def _run(self, args: Sequence[str], redact: Sequence[str] = ()) -> str:
        """Run a CLI command and return its stdout.

        Raises:
            SpeechServiceError: If the command cannot be started, times out or exits non-zero
        """
        cmd = [self.executable, *args]
        shown = " ".join("***" if a in redact else a for a in cmd)
        logger.debug(f"Running speech CLI | cmd={shown}")
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise SpeechServiceError(f"Speech CLI not found: {self.executable}") from e
        except subprocess.TimeoutExpired as e:
            raise SpeechServiceError(f"Speech CLI timed out: {shown}") from e

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            logger.error(f"Speech CLI failed | cmd={shown} | code={result.returncode} | stderr={stderr}")
            raise SpeechServiceError(
                f"Speech CLI exited with code {result.returncode}: {stderr or shown}"
            )
        return result.stdout or ""

    def configure(self) -> None:
        self._run(
            [
                "config", "set",
                "-n", self.project_name,
                "-k", self.subscription_key,
                "-r", self.region,
                "-s",
            ],
            redact=(self.subscription_key,),
        )
        logger.info(f"Speech CLI configured | project={self.project_name} | region={self.region}")

    def create_dataset(
        self,
        name: str,
        audio_zip: Path,
        transcript: Path,
        locale: str,
    ) -> SpeechDataset:
        # The CLI takes the locale from the project; it is not a dataset option
        output = self._run(
            ["dataset", "create", "-n", name, "-a", str(audio_zip), "-t", str(transcript), "--wait"]
        )
        return SpeechDataset(id=output_line(output, 3), name=name)

    def delete_dataset(self, dataset_id: str) -> None:
        self._run(["dataset", "delete", dataset_id])

    def list_models(self) -> List[SpeechModel]:
        output = self._run(["model", "list"])
        models = []
        for line in output.splitlines():
            model = parse_model_line(line)
            if model is not None:
                models.append(model)
        return models

    def list_baseline_models(self, locale: str) -> List[SpeechModel]:
        output = self._run(["model", "list-scenarios", "--locale", locale, "--simple"])
        return [
            SpeechModel(id=line.strip(), locale=locale)
            for line in output.splitlines()
            if line.strip()
        ]

    def create_test(
        self,
        name: str,
        dataset_id: str,
        model_id: str,
        language_model_id: str,
    ) -> SpeechTest:
        output = self._run(
            [
                "test", "create",
                "-n", name,
                "-a", dataset_id,
                "-m", model_id,
                "-lm", language_model_id,
                "--wait",
            ]
        )
        return SpeechTest(id=output_line(output, 3), name=name)

    def show_test(self, test_id: str) -> TestSummary:
        output = self._run(["test", "show", test_id])
        payload = strip_first_line(output)
        try:
            return TestSummary.from_json(payload)
        except ValueError as e:
            raise MalformedOutputError(f"Test summary for {test_id} is not valid JSON: {e}") from e

    def delete_test(self, test_id: str) -> None:
        self._run(["test", "delete", test_id])
