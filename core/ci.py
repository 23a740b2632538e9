"""GitHub Actions helpers: annotations and environment exports."""

from __future__ import annotations

import logging
import os
import sys
from typing import Mapping, Optional, TextIO

logger = logging.getLogger(__name__)


def error_annotation(message: str, stream: Optional[TextIO] = None) -> None:
    """Print an ``::error ::`` workflow command so the CI UI highlights it."""
    stream = stream or sys.stdout
    # Workflow commands are single-line; newlines must be escaped.
    escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
    print(f"::error ::{escaped}", file=stream)


def export_env(values: Mapping[str, str], env_file: Optional[str] = None) -> bool:
    """Append ``KEY=VALUE`` lines to the ``GITHUB_ENV`` file.

    Returns False when no env file is configured (running outside CI).
    """
    env_file = env_file or os.getenv("GITHUB_ENV", "")
    if not env_file:
        logger.debug("GITHUB_ENV not set, skipping export")
        return False

    with open(env_file, "a", encoding="utf-8") as f:
        for key, value in values.items():
            if value is None:
                continue
            f.write(f"{key}={value}\n")
    logger.info(f"Exported CI variables | keys={','.join(values)}")
    return True
