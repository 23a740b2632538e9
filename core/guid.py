"""GUID helpers for identifiers issued by the speech service."""

from __future__ import annotations

import re
from typing import Optional

_HEX32 = re.compile(r"[0-9a-fA-F]{32}")


def is_valid_guid(value: Optional[str]) -> bool:
    """Return True if ``value`` is 32 hex digits once hyphens are removed.

    Hyphens are optional and may appear anywhere, matching the
    ``${id//-/} =~ ^[[:xdigit:]]{32}$`` check used by the CI scripts.
    """
    if not value:
        return False
    return _HEX32.fullmatch(value.replace("-", "")) is not None

