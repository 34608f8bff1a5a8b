"""JSON file adapter for the primary gateway configuration.

The file is re-read on every ``load()`` so keyword edits made in the admin
panel apply to the very next message without a restart.
"""

from __future__ import annotations

import json
import logging
from typing import Any

LOGGER = logging.getLogger(__name__)


class JsonConfigSource:
    """Load the gateway config from disk; missing or broken files read as empty."""

    def __init__(self, path: str) -> None:
        self._path = path

    @property
    def path(self) -> str:
        return self._path

    def load(self) -> dict[str, Any]:
        try:
            with open(self._path, "r", encoding="utf-8-sig") as handle:
                data = json.load(handle)
        except FileNotFoundError:
            LOGGER.debug("Gateway config not found: %s", self._path)
            return {}
        except (OSError, UnicodeDecodeError, ValueError) as exc:
            LOGGER.warning("Gateway config unreadable at %s: %s", self._path, exc)
            return {}

        if not isinstance(data, dict):
            LOGGER.warning("Gateway config at %s is not a JSON object", self._path)
            return {}
        return data
