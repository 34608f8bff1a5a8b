"""Keyword pattern compilation with a single-slot fingerprint cache."""

from __future__ import annotations

import hashlib
import json
import logging
import re
import threading
from typing import Optional, Sequence

LOGGER = logging.getLogger(__name__)


def fingerprint_patterns(patterns: Sequence[object]) -> str:
    """Return an order-sensitive content hash of a pattern list."""

    payload = json.dumps(list(patterns), ensure_ascii=False, default=str)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def compile_patterns(patterns: Sequence[object]) -> list[re.Pattern]:
    """Compile every pattern case-insensitively, skipping invalid ones.

    Patterns are used as regular expressions verbatim; keywords containing
    regex metacharacters are not escaped.
    """

    compiled: list[re.Pattern] = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(str(pattern), re.IGNORECASE))
        except (re.error, OverflowError, RecursionError) as exc:
            LOGGER.warning("[DM-FILTER] Skipping invalid regex pattern: %s (%s)", pattern, exc)
    return compiled


class PatternCompiler:
    """Compile pattern lists, recompiling only when their content changes.

    Holds exactly one entry: a new fingerprint replaces the previous one.
    """

    def __init__(self) -> None:
        self._slot: Optional[tuple[str, list[re.Pattern]]] = None
        self._lock = threading.Lock()
        self.compilations = 0

    def compiled_for(self, patterns: Sequence[object]) -> list[re.Pattern]:
        fingerprint = fingerprint_patterns(patterns)
        slot = self._slot
        if slot is not None and slot[0] == fingerprint:
            return slot[1]

        with self._lock:
            slot = self._slot
            if slot is not None and slot[0] == fingerprint:
                return slot[1]
            compiled = compile_patterns(patterns)
            self._slot = (fingerprint, compiled)
            self.compilations += 1
            LOGGER.debug(
                "[DM-FILTER] Compiled %s of %s keyword patterns", len(compiled), len(patterns)
            )
            return compiled
