"""Admin policy loading with a modification-time cache.

The admin file is optional: a fresh install has none, and an operator may
be mid-edit. Every read or parse problem therefore yields ``None`` instead of
an exception, and the previous cache entry is left untouched.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from typing import Any, Optional

from core.models import AdminPolicy, GodModeSettings, PolicyRule, SuperUser

LOGGER = logging.getLogger(__name__)

_BOM = "\ufeff"


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def parse_admin_policy(raw: Any) -> AdminPolicy:
    """Map the admin config document onto an ``AdminPolicy``.

    Unexpected shapes at any level read as absent rather than failing.
    """

    document = _as_dict(raw)
    god_mode_raw = _as_dict(_as_dict(document.get("agentSettings")).get("godMode"))
    super_users = tuple(
        SuperUser(
            platform=str(entry.get("platform", "")),
            identifier=str(entry.get("identifier", "")),
            password_required=bool(entry.get("passwordRequired", False)),
        )
        for entry in _as_list(god_mode_raw.get("superUsers"))
        if isinstance(entry, dict)
    )
    rules = tuple(
        PolicyRule(
            enabled=bool(entry.get("enabled", False)),
            trigger_type=str(entry.get("triggerType", "")),
            no_keyword_restrictions=entry.get("noKeywordRestrictions") is True,
        )
        for entry in _as_list(document.get("rules"))
        if isinstance(entry, dict)
    )
    return AdminPolicy(
        god_mode=GodModeSettings(enabled=bool(god_mode_raw.get("enabled", False)), super_users=super_users),
        rules=rules,
    )


class AdminPolicyCache:
    """Serve the parsed admin policy, re-reading only when the file's mtime changes.

    A file replaced with an identical mtime (coarse filesystem clocks) keeps
    serving the previously parsed policy.
    """

    def __init__(self, path: str) -> None:
        self._path = path
        self._slot: Optional[tuple[int, AdminPolicy]] = None
        self._lock = threading.Lock()
        self.reloads = 0

    @property
    def path(self) -> str:
        return self._path

    def current(self) -> Optional[AdminPolicy]:
        try:
            mtime_ns = os.stat(self._path).st_mtime_ns
        except OSError:
            # Fresh install or file removed; no admin policy available.
            return None

        slot = self._slot
        if slot is not None and slot[0] == mtime_ns:
            return slot[1]

        with self._lock:
            try:
                with open(self._path, "r", encoding="utf-8") as handle:
                    raw = handle.read()
                if raw.startswith(_BOM):
                    raw = raw[1:]
                policy = parse_admin_policy(json.loads(raw))
            except (OSError, UnicodeDecodeError, ValueError, RecursionError) as exc:
                LOGGER.debug("[DM-FILTER] Admin policy unavailable at %s: %s", self._path, exc)
                return None

            self._slot = (mtime_ns, policy)
            self.reloads += 1
        LOGGER.info(
            "[DM-FILTER] Admin policy loaded from %s (god mode=%s, super-users=%s, rules=%s)",
            self._path,
            policy.god_mode.enabled,
            len(policy.god_mode.super_users),
            len(policy.rules),
        )
        return policy
