"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any transport-specific message types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class InboundMessage:
    """Minimal view of one inbound chat message used by the admission filter."""

    sender_id: str
    body: str
    chat_type: str = "direct"
    sender_e164: Optional[str] = None
    message_id: Optional[str] = None

    @property
    def is_direct(self) -> bool:
        return self.chat_type != "group"


class Verdict(Enum):
    ALLOW = "allow"
    DROP = "drop"


class Reason(Enum):
    NO_PATTERNS = "no keyword patterns configured"
    SUPER_USER = "passwordless God Mode super-user"
    NO_KEYWORD_RULE = "rule with noKeywordRestrictions"
    CONTROL_COMMAND = "God Mode control command"
    KEYWORD_MATCH = "keyword match"
    NO_MATCH = "no keyword match"
    ERROR = "filter error"
    NOT_DIRECT = "not a direct message"


@dataclass(frozen=True)
class Decision:
    """Admission verdict for one message with a human-readable reason."""

    verdict: Verdict
    reason: Reason
    matched_pattern: Optional[str] = None

    @property
    def dropped(self) -> bool:
        return self.verdict is Verdict.DROP

    @classmethod
    def allow(cls, reason: Reason, matched_pattern: Optional[str] = None) -> "Decision":
        return cls(Verdict.ALLOW, reason, matched_pattern)

    @classmethod
    def drop(cls, reason: Reason = Reason.NO_MATCH) -> "Decision":
        return cls(Verdict.DROP, reason)


@dataclass(frozen=True)
class SuperUser:
    platform: str
    identifier: str
    password_required: bool


@dataclass(frozen=True)
class GodModeSettings:
    enabled: bool = False
    super_users: tuple[SuperUser, ...] = ()


@dataclass(frozen=True)
class PolicyRule:
    enabled: bool
    trigger_type: str
    no_keyword_restrictions: bool


@dataclass(frozen=True)
class AdminPolicy:
    """Parsed admin policy: God Mode roster plus the agent's rule list."""

    god_mode: GodModeSettings = field(default_factory=GodModeSettings)
    rules: tuple[PolicyRule, ...] = ()
