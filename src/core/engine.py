"""Admission decision engine.

Decides, before any agent work, whether a direct message may reach the agent.
Rules are evaluated in a fixed order and the first applicable one wins:

1) No keyword patterns configured -> allow everything
2) Passwordless God Mode super-user -> allow
3) Enabled non-lead rule with noKeywordRestrictions -> allow
4) God Mode activation/deactivation command -> allow
5) Any keyword pattern matches the body -> allow
6) Otherwise -> drop

Configuration problems inside the engine degrade to "feature absent"; the
engine itself is not where raw failures become verdicts (see gateway).
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from core.admin_policy import AdminPolicyCache
from core.config import FilterConfig
from core.models import AdminPolicy, Decision, InboundMessage, Reason
from core.patterns import PatternCompiler
from core.phone import phone_variants, strip_transport_suffix
from core.ports import ConfigSourcePort
from core.stats import SessionCounters

LOGGER = logging.getLogger(__name__)

PREVIEW_CHARS = 50


def mention_patterns(gateway_config: Any) -> list:
    """Return ``messages.groupChat.mentionPatterns`` or an empty list."""

    if not isinstance(gateway_config, dict):
        return []
    messages = gateway_config.get("messages")
    group_chat = messages.get("groupChat") if isinstance(messages, dict) else None
    patterns = group_chat.get("mentionPatterns") if isinstance(group_chat, dict) else None
    if not isinstance(patterns, list):
        return []
    return patterns


def _preview(body: str) -> str:
    return body[:PREVIEW_CHARS].replace("\n", " ")


class AdmissionEngine:
    """Produce ALLOW/DROP decisions for direct messages.

    Caches and counters are owned by the instance, so independent engines
    never share state.
    """

    def __init__(
        self,
        config_source: ConfigSourcePort,
        policy_cache: AdminPolicyCache,
        filter_config: Optional[FilterConfig] = None,
        compiler: Optional[PatternCompiler] = None,
        counters: Optional[SessionCounters] = None,
    ) -> None:
        self._config_source = config_source
        self._policy_cache = policy_cache
        self._config = filter_config or FilterConfig()
        self.compiler = compiler or PatternCompiler()
        self.counters = counters or SessionCounters(tokens_per_session=self._config.tokens_per_session)

    def should_drop(self, message: InboundMessage) -> bool:
        return self.evaluate(message).dropped

    def evaluate(self, message: InboundMessage) -> Decision:
        patterns = mention_patterns(self._config_source.load())
        if not patterns:
            return Decision.allow(Reason.NO_PATTERNS)

        policy = self._policy_cache.current()
        if policy is not None:
            if self._is_passwordless_super_user(message, policy):
                LOGGER.info("[DM-FILTER] Passwordless God Mode super-user, bypassing filter")
                return Decision.allow(Reason.SUPER_USER)
            if self._has_no_keyword_rule(policy):
                LOGGER.info("[DM-FILTER] Rule with noKeywordRestrictions exists, bypassing filter")
                return Decision.allow(Reason.NO_KEYWORD_RULE)

        if self._is_control_command(message.body):
            LOGGER.info("[DM-FILTER] God Mode command, bypassing filter")
            return Decision.allow(Reason.CONTROL_COMMAND)

        body = message.body or ""
        for regex in self.compiler.compiled_for(patterns):
            if regex.search(body):
                self.counters.record_allow()
                LOGGER.info("[DM-FILTER] Allowed, matched pattern: %s", regex.pattern)
                return Decision.allow(Reason.KEYWORD_MATCH, matched_pattern=regex.pattern)

        self.counters.record_drop()
        LOGGER.info(
            '[DM-FILTER] Dropped "%s", no keyword match | saved ~%s tokens (%s)',
            _preview(body),
            self.counters.tokens_per_session,
            self.counters.summary(),
        )
        return Decision.drop(Reason.NO_MATCH)

    def _is_passwordless_super_user(self, message: InboundMessage, policy: AdminPolicy) -> bool:
        god_mode = policy.god_mode
        if not god_mode.enabled or not god_mode.super_users:
            return False

        sender = message.sender_e164 or message.sender_id or ""
        sender = strip_transport_suffix(sender, self._config.sender_suffix)
        sender_variants = phone_variants(sender, self._config.country_code)
        for user in god_mode.super_users:
            if user.platform != self._config.platform or user.password_required:
                continue
            if phone_variants(user.identifier, self._config.country_code) & sender_variants:
                return True
        return False

    @staticmethod
    def _has_no_keyword_rule(policy: AdminPolicy) -> bool:
        # Lead rules trigger on contact capture, not on message content.
        return any(
            rule.enabled and rule.trigger_type != "lead" and rule.no_keyword_restrictions
            for rule in policy.rules
        )

    def _is_control_command(self, body: Optional[str]) -> bool:
        lowered = (body or "").strip().lower()
        if lowered.startswith(self._config.activation_prefix.lower()):
            return True
        return lowered in {command.lower() for command in self._config.deactivation_commands}
