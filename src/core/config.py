"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass

# Approximate tokens per agent session (instructions + tool call + response).
DEFAULT_TOKENS_PER_SESSION = 2500


@dataclass(frozen=True)
class FilterConfig:
    """Admission filter settings consumed by the decision engine."""

    platform: str = "whatsapp"
    sender_suffix: str = "@s.whatsapp.net"
    country_code: str = "972"
    tokens_per_session: int = DEFAULT_TOKENS_PER_SESSION
    activation_prefix: str = "!godmode "
    deactivation_commands: tuple[str, ...] = ("/exit", "/godmode off")
