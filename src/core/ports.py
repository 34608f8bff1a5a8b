"""Ports (interfaces) used by the admission filter.

Ports define the minimal contracts for configuration, agent dispatch and read
receipts so that the core can sit in front of different host pipelines.
"""

from __future__ import annotations

from typing import Any, Protocol

from core.models import InboundMessage


class ConfigSourcePort(Protocol):
    """Primary gateway configuration, loaded fresh on every call."""

    def load(self) -> dict[str, Any]:
        ...


class AgentPort(Protocol):
    """Agent invocation owned by the host pipeline."""

    async def dispatch(self, message: InboundMessage) -> bool:
        """Run the agent for a message and return whether a reply was sent."""
        ...


class ReadReceiptPort(Protocol):
    async def mark_read(self, message: InboundMessage) -> None:
        ...
