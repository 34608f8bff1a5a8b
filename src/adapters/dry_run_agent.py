"""Agent adapter that records dispatches instead of invoking a real agent.

Used by the CLI replay command to show which messages would have reached the
agent, and what the filter saved.
"""

from __future__ import annotations

import logging

from core.models import InboundMessage

LOGGER = logging.getLogger(__name__)


class DryRunAgent:
    """Remember every dispatched message and report no reply."""

    def __init__(self) -> None:
        self.dispatched: list[InboundMessage] = []

    async def dispatch(self, message: InboundMessage) -> bool:
        self.dispatched.append(message)
        LOGGER.debug("Dry-run dispatch for %s", message.sender_id)
        return False
