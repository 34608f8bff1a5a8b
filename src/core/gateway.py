"""Host pipeline boundary for the admission filter.

The gate is the single place where an unexpected failure from the decision
path is converted into a verdict, and that verdict is always ALLOW: a wrongly
admitted message only costs tokens, a wrongly dropped one is lost silently.
"""

from __future__ import annotations

import logging
from typing import Optional

from core.engine import AdmissionEngine
from core.models import Decision, InboundMessage, Reason
from core.ports import AgentPort, ReadReceiptPort

LOGGER = logging.getLogger(__name__)


class DirectMessageGate:
    """Run the admission filter once per direct message, then hand off to the agent."""

    def __init__(
        self,
        engine: AdmissionEngine,
        agent: AgentPort,
        receipts: Optional[ReadReceiptPort] = None,
    ) -> None:
        self._engine = engine
        self._agent = agent
        self._receipts = receipts

    def admit(self, message: InboundMessage) -> Decision:
        """Return the admission decision, failing open on any error."""

        # Group messages are gated elsewhere by the host.
        if not message.is_direct:
            return Decision.allow(Reason.NOT_DIRECT)
        try:
            return self._engine.evaluate(message)
        except Exception as exc:
            LOGGER.exception("[DM-FILTER] Error: %s, allowing message through", exc)
            return Decision.allow(Reason.ERROR)

    async def handle(self, message: InboundMessage) -> bool:
        """Process one inbound message; return whether the agent replied."""

        decision = self.admit(message)
        if decision.dropped:
            return False

        replied = await self._agent.dispatch(message)
        # Read receipts only when the agent actually answered.
        if replied and self._receipts is not None:
            await self._receipts.mark_read(message)
        return replied
