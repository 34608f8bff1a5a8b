"""In-memory session counters for the admission filter."""

from __future__ import annotations

from dataclasses import asdict, dataclass

from core.config import DEFAULT_TOKENS_PER_SESSION


@dataclass
class SessionCounters:
    """Running totals since process start. Never persisted, never decremented."""

    tokens_per_session: int = DEFAULT_TOKENS_PER_SESSION
    dropped: int = 0
    allowed: int = 0
    tokens_saved: int = 0

    def record_drop(self) -> None:
        self.dropped += 1
        self.tokens_saved += self.tokens_per_session

    def record_allow(self) -> None:
        self.allowed += 1

    def snapshot(self) -> dict[str, int]:
        return asdict(self)

    def summary(self) -> str:
        return f"total: {self.dropped} dropped, {self.allowed} allowed, ~{self.tokens_saved:,} tokens saved"
