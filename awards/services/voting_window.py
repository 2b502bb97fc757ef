"""Voting window policy evaluation."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol

from awards.utils.datetime_helpers import ensure_utc
from awards.utils.exceptions import (
    VOTING_DISABLED,
    VOTING_ENDED,
    VOTING_NOT_STARTED,
    VotingWindowError,
)


class VotingWindowPolicy(Protocol):
    voting_enabled: bool
    voting_start_at: Optional[datetime]
    voting_end_at: Optional[datetime]


@dataclass(frozen=True)
class WindowDecision:
    """Outcome of a window check; ``reason`` is set only when denied."""

    permitted: bool
    reason: Optional[str] = None

    def raise_for_denial(self) -> None:
        if not self.permitted:
            raise VotingWindowError(self.reason)


PERMITTED = WindowDecision(permitted=True)


def evaluate_voting_window(policy: Optional[VotingWindowPolicy], now: datetime) -> WindowDecision:
    """Decide whether a vote at ``now`` is allowed under ``policy``.

    Rules short-circuit in order: disabled, not started, ended. A missing
    policy places no restriction on voting. Both bounds are inclusive.
    """
    if policy is None:
        return PERMITTED

    if not policy.voting_enabled:
        return WindowDecision(permitted=False, reason=VOTING_DISABLED)

    now = ensure_utc(now)
    start_at = ensure_utc(policy.voting_start_at)
    end_at = ensure_utc(policy.voting_end_at)

    if start_at is not None and now < start_at:
        return WindowDecision(permitted=False, reason=VOTING_NOT_STARTED)

    if end_at is not None and now > end_at:
        return WindowDecision(permitted=False, reason=VOTING_ENDED)

    return PERMITTED
