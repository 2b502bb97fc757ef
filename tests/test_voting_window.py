"""Tests for the voting window policy evaluator."""
from datetime import datetime, timedelta, UTC
from types import SimpleNamespace

import pytest

from awards.services.voting_window import evaluate_voting_window
from awards.utils.exceptions import VotingWindowError

NOW = datetime(2025, 6, 1, 12, 0, 0, tzinfo=UTC)


def _policy(enabled=True, start=None, end=None):
    return SimpleNamespace(voting_enabled=enabled, voting_start_at=start, voting_end_at=end)


def test_missing_policy_is_permitted():
    decision = evaluate_voting_window(None, NOW)
    assert decision.permitted
    assert decision.reason is None


def test_enabled_without_bounds_is_permitted():
    assert evaluate_voting_window(_policy(), NOW).permitted


def test_disabled_policy_denied():
    decision = evaluate_voting_window(_policy(enabled=False), NOW)
    assert not decision.permitted
    assert decision.reason == "VOTING_DISABLED"


def test_disabled_wins_over_window_bounds():
    policy = _policy(enabled=False, start=NOW + timedelta(days=1), end=NOW - timedelta(days=1))
    assert evaluate_voting_window(policy, NOW).reason == "VOTING_DISABLED"


def test_before_start_denied():
    decision = evaluate_voting_window(_policy(start=NOW + timedelta(seconds=1)), NOW)
    assert decision.reason == "VOTING_NOT_STARTED"


def test_after_end_denied():
    decision = evaluate_voting_window(_policy(end=NOW - timedelta(seconds=1)), NOW)
    assert decision.reason == "VOTING_ENDED"


def test_bounds_are_inclusive():
    assert evaluate_voting_window(_policy(start=NOW), NOW).permitted
    assert evaluate_voting_window(_policy(end=NOW), NOW).permitted


def test_naive_bounds_treated_as_utc():
    naive_start = (NOW + timedelta(hours=1)).replace(tzinfo=None)
    decision = evaluate_voting_window(_policy(start=naive_start), NOW)
    assert decision.reason == "VOTING_NOT_STARTED"


def test_raise_for_denial_carries_reason():
    decision = evaluate_voting_window(_policy(end=NOW - timedelta(days=1)), NOW)
    with pytest.raises(VotingWindowError) as exc_info:
        decision.raise_for_denial()
    assert exc_info.value.code == "VOTING_ENDED"
    assert exc_info.value.message == "Voting has ended"


def test_raise_for_denial_noop_when_permitted():
    evaluate_voting_window(_policy(), NOW).raise_for_denial()
