"""Tests for SettingsService."""
from datetime import datetime, timedelta, UTC

import pytest
from sqlalchemy import func, select

from awards.models import VotingSettings
from awards.services import SettingsService
from awards.utils.exceptions import InvalidVotingWindowError


@pytest.mark.asyncio
async def test_default_settings_created_lazily(db_session):
    service = SettingsService(db_session)

    settings_row = await service.get_voting_settings()
    assert settings_row.voting_enabled is True
    assert settings_row.voting_start_at is None
    assert settings_row.voting_end_at is None
    assert settings_row.results_announced is False

    await service.get_voting_settings()
    count = await db_session.execute(select(func.count(VotingSettings.settings_id)))
    assert count.scalar() == 1


@pytest.mark.asyncio
async def test_partial_update_leaves_other_fields(db_session, user_factory):
    admin = await user_factory()
    service = SettingsService(db_session)
    start = datetime(2025, 3, 1, tzinfo=UTC)

    await service.update_voting_settings({"voting_start_at": start}, updated_by=admin.user_id)
    updated = await service.update_voting_settings({"voting_enabled": False}, updated_by=admin.user_id)

    assert updated.voting_enabled is False
    assert updated.voting_start_at.replace(tzinfo=UTC) == start
    assert updated.updated_by_id == admin.user_id


@pytest.mark.asyncio
async def test_explicit_none_clears_bound(db_session):
    service = SettingsService(db_session)
    await service.update_voting_settings({"voting_end_at": datetime(2030, 1, 1, tzinfo=UTC)})

    updated = await service.update_voting_settings({"voting_end_at": None})
    assert updated.voting_end_at is None


@pytest.mark.asyncio
async def test_start_must_precede_end(db_session):
    service = SettingsService(db_session)
    now = datetime.now(UTC)

    with pytest.raises(InvalidVotingWindowError):
        await service.update_voting_settings({"voting_start_at": now, "voting_end_at": now - timedelta(hours=1)})

    await service.update_voting_settings({"voting_end_at": now})
    with pytest.raises(InvalidVotingWindowError):
        await service.update_voting_settings({"voting_start_at": now + timedelta(days=1)})


@pytest.mark.asyncio
async def test_unknown_field_rejected(db_session):
    with pytest.raises(ValueError, match="results_announced"):
        await SettingsService(db_session).update_voting_settings({"results_announced": True})


@pytest.mark.asyncio
async def test_check_voting_window(db_session):
    service = SettingsService(db_session)
    now = datetime.now(UTC)

    assert (await service.check_voting_window(now)).permitted

    await service.update_voting_settings({"voting_end_at": now - timedelta(minutes=1)})
    decision = await service.check_voting_window(now)
    assert not decision.permitted
    assert decision.reason == "VOTING_ENDED"


@pytest.mark.asyncio
async def test_reveal_winners(db_session):
    settings_row = await SettingsService(db_session).reveal_winners()
    assert settings_row.results_announced is True
