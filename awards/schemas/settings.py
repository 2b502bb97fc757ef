"""Voting settings schemas."""
from datetime import datetime
from typing import Optional

from awards.schemas.base import BaseSchema


class VotingSettingsResponse(BaseSchema):
    voting_enabled: bool
    voting_start_at: Optional[datetime] = None
    voting_end_at: Optional[datetime] = None
    results_announced: bool
    updated_at: Optional[datetime] = None


class VotingSettingsUpdateRequest(BaseSchema):
    """Partial update; omitted fields are left unchanged, explicit nulls clear a bound."""

    voting_enabled: Optional[bool] = None
    voting_start_at: Optional[datetime] = None
    voting_end_at: Optional[datetime] = None

    def to_changes(self) -> dict:
        # Raw attribute values; a dump would render the datetimes as strings
        changes = {name: getattr(self, name) for name in self.model_fields_set}
        if changes.get("voting_enabled", True) is None:
            changes.pop("voting_enabled")
        return changes
