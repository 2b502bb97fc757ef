"""RSVP schemas."""
from datetime import datetime

from pydantic import Field

from awards.schemas.base import BaseSchema


class RSVPRequest(BaseSchema):
    attending: bool
    guest_count: int = Field(default=0)


class RSVPResponse(BaseSchema):
    rsvp_id: int
    user_id: int
    attending: bool
    guest_count: int
    created_at: datetime
    updated_at: datetime


class MyRSVPResponse(BaseSchema):
    rsvp: RSVPResponse | None = None


class RSVPStatsResponse(BaseSchema):
    total_rsvps: int
    attending: int
    not_attending: int
    total_guests: int
