"""Base schemas with common configuration."""
from pydantic import BaseModel, ConfigDict, field_serializer
from pydantic.alias_generators import to_camel
from datetime import datetime, UTC


def serialize_datetime_utc(dt: datetime) -> str:
    """
    Serialize datetime to ISO 8601 with explicit UTC timezone.

    SQLite stores datetimes as naive strings, so we treat them as UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat().replace('+00:00', 'Z')


class BaseSchema(BaseModel):
    """Base schema for API payloads: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_serializer("*", mode="wrap")
    def serialize_datetimes(self, value, handler):
        """Serialize datetime fields with an explicit UTC ``Z`` suffix.

        Runs per field, so nested schemas get the same treatment in both
        python and JSON mode.
        """
        if isinstance(value, datetime):
            return serialize_datetime_utc(value)
        return handler(value)


class MessageResponse(BaseSchema):
    message: str
