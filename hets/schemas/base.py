"""
Base schema classes with custom serialization.

Timestamps are stored as naive UTC in TIMESTAMP WITHOUT TIME ZONE columns.
They are emitted with an explicit Z suffix and millisecond precision so the
front-end never has to guess the timezone. Calendar dates stay plain
YYYY-MM-DD strings.
"""

from datetime import date, datetime, timezone
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer


def serialize_datetime_utc(dt: datetime | None) -> str | None:
    """
    Serialize a datetime as ISO-8601 UTC.

    Example: 2024-05-01 09:01:16.715 -> "2024-05-01T09:01:16.715Z"
    """
    if dt is None:
        return None

    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)

    formatted = dt.strftime("%Y-%m-%dT%H:%M:%S")
    ms = dt.microsecond // 1000
    return f"{formatted}.{ms:03d}Z"


def serialize_date_simple(d: date | None) -> str | None:
    """Serialize date as simple ISO date string (YYYY-MM-DD)."""
    if d is None:
        return None
    return d.isoformat()


# Annotated types for Pydantic v2 serialization
DateTimeUTC = Annotated[datetime, PlainSerializer(serialize_datetime_utc, return_type=str)]
DateSimple = Annotated[date, PlainSerializer(serialize_date_simple, return_type=str)]


class BaseSchema(BaseModel):
    """
    Base schema class with standard configuration.
    Use DateTimeUTC or DateSimple types for fields.
    """

    model_config = ConfigDict(
        from_attributes=True,
    )
