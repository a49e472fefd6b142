"""Event Pydantic schemas."""

from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, model_validator


def _to_naive_utc(value: datetime) -> datetime:
    """Event dates are stored as naive UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


EventDate = Annotated[datetime, AfterValidator(_to_naive_utc)]


class EventCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    start_date: EventDate
    end_date: EventDate
    time: str | None = None
    photo_url: str | None = None

    @model_validator(mode="after")
    def _end_not_before_start(self) -> "EventCreate":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class EventUpdate(BaseModel):
    name: str | None = Field(None, min_length=1)
    description: str | None = None
    start_date: EventDate | None = None
    end_date: EventDate | None = None
    time: str | None = None
    photo_url: str | None = None


class EventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    start_date: datetime
    end_date: datetime
    time: str | None
    photo_url: str | None
