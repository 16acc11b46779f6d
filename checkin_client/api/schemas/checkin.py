from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator


class LocationSample(BaseModel):
    lat: float
    lng: float
    accuracy: float


class CheckinCreate(BaseModel):
    child_id: str | int
    lat: float
    lng: float
    accuracy: float
    note: str = ""
    link: str = ""

    @classmethod
    def from_sample(
        cls, child_id: str | int, sample: LocationSample, note: str = "", link: str = ""
    ) -> "CheckinCreate":
        return cls(
            child_id=child_id,
            lat=sample.lat,
            lng=sample.lng,
            accuracy=sample.accuracy,
            note=note,
            link=link,
        )


class CheckinRecord(BaseModel):
    """A check-in as stored by the service. ``id`` and ``created_at`` are server-assigned."""

    model_config = ConfigDict(extra="ignore")

    id: str | int
    child_id: str | int
    lat: float
    lng: float
    accuracy: float | None = None
    note: str | None = None
    link: str | None = None
    created_at: datetime | None = None

    @field_validator("created_at", mode="before")
    @classmethod
    def _parse_created_at(cls, value):
        # An unreadable timestamp renders as blank rather than dropping the record
        if isinstance(value, str):
            try:
                return datetime.fromisoformat(value.replace("Z", "+00:00"))
            except ValueError:
                return None
        return value
