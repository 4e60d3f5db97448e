"""Trip models."""

from datetime import date

from pydantic import BaseModel, Field, model_validator


class TripDraft(BaseModel):
    """Trip as submitted by the dashboard, before an id is assigned."""

    user_id: str
    title: str = Field(..., min_length=1)
    start_date: date
    end_date: date
    cover_image: str | None = None
    notes: str | None = None

    @model_validator(mode="after")
    def _check_date_range(self) -> "TripDraft":
        if self.start_date > self.end_date:
            raise ValueError("start_date must be on or before end_date")
        return self


class Trip(TripDraft):
    """Stored trip."""

    id: str

    @property
    def num_days(self) -> int:
        """Number of calendar days covered, inclusive."""
        return (self.end_date - self.start_date).days + 1

    def contains(self, day: date) -> bool:
        """Check whether a date falls within [start_date, end_date]."""
        return self.start_date <= day <= self.end_date
