"""Trip aggregate - days, time zones and per-day expense parameters."""

from datetime import datetime, timedelta
from typing import Annotated, Any

from pydantic import BaseModel, Field, field_validator, model_validator

from perdiem.models.itinerary import TransportLeg
from perdiem.timeline.clock import canonical_date, parse_local_calendar_date


def _coerce_canonical(value: Any) -> datetime:
    parsed = parse_local_calendar_date(value)
    if parsed is None:
        raise ValueError(f"unparseable calendar date: {value!r}")
    return parsed


class MealFlags(BaseModel):
    """Which M&IE components the traveler claims for a day."""

    breakfast: bool = True
    lunch: bool = True
    dinner: bool = True
    incidentals: bool = True


class LodgingParams(BaseModel):
    """Lodging actuals and caps for one night."""

    rate: float | None = None
    tax: float = 0.0
    currency: str = "USD"
    max_lodging: float | None = None
    overage_cap_percent: float = Field(default=25.0, ge=0)
    hotel_name: str = ""


class Day(BaseModel):
    """One calendar date of the trip."""

    date: datetime
    location: str | None = None
    mie_base: float | None = Field(default=None, ge=0)
    lodging_rate: float | None = Field(default=None, ge=0)
    meals: MealFlags = Field(default_factory=MealFlags)
    lodging: LodgingParams = Field(default_factory=LodgingParams)
    is_foreign_mie: bool = False
    is_foreign_lodging: bool = False
    # Deprecated: legs nested per day. Projected with the day's date when
    # the leg carries none of its own.
    legs: list[TransportLeg] = Field(default_factory=list)

    @field_validator("date", mode="before")
    @classmethod
    def anchor_at_noon(cls, v: Any) -> datetime:
        """Parse and pin the day's date to local noon."""
        return _coerce_canonical(v)


class Trip(BaseModel):
    """Root aggregate: contiguous days plus home/destination clocks."""

    name: str = ""
    home_tz: str
    dest_tz: str
    home_city: str = ""
    dest_city: str = ""
    days: Annotated[list[Day], Field(min_length=1)]
    transport_legs: list[TransportLeg] = Field(default_factory=list)
    registration_fee: float = 0.0
    registration_currency: str = "USD"

    @model_validator(mode="after")
    def validate_contiguous_days(self) -> "Trip":
        """Ensure days ascend one calendar day at a time with no duplicates."""
        for prev, cur in zip(self.days, self.days[1:]):
            gap = (cur.date.date() - prev.date.date()).days
            if gap <= 0:
                raise ValueError(f"days must be sorted without duplicates: {prev.date:%Y-%m-%d}")
            if gap > 1:
                raise ValueError(f"days must be contiguous: gap after {prev.date:%Y-%m-%d}")
        return self

    @property
    def start_date(self) -> datetime | None:
        """First day of the trip, or None for a degenerate trip."""
        return self.days[0].date if self.days else None

    @property
    def total_days(self) -> int:
        return len(self.days)


def build_days(start: datetime, end: datetime, template: Day | None = None) -> list[Day]:
    """Create one Day per calendar date in ``[start, end]``.

    Args:
        start: First date (any time of day)
        end: Last date; clamped to ``start`` when earlier
        template: Optional day whose settings every new day copies

    Returns:
        Noon-anchored days, ascending
    """
    first = canonical_date(start)
    last = max(canonical_date(end), first)
    count = (last.date() - first.date()).days + 1

    days = []
    for i in range(count):
        date_i = first + timedelta(days=i)
        if template is not None:
            days.append(template.model_copy(update={"date": date_i, "legs": []}, deep=True))
        else:
            days.append(Day(date=date_i))
    return days


def resize_trip(trip: Trip, new_start: datetime, new_end: datetime) -> Trip:
    """Return a copy of ``trip`` covering ``[new_start, new_end]``.

    Extending inserts copies of the second-to-last day (the first day on
    one-day trips) just before the last day, so arrival and departure days
    keep their settings. Shortening removes days from the middle, second to
    last first. Dates are then reassigned consecutively from ``new_start``.
    """
    first = canonical_date(new_start)
    last = max(canonical_date(new_end), first)
    new_count = (last.date() - first.date()).days + 1

    days = [d.model_copy(deep=True) for d in trip.days]
    current_count = len(days)

    if new_count > current_count:
        template_idx = current_count - 2 if current_count > 1 else 0
        template = trip.days[template_idx]
        for _ in range(new_count - current_count):
            filler = template.model_copy(update={"legs": []}, deep=True)
            days.insert(len(days) - 1, filler)
    elif new_count < current_count:
        for _ in range(current_count - new_count):
            if len(days) > 2:
                del days[-2]
            else:
                del days[1]

    redated = [
        d.model_copy(update={"date": first + timedelta(days=i)}) for i, d in enumerate(days)
    ]
    return trip.model_copy(update={"days": redated})
