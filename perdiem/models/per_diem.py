"""Per-diem models - rate lookups and daily M&IE accrual."""

from pydantic import BaseModel


class PerDiemRates(BaseModel):
    """Result of a per-diem table lookup.

    ``found=False`` means the table has no data for the location; the rate
    fields are then None and must not be read as zero dollars.
    """

    lodging: float | None = None
    mie: float | None = None
    is_foreign: bool = False
    found: bool = False


class MealBreakdown(BaseModel):
    """M&IE split across its four claimable components."""

    breakfast: float
    lunch: float
    dinner: float
    incidentals: float


class DayAccrual(BaseModel):
    """M&IE accrued for one trip day."""

    total: float | None
    percent: int
    per_meal: MealBreakdown | None
    is_first_or_last: bool
    found: bool


class EffectiveDayRates(BaseModel):
    """Location and rates in force for a day after cascading."""

    location: str
    location_inherited: bool
    lodging: float | None
    lodging_inherited: bool
    mie: float | None
    mie_inherited: bool
    rates: PerDiemRates


class DayPerDiem(BaseModel):
    """Per-diem row for one trip day: rates in force plus the accrual."""

    day_index: int
    date: str
    effective: EffectiveDayRates
    accrual: DayAccrual
