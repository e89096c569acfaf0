"""Expense models - lodging cap checks and trip totals."""

from pydantic import BaseModel


class LodgingStatus(BaseModel):
    """One night's lodging compared with its cap, in the reporting currency."""

    day_index: int
    amount: float | None
    cap: float | None
    cap_with_overage: float | None
    is_over_cap: bool
    is_red_zone: bool


class TripTotals(BaseModel):
    """Reimbursable totals for a trip, in the reporting currency."""

    currency: str
    travel: float
    lodging: float
    booked_lodging: float = 0.0
    mie: float | None
    fees: float
    grand: float
