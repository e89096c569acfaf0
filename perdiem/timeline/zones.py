"""Timezone resolution and DST-aware offsets between two zones."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from perdiem.adapters.airports import airport_timezone
from perdiem.config import get_settings
from perdiem.models.trip import Trip

logger = logging.getLogger(__name__)

AirportTimezoneLookup = Callable[[str | None], str | None]


@dataclass(frozen=True)
class ZoneContext:
    """The two clocks of a trip plus the labels used to match places to them."""

    home_tz: str
    dest_tz: str
    home_city: str = ""
    dest_city: str = ""
    airport_timezone: AirportTimezoneLookup = field(default=airport_timezone, compare=False)

    @classmethod
    def from_trip(
        cls, trip: Trip, lookup: AirportTimezoneLookup = airport_timezone
    ) -> "ZoneContext":
        """Build the context for a trip."""
        return cls(
            home_tz=trip.home_tz,
            dest_tz=trip.dest_tz,
            home_city=trip.home_city,
            dest_city=trip.dest_city,
            airport_timezone=lookup,
        )

    @property
    def is_dual(self) -> bool:
        """True when home and destination clocks differ."""
        return self.home_tz != self.dest_tz


def _city_matches(token: str, city: str) -> bool:
    t = token.strip().upper()
    c = city.strip().upper()
    if not t or not c:
        return False
    return t in c or c in t


def resolve_timezone(token: str | None, context: ZoneContext, preferred: str | None = None) -> str:
    """Resolve a place token to an IANA timezone id.

    Resolution order, first match wins:
    1. Known 3-letter airport code
    2. Token and home-city label contain one another (case-insensitive)
    3. Same test against the destination-city label
    4. ``preferred`` when given, else the home timezone

    City matching is a low-confidence heuristic and only applies when no
    airport data exists for the token. This never fails; some zone is always
    returned.
    """
    if token and token.strip():
        code = token.strip()
        if len(code) == 3 and code.isalpha():
            tz = context.airport_timezone(code)
            if tz:
                return tz
        if _city_matches(code, context.home_city):
            return context.home_tz
        if _city_matches(code, context.dest_city):
            return context.dest_tz

    return preferred or context.home_tz


def _as_utc(instant: datetime) -> datetime:
    # Naive values are calendar anchors; read them as UTC so both zones see
    # one absolute instant.
    if instant.tzinfo is None:
        return instant.replace(tzinfo=UTC)
    return instant.astimezone(UTC)


def _civil_difference(instant_utc: datetime, tz_a: str, tz_b: str) -> float:
    try:
        wall_a = instant_utc.astimezone(ZoneInfo(tz_a)).replace(tzinfo=None)
        wall_b = instant_utc.astimezone(ZoneInfo(tz_b)).replace(tzinfo=None)
    except (ZoneInfoNotFoundError, ValueError) as e:
        logger.warning(
            f"Unknown timezone in offset lookup: {tz_a} / {tz_b}",
            extra={"structured": {"tz_a": tz_a, "tz_b": tz_b, "error": type(e).__name__}},
        )
        return 0.0
    return (wall_a - wall_b).total_seconds() / 3600


_cached_difference = lru_cache(maxsize=get_settings().offset_cache_size)(_civil_difference)


def offset_hours(instant: datetime, tz_a: str | None, tz_b: str | None) -> float:
    """Hours to subtract from a ``tz_a`` wall clock to get the ``tz_b`` wall clock.

    Evaluated at ``instant``, so daylight-saving transitions are honored. Naive
    instants (the noon-anchored calendar dates used throughout) are read as UTC.

    Returns:
        Signed offset in hours. ``0.0`` when the zones are equal, missing or
        unknown; this function never raises.
    """
    if not tz_a or not tz_b or tz_a == tz_b:
        return 0.0
    return _cached_difference(_as_utc(instant), tz_a, tz_b)
