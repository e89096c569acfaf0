"""Midnight grid - day boundaries of both clocks on the home axis."""

from datetime import datetime, timedelta

from perdiem.config import get_settings
from perdiem.models.common import TimezoneSide
from perdiem.models.timeline import MidnightMark
from perdiem.timeline.clock import canonical_date, day_label
from perdiem.timeline.zones import offset_hours


def build_midnights(
    trip_start: datetime | None,
    total_days: int,
    home_tz: str,
    dest_tz: str | None,
) -> list[MidnightMark]:
    """Compute every home and destination midnight across the trip span.

    Home midnights sit at ``i * 24`` for ``i`` in ``0..total_days``. When the
    destination clock differs, its midnight starting destination date ``i``
    sits at ``i * 24 - offset`` for ``i`` in ``0..total_days + 1``, kept only
    inside ``[lower_bound, (total_days + 1) * 24]``.

    Returns:
        Marks sorted by position, home before destination on ties. Empty for
        a trip without days.
    """
    if trip_start is None or total_days <= 0:
        return []

    start = canonical_date(trip_start)
    marks = [
        MidnightMark(
            hours_from_start=i * 24.0,
            tz=TimezoneSide.home,
            label=day_label(start + timedelta(days=i)),
            day_index=i,
        )
        for i in range(total_days + 1)
    ]

    if dest_tz and dest_tz != home_tz:
        lower = get_settings().dest_midnight_lower_bound_hours
        upper = (total_days + 1) * 24.0
        for i in range(total_days + 2):
            dest_date = start + timedelta(days=i)
            position = i * 24 - offset_hours(dest_date, dest_tz, home_tz)
            if lower <= position <= upper:
                marks.append(
                    MidnightMark(
                        hours_from_start=position,
                        tz=TimezoneSide.dest,
                        label=day_label(dest_date),
                        day_index=i,
                    )
                )

    marks.sort(key=lambda m: (m.hours_from_start, m.tz != TimezoneSide.home))
    return marks
