"""Verification functions for layovers, hotel stays and lodging caps."""

from collections import defaultdict
from collections.abc import Sequence

from perdiem.models.expenses import LodgingStatus
from perdiem.models.timeline import FlightEvent, HotelEvent, Projection
from perdiem.models.violations import Violation, ViolationKind, ViolationSeverity

MIN_CONNECTION_HOURS = 0.75


def verify_layovers(projection: Projection) -> list[Violation]:
    """Check connections between consecutive segments of the same journey.

    Checks:
    1. Next segment departs before the previous one lands (→ ADVISORY)
    2. Connection shorter than 45 minutes (→ ADVISORY)

    Args:
        projection: Projected timeline; only flight events are read

    Returns:
        List of ADVISORY violations (never BLOCKING)
    """
    violations: list[Violation] = []

    journeys: dict[tuple[str, str], list[FlightEvent]] = defaultdict(list)
    for event in projection.events:
        if isinstance(event, FlightEvent):
            journeys[(event.flight_id, event.direction.value)].append(event)

    for segments in journeys.values():
        segments.sort(key=lambda e: e.segment_index)
        for prev, nxt in zip(segments, segments[1:]):
            gap = nxt.start_hours - prev.end_hours
            affected = [prev.event_id, nxt.event_id]

            # Case 1: Overlapping segments
            if gap < 0:
                violations.append(
                    Violation(
                        kind=ViolationKind.LAYOVER,
                        code="LAYOVER_OVERLAP",
                        message="A connecting flight departs before the previous flight lands.",
                        severity=ViolationSeverity.ADVISORY,
                        affected_ids=affected,
                        details={"gap_hours": round(gap, 2), "at_port": prev.arr_port},
                    )
                )
            # Case 2: Tight connection
            elif gap < MIN_CONNECTION_HOURS:
                violations.append(
                    Violation(
                        kind=ViolationKind.LAYOVER,
                        code="SHORT_LAYOVER",
                        message="A connection is shorter than 45 minutes.",
                        severity=ViolationSeverity.ADVISORY,
                        affected_ids=affected,
                        details={
                            "gap_hours": round(gap, 2),
                            "threshold_hours": MIN_CONNECTION_HOURS,
                            "at_port": prev.arr_port,
                        },
                    )
                )

    return violations


def verify_hotels(projection: Projection) -> list[Violation]:
    """Flag stays whose check-out is not after check-in on the timeline.

    Same-day stays with default times (check-in 14:00, check-out 11:00) land
    here, as do check-out times entered before the check-in time.
    """
    affected = [
        e.event_id
        for e in projection.events
        if isinstance(e, HotelEvent) and e.end_hours <= e.start_hours
    ]
    if not affected:
        return []

    return [
        Violation(
            kind=ViolationKind.HOTEL,
            code="HOTEL_CHECKOUT_BEFORE_CHECKIN",
            message="A hotel stay checks out before it checks in.",
            severity=ViolationSeverity.ADVISORY,
            affected_ids=affected,
            details={"num_stays": len(affected)},
        )
    ]


def verify_lodging_caps(statuses: Sequence[LodgingStatus]) -> list[Violation]:
    """Verify nightly lodging against the cap and the overage allowance.

    Checks:
    1. Above the cap but within the overage allowance (→ ADVISORY)
    2. Above the overage allowance (→ BLOCKING)
    """
    over = [s for s in statuses if s.is_over_cap and not s.is_red_zone]
    red = [s for s in statuses if s.is_red_zone]

    violations: list[Violation] = []
    if over:
        violations.append(
            Violation(
                kind=ViolationKind.LODGING,
                code="LODGING_OVER_CAP",
                message="Lodging exceeds the nightly cap on some days.",
                severity=ViolationSeverity.ADVISORY,
                affected_ids=[f"day:{s.day_index}" for s in over],
                details={"days": [s.day_index for s in over]},
            )
        )
    if red:
        violations.append(
            Violation(
                kind=ViolationKind.LODGING,
                code="LODGING_OVER_OVERAGE_CAP",
                message="Lodging exceeds the cap plus its overage allowance on some days.",
                severity=ViolationSeverity.BLOCKING,
                affected_ids=[f"day:{s.day_index}" for s in red],
                details={
                    "days": [s.day_index for s in red],
                    "amounts": [s.amount for s in red],
                    "caps_with_overage": [s.cap_with_overage for s in red],
                },
            )
        )
    return violations


def run_verifiers(projection: Projection, statuses: Sequence[LodgingStatus]) -> list[Violation]:
    """Run every check and return the combined findings."""
    return [
        *verify_layovers(projection),
        *verify_hotels(projection),
        *verify_lodging_caps(statuses),
    ]
