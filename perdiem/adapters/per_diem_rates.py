"""CSV-backed per-diem rate tables (GSA CONUS and State Department OCONUS).

US files carry three header rows followed by ID, STATE, DESTINATION, COUNTY,
SEASON BEGIN, SEASON END, LODGING, M&IE columns. Foreign files carry one
header row naming the columns. Seasons are month/day ranges that may wrap
around the year end (e.g. November 1 - March 31).
"""

import calendar
import csv
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from functools import lru_cache
from pathlib import Path

from perdiem.config import get_settings
from perdiem.models.per_diem import PerDiemRates

logger = logging.getLogger(__name__)

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"

US_HEADER_ROWS = 3
OTHER_LOCATION = "[Other]"

_MONTHS = {
    **{name.lower(): i for i, name in enumerate(calendar.month_name) if name},
    **{abbr.lower(): i for i, abbr in enumerate(calendar.month_abbr) if abbr},
}

MonthDay = tuple[int, int]


@dataclass(frozen=True)
class SeasonRate:
    """Rates in force between two month/day bounds, inclusive."""

    start: MonthDay
    end: MonthDay
    lodging: float
    mie: float

    def contains(self, on: datetime) -> bool:
        md = (on.month, on.day)
        if self.start <= self.end:
            return self.start <= md <= self.end
        # Wraps around the year end
        return md >= self.start or md <= self.end


@dataclass
class PerDiemLocation:
    """One destination in a rate table."""

    name: str
    region: str
    is_foreign: bool
    lodging: float | None = None
    mie: float | None = None
    seasons: list[SeasonRate] = field(default_factory=list)

    def rates_on(self, on: datetime) -> PerDiemRates:
        for season in self.seasons:
            if season.contains(on):
                return PerDiemRates(
                    lodging=season.lodging, mie=season.mie, is_foreign=self.is_foreign, found=True
                )
        if self.lodging is None or self.mie is None:
            return PerDiemRates(is_foreign=self.is_foreign, found=False)
        return PerDiemRates(
            lodging=self.lodging, mie=self.mie, is_foreign=self.is_foreign, found=True
        )


def parse_dollars(text: str | None) -> float | None:
    """Parse ``"$ 1,234"`` style amounts; None when blank or garbage."""
    if not text:
        return None
    cleaned = re.sub(r"[$,\s]", "", text)
    try:
        return float(cleaned)
    except ValueError:
        return None


def parse_season_bound(text: str | None) -> MonthDay | None:
    """Parse ``"October 1"``, ``"1-Oct"``, ``"Oct 1"`` or ``"10/01"``."""
    if not text:
        return None
    text = text.strip()

    numeric = re.match(r"^(\d{1,2})/(\d{1,2})(?:/\d{2,4})?$", text)
    if numeric:
        month, day = int(numeric.group(1)), int(numeric.group(2))
    else:
        month = day = 0
        for part in re.split(r"[\s\-]+", text):
            if part.lower() in _MONTHS:
                month = _MONTHS[part.lower()]
            elif part.isdigit():
                day = int(part)

    if not (1 <= month <= 12 and 1 <= day <= 31):
        return None
    return month, day


def _add_rate(
    locations: dict[tuple[str, str], PerDiemLocation],
    name: str,
    region: str,
    is_foreign: bool,
    season: tuple[str, str],
    lodging: float,
    mie: float,
) -> None:
    key = (region.upper(), name.upper())
    location = locations.get(key)
    if location is None:
        location = PerDiemLocation(name=name, region=region, is_foreign=is_foreign)
        locations[key] = location

    start, end = (parse_season_bound(s) for s in season)
    if start is not None and end is not None:
        location.seasons.append(SeasonRate(start=start, end=end, lodging=lodging, mie=mie))
    else:
        location.lodging = lodging
        location.mie = mie


def parse_us_csv(lines: Iterable[str]) -> list[PerDiemLocation]:
    """Parse a GSA CONUS rate file.

    ``"Boston / Cambridge"`` destinations expand to one location per city.
    Rows missing a state, destination or either amount are ignored.
    """
    locations: dict[tuple[str, str], PerDiemLocation] = {}
    for row_number, row in enumerate(csv.reader(lines)):
        if row_number < US_HEADER_ROWS or len(row) < 8:
            continue
        state, destination = row[1].strip(), row[2].strip()
        lodging, mie = parse_dollars(row[6]), parse_dollars(row[7])
        if not state or not destination or lodging is None or mie is None:
            continue
        for city in (c.strip() for c in destination.split("/")):
            if city:
                _add_rate(locations, city, state, False, (row[4], row[5]), lodging, mie)
    return list(locations.values())


def _column(header: list[str], predicate) -> int | None:
    for idx, name in enumerate(header):
        if predicate(name.strip().lower()):
            return idx
    return None


def parse_foreign_csv(lines: Iterable[str]) -> list[PerDiemLocation]:
    """Parse a State Department OCONUS rate file (one header row)."""
    reader = csv.reader(lines)
    header = next(reader, None)
    if header is None:
        return []

    cols = {
        "country": _column(header, lambda h: h == "country"),
        "location": _column(header, lambda h: h == "location"),
        "start": _column(header, lambda h: h.startswith("season start")),
        "end": _column(header, lambda h: h.startswith("season end")),
        "lodging": _column(header, lambda h: h == "lodging"),
        "mie": _column(header, lambda h: h.startswith("meals")),
    }
    missing = [name for name, idx in cols.items() if idx is None]
    if missing:
        raise ValueError(f"foreign per-diem file is missing columns: {missing}")

    locations: dict[tuple[str, str], PerDiemLocation] = {}
    for row in reader:
        if len(row) <= max(cols.values()):
            continue
        country = row[cols["country"]].strip()
        city = row[cols["location"]].strip()
        lodging, mie = parse_dollars(row[cols["lodging"]]), parse_dollars(row[cols["mie"]])
        if not country or not city or lodging is None or mie is None:
            continue
        season = (row[cols["start"]], row[cols["end"]])
        if season[0].strip().upper() == "N/A":
            season = ("", "")
        _add_rate(locations, city, country, True, season, lodging, mie)
    return list(locations.values())


def _split_location(location: str) -> tuple[str, str]:
    city, _, region = location.partition(",")
    return city.strip(), region.strip()


def _region_matches(entry: PerDiemLocation, region: str) -> bool:
    if not region:
        return True
    a, b = entry.region.upper(), region.upper()
    if not entry.is_foreign:
        return a == b
    return a == b or (len(b) > 2 and (b in a or a in b))


class PerDiemTable:
    """Lookup over parsed US and foreign locations.

    ``rates_for`` accepts ``"City"``, ``"City, ST"`` or ``"City, Country"``.
    An exact city name wins over a partial match. A foreign country named
    in the location falls back to its ``[Other]`` row. Anything else is
    reported as not found rather than guessed.
    """

    def __init__(self, locations: Iterable[PerDiemLocation]):
        self.locations = list(locations)

    def find(self, location: str) -> PerDiemLocation | None:
        city, region = _split_location(location)
        if not city:
            return None
        city_upper = city.upper()
        candidates = [
            e
            for e in self.locations
            if e.name != OTHER_LOCATION and _region_matches(e, region)
        ]

        for entry in candidates:
            if entry.name.upper() == city_upper:
                return entry
        if len(city_upper) >= 3:
            for entry in candidates:
                name = entry.name.upper()
                if city_upper in name or name in city_upper:
                    return entry

        if region:
            for entry in self.locations:
                if entry.name == OTHER_LOCATION and entry.is_foreign and _region_matches(entry, region):
                    return entry
        return None

    def rates_for(self, location: str, on: datetime) -> PerDiemRates:
        entry = self.find(location)
        if entry is None:
            logger.debug(f"No per-diem rates for location={location!r}")
            return PerDiemRates(found=False)
        return entry.rates_on(on)


def load_table(us_csv: str | Path | None = None, foreign_csv: str | Path | None = None) -> PerDiemTable:
    """Build a table from CSV files, defaulting to the bundled samples."""
    us_path = Path(us_csv) if us_csv else FIXTURES_DIR / "per_diem_us_sample.csv"
    foreign_path = Path(foreign_csv) if foreign_csv else FIXTURES_DIR / "per_diem_foreign_sample.csv"

    with open(us_path, newline="", encoding="utf-8") as f:
        locations = parse_us_csv(f)
    with open(foreign_path, newline="", encoding="utf-8") as f:
        locations.extend(parse_foreign_csv(f))

    logger.info(f"Loaded {len(locations)} per-diem locations from {us_path.name}, {foreign_path.name}")
    return PerDiemTable(locations)


@lru_cache
def default_table() -> PerDiemTable:
    settings = get_settings()
    return load_table(settings.us_per_diem_csv, settings.foreign_per_diem_csv)


def rates_for(location: str, on: datetime) -> PerDiemRates:
    """Look up rates in the configured table."""
    return default_table().rates_for(location, on)
