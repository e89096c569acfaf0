"""Fixture-based airport lookups: IATA code to IANA timezone and city."""

import json
from functools import lru_cache
from pathlib import Path

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


@lru_cache
def _load_table(filename: str) -> dict[str, str]:
    fixtures_path = FIXTURES_DIR / filename
    with open(fixtures_path, encoding="utf-8") as f:
        data: dict[str, str] = json.load(f)
    return data


def _normalize_code(code: str | None) -> str | None:
    if not code:
        return None
    normalized = code.strip().upper()
    return normalized or None


def airport_timezone(code: str | None) -> str | None:
    """Look up the IANA timezone for a 3-letter airport code.

    Args:
        code: IATA airport code, any case, surrounding whitespace ignored

    Returns:
        IANA timezone id, or None if the code is unknown
    """
    normalized = _normalize_code(code)
    if normalized is None:
        return None
    return _load_table("airport_timezones.json").get(normalized)


def airport_city(code: str | None) -> str | None:
    """Look up the display city for an airport code, or None if unknown."""
    normalized = _normalize_code(code)
    if normalized is None:
        return None
    return _load_table("airport_cities.json").get(normalized)


def is_airport_code(token: str | None) -> bool:
    """True when ``token`` is a 3-letter code present in the timezone table."""
    normalized = _normalize_code(token)
    return normalized is not None and len(normalized) == 3 and airport_timezone(normalized) is not None
