"""Fixture-based FX rates and currency conversion.

Rates are quoted against USD ("1 USD = N units"), so converting between two
non-USD currencies goes through USD.
"""

import json
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path

from perdiem.config import get_settings

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"

FxRates = Mapping[str, float]


class UnknownCurrencyError(KeyError):
    """A currency code has no entry in the rate table."""

    def __init__(self, currency: str):
        super().__init__(currency)
        self.currency = currency

    def __str__(self) -> str:
        return f"no FX rate for currency {self.currency!r}"


@lru_cache(maxsize=8)
def _load_rates_file(path: str) -> dict[str, float]:
    with open(path) as f:
        data = json.load(f)
    return {code.upper(): float(rate) for code, rate in data["rates"].items()}


def load_fx_rates(path: str | Path | None = None) -> dict[str, float]:
    """Load a rate table, defaulting to the configured or bundled fixture.

    Args:
        path: JSON file with a ``rates`` object of ``code -> units per USD``

    Returns:
        Fresh dict of upper-cased currency codes to rates
    """
    if path is None:
        path = get_settings().fx_rates_path or FIXTURES_DIR / "fx_rates.json"
    return dict(_load_rates_file(str(path)))


def convert(amount: float, from_ccy: str, to_ccy: str, rates: FxRates) -> float:
    """Convert ``amount`` from one currency to another.

    Raises:
        UnknownCurrencyError: Either code is missing from ``rates``
    """
    src = (from_ccy or "USD").upper()
    dst = (to_ccy or "USD").upper()
    if src == dst:
        return amount

    for code in (src, dst):
        if not rates.get(code):
            raise UnknownCurrencyError(code)

    usd = amount / rates[src]
    return usd * rates[dst]
