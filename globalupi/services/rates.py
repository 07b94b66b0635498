"""Fixed exchange-rate table.

Rates are keyed by the exact ordered pair. There is no inverse or transitive
lookup: USD->EUR and EUR->USD are independent entries and are not reciprocals
of each other, and a pair that is not listed (including a currency mapped to
itself) is rejected.
"""

from __future__ import annotations
from typing import Dict, List, Tuple, Union

from globalupi.core.errors import UnknownPair
from globalupi.models.constants import Currency

Pair = Tuple[Currency, Currency]

_RATES: Dict[Pair, float] = {
    (Currency.INR, Currency.USD): 0.012,
    (Currency.INR, Currency.EUR): 0.011,
    (Currency.USD, Currency.INR): 83.50,
    (Currency.USD, Currency.EUR): 0.92,
    (Currency.EUR, Currency.INR): 91.05,
    (Currency.EUR, Currency.USD): 1.09,
}


def parse_currency(code: Union[Currency, str]) -> Currency:
    """Currency for a code, case-insensitive; unsupported codes raise UnknownPair."""
    try:
        return Currency(code.upper() if isinstance(code, str) else code)
    except ValueError as e:
        raise UnknownPair() from e


def get_rate(from_currency: Union[Currency, str], to_currency: Union[Currency, str]) -> float:
    """Return the multiplier for (from, to) or raise UnknownPair."""
    pair = (parse_currency(from_currency), parse_currency(to_currency))
    try:
        return _RATES[pair]
    except KeyError as e:
        raise UnknownPair() from e


def supported_pairs() -> List[Pair]:
    return list(_RATES)
