"""Money / rounding helpers.

Centralized so the transfer and conversion services use identical rounding
semantics.
"""

from __future__ import annotations

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

CENT = Decimal("0.01")


def to_decimal(value: Union[float, int, str, Decimal]) -> Decimal:
    # str() first so 0.1 becomes Decimal("0.1"), not its binary expansion
    return value if isinstance(value, Decimal) else Decimal(str(value))


def round2(value: Union[float, Decimal]) -> float:
    return float(to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP))


def multiply_round2(amount: float, rate: float) -> float:
    """Return amount * rate rounded half-up to cents, computed in decimal."""
    return round2(to_decimal(amount) * to_decimal(rate))


def is_amount(value: object) -> bool:
    """True for a positive, finite int or float. Booleans are not amounts."""
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
        and value > 0
    )


def has_cent_precision(value: Union[float, int, Decimal]) -> bool:
    return to_decimal(value).as_tuple().exponent >= -2
