from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from typing import Union

from globalupi.core.errors import StorageFailure, ValidationError
from globalupi.db.dal import Database
from globalupi.models.constants import Currency
from globalupi.services import rates
from globalupi.services.money import is_amount, multiply_round2

"""Currency conversion quotes.

Looks up the fixed rate for the exact ordered pair, rounds the converted
amount half-up to cents and appends a conversion record. Balances are never
touched: a conversion is a quote plus an audit entry, unlike send-money.
"""

logger = logging.getLogger("globalupi.conversion")


@dataclass(frozen=True)
class ConversionResult:
    from_amount: float
    from_currency: Currency
    to_amount: float
    to_currency: Currency
    rate: float


class ConversionService:
    def __init__(self, db: Database):
        self.db = db

    def convert(
        self,
        account_id: int,
        from_amount: float,
        from_currency: Union[Currency, str],
        to_currency: Union[Currency, str],
    ) -> ConversionResult:
        if not is_amount(from_amount):
            raise ValidationError("Amount must be greater than zero")
        rate = rates.get_rate(from_currency, to_currency)
        src, dst = rates.parse_currency(from_currency), rates.parse_currency(to_currency)
        to_amount = multiply_round2(from_amount, rate)

        try:
            self.db.record_conversion(account_id, src, dst, from_amount, to_amount, rate)
        except sqlite3.Error as e:
            logger.exception("recording conversion failed for account %s", account_id)
            raise StorageFailure("Error recording conversion") from e

        logger.info(
            "converted %s %s -> %s %s at %s",
            from_amount,
            src.value,
            to_amount,
            dst.value,
            rate,
            extra={"account_id": account_id},
        )
        return ConversionResult(
            from_amount=from_amount,
            from_currency=src,
            to_amount=to_amount,
            to_currency=dst,
            rate=rate,
        )
