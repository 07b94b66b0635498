"""Domain constants and enumerations for validation."""

from enum import Enum
from typing import Dict, Set


class Currency(str, Enum):
    INR = "INR"
    USD = "USD"
    EUR = "EUR"


class TransactionKind(str, Enum):
    SENT = "sent"
    RECEIVED = "received"
    CONVERSION = "conversion"


# Column chosen per currency; never built from request input.
BALANCE_COLUMNS: Dict[Currency, str] = {
    Currency.INR: "balance_inr",
    Currency.USD: "balance_usd",
    Currency.EUR: "balance_eur",
}

STARTING_BALANCES: Dict[Currency, float] = {
    Currency.INR: 25500.00,
    Currency.USD: 500.00,
    Currency.EUR: 300.00,
}

CURRENCIES: Set[str] = {c.value for c in Currency}
TRANSACTION_KINDS: Set[str] = {k.value for k in TransactionKind}
ALL_KINDS = "all"
STATUS_COMPLETED = "completed"
DEFAULT_SEND_DESCRIPTION = "Payment sent"
