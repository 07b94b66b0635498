"""Pydantic domain models for the GlobalUPI API."""

from .constants import (
    CURRENCIES,
    TRANSACTION_KINDS,
    BALANCE_COLUMNS,
    Currency,
    TransactionKind,
)  # re-export
from .account import SignupIn, LoginIn, UserOut, Balances
from .transaction import Recipient, SendMoneyIn, SendMoneyOut, TransactionOut
from .conversion import ConvertIn, ConversionOut
from .investment import InvestmentIn

__all__ = [
    "CURRENCIES",
    "TRANSACTION_KINDS",
    "BALANCE_COLUMNS",
    "Currency",
    "TransactionKind",
    "SignupIn",
    "LoginIn",
    "UserOut",
    "Balances",
    "Recipient",
    "SendMoneyIn",
    "SendMoneyOut",
    "TransactionOut",
    "ConvertIn",
    "ConversionOut",
    "InvestmentIn",
]
