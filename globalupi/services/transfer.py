"""Send-money service.

Debits the acting account and appends a `sent` ledger record in one database
transaction. Recipients are external payees: nothing is ever credited to
another managed account.
"""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from typing import Optional, Union

from globalupi.core.errors import (
    InsufficientFunds,
    StorageFailure,
    ValidationError,
)
from globalupi.db.dal import Database
from globalupi.models.constants import (
    DEFAULT_SEND_DESCRIPTION,
    STATUS_COMPLETED,
    Currency,
    TransactionKind,
)
from globalupi.models.transaction import Recipient
from globalupi.services.money import has_cent_precision, is_amount

logger = logging.getLogger("globalupi.transfer")


@dataclass(frozen=True)
class TransferResult:
    transaction_id: str
    ledger_id: int
    new_balance: float
    amount: float
    currency: Currency


class TransferService:
    def __init__(self, db: Database, reference_prefix: str = "TXN"):
        self.db = db
        self.reference_prefix = reference_prefix

    def reference_for(self, ledger_id: int) -> str:
        return f"{self.reference_prefix}{ledger_id}"

    def send_money(
        self,
        account_id: int,
        recipient: Recipient,
        amount: float,
        currency: Union[Currency, str],
        message: Optional[str] = None,
    ) -> TransferResult:
        # 1. Preconditions
        for field in ("name", "email", "bank_name", "account_number"):
            if not getattr(recipient, field, None):
                raise ValidationError()
        if not is_amount(amount):
            raise ValidationError("Amount must be greater than zero")
        if not has_cent_precision(amount):
            raise ValidationError("Amount cannot have more than 2 decimal places")
        try:
            currency = Currency(currency.upper() if isinstance(currency, str) else currency)
        except ValueError as e:
            raise ValidationError(f"Unsupported currency '{currency}'") from e
        description = message or DEFAULT_SEND_DESCRIPTION

        # 2. Check, debit and record under one write transaction
        try:
            with self.db.transaction() as cur:
                balance = self.db.get_balance(account_id, currency, cur=cur)
                if balance < amount:
                    raise InsufficientFunds()
                new_balance = self.db.debit(account_id, currency, amount, cur=cur)
                ledger_id = self.db.record_transaction(
                    account_id,
                    TransactionKind.SENT,
                    recipient,
                    amount,
                    currency,
                    description,
                    status=STATUS_COMPLETED,
                    cur=cur,
                )
        except sqlite3.Error as e:
            logger.exception("send-money failed for account %s", account_id)
            raise StorageFailure() from e

        result = TransferResult(
            transaction_id=self.reference_for(ledger_id),
            ledger_id=ledger_id,
            new_balance=new_balance,
            amount=amount,
            currency=currency,
        )
        logger.info(
            "sent %s %s from account %s (%s)",
            amount,
            currency.value,
            account_id,
            result.transaction_id,
            extra={"account_id": account_id},
        )
        return result
