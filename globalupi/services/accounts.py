"""Signup, login and balance lookups for the auth gate and dashboard."""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from typing import Any, Dict

from globalupi.core.config import Settings
from globalupi.core.errors import InvalidCredentials, NotFound, StorageFailure
from globalupi.core.security import hash_password, issue_token, verify_password
from globalupi.db.dal import Database
from globalupi.models.account import SignupIn, UserOut

logger = logging.getLogger("globalupi.accounts")

# Compared against when the email is unknown so both failure paths do the same work.
_DUMMY_HASH = hash_password("not-a-real-password")


@dataclass(frozen=True)
class AuthResult:
    token: str
    user: UserOut


class AccountService:
    def __init__(self, db: Database, settings: Settings):
        self.db = db
        self.settings = settings

    def signup(self, payload: SignupIn) -> AuthResult:
        try:
            account_id = self.db.create_account(
                name=payload.name,
                email=payload.email,
                phone=payload.phone,
                bank_name=payload.bank_name,
                account_number=payload.account_number,
                password_hash=hash_password(payload.password),
            )
        except sqlite3.Error as e:
            logger.exception("account creation failed")
            raise StorageFailure() from e
        logger.info("account %s created", account_id, extra={"account_id": account_id})
        user = UserOut(
            id=account_id,
            name=payload.name,
            email=payload.email,
            phone=payload.phone,
            bank_name=payload.bank_name,
            account_number=payload.account_number,
        )
        return AuthResult(token=issue_token(account_id, payload.email, self.settings), user=user)

    def find_by_credential(self, email: str, password: str) -> Dict[str, Any]:
        """Return the account row, or raise InvalidCredentials with one message for every cause."""
        row = self.db.get_account_by_email(email.lower())
        if row is None:
            verify_password(password, _DUMMY_HASH)
            raise InvalidCredentials()
        if not verify_password(password, row["password_hash"]):
            raise InvalidCredentials()
        return row

    def login(self, email: str, password: str) -> AuthResult:
        row = self.find_by_credential(email, password)
        token = issue_token(int(row["id"]), row["email"], self.settings)
        return AuthResult(token=token, user=UserOut.from_row(row))

    def profile(self, account_id: int) -> UserOut:
        row = self.db.get_account(account_id)
        if row is None:
            raise NotFound()
        return UserOut.from_row(row)

    def balances(self, account_id: int) -> Dict[str, float]:
        return self.db.get_balances(account_id)
