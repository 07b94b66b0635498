from __future__ import annotations

import sqlite3
import threading

import pytest

from globalupi.core.errors import (
    InsufficientFunds,
    NotFound,
    StorageFailure,
    ValidationError,
)
from globalupi.models.constants import Currency
from globalupi.models.transaction import Recipient
from globalupi.services.transfer import TransferService

PAYEE = Recipient(
    name="Meera", email="meera@example.com", bank_name="ICICI", account_number="7788"
)


@pytest.fixture
def service(db) -> TransferService:
    return TransferService(db)


def test_send_debits_exactly_and_records_once(db, service, account_id) -> None:
    result = service.send_money(account_id, PAYEE, 150.5, Currency.USD, "rent")

    assert result.new_balance == 349.5
    assert db.get_balance(account_id, Currency.USD) == 349.5
    assert result.transaction_id == f"TXN{result.ledger_id}"

    rows = list(db.list_transactions(account_id))
    assert len(rows) == 1
    row = rows[0]
    assert row["id"] == result.ledger_id
    assert row["type"] == "sent"
    assert row["amount"] == 150.5
    assert row["currency"] == "USD"
    assert row["description"] == "rent"
    assert row["status"] == "completed"
    assert row["recipient_email"] == "meera@example.com"


def test_default_description(db, service, account_id) -> None:
    service.send_money(account_id, PAYEE, 1.0, "inr")
    row = next(iter(db.list_transactions(account_id)))
    assert row["description"] == "Payment sent"
    assert row["currency"] == "INR"


def test_custom_reference_prefix(db, account_id) -> None:
    result = TransferService(db, reference_prefix="GUPI-").send_money(
        account_id, PAYEE, 1.0, Currency.EUR
    )
    assert result.transaction_id == f"GUPI-{result.ledger_id}"


def test_insufficient_funds_changes_nothing(db, service, account_id) -> None:
    with pytest.raises(InsufficientFunds):
        service.send_money(account_id, PAYEE, 300.01, Currency.EUR)
    assert db.get_balance(account_id, Currency.EUR) == 300.00
    assert list(db.list_transactions(account_id)) == []


def test_unknown_account(service) -> None:
    with pytest.raises(NotFound):
        service.send_money(4242, PAYEE, 1.0, Currency.INR)


@pytest.mark.parametrize("amount", [0, -1.0, float("nan"), float("inf"), True])
def test_amount_must_be_positive_and_finite(service, account_id, amount) -> None:
    with pytest.raises(ValidationError):
        service.send_money(account_id, PAYEE, amount, Currency.INR)


@pytest.mark.parametrize("amount", [0.004, 0.001, 12.345])
def test_sub_cent_amount_rejected_without_side_effects(db, service, account_id, amount) -> None:
    with pytest.raises(ValidationError):
        service.send_money(account_id, PAYEE, amount, Currency.USD)
    assert db.get_balance(account_id, Currency.USD) == 500.0
    assert list(db.list_transactions(account_id)) == []


def test_ledger_amount_matches_debit(db, service, account_id) -> None:
    result = service.send_money(account_id, PAYEE, 0.01, Currency.USD)
    assert result.new_balance == 499.99
    assert [row["amount"] for row in db.list_transactions(account_id)] == [0.01]


def test_recipient_fields_required(service, account_id) -> None:
    blank = PAYEE.model_copy(update={"bank_name": ""})
    with pytest.raises(ValidationError):
        service.send_money(account_id, blank, 1.0, Currency.INR)


def test_unsupported_currency(service, account_id) -> None:
    with pytest.raises(ValidationError):
        service.send_money(account_id, PAYEE, 1.0, "GBP")


def test_ledger_failure_rolls_back_debit(db, service, account_id, monkeypatch) -> None:
    def broken_append(*args, **kwargs):
        raise sqlite3.OperationalError("disk I/O error")

    monkeypatch.setattr(db, "record_transaction", broken_append)
    with pytest.raises(StorageFailure):
        service.send_money(account_id, PAYEE, 100.0, Currency.USD)

    monkeypatch.undo()
    assert db.get_balance(account_id, Currency.USD) == 500.00
    assert list(db.list_transactions(account_id)) == []


def test_balances_never_negative_after_many_sends(db, service, account_id) -> None:
    for amount in (120.0, 120.0, 120.0, 120.0, 120.0):
        try:
            service.send_money(account_id, PAYEE, amount, Currency.USD)
        except InsufficientFunds:
            pass
    balances = db.get_balances(account_id)
    assert balances["balance_usd"] == 20.0
    assert all(v >= 0 for v in balances.values())
    assert len(list(db.list_transactions(account_id, "sent"))) == 4


def test_concurrent_full_balance_sends_single_winner(db, account_id) -> None:
    barrier = threading.Barrier(2)
    outcomes: list = []
    lock = threading.Lock()

    def worker() -> None:
        service = TransferService(db)
        barrier.wait()
        try:
            result = service.send_money(account_id, PAYEE, 500.0, Currency.USD)
            outcome = result
        except InsufficientFunds as e:
            outcome = e
        with lock:
            outcomes.append(outcome)

    threads = [threading.Thread(target=worker) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)

    assert len(outcomes) == 2
    assert sum(isinstance(o, InsufficientFunds) for o in outcomes) == 1
    assert db.get_balance(account_id, Currency.USD) == 0.0
    assert len(list(db.list_transactions(account_id, "sent"))) == 1


def test_concurrent_sends_on_different_accounts(db, make_account) -> None:
    first = make_account("first@example.com")
    second = make_account("second@example.com")
    barrier = threading.Barrier(2)
    results: dict = {}

    def worker(acct: int) -> None:
        barrier.wait()
        results[acct] = TransferService(db).send_money(acct, PAYEE, 500.0, Currency.USD)

    threads = [threading.Thread(target=worker, args=(a,)) for a in (first, second)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)

    assert results[first].new_balance == 0.0
    assert results[second].new_balance == 0.0
