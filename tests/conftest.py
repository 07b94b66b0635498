"""Pytest fixtures: an isolated database and app per test."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from globalupi.core.config import Settings
from globalupi.core.security import hash_password
from globalupi.db.dal import Database
from globalupi.db.migrate import apply_migrations
from globalupi.main import create_app

TEST_SECRET = "test-signing-secret"

SIGNUP = {
    "name": "Asha Rao",
    "email": "asha@example.com",
    "phone": "+91 90000 00001",
    "bankName": "State Bank",
    "accountNumber": "001122334455",
    "password": "s3cret-pass",
}


@pytest.fixture
def settings(tmp_path) -> Settings:
    s = Settings(
        data_dir=tmp_path,
        db_path=tmp_path / "test.sqlite3",
        jwt_secret=TEST_SECRET,
    )
    s.init_post_load()
    return s


@pytest.fixture
def db(settings) -> Database:
    apply_migrations(settings.db_path)
    return Database(settings.db_path, timeout=settings.sqlite_timeout_seconds)


def _make_account(db: Database, email: str, name: str = "Test User") -> int:
    return db.create_account(
        name=name,
        email=email,
        phone="555-0100",
        bank_name="Test Bank",
        account_number="000111",
        password_hash=hash_password("pw"),
    )


@pytest.fixture
def make_account(db):
    def factory(email: str, name: str = "Test User") -> int:
        return _make_account(db, email, name)

    return factory


@pytest.fixture
def account_id(make_account) -> int:
    return make_account("owner@example.com", "Owner")


@pytest.fixture
def client(settings) -> TestClient:
    app = create_app(settings_override=settings)
    return TestClient(app)


@pytest.fixture
def signup_payload() -> dict:
    return dict(SIGNUP)


@pytest.fixture
def auth_headers(client, signup_payload) -> dict:
    resp = client.post("/api/auth/signup", json=signup_payload)
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}
