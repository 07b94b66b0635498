from __future__ import annotations

import pytest

RECIPIENT = {
    "recipientName": "Kiran",
    "recipientEmail": "kiran@example.com",
    "recipientBankName": "Axis",
    "recipientAccountNumber": "9090",
}


def test_health_reports_schema_version(client) -> None:
    body = client.get("/health").json()
    assert body["status"] == "ok"
    assert body["schema_version"] == 2


def test_signup_returns_token_and_user(client, signup_payload) -> None:
    resp = client.post("/api/auth/signup", json=signup_payload)
    body = resp.json()
    assert resp.status_code == 200
    assert body["success"] is True
    assert body["token"]
    assert body["user"]["email"] == signup_payload["email"]
    assert body["user"]["bankName"] == signup_payload["bankName"]
    assert "password" not in body["user"]


def test_signup_duplicate_email(client, signup_payload) -> None:
    client.post("/api/auth/signup", json=signup_payload)
    resp = client.post("/api/auth/signup", json=signup_payload)
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "message": "Email already exists"}


def test_signup_requires_all_fields(client, signup_payload) -> None:
    payload = {k: v for k, v in signup_payload.items() if k != "phone"}
    resp = client.post("/api/auth/signup", json=payload)
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "message": "All fields are required"}


def test_login_uniform_failure_message(client, signup_payload) -> None:
    client.post("/api/auth/signup", json=signup_payload)
    wrong_pw = client.post(
        "/api/auth/login", json={"email": signup_payload["email"], "password": "nope"}
    )
    no_user = client.post(
        "/api/auth/login", json={"email": "ghost@example.com", "password": "nope"}
    )
    assert wrong_pw.status_code == no_user.status_code == 401
    assert wrong_pw.json() == no_user.json() == {
        "success": False,
        "message": "Invalid email or password",
    }


def test_login_success(client, signup_payload) -> None:
    client.post("/api/auth/signup", json=signup_payload)
    resp = client.post(
        "/api/auth/login",
        json={"email": signup_payload["email"].upper(), "password": signup_payload["password"]},
    )
    body = resp.json()
    assert body["success"] is True
    assert body["user"]["name"] == signup_payload["name"]


def test_core_routes_require_token(client) -> None:
    for method, path in [
        ("GET", "/api/dashboard/balance"),
        ("POST", "/api/send-money"),
        ("POST", "/api/converter"),
        ("GET", "/api/transactions"),
        ("GET", "/api/investments"),
    ]:
        resp = client.request(method, path, json={})
        assert resp.status_code == 401, path
        assert resp.json() == {"success": False, "message": "No token provided"}


def test_invalid_token(client) -> None:
    resp = client.get(
        "/api/dashboard/balance", headers={"Authorization": "Bearer garbage"}
    )
    assert resp.status_code == 401
    assert resp.json()["message"] == "Invalid token"


def test_balance_and_profile(client, auth_headers) -> None:
    body = client.get("/api/dashboard/balance", headers=auth_headers).json()
    assert body == {
        "success": True,
        "balances": {"balance_inr": 25500.0, "balance_usd": 500.0, "balance_eur": 300.0},
    }
    user = client.get("/api/dashboard/user", headers=auth_headers).json()["user"]
    assert set(user) == {"id", "name", "email", "phone"}


def test_send_money_flow(client, auth_headers) -> None:
    resp = client.post(
        "/api/send-money",
        json={**RECIPIENT, "amount": 1000, "currency": "INR", "message": "Dinner"},
        headers=auth_headers,
    )
    body = resp.json()
    assert resp.status_code == 200
    assert body["success"] is True
    assert body["newBalance"] == 24500.0
    assert body["transactionId"].startswith("TXN")

    txns = client.get("/api/transactions?type=sent", headers=auth_headers).json()
    assert txns["success"] is True
    assert len(txns["transactions"]) == 1
    assert txns["transactions"][0]["description"] == "Dinner"
    assert f"TXN{txns['transactions'][0]['id']}" == body["transactionId"]


def test_send_money_insufficient(client, auth_headers) -> None:
    resp = client.post(
        "/api/send-money",
        json={**RECIPIENT, "amount": 301, "currency": "EUR"},
        headers=auth_headers,
    )
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "message": "Insufficient balance"}
    balances = client.get("/api/dashboard/balance", headers=auth_headers).json()
    assert balances["balances"]["balance_eur"] == 300.0


def test_send_money_validation(client, auth_headers) -> None:
    missing = client.post(
        "/api/send-money",
        json={"recipientName": "Kiran", "amount": 5, "currency": "USD"},
        headers=auth_headers,
    )
    assert missing.status_code == 400
    assert missing.json()["message"] == "All fields are required"

    for bad in ({"amount": -5, "currency": "USD"}, {"amount": 5, "currency": "GBP"}, {"amount": 1.234, "currency": "USD"}):
        resp = client.post("/api/send-money", json={**RECIPIENT, **bad}, headers=auth_headers)
        assert resp.status_code == 400, bad
        assert resp.json()["success"] is False


def test_converter(client, auth_headers) -> None:
    resp = client.post(
        "/api/converter",
        json={"fromAmount": 100, "fromCurrency": "INR", "toCurrency": "USD"},
        headers=auth_headers,
    )
    assert resp.json() == {
        "success": True,
        "message": "Conversion successful",
        "fromAmount": 100.0,
        "fromCurrency": "INR",
        "toAmount": 1.2,
        "toCurrency": "USD",
        "rate": 0.012,
    }
    balances = client.get("/api/dashboard/balance", headers=auth_headers).json()
    assert balances["balances"]["balance_inr"] == 25500.0


def test_converter_same_currency(client, auth_headers) -> None:
    resp = client.post(
        "/api/converter",
        json={"fromAmount": 10, "fromCurrency": "USD", "toCurrency": "USD"},
        headers=auth_headers,
    )
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "message": "Invalid currency pair"}


@pytest.mark.parametrize("src,dst", [("USD", "GBP"), ("JPY", "INR"), ("usd", "usd")])
def test_converter_unlisted_pair(client, auth_headers, src, dst) -> None:
    resp = client.post(
        "/api/converter",
        json={"fromAmount": 10, "fromCurrency": src, "toCurrency": dst},
        headers=auth_headers,
    )
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "message": "Invalid currency pair"}


def test_transactions_filter_validation(client, auth_headers) -> None:
    resp = client.get("/api/transactions?type=bogus", headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["success"] is False
    everything = client.get("/api/transactions?type=all", headers=auth_headers).json()
    assert everything == {"success": True, "transactions": []}


def test_investments(client, auth_headers) -> None:
    created = client.post(
        "/api/investments",
        json={
            "symbol": "INFY",
            "name": "Infosys",
            "type": "stock",
            "quantity": 10,
            "currentPrice": 1500.5,
            "performance": 2.5,
        },
        headers=auth_headers,
    ).json()
    assert created["success"] is True
    listed = client.get("/api/investments", headers=auth_headers).json()["investments"]
    assert [i["symbol"] for i in listed] == ["INFY"]
    assert listed[0]["id"] == created["investmentId"]


def test_unknown_route(client) -> None:
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    assert resp.json()["success"] is False
