import json
import os
import tempfile

from fastapi.testclient import TestClient

from globalupi.core.config import Settings
from globalupi.main import create_app

"""Smoke test for the send-money / converter flow.
Scenario:
1. Sign up (USD 500 starting balance)
2. Send USD 200 -> balance 300, one `sent` record
3. Try to send USD 400 -> rejected, balance unchanged
4. Convert INR 100 -> USD quote 1.20, balances unchanged
"""


def run():
    with tempfile.TemporaryDirectory() as d:
        settings = Settings(db_path=os.path.join(d, "smoke.db"), jwt_secret="smoke")
        app = create_app(settings_override=settings)
        client = TestClient(app)

        signup = client.post(
            "/api/auth/signup",
            json={
                "name": "Smoke",
                "email": "smoke@example.com",
                "phone": "000",
                "bankName": "Smoke Bank",
                "accountNumber": "1",
                "password": "pw",
            },
        ).json()
        headers = {"Authorization": f"Bearer {signup['token']}"}

        def send(amount):
            return client.post(
                "/api/send-money",
                json={
                    "recipientName": "Payee",
                    "recipientEmail": "payee@example.com",
                    "recipientBankName": "Other Bank",
                    "recipientAccountNumber": "2",
                    "amount": amount,
                    "currency": "USD",
                },
                headers=headers,
            ).json()

        first = send(200)
        rejected = send(400)
        quote = client.post(
            "/api/converter",
            json={"fromAmount": 100, "fromCurrency": "INR", "toCurrency": "USD"},
            headers=headers,
        ).json()
        balances = client.get("/api/dashboard/balance", headers=headers).json()
        history = client.get("/api/transactions?type=all", headers=headers).json()

        print(
            json.dumps(
                {
                    "first_send": first,
                    "rejected_send": rejected,
                    "quote": quote,
                    "balances": balances["balances"],
                    "history_count": len(history["transactions"]),
                },
                indent=2,
            )
        )


if __name__ == "__main__":
    run()
