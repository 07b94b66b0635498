"""Python client for the GlobalUPI JSON API.

The logged-in state lives on an explicit `ClientSession` held by the client
instance. Any 401 from an authenticated call drops that session and raises
`SessionExpired`, so callers return to a logged-out state instead of retrying
with a stale token.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger("globalupi.client")


class ApiError(Exception):
    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SessionExpired(ApiError):
    pass


class NotLoggedIn(Exception):
    pass


@dataclass
class ClientSession:
    token: str
    user: Dict[str, Any] = field(default_factory=dict)


class GlobalUpiClient:
    def __init__(
        self, http: httpx.Client, session: Optional[ClientSession] = None
    ):
        self.http = http
        self.session = session

    @classmethod
    def connect(cls, base_url: str, timeout: float = 10.0) -> "GlobalUpiClient":
        return cls(httpx.Client(base_url=base_url, timeout=timeout))

    @property
    def logged_in(self) -> bool:
        return self.session is not None

    # ------------------------------------------------------------------
    # Transport
    def _request(
        self,
        method: str,
        path: str,
        *,
        auth: bool = True,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        headers = {}
        if auth:
            if self.session is None:
                raise NotLoggedIn("login required")
            headers["Authorization"] = f"Bearer {self.session.token}"
        resp = self.http.request(method, path, json=json, params=params, headers=headers)
        try:
            data = resp.json()
        except ValueError:
            data = {"success": False, "message": resp.text or resp.reason_phrase}
        if auth and resp.status_code == 401:
            logger.info("session rejected by server; clearing local session")
            self.session = None
            raise SessionExpired(data.get("message", "Invalid token"), resp.status_code)
        if resp.status_code >= 400 or not data.get("success", False):
            raise ApiError(data.get("message", "Request failed"), resp.status_code)
        return data

    def _start_session(self, data: Dict[str, Any]) -> ClientSession:
        self.session = ClientSession(token=data["token"], user=data.get("user") or {})
        return self.session

    # ------------------------------------------------------------------
    # Auth
    def signup(
        self,
        name: str,
        email: str,
        phone: str,
        bank_name: str,
        account_number: str,
        password: str,
    ) -> ClientSession:
        data = self._request(
            "POST",
            "/api/auth/signup",
            auth=False,
            json={
                "name": name,
                "email": email,
                "phone": phone,
                "bankName": bank_name,
                "accountNumber": account_number,
                "password": password,
            },
        )
        return self._start_session(data)

    def login(self, email: str, password: str) -> ClientSession:
        data = self._request(
            "POST",
            "/api/auth/login",
            auth=False,
            json={"email": email, "password": password},
        )
        return self._start_session(data)

    def logout(self) -> None:
        self.session = None

    # ------------------------------------------------------------------
    # Dashboard & core operations
    def balances(self) -> Dict[str, float]:
        return self._request("GET", "/api/dashboard/balance")["balances"]

    def profile(self) -> Dict[str, Any]:
        return self._request("GET", "/api/dashboard/user")["user"]

    def send_money(
        self,
        recipient_name: str,
        recipient_email: str,
        recipient_bank_name: str,
        recipient_account_number: str,
        amount: float,
        currency: str,
        message: Optional[str] = None,
    ) -> Dict[str, Any]:
        return self._request(
            "POST",
            "/api/send-money",
            json={
                "recipientName": recipient_name,
                "recipientEmail": recipient_email,
                "recipientBankName": recipient_bank_name,
                "recipientAccountNumber": recipient_account_number,
                "amount": amount,
                "currency": currency,
                "message": message,
            },
        )

    def convert(self, from_amount: float, from_currency: str, to_currency: str) -> Dict[str, Any]:
        return self._request(
            "POST",
            "/api/converter",
            json={
                "fromAmount": from_amount,
                "fromCurrency": from_currency,
                "toCurrency": to_currency,
            },
        )

    def transactions(self, kind: str = "all") -> List[Dict[str, Any]]:
        return self._request("GET", "/api/transactions", params={"type": kind})[
            "transactions"
        ]

    def investments(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/investments")["investments"]

    def add_investment(
        self,
        symbol: str,
        name: str,
        type_: str,
        quantity: float,
        current_price: float,
        performance: float = 0.0,
    ) -> int:
        data = self._request(
            "POST",
            "/api/investments",
            json={
                "symbol": symbol,
                "name": name,
                "type": type_,
                "quantity": quantity,
                "currentPrice": current_price,
                "performance": performance,
            },
        )
        return int(data["investmentId"])
