from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SignupIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    phone: str = Field(..., min_length=1)
    bank_name: str = Field(..., min_length=1, alias="bankName")
    account_number: str = Field(..., min_length=1, alias="accountNumber")
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        if "@" not in v:
            raise ValueError("invalid email address")
        return v.lower()


class LoginIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class UserOut(BaseModel):
    """Public account profile; never carries the credential hash."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    email: str
    phone: Optional[str] = None
    bank_name: Optional[str] = Field(None, serialization_alias="bankName")
    account_number: Optional[str] = Field(None, serialization_alias="accountNumber")

    @classmethod
    def from_row(cls, row: dict) -> "UserOut":
        return cls(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            phone=row.get("phone"),
            bank_name=row.get("bank_name"),
            account_number=row.get("account_number"),
        )


class Balances(BaseModel):
    balance_inr: float
    balance_usd: float
    balance_eur: float
