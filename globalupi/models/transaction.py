from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from globalupi.services.money import has_cent_precision

from .constants import Currency


def _upper(v):
    return v.strip().upper() if isinstance(v, str) else v


class Recipient(BaseModel):
    """External payee; never resolved to a managed account."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    bank_name: str = Field(..., min_length=1)
    account_number: str = Field(..., min_length=1)


class SendMoneyIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    recipient_name: str = Field(..., min_length=1, alias="recipientName")
    recipient_email: str = Field(..., min_length=1, alias="recipientEmail")
    recipient_bank_name: str = Field(..., min_length=1, alias="recipientBankName")
    recipient_account_number: str = Field(
        ..., min_length=1, alias="recipientAccountNumber"
    )
    amount: float = Field(..., gt=0, allow_inf_nan=False)
    currency: Currency
    message: Optional[str] = None

    @field_validator("currency", mode="before")
    @classmethod
    def upper_currency(cls, v):
        return _upper(v)

    @field_validator("amount")
    @classmethod
    def at_most_two_decimals(cls, v: float) -> float:
        if not has_cent_precision(v):
            raise ValueError("amount cannot have more than 2 decimal places")
        return v

    def recipient(self) -> Recipient:
        return Recipient(
            name=self.recipient_name,
            email=self.recipient_email,
            bank_name=self.recipient_bank_name,
            account_number=self.recipient_account_number,
        )


class SendMoneyOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = "Money sent successfully"
    transaction_id: str = Field(..., serialization_alias="transactionId")
    new_balance: float = Field(..., serialization_alias="newBalance")


class TransactionOut(BaseModel):
    id: int
    account_id: int
    type: str
    recipient_name: Optional[str] = None
    recipient_email: Optional[str] = None
    recipient_bank_name: Optional[str] = None
    recipient_account_number: Optional[str] = None
    amount: float
    currency: str
    description: Optional[str] = None
    status: str
    created_at: str
