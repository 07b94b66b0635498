from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import Currency


class ConvertIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_amount: float = Field(..., gt=0, allow_inf_nan=False, alias="fromAmount")
    # pair support is decided by the rate table, not the model
    from_currency: str = Field(..., min_length=1, alias="fromCurrency")
    to_currency: str = Field(..., min_length=1, alias="toCurrency")

    @field_validator("from_currency", "to_currency", mode="before")
    @classmethod
    def upper_currency(cls, v):
        return v.strip().upper() if isinstance(v, str) else v


class ConversionOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = "Conversion successful"
    from_amount: float = Field(..., serialization_alias="fromAmount")
    from_currency: Currency = Field(..., serialization_alias="fromCurrency")
    to_amount: float = Field(..., serialization_alias="toAmount")
    to_currency: Currency = Field(..., serialization_alias="toCurrency")
    rate: float
