from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class InvestmentIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    symbol: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    quantity: float = Field(..., gt=0, allow_inf_nan=False)
    current_price: float = Field(..., ge=0, allow_inf_nan=False, alias="currentPrice")
    performance: float = Field(0, allow_inf_nan=False)
