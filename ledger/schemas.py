from pydantic import BaseModel, Field
from decimal import Decimal
from typing import List


class AddBalanceRequest(BaseModel):
    user_id: int
    coin: str = Field(..., min_length=1, max_length=16)
    amount: Decimal = Field(gt=0)


class ReduceBalanceRequest(BaseModel):
    coin: str = Field(..., min_length=1, max_length=16)
    amount: Decimal = Field(gt=0)


class FreezeBalanceRequest(BaseModel):
    user_id: int
    coin: str = Field(..., min_length=1, max_length=16)
    amount: Decimal = Field(gt=0)


class BalanceItem(BaseModel):
    coin: str
    balance: Decimal
    frozen: Decimal


class BalancesResponse(BaseModel):
    success: bool
    data: List[BalanceItem]
