from pydantic import BaseModel
from decimal import Decimal
from typing import List, Literal, Optional


class KycStatusUpdate(BaseModel):
    user_id: int
    kyc_status: Literal["approved", "rejected", "pending"]


class UserStatusUpdate(BaseModel):
    userId: int
    newStatus: Literal["active", "suspended"]


class CoinBalance(BaseModel):
    coin: str
    balance: Decimal
    frozen: Decimal


class UserSummary(BaseModel):
    id: int
    username: Optional[str] = None
    email: str
    verified: Optional[bool] = None
    kyc_status: Optional[str] = None
    kyc_selfie: Optional[str] = None
    kyc_id_card: Optional[str] = None
    status: Optional[str] = None
    trade_mode: str
    balances: List[CoinBalance]


class KycDocument(BaseModel):
    kyc_selfie: Optional[str] = None
    kyc_id_card: Optional[str] = None
    kyc_status: Optional[str] = None
