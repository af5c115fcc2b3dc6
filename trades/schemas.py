from pydantic import BaseModel, StrictBool
from decimal import Decimal
from datetime import datetime
from typing import Literal, Optional


class TradeItem(BaseModel):
    id: int
    user_id: int
    username: Optional[str] = None
    type: str
    amount: Decimal
    result: Optional[str] = None
    duration: Optional[int] = None
    created_at: Optional[datetime] = None


class UpdateTradeRequest(BaseModel):
    tradeId: int
    result: Literal["Win", "Loss"]


class TradeModeRequest(BaseModel):
    # null or "" clears the override
    mode: Optional[Literal["WIN", "LOSE", ""]] = None


class AutoWinningRequest(BaseModel):
    enabled: StrictBool
