from pydantic import BaseModel, ConfigDict
from decimal import Decimal
from datetime import datetime
from typing import Optional


class DepositItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    coin: str
    amount: Decimal
    address: Optional[str] = None
    screenshot: Optional[str] = None
    screenshot_url: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None


class WithdrawalItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    coin: str
    amount: Decimal
    address: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
