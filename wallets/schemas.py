from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional


class DepositAddressRequest(BaseModel):
    coin: str = Field(..., min_length=1, max_length=16)
    network: str = Field(..., min_length=1, max_length=32)
    address: str = Field(..., min_length=1)
    qr: Optional[str] = None


class DepositAddressItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    coin: str
    network: str
    address: str
    qr_url: Optional[str] = None
    updated_at: Optional[datetime] = None
