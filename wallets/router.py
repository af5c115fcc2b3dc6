from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.auth import AdminIdentity, Capability, require_capability
from core.database import get_db
from wallets import service
from wallets.schemas import DepositAddressItem, DepositAddressRequest

router = APIRouter(prefix="/admin", tags=["Deposit Wallets"])


@router.get("/deposit-addresses", response_model=List[DepositAddressItem])
def list_deposit_addresses(
    db: Session = Depends(get_db),
    admin: AdminIdentity = Depends(require_capability(Capability.VIEW_WALLETS)),
):
    return service.list_addresses(db)


@router.post("/deposit-addresses")
def save_deposit_address(
    payload: DepositAddressRequest,
    db: Session = Depends(get_db),
    admin: AdminIdentity = Depends(require_capability(Capability.CONFIGURE_WALLETS)),
):
    row = service.save_address(db, payload.coin, payload.network, payload.address, payload.qr)
    return {
        "success": True,
        "message": "Deposit wallet settings updated",
        "data": DepositAddressItem.model_validate(row),
    }
