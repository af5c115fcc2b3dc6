from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from approvals import service
from approvals.schemas import DepositItem, WithdrawalItem
from core.auth import AdminIdentity, Capability, require_capability
from core.config import settings
from core.database import get_db

router = APIRouter(prefix="/admin", tags=["Approvals"])

can_review = require_capability(Capability.REVIEW_REQUESTS)


def _upload_url(filename: str | None) -> str | None:
    if not filename:
        return None
    return f"{settings.UPLOADS_BASE_URL.rstrip('/')}/{filename}"


@router.get("/deposits", response_model=List[DepositItem])
def list_deposits(
    db: Session = Depends(get_db),
    admin: AdminIdentity = Depends(can_review),
):
    items = []
    for deposit in service.list_deposits(db):
        item = DepositItem.model_validate(deposit)
        item.screenshot_url = _upload_url(deposit.screenshot)
        items.append(item)
    return items


@router.get("/withdrawals", response_model=List[WithdrawalItem])
def list_withdrawals(
    db: Session = Depends(get_db),
    admin: AdminIdentity = Depends(can_review),
):
    return service.list_withdrawals(db)


@router.post("/deposits/{deposit_id}/approve")
def approve_deposit(
    deposit_id: int,
    db: Session = Depends(get_db),
    admin: AdminIdentity = Depends(can_review),
):
    service.approve_deposit(db, deposit_id)
    return {"success": True, "message": f"Deposit #{deposit_id} approved and user_balances updated."}


@router.post("/deposits/{deposit_id}/deny")
def deny_deposit(
    deposit_id: int,
    db: Session = Depends(get_db),
    admin: AdminIdentity = Depends(can_review),
):
    service.deny(db, "deposit", deposit_id)
    return {"success": True, "message": f"Deposit #{deposit_id} denied."}


@router.post("/withdrawals/{withdrawal_id}/approve")
def approve_withdrawal(
    withdrawal_id: int,
    db: Session = Depends(get_db),
    admin: AdminIdentity = Depends(can_review),
):
    service.approve_withdrawal(db, withdrawal_id)
    return {"success": True, "message": f"Withdrawal #{withdrawal_id} approved and user balance reduced."}


@router.post("/withdrawals/{withdrawal_id}/deny")
def deny_withdrawal(
    withdrawal_id: int,
    db: Session = Depends(get_db),
    admin: AdminIdentity = Depends(can_review),
):
    service.deny(db, "withdrawal", withdrawal_id)
    return {"success": True, "message": f"Withdrawal #{withdrawal_id} denied."}
