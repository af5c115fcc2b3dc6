from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.auth import AdminIdentity, Capability, require_capability
from core.database import get_db
from core.errors import ErrorCode, ErrorMessage, not_found
from core.models import User
from ledger import service as ledger
from ledger.schemas import (
    AddBalanceRequest,
    BalancesResponse,
    FreezeBalanceRequest,
    ReduceBalanceRequest,
)

router = APIRouter(prefix="/admin", tags=["Balances"])

can_manage_balances = require_capability(Capability.MANAGE_BALANCES)


def _ensure_user(db: Session, user_id: int) -> None:
    if not db.query(User.id).filter(User.id == user_id).first():
        raise not_found(ErrorCode.USER_NOT_FOUND, ErrorMessage.USER_NOT_FOUND)


@router.get("/user/{user_id}/balances", response_model=BalancesResponse)
def user_balances(
    user_id: int,
    db: Session = Depends(get_db),
    admin: AdminIdentity = Depends(can_manage_balances),
):
    _ensure_user(db, user_id)
    return {"success": True, "data": ledger.read(db, user_id)}


@router.post("/add-balance")
def add_balance(
    payload: AddBalanceRequest,
    db: Session = Depends(get_db),
    admin: AdminIdentity = Depends(can_manage_balances),
):
    _ensure_user(db, payload.user_id)
    try:
        ledger.credit(db, payload.user_id, payload.coin, payload.amount)
        db.commit()
    except Exception:
        db.rollback()
        raise

    return {
        "success": True,
        "message": f"Added {payload.amount} {payload.coin.strip()} to user #{payload.user_id}",
    }


@router.post("/user/{user_id}/reduce-balance")
def reduce_balance(
    user_id: int,
    payload: ReduceBalanceRequest,
    db: Session = Depends(get_db),
    admin: AdminIdentity = Depends(can_manage_balances),
):
    _ensure_user(db, user_id)
    try:
        ledger.debit(db, user_id, payload.coin, payload.amount)
        db.commit()
    except Exception:
        db.rollback()
        raise

    return {
        "success": True,
        "message": f"Reduced {payload.amount} {payload.coin.strip()} from user #{user_id}",
    }


@router.post("/freeze-balance")
def freeze_balance(
    payload: FreezeBalanceRequest,
    db: Session = Depends(get_db),
    admin: AdminIdentity = Depends(can_manage_balances),
):
    _ensure_user(db, payload.user_id)
    try:
        ledger.freeze(db, payload.user_id, payload.coin, payload.amount)
        db.commit()
    except Exception:
        db.rollback()
        raise

    return {
        "success": True,
        "message": f"Froze {payload.amount} {payload.coin.strip()} for user #{payload.user_id}",
    }
