from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from accounts import service
from accounts.schemas import KycDocument, KycStatusUpdate, UserStatusUpdate, UserSummary
from core.auth import AdminIdentity, Capability, require_capability
from core.config import settings
from core.database import get_db

router = APIRouter(prefix="/admin", tags=["Users"])

can_manage_users = require_capability(Capability.MANAGE_USERS)


@router.get("/users", response_model=List[UserSummary])
def list_users(
    db: Session = Depends(get_db),
    admin: AdminIdentity = Depends(can_manage_users),
):
    return service.list_users(db)


@router.delete("/user/{user_id}")
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    admin: AdminIdentity = Depends(can_manage_users),
):
    service.delete_user(db, user_id)
    return {"success": True, "message": f"User #{user_id} and all related data deleted."}


@router.get("/user/{user_id}/kyc", response_model=KycDocument)
def user_kyc(
    user_id: int,
    db: Session = Depends(get_db),
    admin: AdminIdentity = Depends(can_manage_users),
):
    user = service.get_kyc(db, user_id)
    base = settings.UPLOADS_BASE_URL.rstrip("/")
    return {
        "kyc_selfie": f"{base}/{user.kyc_selfie}" if user.kyc_selfie else None,
        "kyc_id_card": f"{base}/{user.kyc_id_card}" if user.kyc_id_card else None,
        "kyc_status": user.kyc_status,
    }


@router.post("/user-kyc-status")
def update_kyc_status(
    payload: KycStatusUpdate,
    db: Session = Depends(get_db),
    admin: AdminIdentity = Depends(can_manage_users),
):
    service.set_kyc_status(db, payload.user_id, payload.kyc_status)
    return {"success": True}


@router.post("/user-status")
def update_user_status(
    payload: UserStatusUpdate,
    db: Session = Depends(get_db),
    admin: AdminIdentity = Depends(can_manage_users),
):
    service.set_status(db, payload.userId, payload.newStatus)
    return {"success": True, "message": f"User {payload.userId} status changed to {payload.newStatus}"}
