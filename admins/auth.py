from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.auth import AdminIdentity, get_current_admin
from core.database import get_db
from admins import service
from admins.schemas import ChangePasswordSchema, LoginResponse, LoginSchema

router = APIRouter(prefix="/admin", tags=["Admin Auth"])


@router.post("/login", response_model=LoginResponse)
def login(req: LoginSchema, db: Session = Depends(get_db)):
    token, role = service.login(db, req.email, req.password)
    return {"success": True, "token": token, "role": role}


@router.post("/change-password")
def change_password(
    req: ChangePasswordSchema,
    db: Session = Depends(get_db),
    admin: AdminIdentity = Depends(get_current_admin),
):
    service.change_password(db, admin, req.currentPassword, req.newPassword)
    return {"success": True, "message": "Password updated"}
