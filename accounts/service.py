import logging
from collections import defaultdict

from sqlalchemy import delete
from sqlalchemy.orm import Session

from core.errors import ErrorCode, ErrorMessage, bad_request, not_found
from core.models import (
    Deposit,
    Trade,
    User,
    UserBalance,
    UserTradeMode,
    Wallet,
    Withdrawal,
)

logger = logging.getLogger(__name__)

KYC_STATUSES = ("approved", "rejected", "pending")
ACCOUNT_STATUSES = ("active", "suspended")

# children first so foreign keys never point at a deleted user
DEPENDENT_MODELS = (Wallet, UserBalance, Trade, Deposit, Withdrawal, UserTradeMode)


def _get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise not_found(ErrorCode.USER_NOT_FOUND, ErrorMessage.USER_NOT_FOUND)
    return user


def list_users(db: Session) -> list[dict]:
    users = db.query(User).order_by(User.id.desc()).all()

    balances = defaultdict(list)
    for row in db.query(UserBalance).order_by(UserBalance.coin.asc()).all():
        balances[row.user_id].append(row)

    modes = {row.user_id: row.mode for row in db.query(UserTradeMode).all()}

    data = []
    for user in users:
        rows = balances.get(user.id, [])
        data.append({
            "id": user.id,
            "username": user.username,
            "email": user.email,
            "verified": user.verified,
            "kyc_status": user.kyc_status,
            "kyc_selfie": user.kyc_selfie,
            "kyc_id_card": user.kyc_id_card,
            "status": user.status,
            "trade_mode": modes.get(user.id, "DEFAULT"),
            "balances": [
                {"coin": r.coin, "balance": r.balance, "frozen": r.frozen}
                for r in rows
            ],
        })
    return data


def delete_user(db: Session, user_id: int) -> None:
    """Remove a user and every row that references it, all or nothing."""
    _get_user(db, user_id)
    try:
        for model in DEPENDENT_MODELS:
            db.execute(delete(model).where(model.user_id == user_id))
        db.execute(delete(User).where(User.id == user_id))
        db.commit()
    except Exception:
        db.rollback()
        logger.warning("Deletion of user #%s rolled back", user_id)
        raise

    logger.info("User #%s and all related data deleted", user_id)


def get_kyc(db: Session, user_id: int) -> User:
    return _get_user(db, user_id)


def set_kyc_status(db: Session, user_id: int, kyc_status: str) -> None:
    if kyc_status not in KYC_STATUSES:
        raise bad_request(ErrorCode.VALIDATION_ERROR, "Invalid input")

    user = _get_user(db, user_id)
    user.kyc_status = kyc_status
    db.commit()
    logger.info("User #%s KYC status set to %s", user_id, kyc_status)


def set_status(db: Session, user_id: int, new_status: str) -> None:
    if new_status not in ACCOUNT_STATUSES:
        raise bad_request(ErrorCode.VALIDATION_ERROR, "Invalid input")

    user = _get_user(db, user_id)
    user.status = new_status
    db.commit()
    logger.info("User #%s status changed to %s", user_id, new_status)
