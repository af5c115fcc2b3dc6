"""Deposit and withdrawal approval state machine.

    pending -> approved   (exactly one ledger credit/debit)
    pending -> denied     (no ledger effect)

The status change is a compare-and-swap on ``status = 'pending'`` executed in
the same transaction as the paired ledger mutation. Two concurrent approvals
of one request race on that row; the loser matches zero rows and reports
ALREADY_FINALIZED instead of applying the ledger effect a second time.
"""
import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from core.errors import ErrorCode, ErrorMessage, already_finalized, not_found
from core.models import Deposit, Withdrawal
from ledger import service as ledger

logger = logging.getLogger(__name__)

PENDING = "pending"
APPROVED = "approved"
DENIED = "denied"

KINDS = {
    "deposit": (Deposit, ErrorCode.DEPOSIT_NOT_FOUND, ErrorMessage.DEPOSIT_NOT_FOUND),
    "withdrawal": (Withdrawal, ErrorCode.WITHDRAWAL_NOT_FOUND, ErrorMessage.WITHDRAWAL_NOT_FOUND),
}


def _transition(db: Session, kind: str, request_id: int, new_status: str):
    model, missing_code, missing_message = KINDS[kind]

    row = db.execute(
        update(model)
        .where(model.id == request_id, model.status == PENDING)
        .values(status=new_status)
        .returning(model.user_id, model.coin, model.amount)
        .execution_options(synchronize_session=False)
    ).first()
    if row is not None:
        return row

    current = db.execute(select(model.status).where(model.id == request_id)).scalar_one_or_none()
    if current is None:
        raise not_found(missing_code, missing_message)

    logger.warning("%s #%s is already %s", kind.capitalize(), request_id, current)
    raise already_finalized(kind, request_id, current)


def approve_deposit(db: Session, deposit_id: int) -> None:
    try:
        user_id, coin, amount = _transition(db, "deposit", deposit_id, APPROVED)
        ledger.credit(db, user_id, coin, amount)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Deposit #%s approved, credited %s %s to user %s", deposit_id, amount, coin, user_id)


def approve_withdrawal(db: Session, withdrawal_id: int) -> None:
    try:
        user_id, coin, amount = _transition(db, "withdrawal", withdrawal_id, APPROVED)
        # InsufficientFunds rolls the status back to pending with the rest of the transaction
        ledger.debit(db, user_id, coin, amount)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Withdrawal #%s approved, debited %s %s from user %s", withdrawal_id, amount, coin, user_id)


def deny(db: Session, kind: str, request_id: int) -> None:
    try:
        _transition(db, kind, request_id, DENIED)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("%s #%s denied", kind.capitalize(), request_id)


def list_deposits(db: Session) -> list[Deposit]:
    return db.query(Deposit).order_by(Deposit.id.desc()).all()


def list_withdrawals(db: Session) -> list[Withdrawal]:
    return db.query(Withdrawal).order_by(Withdrawal.id.desc()).all()
