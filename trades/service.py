import logging
from sqlalchemy.orm import Session

from core.errors import ErrorCode, ErrorMessage, bad_request, not_found
from core.models import PlatformSetting, Trade, User, UserTradeMode

logger = logging.getLogger(__name__)

TRADE_RESULTS = ("Win", "Loss")
TRADE_MODES = ("WIN", "LOSE")
AUTO_WINNING_KEY = "auto_winning"


def list_trades(db: Session) -> list[dict]:
    rows = (
        db.query(Trade, User.username)
        .outerjoin(User, Trade.user_id == User.id)
        .order_by(Trade.id.desc())
        .all()
    )
    return [
        {
            "id": trade.id,
            "user_id": trade.user_id,
            "username": username,
            "type": trade.direction,
            "amount": trade.amount,
            "result": trade.result,
            "duration": trade.duration,
            "created_at": trade.timestamp,
        }
        for trade, username in rows
    ]


def update_result(db: Session, trade_id: int, result: str) -> None:
    if result not in TRADE_RESULTS:
        raise bad_request(ErrorCode.VALIDATION_ERROR, "Invalid input")

    trade = db.query(Trade).filter(Trade.id == trade_id).with_for_update().first()
    if not trade:
        raise not_found(ErrorCode.TRADE_NOT_FOUND, ErrorMessage.TRADE_NOT_FOUND)

    trade.result = result
    db.commit()
    logger.info("Trade #%s result overridden to %s", trade_id, result)


def check_trade_mode(db: Session, user_id: int, mode: str | None) -> str | None:
    mode = (mode or "").upper() or None
    if mode is not None and mode not in TRADE_MODES:
        raise bad_request(ErrorCode.VALIDATION_ERROR, "Invalid input")

    if not db.query(User.id).filter(User.id == user_id).first():
        raise not_found(ErrorCode.USER_NOT_FOUND, ErrorMessage.USER_NOT_FOUND)

    # release the read transaction before the upstream call
    db.rollback()
    return mode


def save_trade_mode(db: Session, user_id: int, mode: str | None) -> None:
    """Write (or clear) a user's override once the main backend has accepted it."""
    try:
        row = db.query(UserTradeMode).filter(UserTradeMode.user_id == user_id).with_for_update().first()
        if mode is None:
            if row:
                db.delete(row)
        elif row:
            row.mode = mode
        else:
            db.add(UserTradeMode(user_id=user_id, mode=mode))
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("User #%s trade mode set to %s", user_id, mode or "DEFAULT")


def trade_modes(db: Session) -> dict[str, str]:
    return {str(row.user_id): row.mode for row in db.query(UserTradeMode).all()}


def get_auto_winning(db: Session) -> bool:
    row = db.query(PlatformSetting).filter(PlatformSetting.key == AUTO_WINNING_KEY).first()
    if not row:
        return True
    return row.value == "true"


def set_auto_winning(db: Session, enabled: bool) -> bool:
    row = (
        db.query(PlatformSetting)
        .filter(PlatformSetting.key == AUTO_WINNING_KEY)
        .with_for_update()
        .first()
    )
    value = "true" if enabled else "false"
    if row:
        row.value = value
    else:
        db.add(PlatformSetting(key=AUTO_WINNING_KEY, value=value))

    db.commit()
    logger.info("AUTO_WINNING set to %s", enabled)
    return enabled
