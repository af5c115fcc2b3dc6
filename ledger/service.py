"""Per-user, per-coin balance ledger.

Every mutation here is a single SQL statement whose WHERE clause carries the
precondition, so two requests against the same (user_id, coin) row are
serialized by the database row lock and neither can observe a stale balance.
None of these functions commit: they join the caller's transaction so an
approval can pair its status change with exactly one ledger mutation.
"""
import logging
from decimal import Decimal

from sqlalchemy import update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from core.errors import ErrorCode, bad_request, insufficient_funds
from core.models import UserBalance

logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def normalize_coin(coin: str) -> str:
    coin = (coin or "").strip()
    if not coin:
        raise bad_request(ErrorCode.VALIDATION_ERROR, "Coin is required")
    return coin


def _positive(amount) -> Decimal:
    value = Decimal(str(amount))
    if not value.is_finite() or value <= 0:
        raise bad_request(ErrorCode.VALIDATION_ERROR, "Amount must be greater than zero")
    return value


def _insert_for(db: Session):
    dialect = db.get_bind().dialect.name
    try:
        return _UPSERT_DIALECTS[dialect]
    except KeyError:
        raise RuntimeError(f"Ledger upsert is not supported on {dialect}")


def credit(db: Session, user_id: int, coin: str, amount) -> None:
    coin = normalize_coin(coin)
    amount = _positive(amount)

    insert = _insert_for(db)
    stmt = insert(UserBalance).values(user_id=user_id, coin=coin, balance=amount, frozen=Decimal("0"))
    stmt = stmt.on_conflict_do_update(
        index_elements=["user_id", "coin"],
        set_={"balance": UserBalance.balance + stmt.excluded.balance},
    )
    db.execute(stmt)
    logger.info("Ledger credit user=%s coin=%s amount=%s", user_id, coin, amount)


def debit(db: Session, user_id: int, coin: str, amount) -> None:
    coin = normalize_coin(coin)
    amount = _positive(amount)

    result = db.execute(
        update(UserBalance)
        .where(
            UserBalance.user_id == user_id,
            UserBalance.coin == coin,
            UserBalance.balance >= amount,
        )
        .values(balance=UserBalance.balance - amount)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        logger.warning("Ledger debit rejected user=%s coin=%s amount=%s", user_id, coin, amount)
        raise insufficient_funds(user_id, coin, amount)

    logger.info("Ledger debit user=%s coin=%s amount=%s", user_id, coin, amount)


def freeze(db: Session, user_id: int, coin: str, amount) -> None:
    coin = normalize_coin(coin)
    amount = _positive(amount)

    result = db.execute(
        update(UserBalance)
        .where(
            UserBalance.user_id == user_id,
            UserBalance.coin == coin,
            UserBalance.balance >= amount,
        )
        .values(
            balance=UserBalance.balance - amount,
            frozen=UserBalance.frozen + amount,
        )
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        logger.warning("Ledger freeze rejected user=%s coin=%s amount=%s", user_id, coin, amount)
        raise insufficient_funds(user_id, coin, amount)

    logger.info("Ledger freeze user=%s coin=%s amount=%s", user_id, coin, amount)


def read(db: Session, user_id: int) -> list[dict]:
    rows = (
        db.query(UserBalance)
        .filter(UserBalance.user_id == user_id)
        .order_by(UserBalance.coin.asc())
        .all()
    )
    return [
        {"coin": row.coin, "balance": row.balance, "frozen": row.frozen}
        for row in rows
    ]
