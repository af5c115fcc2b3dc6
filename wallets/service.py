import logging

from sqlalchemy.orm import Session

from core.errors import ErrorCode, bad_request
from core.models import DepositAddress

logger = logging.getLogger(__name__)


def list_addresses(db: Session) -> list[DepositAddress]:
    return (
        db.query(DepositAddress)
        .order_by(DepositAddress.coin.asc(), DepositAddress.network.asc())
        .all()
    )


def save_address(db: Session, coin: str, network: str, address: str, qr_url: str | None = None) -> DepositAddress:
    coin = (coin or "").strip().upper()
    if not coin:
        raise bad_request(ErrorCode.VALIDATION_ERROR, "Coin is required")
    network = network.strip().upper()

    row = (
        db.query(DepositAddress)
        .filter(DepositAddress.coin == coin, DepositAddress.network == network)
        .with_for_update()
        .first()
    )
    if row:
        row.address = address
        # a save without a new QR keeps the stored one
        if qr_url:
            row.qr_url = qr_url
    else:
        row = DepositAddress(coin=coin, network=network, address=address, qr_url=qr_url)
        db.add(row)

    db.commit()
    db.refresh(row)
    logger.info("Deposit address for %s/%s updated", coin, network)
    return row
