from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.sql import func

from core.database import Base


# ADMIN

class Admin(Base):
    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, index=True)

    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False, default="support")  # superadmin | support

    created_at = Column(DateTime(timezone=True), server_default=func.now())


# USER

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    email = Column(String, unique=True, index=True, nullable=False)
    username = Column(String, index=True, nullable=True)
    verified = Column(Boolean, default=False)

    kyc_status = Column(String, default="pending")  # pending | approved | rejected
    kyc_selfie = Column(String, nullable=True)
    kyc_id_card = Column(String, nullable=True)

    status = Column(String, default="active")  # active | suspended

    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Wallet(Base):
    __tablename__ = "wallets"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    coin = Column(String, nullable=False)
    address = Column(String, nullable=False)


# LEDGER

class UserBalance(Base):
    __tablename__ = "user_balances"
    __table_args__ = (
        UniqueConstraint("user_id", "coin", name="uq_user_balances_user_coin"),
        CheckConstraint("balance >= 0", name="ck_user_balances_balance_non_negative"),
        CheckConstraint("frozen >= 0", name="ck_user_balances_frozen_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    coin = Column(String, nullable=False)

    balance = Column(Numeric(28, 8), nullable=False, default=0)
    frozen = Column(Numeric(28, 8), nullable=False, default=0)


# REQUESTS

class Deposit(Base):
    __tablename__ = "deposits"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    coin = Column(String, nullable=False)
    amount = Column(Numeric(28, 8), nullable=False)
    address = Column(String, nullable=True)
    screenshot = Column(String, nullable=True)

    status = Column(String, nullable=False, default="pending")  # pending | approved | denied
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Withdrawal(Base):
    __tablename__ = "withdrawals"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    coin = Column(String, nullable=False)
    amount = Column(Numeric(28, 8), nullable=False)
    address = Column(String, nullable=True)

    status = Column(String, nullable=False, default="pending")  # pending | approved | denied
    created_at = Column(DateTime(timezone=True), server_default=func.now())


# TRADES

class Trade(Base):
    __tablename__ = "trades"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    direction = Column(String, nullable=False)  # BUY | SELL
    amount = Column(Numeric(28, 8), nullable=False)
    result = Column(String, nullable=True)  # Win | Loss
    duration = Column(Integer, nullable=True)

    timestamp = Column(DateTime(timezone=True), server_default=func.now())


class UserTradeMode(Base):
    __tablename__ = "user_trade_modes"

    user_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    mode = Column(String, nullable=False)  # WIN | LOSE
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class PlatformSetting(Base):
    __tablename__ = "platform_settings"

    key = Column(String, primary_key=True)
    value = Column(String, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


# DEPOSIT WALLETS

class DepositAddress(Base):
    __tablename__ = "deposit_addresses"
    __table_args__ = (
        UniqueConstraint("coin", "network", name="uq_deposit_addresses_coin_network"),
    )

    id = Column(Integer, primary_key=True, index=True)
    coin = Column(String, nullable=False)
    network = Column(String, nullable=False)
    address = Column(String, nullable=False)
    qr_url = Column(String, nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
