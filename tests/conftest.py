import os
import tempfile
from decimal import Decimal

_tmpdir = tempfile.mkdtemp(prefix="novachain-admin-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_tmpdir, 'admin.db')}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["MAIN_BACKEND_URL"] = "http://main-backend.test"
os.environ["MAIN_BACKEND_TOKEN"] = "main-token"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import event

from core.auth import Role, create_token
from core.database import Base, SessionLocal, engine
from core.models import Deposit, Trade, User, UserBalance, Wallet, Withdrawal
from admins.service import upsert_admin

SUPERADMIN_EMAIL = "root@novachain.com"
SUPPORT_EMAIL = "support@novachain.com"
PASSWORD = "SuperSecret123"


# pysqlite would otherwise open transactions lazily and deadlock concurrent
# writers; BEGIN IMMEDIATE makes SQLite serialize them like row locks do.
@event.listens_for(engine, "connect")
def _sqlite_connect(dbapi_connection, connection_record):
    dbapi_connection.isolation_level = None
    dbapi_connection.execute("PRAGMA busy_timeout = 30000")


@event.listens_for(engine, "begin")
def _sqlite_begin(conn):
    conn.exec_driver_sql("BEGIN IMMEDIATE")


@pytest.fixture(autouse=True)
def schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    engine.dispose()


@pytest.fixture
def client():
    from main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admins():
    with SessionLocal() as db:
        upsert_admin(db, SUPERADMIN_EMAIL, PASSWORD, Role.SUPERADMIN)
        upsert_admin(db, SUPPORT_EMAIL, PASSWORD, Role.SUPPORT)


@pytest.fixture
def superadmin_headers(admins):
    return {"Authorization": f"Bearer {create_token(SUPERADMIN_EMAIL, Role.SUPERADMIN.value)}"}


@pytest.fixture
def support_headers(admins):
    return {"Authorization": f"Bearer {create_token(SUPPORT_EMAIL, Role.SUPPORT.value)}"}


def add_rows(*rows):
    with SessionLocal() as db:
        db.add_all(rows)
        db.commit()
        return [row.id for row in rows if hasattr(row, "id")]


def make_user(user_id: int = 7, **fields) -> int:
    fields.setdefault("email", f"user{user_id}@novachain.com")
    fields.setdefault("username", f"user{user_id}")
    add_rows(User(id=user_id, **fields))
    return user_id


def set_balance(user_id: int, coin: str, balance, frozen=0):
    add_rows(UserBalance(user_id=user_id, coin=coin, balance=Decimal(str(balance)), frozen=Decimal(str(frozen))))


def balance_of(user_id: int, coin: str):
    with SessionLocal() as db:
        row = (
            db.query(UserBalance)
            .filter(UserBalance.user_id == user_id, UserBalance.coin == coin)
            .first()
        )
        if row is None:
            return None
        return Decimal(str(row.balance)), Decimal(str(row.frozen))


def status_of(model, request_id: int) -> str:
    with SessionLocal() as db:
        return db.query(model).filter(model.id == request_id).one().status


def make_deposit(user_id: int, coin: str, amount, status: str = "pending") -> int:
    return add_rows(Deposit(user_id=user_id, coin=coin, amount=Decimal(str(amount)), status=status))[0]


def make_withdrawal(user_id: int, coin: str, amount, status: str = "pending") -> int:
    return add_rows(Withdrawal(user_id=user_id, coin=coin, amount=Decimal(str(amount)), status=status))[0]


def make_dependents(user_id: int):
    add_rows(
        Wallet(user_id=user_id, coin="USDT", address="TXyz"),
        UserBalance(user_id=user_id, coin="USDT", balance=Decimal("10"), frozen=Decimal("0")),
        Trade(user_id=user_id, direction="BUY", amount=Decimal("5"), result="Win", duration=60),
        Deposit(user_id=user_id, coin="USDT", amount=Decimal("10"), status="approved"),
        Withdrawal(user_id=user_id, coin="USDT", amount=Decimal("1"), status="pending"),
    )
