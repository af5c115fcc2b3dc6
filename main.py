import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from core.config import settings
from core.exceptions import AppException
from core.handlers import (
    app_exception_handler,
    persistence_exception_handler,
    validation_exception_handler,
)
from admins.auth import router as auth_router
from accounts.router import router as accounts_router
from ledger.router import router as ledger_router
from approvals.router import router as approvals_router
from trades.router import router as trades_router
from wallets.router import router as wallets_router
from upstream.router import router as upstream_router

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI(title="NovaChain Admin API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(SQLAlchemyError, persistence_exception_handler)

app.include_router(auth_router)
app.include_router(accounts_router)
app.include_router(ledger_router)
app.include_router(approvals_router)
app.include_router(trades_router)
app.include_router(wallets_router)
app.include_router(upstream_router)


@app.get("/")
def health_check():
    return {"status": "healthy", "version": "1.0.0"}
