import asyncio
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.auth import AdminIdentity, Capability, require_capability
from core.database import get_db
from trades import service
from trades.schemas import AutoWinningRequest, TradeItem, TradeModeRequest, UpdateTradeRequest
from upstream.service import forward

router = APIRouter(prefix="/admin", tags=["Trades"])

can_manage_trades = require_capability(Capability.MANAGE_TRADES)


@router.get("/trades", response_model=List[TradeItem])
def list_trades(
    db: Session = Depends(get_db),
    admin: AdminIdentity = Depends(can_manage_trades),
):
    return service.list_trades(db)


@router.post("/update-trade")
def update_trade(
    payload: UpdateTradeRequest,
    db: Session = Depends(get_db),
    admin: AdminIdentity = Depends(can_manage_trades),
):
    service.update_result(db, payload.tradeId, payload.result)
    return {"success": True, "message": f"Trade {payload.tradeId} updated to {payload.result}"}


@router.post("/users/{user_id}/trade-mode")
async def set_trade_mode(
    user_id: int,
    payload: TradeModeRequest,
    db: Session = Depends(get_db),
    admin: AdminIdentity = Depends(can_manage_trades),
):
    # no transaction or row lock is held while the main backend is called;
    # the override is written only after it accepts the change
    mode = await asyncio.to_thread(service.check_trade_mode, db, user_id, payload.mode)
    upstream = await forward(
        "POST",
        f"/api/admin/users/{user_id}/trade-mode",
        json={"mode": mode},
    )
    await asyncio.to_thread(service.save_trade_mode, db, user_id, mode)

    return {"success": True, "user_id": user_id, "mode": mode, "upstream": upstream}


@router.get("/user-win-modes")
def user_win_modes(
    db: Session = Depends(get_db),
    admin: AdminIdentity = Depends(can_manage_trades),
):
    return service.trade_modes(db)


@router.get("/auto-winning")
def get_auto_winning(
    db: Session = Depends(get_db),
    admin: AdminIdentity = Depends(can_manage_trades),
):
    return {"success": True, "enabled": service.get_auto_winning(db)}


@router.post("/auto-winning")
def set_auto_winning(
    payload: AutoWinningRequest,
    db: Session = Depends(get_db),
    admin: AdminIdentity = Depends(can_manage_trades),
):
    enabled = service.set_auto_winning(db, payload.enabled)
    return {"success": True, "enabled": enabled, "message": f"AUTO_WINNING set to {enabled}"}
