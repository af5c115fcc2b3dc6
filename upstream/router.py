from fastapi import APIRouter, Depends, Request

from core.auth import AdminIdentity, Capability, require_capability
from core.errors import ErrorCode, ErrorMessage, not_found
from upstream.service import forward

router = APIRouter(prefix="/admin/main", tags=["Main Backend"])

PROXIED_RESOURCES = ("trades", "deposits", "withdrawals")


@router.get("/{resource}")
async def proxy_read(
    resource: str,
    request: Request,
    admin: AdminIdentity = Depends(require_capability(Capability.REVIEW_REQUESTS)),
):
    if resource not in PROXIED_RESOURCES:
        raise not_found(ErrorCode.RESOURCE_NOT_FOUND, ErrorMessage.RESOURCE_NOT_FOUND)

    return await forward("GET", f"/api/admin/{resource}", params=dict(request.query_params))
