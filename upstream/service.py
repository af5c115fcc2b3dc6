import logging
import httpx

from core.config import settings
from core.errors import upstream_error

logger = logging.getLogger(__name__)


def _base_url() -> str:
    return str(settings.MAIN_BACKEND_URL).rstrip("/")


def _auth_headers() -> dict:
    headers = {
        "Content-Type": "application/json",
        "User-Agent": "NovaChain-Admin-FastAPI",
    }
    if settings.MAIN_BACKEND_TOKEN:
        headers["Authorization"] = f"Bearer {settings.MAIN_BACKEND_TOKEN}"
    return headers


def _client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=_base_url(),
        headers=_auth_headers(),
        timeout=settings.UPSTREAM_TIMEOUT,
        follow_redirects=True,
    )


async def forward(method: str, path: str, *, json: dict | None = None, params: dict | None = None):
    """Send one request to the main backend and return its decoded JSON body.

    Failures are not retried; the operator re-issues the request.
    """
    try:
        async with _client() as client:
            resp = await client.request(method, path, json=json, params=params)
    except httpx.RequestError as e:
        logger.error("Main backend %s %s unreachable: %s", method, path, e)
        raise upstream_error(details={"reason": str(e)[:200]})

    if resp.status_code < 200 or resp.status_code >= 300:
        detail = (resp.text or "")[:500]
        logger.error("Main backend %s %s failed %s: %s", method, path, resp.status_code, detail)
        raise upstream_error(details={"status": resp.status_code, "body": detail})

    try:
        return resp.json()
    except ValueError:
        return {"raw": resp.text}
