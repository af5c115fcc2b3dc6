import enum
import jwt
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.config import settings
from core.errors import ErrorCode, ErrorMessage, forbidden, unauthorized


class Role(str, enum.Enum):
    SUPERADMIN = "superadmin"
    SUPPORT = "support"


class Capability(str, enum.Enum):
    MANAGE_USERS = "manage_users"
    MANAGE_BALANCES = "manage_balances"
    REVIEW_REQUESTS = "review_requests"
    MANAGE_TRADES = "manage_trades"
    VIEW_WALLETS = "view_wallets"
    CONFIGURE_WALLETS = "configure_wallets"


ROLE_CAPABILITIES: dict[Role, frozenset[Capability]] = {
    Role.SUPERADMIN: frozenset(Capability),
    Role.SUPPORT: frozenset(Capability) - {Capability.CONFIGURE_WALLETS},
}


@dataclass(frozen=True)
class AdminIdentity:
    email: str
    role: Role

    @property
    def capabilities(self) -> frozenset[Capability]:
        return ROLE_CAPABILITIES.get(self.role, frozenset())

    def can(self, capability: Capability) -> bool:
        return capability in self.capabilities


# auto_error=False so a missing header maps to our own 401 body
bearer_scheme = HTTPBearer(auto_error=False)


def create_token(email: str, role: str) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": email,
        "email": email,
        "role": role,
        "iat": now,
        "exp": now + timedelta(hours=settings.TOKEN_EXPIRE_HOURS),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def authenticate(token: str | None) -> AdminIdentity:
    """Verify a session token and return the identity it carries.

    Validity is signature plus expiry only; there is no revocation list.
    """
    if not token:
        raise unauthorized(ErrorCode.AUTH_MISSING_TOKEN, ErrorMessage.MISSING_TOKEN)

    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"verify_exp": True, "require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError:
        raise unauthorized(message="Token expired")
    except jwt.InvalidTokenError:
        raise unauthorized()

    email = payload.get("email") or payload.get("sub")
    try:
        role = Role(payload.get("role"))
    except ValueError:
        raise unauthorized()
    if not email:
        raise unauthorized()

    return AdminIdentity(email=email, role=role)


def get_current_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> AdminIdentity:
    return authenticate(credentials.credentials if credentials else None)


def require_capability(capability: Capability):
    def _dependency(admin: AdminIdentity = Depends(get_current_admin)) -> AdminIdentity:
        if not admin.can(capability):
            raise forbidden(details={"required": capability.value, "role": admin.role.value})
        return admin

    return _dependency
