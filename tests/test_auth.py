from datetime import datetime, timedelta, timezone

import jwt
import pytest

from core.auth import AdminIdentity, Capability, Role, authenticate, create_token
from core.errors import ErrorCode
from core.exceptions import AuthError
from conftest import PASSWORD, SUPERADMIN_EMAIL, SUPPORT_EMAIL


def test_login_returns_token_and_role(client, admins):
    resp = client.post("/admin/login", json={"email": SUPERADMIN_EMAIL, "password": PASSWORD})

    assert resp.status_code == 200
    body = resp.json()
    assert body["role"] == "superadmin"
    identity = authenticate(body["token"])
    assert identity.email == SUPERADMIN_EMAIL
    assert identity.role is Role.SUPERADMIN


def test_login_wrong_password_issues_no_token(client, admins):
    resp = client.post("/admin/login", json={"email": SUPERADMIN_EMAIL, "password": "nope"})

    assert resp.status_code == 401
    body = resp.json()
    assert "token" not in body
    assert body["error"]["code"] == ErrorCode.AUTH_INVALID_CREDENTIALS


def test_login_unknown_email(client, admins):
    resp = client.post("/admin/login", json={"email": "ghost@novachain.com", "password": PASSWORD})
    assert resp.status_code == 401


def test_token_signed_with_other_secret_is_invalid():
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"email": SUPERADMIN_EMAIL, "role": "superadmin", "iat": now, "exp": now + timedelta(hours=1)},
        "someone-elses-secret",
        algorithm="HS256",
    )

    with pytest.raises(AuthError) as exc:
        authenticate(token)
    assert exc.value.code == ErrorCode.AUTH_INVALID_TOKEN


def test_expired_token_is_invalid():
    issued = datetime.now(timezone.utc) - timedelta(hours=10)
    token = jwt.encode(
        {"email": SUPERADMIN_EMAIL, "role": "superadmin", "iat": issued, "exp": issued + timedelta(hours=8)},
        "test-secret",
        algorithm="HS256",
    )

    with pytest.raises(AuthError) as exc:
        authenticate(token)
    assert exc.value.code == ErrorCode.AUTH_INVALID_TOKEN
    assert exc.value.status_code == 401


def test_token_with_unknown_role_is_invalid():
    with pytest.raises(AuthError):
        authenticate(create_token(SUPERADMIN_EMAIL, "owner"))


def test_missing_token(client):
    resp = client.get("/admin/users")

    assert resp.status_code == 401
    assert resp.json()["error"]["code"] == ErrorCode.AUTH_MISSING_TOKEN


def test_garbage_token(client):
    resp = client.get("/admin/users", headers={"Authorization": "Bearer not-a-jwt"})

    assert resp.status_code == 401
    assert resp.json()["error"]["code"] == ErrorCode.AUTH_INVALID_TOKEN


def test_support_lacks_wallet_configuration():
    support = AdminIdentity(email=SUPPORT_EMAIL, role=Role.SUPPORT)
    superadmin = AdminIdentity(email=SUPERADMIN_EMAIL, role=Role.SUPERADMIN)

    assert not support.can(Capability.CONFIGURE_WALLETS)
    assert support.can(Capability.MANAGE_BALANCES)
    assert superadmin.capabilities == frozenset(Capability)


def test_change_password(client, admins, support_headers):
    resp = client.post(
        "/admin/change-password",
        json={"currentPassword": PASSWORD, "newPassword": "n3w-pass"},
        headers=support_headers,
    )
    assert resp.status_code == 200

    old = client.post("/admin/login", json={"email": SUPPORT_EMAIL, "password": PASSWORD})
    new = client.post("/admin/login", json={"email": SUPPORT_EMAIL, "password": "n3w-pass"})
    assert old.status_code == 401
    assert new.status_code == 200
    assert new.json()["role"] == "support"

    # the other admin is untouched
    other = client.post("/admin/login", json={"email": SUPERADMIN_EMAIL, "password": PASSWORD})
    assert other.status_code == 200


def test_change_password_wrong_current(client, admins, support_headers):
    resp = client.post(
        "/admin/change-password",
        json={"currentPassword": "wrong", "newPassword": "n3w-pass"},
        headers=support_headers,
    )

    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == ErrorCode.INVALID_CURRENT_PASSWORD


def test_change_password_too_short(client, admins, support_headers):
    resp = client.post(
        "/admin/change-password",
        json={"currentPassword": PASSWORD, "newPassword": "12345"},
        headers=support_headers,
    )

    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == ErrorCode.WEAK_PASSWORD


def test_change_password_requires_token(client, admins):
    resp = client.post(
        "/admin/change-password",
        json={"currentPassword": PASSWORD, "newPassword": "n3w-pass"},
    )
    assert resp.status_code == 401
