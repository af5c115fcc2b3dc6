from sqlalchemy.exc import OperationalError

from core.errors import ErrorCode
from accounts import service as accounts


def test_health_check(client):
    assert client.get("/").json() == {"status": "healthy", "version": "1.0.0"}


def test_database_failure_is_reported_as_json(client, support_headers, monkeypatch):
    def broken(db):
        raise OperationalError("SELECT", {}, Exception("connection lost"))

    monkeypatch.setattr(accounts, "list_users", broken)

    resp = client.get("/admin/users", headers=support_headers)

    assert resp.status_code == 500
    body = resp.json()
    assert body["success"] is False
    assert body["error"]["code"] == ErrorCode.PERSISTENCE_ERROR
