from core.errors import ErrorCode


def test_support_cannot_configure_wallets(client, support_headers):
    resp = client.post(
        "/admin/deposit-addresses",
        json={"coin": "USDT", "network": "TRC20", "address": "TXabc"},
        headers=support_headers,
    )

    assert resp.status_code == 403
    assert resp.json()["error"]["code"] == ErrorCode.FORBIDDEN


def test_superadmin_upserts_by_coin_and_network(client, superadmin_headers, support_headers):
    first = client.post(
        "/admin/deposit-addresses",
        json={"coin": "usdt", "network": "trc20", "address": "TXabc", "qr": "/uploads/qr-1.png"},
        headers=superadmin_headers,
    )
    assert first.status_code == 200

    # no qr in the second save keeps the stored one
    second = client.post(
        "/admin/deposit-addresses",
        json={"coin": "USDT", "network": "TRC20", "address": "TXdef"},
        headers=superadmin_headers,
    )
    assert second.status_code == 200

    client.post(
        "/admin/deposit-addresses",
        json={"coin": "USDT", "network": "ERC20", "address": "0xabc"},
        headers=superadmin_headers,
    )

    # reading is open to every admin
    resp = client.get("/admin/deposit-addresses", headers=support_headers)
    assert resp.status_code == 200
    rows = {(r["coin"], r["network"]): r for r in resp.json()}
    assert set(rows) == {("USDT", "TRC20"), ("USDT", "ERC20")}
    assert rows[("USDT", "TRC20")]["address"] == "TXdef"
    assert rows[("USDT", "TRC20")]["qr_url"] == "/uploads/qr-1.png"
    assert rows[("USDT", "ERC20")]["qr_url"] is None


def test_deposit_addresses_require_token(client):
    assert client.get("/admin/deposit-addresses").status_code == 401
