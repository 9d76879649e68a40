"""
Pytest tests for the donate action HTTP surface (FastAPI TestClient).

Assembler is overridden with a fixed blockhash via conftest; no RPC.
"""

from __future__ import annotations

from solders.pubkey import Pubkey

from solana_donate.actions.builder import decode_transfers
from solana_donate.actions.encoder import decode_transaction
from solana_donate.api_server.donate import get_assembler
from solana_donate.ledger.assembler import TransactionAssembler

BASE = "/api/donate"


def test_get_listing(client):
    """GET / -> label "1 SOL", 3 preset links + 1 custom link."""
    r = client.get(f"{BASE}/")
    assert r.status_code == 200
    data = r.json()
    assert data["label"] == "1 SOL"
    assert data["title"] == "Donate to SOL Maniac"
    assert data["icon"] == "https://example.com/icon.png"
    actions = data["links"]["actions"]
    assert len(actions) == 4
    assert actions[0] == {"label": "0.25 SOL", "href": "/api/donate/0.25"}
    assert actions[-1]["href"] == "/api/donate/{amount}"
    assert actions[-1]["parameters"] == [{"name": "amount", "label": "Enter a custom SOL amount"}]
    # unset optional fields are omitted
    assert "disabled" not in data
    assert "error" not in data


def test_get_amount_descriptor(client):
    """GET /0.5 -> label "0.5 SOL", no links."""
    r = client.get(f"{BASE}/0.5")
    assert r.status_code == 200
    data = r.json()
    assert data["label"] == "0.5 SOL"
    assert "links" not in data


def test_post_amount_builds_transfer(client, settings):
    """POST /1 -> base64 tx with one transfer of 1_000_000_000 lamports."""
    donor = Pubkey.new_unique()
    r = client.post(f"{BASE}/1", json={"account": str(donor)})
    assert r.status_code == 200
    data = r.json()
    assert data["message"] == "Thank you for donating 1 SOL!"
    tx = decode_transaction(data["transaction"])
    transfers = decode_transfers(tx)
    assert len(transfers) == 1
    assert transfers[0]["from_pubkey"] == donor
    assert transfers[0]["to_pubkey"] == Pubkey.from_string(settings.destination_wallet)
    assert transfers[0]["lamports"] == 1_000_000_000
    assert tx.message.account_keys[0] == donor


def test_post_custom_amount(client):
    donor = Pubkey.new_unique()
    r = client.post(f"{BASE}/0.1", json={"account": str(donor)})
    assert r.status_code == 200
    tx = decode_transaction(r.json()["transaction"])
    assert decode_transfers(tx)[0]["lamports"] == 100_000_000


def test_post_without_amount_uses_default(client):
    """POST / is identical to POST /1 (fixed blockhash -> identical bytes)."""
    account = str(Pubkey.new_unique())
    r_default = client.post(f"{BASE}/", json={"account": account})
    r_one = client.post(f"{BASE}/1", json={"account": account})
    assert r_default.status_code == 200
    assert r_one.status_code == 200
    assert r_default.json()["transaction"] == r_one.json()["transaction"]


def test_post_invalid_account(client):
    """POST /1 with a bad key -> 400, no transaction field."""
    r = client.post(f"{BASE}/1", json={"account": "not-a-key"})
    assert r.status_code == 400
    data = r.json()
    assert "transaction" not in data
    assert data["error_code"] == "invalid_account"
    assert data["message"]


def test_post_invalid_amount(client):
    r = client.post(f"{BASE}/ten", json={"account": str(Pubkey.new_unique())})
    assert r.status_code == 400
    data = r.json()
    assert "transaction" not in data
    assert data["error_code"] == "invalid_amount"


def test_post_negative_amount(client):
    r = client.post(f"{BASE}/-1", json={"account": str(Pubkey.new_unique())})
    assert r.status_code == 400
    assert r.json()["error_code"] == "invalid_amount"


def test_post_missing_account(client):
    r = client.post(f"{BASE}/1", json={})
    assert r.status_code == 422
    data = r.json()
    assert "transaction" not in data
    assert data["error_code"] == "invalid_request"
    assert "account" in data["message"]


def test_post_assembly_failure_returns_503(app, client):
    """RPC failure -> 503 assembly_failed, no partial transaction."""

    class _DownProvider:
        async def latest_blockhash(self):
            raise ConnectionError("connection refused")

    app.dependency_overrides[get_assembler] = lambda: TransactionAssembler(_DownProvider(), timeout_sec=1.0)
    r = client.post(f"{BASE}/1", json={"account": str(Pubkey.new_unique())})
    assert r.status_code == 503
    data = r.json()
    assert data["error_code"] == "assembly_failed"
    assert "transaction" not in data


def test_unknown_route_json_error(client):
    r = client.get("/nope/nope")
    assert r.status_code == 404
    assert "message" in r.json()


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_actions_json(client):
    r = client.get("/actions.json")
    assert r.status_code == 200
    assert r.json() == {"rules": [{"pathPattern": "/donate/**", "apiPath": "/api/donate/**"}]}


def test_cors_preflight(client):
    """Wallets call cross-origin: preflight allowed from any origin."""
    r = client.options(
        f"{BASE}/1",
        headers={
            "Origin": "https://dial.to",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "*"
    assert "POST" in r.headers["access-control-allow-methods"]


def test_cors_on_simple_request(client):
    r = client.get(f"{BASE}/", headers={"Origin": "https://dial.to"})
    assert r.headers["access-control-allow-origin"] == "*"


def test_request_id_header(client):
    r = client.get("/health", headers={"X-Request-ID": "abc123"})
    assert r.headers["X-Request-ID"] == "abc123"
    generated = client.get("/health").headers["X-Request-ID"]
    assert len(generated) == 32


def test_post_underscore_amount_rejected(client):
    """Decimal would read 1_0 as 10; the API refuses it."""
    r = client.post(f"{BASE}/1_0", json={"account": str(Pubkey.new_unique())})
    assert r.status_code == 400
    assert r.json()["error_code"] == "invalid_amount"


def test_mount_path_without_trailing_slash(client):
    """Bare /api/donate answers directly instead of redirecting."""
    account = str(Pubkey.new_unique())
    r = client.post(BASE, json={"account": account}, follow_redirects=False)
    assert r.status_code == 200
    assert r.json()["transaction"] == client.post(f"{BASE}/", json={"account": account}).json()["transaction"]
    g = client.get(BASE, follow_redirects=False)
    assert g.status_code == 200
    assert g.json()["label"] == "1 SOL"
