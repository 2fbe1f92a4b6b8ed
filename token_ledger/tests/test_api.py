"""
Tests for the HTTP surface.

Each test swaps in a freshly deployed token so state never leaks between
tests.
"""

import importlib
import logging

import pytest
from fastapi.testclient import TestClient

from token_ledger import api as api_module
from token_ledger.chain import Environment, ZERO_ADDRESS
from token_ledger.deploy import NAME, SUPPLY, SYMBOL, deploy_token


def make_client(monkeypatch, **kwargs):
    env = Environment()
    deployment = deploy_token(env, **kwargs)
    monkeypatch.setattr(api_module, "token", deployment.token)
    return TestClient(api_module.app), env, deployment


class TestReadEndpoints:
    """Tests for the read-only endpoints."""

    def test_health(self, monkeypatch):
        client, env, deployment = make_client(monkeypatch)

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_token_info(self, monkeypatch):
        client, env, deployment = make_client(monkeypatch)

        data = client.get("/token").json()

        assert data["address"] == deployment.proxy
        assert data["logic_address"] == deployment.logic
        assert data["name"] == NAME
        assert data["symbol"] == SYMBOL
        assert data["decimals"] == 18
        assert data["total_supply"] == SUPPLY // 100
        assert data["reserve"] == SUPPLY

    def test_balance(self, monkeypatch):
        client, env, deployment = make_client(monkeypatch)

        data = client.get(f"/accounts/{env.accounts[0]}/balance").json()

        assert data == {"address": env.accounts[0], "balance": SUPPLY // 100}


class TestTokenEndpoints:
    """Tests for supply changing endpoints."""

    def test_mint(self, monkeypatch):
        client, env, deployment = make_client(monkeypatch)

        response = client.post("/token/mint", json={
            "sender": env.accounts[0], "to": env.accounts[2], "amount": 100,
        })

        assert response.status_code == 200
        names = [event["name"] for event in response.json()["events"]]
        assert names == ["Transfer", "Mint"]
        assert deployment.token.balance_of(env.accounts[2]) == 100

    def test_mint_by_non_minter_is_forbidden(self, monkeypatch):
        client, env, deployment = make_client(monkeypatch)

        response = client.post("/token/mint", json={
            "sender": env.accounts[3], "to": env.accounts[3], "amount": 100,
        })

        assert response.status_code == 403
        assert response.json()["detail"] == {
            "code": "UNAUTHORIZED",
            "reason": "MinterRole: caller does not have the Minter role",
        }

    def test_mint_beyond_reserve(self, monkeypatch):
        client, env, deployment = make_client(monkeypatch)

        response = client.post("/token/mint", json={
            "sender": env.accounts[0], "to": env.accounts[2], "amount": SUPPLY,
        })

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "RESERVE_EXCEEDED"

    def test_negative_amount_fails_validation(self, monkeypatch):
        client, env, deployment = make_client(monkeypatch)

        response = client.post("/token/transfer", json={
            "sender": env.accounts[0], "to": env.accounts[2], "amount": -5,
        })

        assert response.status_code == 422

    def test_transfer_and_burn(self, monkeypatch):
        client, env, deployment = make_client(monkeypatch)
        holder = env.accounts[2]

        client.post("/token/transfer", json={"sender": env.accounts[0], "to": holder, "amount": 50})
        response = client.post("/token/burn", json={"sender": holder, "amount": 20})

        assert response.status_code == 200
        assert client.get(f"/accounts/{holder}/balance").json()["balance"] == 30


class TestRoleAndGateEndpoints:
    """Tests for role and gate configuration endpoints."""

    def test_add_role_and_list_roles(self, monkeypatch):
        client, env, deployment = make_client(monkeypatch)
        account = env.accounts[4]

        response = client.post("/roles/Revoker/add", json={
            "sender": env.accounts[0], "account": account,
        })

        assert response.status_code == 200
        assert client.get(f"/accounts/{account}/roles").json()["roles"] == ["Revoker"]

    def test_revoke(self, monkeypatch):
        client, env, deployment = make_client(monkeypatch)
        owner, holder = env.accounts[0], env.accounts[4]

        client.post("/roles/Revoker/add", json={"sender": owner, "account": owner})
        client.post("/token/transfer", json={"sender": owner, "to": holder, "amount": 40})

        response = client.post("/token/revoke", json={
            "sender": owner, "from_address": holder, "to": owner, "amount": 40,
        })

        assert response.status_code == 200
        assert deployment.token.balance_of(holder) == 0

    def test_gate_check_after_blacklisting(self, monkeypatch):
        client, env, deployment = make_client(monkeypatch)
        owner, blocked = env.accounts[0], env.accounts[5]

        client.post("/roles/Blacklister/add", json={"sender": owner, "account": owner})
        client.post("/gate/blacklist", json={"sender": owner, "account": blocked, "blacklisted": True})

        data = client.get("/gate/check", params={"sender": owner, "recipient": blocked}).json()

        assert data["code"] == 2
        assert data["allowed"] is False

        response = client.post("/token/transfer", json={"sender": owner, "to": blocked, "amount": 1})
        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "TRANSFER_RESTRICTED"

    def test_tier_requires_whitelister(self, monkeypatch):
        client, env, deployment = make_client(monkeypatch)

        response = client.post("/gate/tier", json={
            "sender": env.accounts[0], "account": env.accounts[2], "tier": 1,
        })

        assert response.status_code == 403


class TestFlashEndpoints:
    """Tests for flash loan views."""

    def test_max_flash_loan(self, monkeypatch):
        client, env, deployment = make_client(monkeypatch)

        data = client.get("/flash/max", params={"token_address": deployment.proxy}).json()

        assert data["value"] == 2 ** 256 - 1 - SUPPLY // 100

    def test_flash_fee_wrong_token(self, monkeypatch):
        client, env, deployment = make_client(monkeypatch)

        response = client.get("/flash/fee", params={"token_address": ZERO_ADDRESS, "amount": 10})

        assert response.status_code == 400
        assert response.json()["detail"]["reason"] == "ERC20FlashMint: wrong token"


class TestModuleImport:
    """Tests for importing the API module."""

    def test_import_leaves_logging_unconfigured(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

        importlib.reload(api_module)

        assert calls == []
        assert api_module.app.title == "Wrapped Token Ledger API"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
