"""Shared fixtures for the ethsignin test suite."""

import pytest
from eth_account import Account
from eth_account.messages import encode_defunct
from fastapi.testclient import TestClient

from ethsignin.main import app
from ethsignin.nonce_store import NonceStore, get_nonce_store
from ethsignin.routers.auth import get_name_resolver
from ethsignin.services.ens_service import NameResolver

# Well-known throwaway keys; never use for anything real
SIGNER_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
OTHER_KEY = "0x" + "11" * 32


def sign_nonce(nonce: str, private_key: str = SIGNER_KEY) -> str:
    """Signs the nonce the way a wallet's personal_sign does (v in 27/28)."""
    signed = Account.sign_message(encode_defunct(text=nonce), private_key=private_key)
    return "0x" + bytes(signed.signature).hex()


class FakeNameResolver(NameResolver):
    """Records lookups and answers from a fixed table."""

    def __init__(self, names=None):
        self.names = {k.lower(): v for k, v in (names or {}).items()}
        self.calls = []

    def reverse_resolve(self, address: str) -> str:
        self.calls.append(address)
        return self.names.get(address.lower(), "")


@pytest.fixture()
def signer():
    return Account.from_key(SIGNER_KEY)


@pytest.fixture()
def other_signer():
    return Account.from_key(OTHER_KEY)


@pytest.fixture()
def store() -> NonceStore:
    return NonceStore()


@pytest.fixture()
def name_resolver() -> FakeNameResolver:
    return FakeNameResolver()


@pytest.fixture()
def client(store, name_resolver):
    """TestClient wired to a fresh store and a fake resolver."""
    app.dependency_overrides[get_nonce_store] = lambda: store
    app.dependency_overrides[get_name_resolver] = lambda: name_resolver
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
