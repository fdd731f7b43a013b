"""Pytest configuration for path setup and shared fixtures.

The package lives under ``client/src``.  When pytest runs without the
package installed, neither that directory nor the repository root (needed
for ``tests.helpers`` and ``scripts``) is on ``sys.path``; this file adds
both before collection.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]

for path in (ROOT / "client" / "src", ROOT):
    path_str = str(path)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)

from rhcrypto.clients.auth_providers import Ed25519AuthProvider, SigningIdentity  # noqa: E402
from rhcrypto.clients.http_exchange import HttpExchangeClient  # noqa: E402
from rhcrypto.config import ClientConfig  # noqa: E402

from tests.helpers.keys import API_KEY, BASE_URL, FIXED_TIME, PUBLIC_KEY, SEED, SEED_B64  # noqa: E402


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig.create(
        api_key=API_KEY,
        private_key_b64=SEED_B64,
        public_key=PUBLIC_KEY,
        base_url=BASE_URL,
    )


@pytest.fixture
def identity() -> SigningIdentity:
    return SigningIdentity.from_seed(API_KEY, SEED, PUBLIC_KEY)


@pytest.fixture
def make_client(config, identity):
    """Factory for clients signing with a frozen clock over a given transport."""

    def _make(transport) -> HttpExchangeClient:
        provider = Ed25519AuthProvider(identity, clock=lambda: FIXED_TIME)
        return HttpExchangeClient(config, transport=transport, auth_provider=provider)

    return _make
