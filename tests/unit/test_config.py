"""Tests for credential loading and client construction.

Construction must fail with ``ConfigError`` before any request is made,
so every test here hands the client a recording transport and checks it
was never called.
"""

from __future__ import annotations

import base64

import pytest  # type: ignore

from rhcrypto.clients.http_exchange import HttpExchangeClient
from rhcrypto.config import DEFAULT_BASE_URL, ClientConfig
from rhcrypto.errors import ConfigError, InvalidKeyMaterial
from rhcrypto.secrets_manager import EnvFileSecretsManager
from tests.helpers.fake_transport import RecordingTransport
from tests.helpers.keys import API_KEY, PUBLIC_KEY, SEED_B64


@pytest.fixture
def credentials(monkeypatch):
    monkeypatch.setenv("ROBINHOOD_API_KEY", API_KEY)
    monkeypatch.setenv("ROBINHOOD_SIGNING_PRIVATE_B64", SEED_B64)
    monkeypatch.setenv("ROBINHOOD_PUBLIC_KEY", PUBLIC_KEY)
    for name in ("ROBINHOOD_BASE_URL", "ROBINHOOD_TIMEOUT", "ROBINHOOD_SIGNING_PRIVATE_B64_FILE"):
        monkeypatch.delenv(name, raising=False)


def test_from_env_reads_credentials(credentials) -> None:
    config = ClientConfig.from_env()
    assert config.api_key == API_KEY
    assert config.private_key_b64.get_secret_value() == SEED_B64
    assert config.base_url == DEFAULT_BASE_URL
    assert config.timeout == 10.0


def test_from_env_optional_settings(credentials, monkeypatch) -> None:
    monkeypatch.setenv("ROBINHOOD_BASE_URL", "https://sandbox.example.test/")
    monkeypatch.setenv("ROBINHOOD_TIMEOUT", "2.5")
    config = ClientConfig.from_env()
    assert config.base_url == "https://sandbox.example.test"
    assert config.timeout == 2.5


def test_missing_signing_key_fails_before_any_request(credentials, monkeypatch) -> None:
    monkeypatch.delenv("ROBINHOOD_SIGNING_PRIVATE_B64")
    transport = RecordingTransport()
    with pytest.raises(ConfigError) as excinfo:
        HttpExchangeClient.from_env(transport=transport)
    assert "ROBINHOOD_SIGNING_PRIVATE_B64" in str(excinfo.value)
    assert transport.calls == []


def test_blank_value_counts_as_missing(credentials, monkeypatch) -> None:
    monkeypatch.setenv("ROBINHOOD_API_KEY", "")
    with pytest.raises(ConfigError):
        ClientConfig.from_env()


def test_malformed_seed_fails_client_construction(credentials, monkeypatch) -> None:
    monkeypatch.setenv("ROBINHOOD_SIGNING_PRIVATE_B64", base64.b64encode(b"short").decode())
    transport = RecordingTransport()
    with pytest.raises(InvalidKeyMaterial):
        HttpExchangeClient.from_env(transport=transport)
    assert transport.calls == []


def test_invalid_timeout_is_config_error(credentials, monkeypatch) -> None:
    monkeypatch.setenv("ROBINHOOD_TIMEOUT", "-1")
    with pytest.raises(ConfigError):
        ClientConfig.from_env()


def test_secret_file_takes_precedence(credentials, monkeypatch, tmp_path) -> None:
    other_seed = base64.b64encode(bytes(32)).decode()
    secret_file = tmp_path / "seed.txt"
    secret_file.write_text(other_seed + "\n", encoding="utf-8")
    monkeypatch.setenv("ROBINHOOD_SIGNING_PRIVATE_B64_FILE", str(secret_file))
    config = ClientConfig.from_env()
    assert config.private_key_b64.get_secret_value() == other_seed


def test_unreadable_secret_file_is_missing(tmp_path) -> None:
    secrets = EnvFileSecretsManager(environ={"ROBINHOOD_API_KEY_FILE": str(tmp_path / "nope")})
    assert secrets.get_secret("ROBINHOOD_API_KEY") is None


def test_relative_secret_file_uses_base_path(tmp_path) -> None:
    (tmp_path / "key.txt").write_text(API_KEY, encoding="utf-8")
    secrets = EnvFileSecretsManager(base_path=tmp_path, environ={"ROBINHOOD_API_KEY_FILE": "key.txt"})
    assert secrets.get_secret("ROBINHOOD_API_KEY") == API_KEY


def test_config_repr_hides_signing_key(config) -> None:
    assert SEED_B64 not in repr(config)
    assert SEED_B64 not in str(config.model_dump())


def test_create_rejects_bad_base_url() -> None:
    with pytest.raises(ConfigError):
        ClientConfig.create(
            api_key=API_KEY, private_key_b64=SEED_B64, public_key=PUBLIC_KEY, base_url="ftp://x"
        )
