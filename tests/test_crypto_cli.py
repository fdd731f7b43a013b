"""Tests for the command line scripts."""

from __future__ import annotations

import uuid

import pytest  # type: ignore

from scripts import crypto_cli, health_check
from tests.helpers.fake_transport import FakeVenue, RecordingTransport
from tests.helpers.keys import API_KEY, PUBLIC_KEY, SEED_B64


def _parse(*argv: str):
    return crypto_cli.build_parser().parse_args(list(argv))


@pytest.mark.asyncio  # type: ignore
async def test_check_trade_reports_validity(make_client) -> None:
    client = make_client(RecordingTransport(handler=FakeVenue().handle))
    result = await crypto_cli.run(_parse("check-trade", "BTC-USD", "0.0000015"), client)
    assert result == {"symbol": "BTC-USD", "quantity": "0.0000015", "valid": True}
    result = await crypto_cli.run(_parse("check-trade", "BTC-USD", "0.00000015"), client)
    assert result["valid"] is False


@pytest.mark.asyncio  # type: ignore
async def test_create_validates_and_submits(make_client) -> None:
    venue = FakeVenue()
    client = make_client(RecordingTransport(handler=venue.handle))
    client_id = str(uuid.uuid4())
    args = _parse(
        "create", "BTC-USD", "buy", "limit", "0.0001",
        "--limit-price", "20000.00", "--client-order-id", client_id,
    )
    order = await crypto_cli.run(args, client)
    assert str(order.client_order_id) == client_id
    dumped = crypto_cli._dump(order)
    assert dumped["limit_order_config"]["limit_price"] == "20000.00"
    assert len(venue.orders) == 1


@pytest.mark.asyncio  # type: ignore
async def test_unknown_pair_is_value_error(make_client) -> None:
    client = make_client(RecordingTransport(handler=FakeVenue().handle))
    with pytest.raises(ValueError):
        await crypto_cli.run(_parse("check-trade", "DOGE-USD", "1"), client)


def test_create_requires_client_order_id() -> None:
    with pytest.raises(SystemExit):
        _parse("create", "BTC-USD", "buy", "market", "0.001")


def test_health_check_passes_with_credentials(monkeypatch, capsys) -> None:
    monkeypatch.setenv("ROBINHOOD_API_KEY", API_KEY)
    monkeypatch.setenv("ROBINHOOD_SIGNING_PRIVATE_B64", SEED_B64)
    monkeypatch.setenv("ROBINHOOD_PUBLIC_KEY", PUBLIC_KEY)
    assert health_check.main() == 0
    out = capsys.readouterr().out
    assert "signing key: ok" in out
    assert SEED_B64 not in out


def test_health_check_fails_without_key(monkeypatch, capsys) -> None:
    monkeypatch.setenv("ROBINHOOD_API_KEY", API_KEY)
    monkeypatch.setenv("ROBINHOOD_PUBLIC_KEY", PUBLIC_KEY)
    monkeypatch.delenv("ROBINHOOD_SIGNING_PRIVATE_B64", raising=False)
    monkeypatch.delenv("ROBINHOOD_SIGNING_PRIVATE_B64_FILE", raising=False)
    assert health_check.main() == 1
    assert "ROBINHOOD_SIGNING_PRIVATE_B64: missing" in capsys.readouterr().out
