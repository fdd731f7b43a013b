"""Tests for market data and account endpoints."""

from __future__ import annotations

from decimal import Decimal

import pytest  # type: ignore

from rhcrypto.account import get_account_info
from rhcrypto.clients.transport import HttpResponse
from rhcrypto.errors import DecodeError
from rhcrypto.market_data import get_best_price, get_estimated_price
from rhcrypto.models import QuoteSide
from tests.helpers.fake_transport import RecordingTransport, json_response
from tests.helpers.keys import BASE_URL

BEST_PRICE_BODY = b"""{
  "results": [
    {
      "symbol": "BTC-USD",
      "price": 42000.12345678,
      "bid_inclusive_of_sell_spread": 41900.5,
      "sell_spread": 0.0024,
      "ask_inclusive_of_buy_spread": 42100.75,
      "buy_spread": 0.0024,
      "timestamp": "2024-05-01T12:00:00Z"
    }
  ]
}"""


@pytest.mark.asyncio  # type: ignore
async def test_best_price_keeps_json_numbers_exact(make_client) -> None:
    transport = RecordingTransport([HttpResponse(200, BEST_PRICE_BODY)])
    page = await get_best_price(make_client(transport), "BTC-USD")
    assert transport.calls[0].url == f"{BASE_URL}/api/v1/crypto/marketdata/best_bid_ask/?symbol=BTC-USD"
    quote = page.results[0]
    assert quote.price == Decimal("42000.12345678")
    assert quote.bid_inclusive_of_sell_spread == Decimal("41900.5")
    assert quote.model_dump(mode="json")["price"] == "42000.12345678"


@pytest.mark.asyncio  # type: ignore
async def test_best_price_for_several_symbols(make_client) -> None:
    transport = RecordingTransport([json_response({"results": []})])
    await get_best_price(make_client(transport), ["BTC-USD", "ETH-USD"])
    assert transport.calls[0].url.endswith("best_bid_ask/?symbol=BTC-USD&symbol=ETH-USD")


@pytest.mark.asyncio  # type: ignore
async def test_estimated_price_joins_quantities(make_client) -> None:
    quotes = [
        {"symbol": "BTC-USD", "side": "ask", "price": "42010.00", "quantity": "0.1"},
        {"symbol": "BTC-USD", "side": "ask", "price": "42050.00", "quantity": "1"},
    ]
    transport = RecordingTransport([json_response({"results": quotes})])
    page = await get_estimated_price(
        make_client(transport), "BTC-USD", QuoteSide.ASK, ["0.1", Decimal("1")]
    )
    assert transport.calls[0].url == (
        f"{BASE_URL}/api/v1/crypto/marketdata/estimated_price/"
        "?symbol=BTC-USD&side=ask&quantity=0.1,1"
    )
    assert [q.quantity for q in page.results] == [Decimal("0.1"), Decimal("1")]
    assert page.results[1].side is QuoteSide.ASK


@pytest.mark.asyncio  # type: ignore
async def test_estimated_price_rejects_bad_input_before_sending(make_client) -> None:
    transport = RecordingTransport()
    client = make_client(transport)
    with pytest.raises(ValueError):
        await get_estimated_price(client, "BTC-USD", "sideways", "1")
    with pytest.raises(ValueError):
        await get_estimated_price(client, "BTC-USD", "bid", [])
    with pytest.raises(TypeError):
        await get_estimated_price(client, "BTC-USD", "bid", [0.1])
    assert transport.calls == []


@pytest.mark.asyncio  # type: ignore
async def test_account_info(make_client) -> None:
    payload = {
        "account_number": "ACCT123",
        "status": "active",
        "buying_power": "1250.50",
        "buying_power_currency": "USD",
    }
    transport = RecordingTransport([json_response(payload)])
    account = await get_account_info(make_client(transport))
    assert transport.calls[0].url == f"{BASE_URL}/api/v1/crypto/trading/accounts/"
    assert account.buying_power == Decimal("1250.50")


@pytest.mark.asyncio  # type: ignore
async def test_account_info_missing_field(make_client) -> None:
    transport = RecordingTransport([json_response({"account_number": "ACCT123", "status": "active"})])
    with pytest.raises(DecodeError) as excinfo:
        await get_account_info(make_client(transport))
    assert excinfo.value.path == "buying_power"
