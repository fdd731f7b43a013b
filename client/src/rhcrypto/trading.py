"""
Trading endpoints.

Trading pairs, holdings, order listing, order creation and cancellation.
Each function is a thin composition: build the path (and body), call
``HttpExchangeClient.execute`` and return the typed result.

``create_crypto_order`` never invents a ``client_order_id``.  The caller
generates it once and reuses it on every resubmission of the same order;
that is what lets the venue deduplicate retries.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Union
from urllib.parse import urlencode
from uuid import UUID

from .clients.http_exchange import HttpExchangeClient, with_query
from .models import Holding, Order, Page, TradingPairPage
from .params import CreateOrderParams, OrderQuery

logger = logging.getLogger(__name__)

TRADING_PAIRS_PATH = "/api/v1/crypto/trading/trading_pairs/"
HOLDINGS_PATH = "/api/v1/crypto/trading/holdings/"
ORDERS_PATH = "/api/v1/crypto/trading/orders/"


def _repeated(name: str, values: Union[str, Iterable[str]]) -> str:
    if isinstance(values, str):
        values = [values]
    return urlencode([(name, value) for value in values])


def _order_id(order_id: Union[UUID, str]) -> str:
    # Validates the id so that nothing but a UUID is interpolated into the path
    return str(UUID(str(order_id)))


async def get_crypto_trading_pairs(
    client: HttpExchangeClient, symbols: Union[str, Iterable[str]] = ()
) -> TradingPairPage:
    """List trading pairs, optionally only ``symbols`` such as ``"BTC-USD"``."""
    path = with_query(TRADING_PAIRS_PATH, _repeated("symbol", symbols))
    return await client.execute("GET", path, response_model=TradingPairPage)


async def get_crypto_holdings(
    client: HttpExchangeClient, asset_codes: Union[str, Iterable[str]] = ()
) -> Page[Holding]:
    """List holdings, optionally only ``asset_codes`` such as ``"BTC"``."""
    path = with_query(HOLDINGS_PATH, _repeated("asset_code", asset_codes))
    return await client.execute("GET", path, response_model=Page[Holding])


async def get_crypto_orders(
    client: HttpExchangeClient, params: Optional[OrderQuery] = None
) -> Page[Order]:
    """List orders matching ``params``.

    The filters are part of the signed path; signing the bare path and
    sending the filters separately would fail verification.
    """
    query = params.to_query_string() if params is not None else ""
    return await client.execute(
        "GET", with_query(ORDERS_PATH, query), response_model=Page[Order]
    )


async def get_crypto_order(client: HttpExchangeClient, order_id: Union[UUID, str]) -> Order:
    path = f"{ORDERS_PATH}{_order_id(order_id)}/"
    return await client.execute("GET", path, response_model=Order)


async def create_crypto_order(client: HttpExchangeClient, params: CreateOrderParams) -> Order:
    """Submit a new order.

    The JSON body is serialised once and the same bytes are signed and
    sent.
    """
    body = params.to_json_bytes()
    logger.info(
        "Submitting %s %s order for %s (client_order_id=%s)",
        params.side.value,
        params.order_type.value,
        params.symbol,
        params.client_order_id,
    )
    order = await client.execute("POST", ORDERS_PATH, body, response_model=Order)
    logger.info("Order %s accepted in state %s", order.id, order.state.value)
    return order


async def cancel_crypto_order(client: HttpExchangeClient, order_id: Union[UUID, str]) -> str:
    """Request cancellation of an order.

    Returns the venue's confirmation text, e.g. ``"Cancel request has been
    submitted for order <id>"``.  Cancellation is asynchronous on the
    venue side; poll ``get_crypto_order`` to observe the final state.
    """
    path = f"{ORDERS_PATH}{_order_id(order_id)}/cancel/"
    text = await client.execute("POST", path, expect_json=False)
    return text.strip().strip('"')
