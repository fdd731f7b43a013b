"""
Market data endpoints.

Best bid/ask and estimated execution prices for crypto symbols.  Both are
authenticated GETs whose filters travel in the signed query string.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence, Union
from urllib.parse import urlencode

from .clients.http_exchange import HttpExchangeClient, with_query
from .models import BestPrice, Page, PriceQuote, QuoteSide
from .validation import as_decimal

BEST_BID_ASK_PATH = "/api/v1/crypto/marketdata/best_bid_ask/"
ESTIMATED_PRICE_PATH = "/api/v1/crypto/marketdata/estimated_price/"


async def get_best_price(
    client: HttpExchangeClient, symbols: Union[str, Sequence[str]] = ()
) -> Page[BestPrice]:
    """Fetch the best bid/ask for ``symbols`` (e.g. ``"BTC-USD"``); all when empty."""
    if isinstance(symbols, str):
        symbols = [symbols]
    query = urlencode([("symbol", symbol) for symbol in symbols])
    return await client.execute(
        "GET", with_query(BEST_BID_ASK_PATH, query), response_model=Page[BestPrice]
    )


async def get_estimated_price(
    client: HttpExchangeClient,
    symbol: str,
    side: Union[QuoteSide, str],
    quantities: Union[Decimal, str, Sequence[Union[Decimal, str]]],
) -> Page[PriceQuote]:
    """Estimate the execution price of one or more sizes.

    ``side`` is ``bid`` (price to sell), ``ask`` (price to buy) or ``both``.
    Several quantities are sent comma-separated and come back as one
    quote each.
    """
    if isinstance(quantities, (Decimal, str)):
        quantities = [quantities]
    amounts = [as_decimal(q) for q in quantities]
    if not amounts:
        raise ValueError("at least one quantity is required")
    query = urlencode(
        [
            ("symbol", symbol),
            ("side", QuoteSide(side).value),
            ("quantity", ",".join(format(a, "f") for a in amounts)),
        ],
        safe=",",
    )
    return await client.execute(
        "GET", with_query(ESTIMATED_PRICE_PATH, query), response_model=Page[PriceQuote]
    )
