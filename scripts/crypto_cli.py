#!/usr/bin/env python
"""
Command line access to the Robinhood Crypto Trading API.

Credentials come from the environment (see ``rhcrypto.config``).  Every
command prints JSON.  ``create`` requires an explicit ``--client-order-id``;
reuse the same id when retrying so the venue can reject the duplicate.

Examples::

    python scripts/crypto_cli.py best-price BTC-USD ETH-USD
    python scripts/crypto_cli.py check-trade BTC-USD 0.00015
    python scripts/crypto_cli.py create BTC-USD buy limit 0.0001 \\
        --limit-price 20000.00 --client-order-id 6c1f...
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from typing import Any, List, Optional

from rhcrypto.account import get_account_info
from rhcrypto.clients.http_exchange import HttpExchangeClient
from rhcrypto.errors import RobinhoodCryptoError
from rhcrypto.market_data import get_best_price, get_estimated_price
from rhcrypto.models import (
    LimitOrderConfig,
    MarketOrderConfig,
    Order,
    StopLimitOrderConfig,
    StopLossOrderConfig,
)
from rhcrypto.params import CreateOrderParams, OrderQuery
from rhcrypto.telemetry import start_metrics_server
from rhcrypto.trading import (
    cancel_crypto_order,
    create_crypto_order,
    get_crypto_holdings,
    get_crypto_order,
    get_crypto_orders,
    get_crypto_trading_pairs,
)
from rhcrypto.validation import check_valid_trade

logger = logging.getLogger("crypto_cli")


def _dump(result: Any) -> Any:
    if isinstance(result, Order):
        return result.to_wire()
    if hasattr(result, "results"):
        return {
            "next": result.next,
            "previous": result.previous,
            "results": [_dump(item) for item in result.results],
        }
    if hasattr(result, "model_dump"):
        return result.model_dump(mode="json")
    return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Robinhood Crypto Trading API client.")
    parser.add_argument("--metrics-port", type=int, help="Expose Prometheus metrics on this port.")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("account", help="Show account status and buying power.")

    p = sub.add_parser("best-price", help="Best bid/ask for symbols.")
    p.add_argument("symbols", nargs="*")

    p = sub.add_parser("estimate", help="Estimated execution price.")
    p.add_argument("symbol")
    p.add_argument("side", choices=["bid", "ask", "both"])
    p.add_argument("quantities", nargs="+")

    p = sub.add_parser("pairs", help="List trading pairs.")
    p.add_argument("symbols", nargs="*")

    p = sub.add_parser("holdings", help="List holdings.")
    p.add_argument("asset_codes", nargs="*")

    p = sub.add_parser("orders", help="List orders.")
    p.add_argument("--symbol")
    p.add_argument("--side", choices=["buy", "sell"])
    p.add_argument("--state")
    p.add_argument("--limit", type=int)
    p.add_argument("--cursor")

    p = sub.add_parser("order", help="Show one order.")
    p.add_argument("order_id")

    p = sub.add_parser("cancel", help="Cancel an order.")
    p.add_argument("order_id")

    p = sub.add_parser("check-trade", help="Check a size against a pair's rules.")
    p.add_argument("symbol")
    p.add_argument("quantity")

    p = sub.add_parser("create", help="Place an order.")
    p.add_argument("symbol")
    p.add_argument("side", choices=["buy", "sell"])
    p.add_argument("type", choices=["market", "limit", "stop_loss", "stop_limit"])
    p.add_argument("quantity", help="Asset quantity.")
    p.add_argument("--client-order-id", required=True)
    p.add_argument("--limit-price")
    p.add_argument("--stop-price")
    p.add_argument("--time-in-force", default="gtc")
    return parser


def _order_config(args: argparse.Namespace):
    if args.type == "market":
        return MarketOrderConfig(asset_quantity=args.quantity)
    extra = {"asset_quantity": args.quantity, "time_in_force": args.time_in_force}
    if args.type == "limit":
        return LimitOrderConfig(limit_price=args.limit_price, **extra)
    if args.type == "stop_loss":
        return StopLossOrderConfig(stop_price=args.stop_price, **extra)
    return StopLimitOrderConfig(limit_price=args.limit_price, stop_price=args.stop_price, **extra)


async def _pair(client: HttpExchangeClient, symbol: str):
    pairs = (await get_crypto_trading_pairs(client, [symbol])).by_symbol()
    if symbol not in pairs:
        raise ValueError(f"unknown trading pair {symbol}")
    return pairs[symbol]


async def run(args: argparse.Namespace, client: HttpExchangeClient) -> Any:
    if args.command == "account":
        return await get_account_info(client)
    if args.command == "best-price":
        return await get_best_price(client, args.symbols)
    if args.command == "estimate":
        return await get_estimated_price(client, args.symbol, args.side, args.quantities)
    if args.command == "pairs":
        return await get_crypto_trading_pairs(client, args.symbols)
    if args.command == "holdings":
        return await get_crypto_holdings(client, args.asset_codes)
    if args.command == "orders":
        query = OrderQuery.build(
            symbol=args.symbol, side=args.side, state=args.state, limit=args.limit, cursor=args.cursor
        )
        return await get_crypto_orders(client, query)
    if args.command == "order":
        return await get_crypto_order(client, args.order_id)
    if args.command == "cancel":
        return {"message": await cancel_crypto_order(client, args.order_id)}
    if args.command == "check-trade":
        pair = await _pair(client, args.symbol)
        return {"symbol": args.symbol, "quantity": args.quantity, "valid": check_valid_trade(pair, args.quantity)}
    if args.command == "create":
        pair = await _pair(client, args.symbol)
        params = CreateOrderParams.build(
            symbol=args.symbol,
            client_order_id=args.client_order_id,
            side=args.side,
            config=_order_config(args),
            pair=pair,
        )
        return await create_crypto_order(client, params)
    raise ValueError(f"unknown command {args.command}")


async def _main(args: argparse.Namespace) -> Any:
    async with HttpExchangeClient.from_env() as client:
        return await run(args, client)


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))
    args = build_parser().parse_args(argv)
    if args.metrics_port:
        start_metrics_server(args.metrics_port)
    try:
        result = asyncio.run(_main(args))
    except (RobinhoodCryptoError, ValueError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        return 1
    json.dump(_dump(result), sys.stdout, indent=2)
    print()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
