"""
Pre-trade checks against a trading pair's size and price rules.

These functions are pure: they never touch the network and trust whatever
``TradingPair`` they are given, so refresh pairs before relying on them.
Step checks use exact decimal remainders; binary float modulo would
reject perfectly valid sizes such as ``0.0003`` against ``0.0001``.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, localcontext
from typing import Optional, Union

from .errors import OrderValidationError
from .models import (
    LimitOrderConfig,
    MarketOrderConfig,
    StopLimitOrderConfig,
    StopLossOrderConfig,
    TradingPair,
)

Number = Union[Decimal, str, int]


def as_decimal(value: Number) -> Decimal:
    if isinstance(value, (float, bool)):
        raise TypeError("binary floats are not accepted; pass a str or Decimal")
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(value)
    except InvalidOperation as exc:
        raise ValueError(f"not a decimal number: {value!r}") from exc


def _is_multiple(value: Decimal, step: Decimal) -> bool:
    with localcontext() as ctx:
        ctx.prec = 100
        try:
            return value % step == 0
        except InvalidOperation:
            return False


def _quantity_problem(pair: TradingPair, quantity: Decimal) -> Optional[str]:
    if not quantity.is_finite() or quantity <= 0:
        return "must be positive"
    if quantity < pair.min_order_size:
        return f"below minimum order size {pair.min_order_size}"
    if pair.max_order_size is not None and quantity > pair.max_order_size:
        return f"above maximum order size {pair.max_order_size}"
    if not _is_multiple(quantity, pair.quantity_increment):
        return f"not a multiple of {pair.quantity_increment}"
    return None


def _price_problem(pair: TradingPair, price: Decimal) -> Optional[str]:
    if not price.is_finite() or price <= 0:
        return "must be positive"
    if not _is_multiple(price, pair.price_increment):
        return f"not a multiple of {pair.price_increment}"
    return None


def check_valid_trade(pair: TradingPair, quantity: Number) -> bool:
    """Return True when ``quantity`` is a legal order size for ``pair``."""
    return _quantity_problem(pair, as_decimal(quantity)) is None


def check_valid_price(pair: TradingPair, price: Number) -> bool:
    """Return True when ``price`` is positive and on the pair's price grid."""
    return _price_problem(pair, as_decimal(price)) is None


def _check_quantity(pair: TradingPair, field: str, value: Decimal) -> None:
    problem = _quantity_problem(pair, value)
    if problem:
        raise OrderValidationError(field, problem)


def _check_price(pair: TradingPair, field: str, value: Decimal) -> None:
    problem = _price_problem(pair, value)
    if problem:
        raise OrderValidationError(field, problem)


def _check_size(pair: TradingPair, config) -> None:
    if config.asset_quantity is not None:
        _check_quantity(pair, "asset_quantity", config.asset_quantity)
    if config.quote_amount is not None:
        # Quote amounts are denominated in the quote currency, same grid as prices
        _check_price(pair, "quote_amount", config.quote_amount)


def validate_order_config(pair: TradingPair, config) -> None:
    """Check every size and price field of ``config`` against ``pair``.

    Raises :class:`OrderValidationError` naming the first offending field.
    """
    if isinstance(config, MarketOrderConfig):
        _check_quantity(pair, "asset_quantity", config.asset_quantity)
    elif isinstance(config, LimitOrderConfig):
        _check_size(pair, config)
        _check_price(pair, "limit_price", config.limit_price)
    elif isinstance(config, StopLossOrderConfig):
        _check_size(pair, config)
        _check_price(pair, "stop_price", config.stop_price)
    elif isinstance(config, StopLimitOrderConfig):
        _check_size(pair, config)
        _check_price(pair, "limit_price", config.limit_price)
        _check_price(pair, "stop_price", config.stop_price)
    else:
        raise TypeError(f"unsupported order config {type(config).__name__}")
