"""
Domain models for the Robinhood Crypto Trading API using Pydantic.

All price, size and balance fields are :class:`decimal.Decimal`.  The venue
sends them as decimal strings and expects them back as strings, so the
``DecimalStr`` type below refuses ``float`` input and serialises with plain
positional notation (``"0.00000001"``, never ``"1E-8"``).

Orders carry exactly one configuration payload.  On the wire the payload
lives under ``<type>_order_config``; here it is a single ``config`` field
typed as a tagged union over the four variants, so a limit order can never
hold a stop-loss configuration.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Dict, Generic, List, Literal, Optional, Sequence, TypeVar, Union
from uuid import UUID

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer, field_validator, model_validator


def _reject_float(value: Any) -> Any:
    if isinstance(value, (float, bool)):
        raise ValueError("binary floats are not accepted; pass a str or Decimal")
    return value


def _plain_decimal(value: Decimal) -> str:
    return format(value, "f")


DecimalStr = Annotated[
    Decimal,
    BeforeValidator(_reject_float),
    PlainSerializer(_plain_decimal, return_type=str),
]
PositiveDecimal = Annotated[DecimalStr, Field(gt=0)]


class OrderSide(str, Enum):
    BUY = "buy"
    SELL = "sell"


class OrderType(str, Enum):
    MARKET = "market"
    LIMIT = "limit"
    STOP_LIMIT = "stop_limit"
    STOP_LOSS = "stop_loss"


class OrderState(str, Enum):
    OPEN = "open"
    PENDING = "pending"
    PARTIALLY_FILLED = "partially_filled"
    FILLED = "filled"
    CANCELED = "canceled"
    FAILED = "failed"
    REJECTED = "rejected"


class QuoteSide(str, Enum):
    """Side of an estimated price request: ``bid`` to sell, ``ask`` to buy."""

    BID = "bid"
    ASK = "ask"
    BOTH = "both"


_ORDER_TYPES = frozenset(t.value for t in OrderType)


def config_key(order_type: Union[OrderType, str]) -> str:
    """Name of the wire field holding the configuration for ``order_type``."""
    return f"{OrderType(order_type).value}_order_config"


def wire_path(loc: Sequence[Union[int, str]]) -> str:
    """Dotted wire location of a validation error.

    ``Order`` validates its lifted ``config`` under the union tag, so
    ``config.limit.limit_price`` is reported as
    ``limit_order_config.limit_price``, the field the venue actually sent.
    """
    parts: List[str] = []
    index = 0
    while index < len(loc):
        part = str(loc[index])
        tag = str(loc[index + 1]) if index + 1 < len(loc) else None
        if part == "config" and tag in _ORDER_TYPES:
            parts.append(config_key(tag))
            index += 2
            continue
        parts.append(part)
        index += 1
    return ".".join(parts)


class _Model(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


# ---------------------------------------------------------------------------
# Order configurations
# ---------------------------------------------------------------------------


class _OrderConfigBase(_Model):
    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True, exclude={"order_type"})


class MarketOrderConfig(_OrderConfigBase):
    order_type: Literal["market"] = "market"
    asset_quantity: PositiveDecimal


class _SizedOrderConfig(_OrderConfigBase):
    """Config sized either in the asset (``asset_quantity``) or in the quote
    currency (``quote_amount``)."""

    asset_quantity: Optional[PositiveDecimal] = None
    quote_amount: Optional[PositiveDecimal] = None
    time_in_force: Optional[str] = None

    @model_validator(mode="after")
    def _require_size(self):
        if self.asset_quantity is None and self.quote_amount is None:
            raise ValueError("one of asset_quantity or quote_amount is required")
        return self


class LimitOrderConfig(_SizedOrderConfig):
    order_type: Literal["limit"] = "limit"
    limit_price: PositiveDecimal


class StopLossOrderConfig(_SizedOrderConfig):
    order_type: Literal["stop_loss"] = "stop_loss"
    stop_price: PositiveDecimal


class StopLimitOrderConfig(_SizedOrderConfig):
    order_type: Literal["stop_limit"] = "stop_limit"
    limit_price: PositiveDecimal
    stop_price: PositiveDecimal


OrderConfig = Annotated[
    Union[MarketOrderConfig, LimitOrderConfig, StopLossOrderConfig, StopLimitOrderConfig],
    Field(discriminator="order_type"),
]


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

T = TypeVar("T")


class Page(_Model, Generic[T]):
    """A list response.  ``next``/``previous`` are absolute cursor URLs."""

    next: Optional[str] = None
    previous: Optional[str] = None
    results: List[T]


class TradingPair(_Model):
    """A tradable symbol with its size and price step constraints."""

    symbol: str
    asset_code: Optional[str] = None
    quote_code: Optional[str] = None
    quantity_increment: PositiveDecimal = Field(alias="asset_increment")
    price_increment: PositiveDecimal = Field(alias="quote_increment")
    min_order_size: PositiveDecimal
    max_order_size: Optional[PositiveDecimal] = None
    status: str


class TradingPairPage(Page[TradingPair]):
    @field_validator("results")
    @classmethod
    def _unique_symbols(cls, pairs: List[TradingPair]) -> List[TradingPair]:
        seen = set()
        for pair in pairs:
            if pair.symbol in seen:
                raise ValueError(f"duplicate trading pair {pair.symbol}")
            seen.add(pair.symbol)
        return pairs

    def by_symbol(self) -> Dict[str, TradingPair]:
        return {pair.symbol: pair for pair in self.results}


class Holding(_Model):
    account_number: Optional[str] = None
    asset_code: str
    total_quantity: DecimalStr
    quantity_available: DecimalStr = Field(alias="quantity_available_for_trading")

    @property
    def quantity_held_for_orders(self) -> Decimal:
        return self.total_quantity - self.quantity_available


class BestPrice(_Model):
    symbol: str
    price: DecimalStr
    bid_inclusive_of_sell_spread: DecimalStr
    sell_spread: DecimalStr
    ask_inclusive_of_buy_spread: DecimalStr
    buy_spread: DecimalStr
    timestamp: str


class PriceQuote(_Model):
    """Estimated execution price for a given side and size."""

    symbol: str
    side: QuoteSide
    price: DecimalStr
    quantity: DecimalStr
    bid_inclusive_of_sell_spread: Optional[DecimalStr] = None
    sell_spread: Optional[DecimalStr] = None
    ask_inclusive_of_buy_spread: Optional[DecimalStr] = None
    buy_spread: Optional[DecimalStr] = None
    timestamp: Optional[str] = None


class AccountInfo(_Model):
    account_number: str
    status: str
    buying_power: DecimalStr
    buying_power_currency: str


class Execution(_Model):
    effective_price: DecimalStr
    quantity: DecimalStr
    timestamp: str


class Order(_Model):
    """An order as reported by the venue.

    Never mutated locally; fetch it again to observe state transitions.
    """

    id: UUID
    account_number: Optional[str] = None
    client_order_id: UUID
    symbol: str
    side: OrderSide
    order_type: OrderType = Field(alias="type")
    state: OrderState
    average_price: Optional[DecimalStr] = None
    filled_asset_quantity: Optional[DecimalStr] = None
    executions: List[Execution]
    created_at: str
    updated_at: Optional[str] = None
    config: OrderConfig

    @model_validator(mode="before")
    @classmethod
    def _lift_config(cls, data: Any) -> Any:
        # Move "<type>_order_config" into "config", tagging it with the type
        if not isinstance(data, dict) or "config" in data:
            return data
        order_type = data.get("type", data.get("order_type"))
        try:
            key = config_key(order_type)
        except ValueError:
            return data
        raw = data.get(key)
        if isinstance(raw, dict):
            data = {k: v for k, v in data.items() if not k.endswith("_order_config")}
            data["config"] = {**raw, "order_type": OrderType(order_type).value}
        return data

    @model_validator(mode="after")
    def _config_matches_type(self):
        if self.config.order_type != self.order_type.value:
            raise ValueError(
                f"{self.config.order_type} config on a {self.order_type.value} order"
            )
        return self

    def to_wire(self) -> Dict[str, Any]:
        data = self.model_dump(mode="json", by_alias=True, exclude={"config"})
        data[config_key(self.order_type)] = self.config.to_wire()
        return data
