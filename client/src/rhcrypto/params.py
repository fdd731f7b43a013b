"""
Request parameter structs.

Both structs are built through one validating factory (``build``) and are
frozen afterwards.  ``CreateOrderParams`` also owns the exact JSON bytes
that get signed and transmitted, so the signature always covers what the
server receives.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlencode
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from .errors import OrderValidationError
from .models import (
    MarketOrderConfig,
    OrderConfig,
    OrderSide,
    OrderState,
    OrderType,
    TradingPair,
    config_key,
)
from .validation import validate_order_config


class _Params(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")


class OrderQuery(_Params):
    """Filters for listing orders.  Unset filters are left out of the query."""

    created_at_start: Optional[str] = None
    created_at_end: Optional[str] = None
    symbol: Optional[str] = None
    id: Optional[UUID] = None
    side: Optional[OrderSide] = None
    state: Optional[OrderState] = None
    order_type: Optional[OrderType] = Field(None, alias="type")
    updated_at_start: Optional[str] = None
    updated_at_end: Optional[str] = None
    cursor: Optional[str] = None
    limit: Optional[int] = Field(None, gt=0)

    @classmethod
    def build(cls, **filters: Any) -> "OrderQuery":
        return cls(**filters)

    def query_pairs(self) -> List[Tuple[str, str]]:
        pairs = []
        for name, field in type(self).model_fields.items():
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, Enum):
                value = value.value
            pairs.append((field.alias or name, str(value)))
        return pairs

    def to_query_string(self) -> str:
        return urlencode(self.query_pairs())


class CreateOrderParams(_Params):
    """A new order.  ``client_order_id`` is the caller's idempotency token:
    resubmitting with the same id must not create a second order."""

    client_order_id: UUID
    symbol: str = Field(..., min_length=1)
    side: OrderSide
    config: OrderConfig

    @classmethod
    def build(
        cls,
        *,
        symbol: str,
        client_order_id: UUID | str,
        side: OrderSide | str,
        config,
        pair: Optional[TradingPair] = None,
    ) -> "CreateOrderParams":
        """Validate and freeze order parameters.

        When ``pair`` is given, sizes and prices are checked against its
        increments and limits before anything is sent.
        """
        params = cls(symbol=symbol, client_order_id=client_order_id, side=side, config=config)
        cfg = params.config
        if not isinstance(cfg, MarketOrderConfig):
            if cfg.asset_quantity is not None and cfg.quote_amount is not None:
                raise OrderValidationError(
                    "asset_quantity", "set either asset_quantity or quote_amount, not both"
                )
        if pair is not None:
            if pair.symbol != params.symbol:
                raise OrderValidationError(
                    "symbol", f"order for {params.symbol} checked against {pair.symbol}"
                )
            validate_order_config(pair, cfg)
        return params

    @property
    def order_type(self) -> OrderType:
        return OrderType(self.config.order_type)

    def to_wire(self) -> Dict[str, Any]:
        return {
            "client_order_id": str(self.client_order_id),
            "side": self.side.value,
            "symbol": self.symbol,
            "type": self.order_type.value,
            config_key(self.order_type): self.config.to_wire(),
        }

    def to_json_bytes(self) -> bytes:
        return json.dumps(self.to_wire(), separators=(",", ":")).encode("utf-8")
