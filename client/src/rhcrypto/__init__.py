"""
Async client for the Robinhood Crypto Trading API.

Requests are signed with the account's Ed25519 key; prices and sizes are
exact decimals end to end.  Typical use::

    from uuid import uuid4
    from rhcrypto import ClientConfig, HttpExchangeClient, CreateOrderParams, LimitOrderConfig
    from rhcrypto.trading import create_crypto_order, get_crypto_trading_pairs

    async with HttpExchangeClient(ClientConfig.from_env()) as client:
        pair = (await get_crypto_trading_pairs(client, ["BTC-USD"])).results[0]
        params = CreateOrderParams.build(
            symbol="BTC-USD",
            client_order_id=uuid4(),
            side="buy",
            config=LimitOrderConfig(asset_quantity="0.0001", limit_price="20000.00"),
            pair=pair,
        )
        order = await create_crypto_order(client, params)
"""

from .clients import Ed25519AuthProvider, HttpExchangeClient, SigningIdentity  # noqa: F401
from .config import ClientConfig  # noqa: F401
from .errors import (  # noqa: F401
    ApiError,
    ConfigError,
    DecodeError,
    InvalidKeyMaterial,
    OrderValidationError,
    RobinhoodCryptoError,
    SigningError,
    TransportError,
)
from .models import (  # noqa: F401
    AccountInfo,
    BestPrice,
    Holding,
    LimitOrderConfig,
    MarketOrderConfig,
    Order,
    OrderSide,
    OrderState,
    OrderType,
    PriceQuote,
    QuoteSide,
    StopLimitOrderConfig,
    StopLossOrderConfig,
    TradingPair,
)
from .params import CreateOrderParams, OrderQuery  # noqa: F401
from .validation import check_valid_price, check_valid_trade, validate_order_config  # noqa: F401
