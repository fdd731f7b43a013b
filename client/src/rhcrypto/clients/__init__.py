"""
Client utilities for talking to the Robinhood Crypto Trading API.

This package provides the Ed25519 request signer, the HTTP transport
abstraction with its aiohttp implementation, and the authenticated client
that ties them together.
"""

from .auth_providers import AuthProvider, Ed25519AuthProvider, SigningIdentity  # noqa: F401
from .http_exchange import HttpExchangeClient  # noqa: F401
from .transport import AiohttpTransport, HttpResponse, Transport  # noqa: F401
