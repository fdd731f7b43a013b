"""
Authenticated HTTP client for the Robinhood Crypto Trading API.

``HttpExchangeClient.execute`` is the single path every endpoint goes
through: it signs the request with the configured auth provider, sends it
through the transport and turns the response into either a typed model or
a typed error.  It never retries and never substitutes defaults for a
malformed response.

Example::

    config = ClientConfig.from_env()
    async with HttpExchangeClient(config) as client:
        pairs = await get_crypto_trading_pairs(client, ["BTC-USD"])
"""

from __future__ import annotations

import json
import logging
import time
from decimal import Decimal
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..config import ClientConfig
from ..errors import ApiError, DecodeError, SigningError, TransportError
from ..models import wire_path
from ..secrets_manager import BaseSecretsManager
from ..telemetry import record_request
from .auth_providers import AuthProvider, Ed25519AuthProvider, HttpMethod, SigningIdentity
from .transport import AiohttpTransport, HttpResponse, Transport

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _loads(body: bytes) -> Any:
    # Floats become Decimal so that prices sent as JSON numbers stay exact
    return json.loads(body, parse_float=Decimal)


def with_query(path: str, query: str) -> str:
    return f"{path}?{query}" if query else path


def _error_path(exc: ValidationError) -> str:
    return wire_path(exc.errors()[0]["loc"])


class HttpExchangeClient:
    """Asynchronous client that signs and dispatches API requests."""

    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: Optional[Transport] = None,
        auth_provider: Optional[AuthProvider] = None,
    ) -> None:
        """Construct the client.

        Args:
            config: Validated credentials and connection settings.
            transport: HTTP transport; defaults to an aiohttp transport
                using ``config.timeout``.
            auth_provider: Header signer; defaults to Ed25519 signing with
                the key material in ``config``.  Key decoding happens here,
                so bad key material fails before any request is made.
        """
        self.base_url = config.base_url
        if auth_provider is None:
            identity = SigningIdentity.from_base64(
                config.api_key,
                config.private_key_b64.get_secret_value(),
                config.public_key,
            )
            auth_provider = Ed25519AuthProvider(identity)
        self.auth_provider = auth_provider
        self.transport = transport or AiohttpTransport(timeout=config.timeout)

    @classmethod
    def from_env(
        cls,
        *,
        secrets: Optional[BaseSecretsManager] = None,
        transport: Optional[Transport] = None,
    ) -> "HttpExchangeClient":
        return cls(ClientConfig.from_env(secrets), transport=transport)

    async def __aenter__(self) -> "HttpExchangeClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self.transport.close()

    async def execute(
        self,
        method: str,
        path: str,
        body: Optional[bytes] = None,
        *,
        response_model: Optional[Type[ModelT]] = None,
        expect_json: bool = True,
    ) -> Any:
        """Sign and send one request.

        Args:
            method: ``GET``, ``POST`` or ``DELETE``.
            path: Request path starting with ``/``, including any query
                string.  It is signed exactly as given.
            body: Exact bytes to transmit; these same bytes are signed.
            response_model: Pydantic model to validate the JSON body into.
            expect_json: When false, return the body as text.

        Raises:
            ApiError: The venue returned a non-2xx status.
            TransportError: The request never completed.
            DecodeError: The body did not match ``response_model``.
            SigningError: ``method`` is not GET, POST or DELETE.
        """
        try:
            verb = HttpMethod(method.upper()).value
        except ValueError as exc:
            raise SigningError(f"unsupported HTTP method {method!r}") from exc
        headers = self.auth_provider.get_headers(verb, path, body)
        if body is not None:
            headers["Content-Type"] = "application/json; charset=utf-8"
        url = f"{self.base_url}{path}"
        started = time.monotonic()
        try:
            response = await self.transport.send(verb, url, headers, body)
        except TransportError:
            record_request(verb, "transport_error", time.monotonic() - started)
            logger.warning("%s %s failed at the transport layer", verb, path)
            raise
        elapsed = time.monotonic() - started
        record_request(verb, str(response.status), elapsed)
        logger.debug("%s %s -> %s in %.3fs", verb, path, response.status, elapsed)

        if not 200 <= response.status < 300:
            raise self._api_error(verb, path, response)
        if not expect_json:
            return response.text()
        return self._decode(response.body, response_model)

    @staticmethod
    def _api_error(method: str, path: str, response: HttpResponse) -> ApiError:
        text = response.text()
        # Avoid logging full response bodies; truncate to prevent leakage
        logger.error("API error %s on %s %s: %s", response.status, method, path, text[:200])
        try:
            payload = _loads(response.body)
        except ValueError:
            payload = None
        if not isinstance(payload, dict):
            return ApiError(response.status, "unknown", text[:200] or f"HTTP {response.status}")

        errors = payload.get("errors") or []
        first = errors[0] if errors and isinstance(errors[0], dict) else {}
        code = payload.get("code") or payload.get("type") or first.get("attr") or "unknown"
        message = payload.get("message") or payload.get("detail")
        if not message:
            details = [str(e.get("detail", e)) if isinstance(e, dict) else str(e) for e in errors]
            message = "; ".join(details) or text[:200]
        return ApiError(response.status, str(code), str(message), errors)

    @staticmethod
    def _decode(body: bytes, response_model: Optional[Type[ModelT]]) -> Any:
        if not body:
            if response_model is None:
                return None
            raise DecodeError("empty response body")
        try:
            payload = _loads(body)
        except ValueError as exc:
            raise DecodeError(f"response is not valid JSON: {exc}") from exc
        if response_model is None:
            return payload
        try:
            return response_model.model_validate(payload)
        except ValidationError as exc:
            first = exc.errors()[0]
            raise DecodeError(first["msg"], path=_error_path(exc)) from exc
