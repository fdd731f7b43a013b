"""
Request signing for the Robinhood Crypto Trading API.

Every authenticated request carries three headers:

* ``x-api-key`` – the API key identifier.
* ``x-timestamp`` – unix time in whole seconds.
* ``x-signature`` – base64 Ed25519 signature over the canonical message.

The canonical message is the UTF-8 concatenation, with no separators, of
``api_key``, ``timestamp``, ``path`` (including the query string),
``METHOD`` and the raw request body (empty when there is none).  The
venue verifies this byte-for-byte, so the path and body passed here must
be exactly what goes on the wire.

Separating the signer from the HTTP client keeps the signing path
synchronous and free of I/O; the only side effect is reading the clock.
"""

from __future__ import annotations

import base64
import binascii
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Optional

from nacl.exceptions import CryptoError
from nacl.signing import SigningKey, VerifyKey

from ..errors import InvalidKeyMaterial, SigningError

SEED_LENGTH = 32

HEADER_API_KEY = "x-api-key"
HEADER_TIMESTAMP = "x-timestamp"
HEADER_SIGNATURE = "x-signature"


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"


@dataclass(frozen=True)
class SigningIdentity:
    """Ed25519 key material for one API key.

    Immutable and safe to share between concurrent requests.  The seed is
    excluded from ``repr`` so the identity can appear in logs.
    """

    api_key: str
    public_key: str
    _signing_key: SigningKey = field(repr=False, compare=False)

    @classmethod
    def from_base64(cls, api_key: str, private_key_b64: str, public_key: str) -> "SigningIdentity":
        try:
            seed = base64.b64decode(private_key_b64, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise InvalidKeyMaterial("signing key is not valid base64") from exc
        return cls.from_seed(api_key, seed, public_key)

    @classmethod
    def from_seed(cls, api_key: str, seed: bytes, public_key: str) -> "SigningIdentity":
        if len(seed) != SEED_LENGTH:
            raise InvalidKeyMaterial(
                f"signing key must be {SEED_LENGTH} bytes, got {len(seed)}"
            )
        return cls(api_key=api_key, public_key=public_key, _signing_key=SigningKey(seed))

    @property
    def verify_key(self) -> VerifyKey:
        return self._signing_key.verify_key

    def sign(self, message: bytes) -> bytes:
        """Return the 64-byte detached signature of ``message``."""
        try:
            return self._signing_key.sign(message).signature
        except (CryptoError, TypeError) as exc:
            raise SigningError(f"failed to sign request: {exc}") from exc


@dataclass(frozen=True)
class SignedRequest:
    """The inputs of one signature.  Built per call and then discarded."""

    method: HttpMethod
    path: str
    body: Optional[bytes]
    timestamp: int

    def canonical_message(self, api_key: str) -> bytes:
        return b"".join(
            (
                api_key.encode("utf-8"),
                str(self.timestamp).encode("ascii"),
                self.path.encode("utf-8"),
                self.method.value.encode("ascii"),
                self.body or b"",
            )
        )


class AuthProvider:
    """Abstract base class for authentication providers."""

    def get_headers(self, method: str, path: str, body: Optional[bytes] = None) -> Dict[str, str]:
        """Return the authentication headers for the given request.

        Subclasses must implement this method.
        """
        raise NotImplementedError


class Ed25519AuthProvider(AuthProvider):
    """Signs requests with an account's Ed25519 key."""

    def __init__(
        self,
        identity: SigningIdentity,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.identity = identity
        self._clock = clock

    def sign_request(self, request: SignedRequest) -> str:
        message = request.canonical_message(self.identity.api_key)
        return base64.b64encode(self.identity.sign(message)).decode("ascii")

    def get_headers(self, method: str, path: str, body: Optional[bytes] = None) -> Dict[str, str]:
        try:
            verb = HttpMethod(method.upper())
        except ValueError as exc:
            raise SigningError(f"unsupported HTTP method {method!r}") from exc
        # One clock read per request; the timestamp header must match the signed one
        request = SignedRequest(method=verb, path=path, body=body, timestamp=int(self._clock()))
        signature = self.sign_request(request)
        return {
            HEADER_API_KEY: self.identity.api_key,
            HEADER_TIMESTAMP: str(request.timestamp),
            HEADER_SIGNATURE: signature,
        }
