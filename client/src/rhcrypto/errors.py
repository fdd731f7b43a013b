"""
Exception hierarchy for the Robinhood Crypto client.

Every error raised by this package derives from :class:`RobinhoodCryptoError`
so callers can catch the whole family in one place, while still being able
to tell a configuration problem (fatal, raised before any network call)
from a server rejection (``ApiError``) or a connectivity failure
(``TransportError``).  None of these are retried by the client.
"""

from __future__ import annotations

from typing import Any, List, Optional


class RobinhoodCryptoError(Exception):
    """Base class for all client errors."""


class ConfigError(RobinhoodCryptoError):
    """Missing or malformed credentials or settings."""


class InvalidKeyMaterial(ConfigError):
    """The Ed25519 seed is not valid base64 or is not exactly 32 bytes."""


class SigningError(RobinhoodCryptoError):
    """The underlying key operation failed while signing a request."""


class TransportError(RobinhoodCryptoError):
    """The HTTP call could not be completed (DNS, connect, timeout, ...)."""


class ApiError(RobinhoodCryptoError):
    """The venue answered with a non-2xx status.

    ``code`` and ``message`` are taken verbatim from the error body so that
    validation failures, rate limits and authentication errors remain
    distinguishable.  ``errors`` keeps the full list of per-field errors
    when the venue returns more than one.
    """

    def __init__(
        self,
        status: int,
        code: str,
        message: str,
        errors: Optional[List[Any]] = None,
    ) -> None:
        super().__init__(f"API error {status} ({code}): {message}")
        self.status = status
        self.code = code
        self.message = message
        self.errors = errors or []


class DecodeError(RobinhoodCryptoError):
    """A response did not match the expected shape.

    ``path`` is the dotted location of the first offending field
    (e.g. ``results.0.asset_increment``); it is empty when the body was
    not valid JSON at all.
    """

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path
        self.message = message


class OrderValidationError(ValueError):
    """An order parameter violates a trading pair's size or price rules."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason
