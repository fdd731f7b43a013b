"""
Client configuration.

``ClientConfig`` is the single object a caller hands to
:class:`rhcrypto.clients.HttpExchangeClient`.  It is immutable and carries
no process-wide state; ``from_env`` is a convenience for scripts that keep
credentials in the environment (or in ``*_FILE`` mounted secrets).

Environment variables:

* ``ROBINHOOD_API_KEY`` – the ``rh-api-...`` key identifier.
* ``ROBINHOOD_SIGNING_PRIVATE_B64`` – base64 encoded 32-byte Ed25519 seed.
* ``ROBINHOOD_PUBLIC_KEY`` – the public key registered with the API key.
* ``ROBINHOOD_BASE_URL`` – optional, defaults to the production host.
* ``ROBINHOOD_TIMEOUT`` – optional request timeout in seconds.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError, field_validator

from .errors import ConfigError
from .secrets_manager import BaseSecretsManager, EnvFileSecretsManager

DEFAULT_BASE_URL = "https://trading.robinhood.com"

ENV_API_KEY = "ROBINHOOD_API_KEY"
ENV_PRIVATE_KEY = "ROBINHOOD_SIGNING_PRIVATE_B64"
ENV_PUBLIC_KEY = "ROBINHOOD_PUBLIC_KEY"
ENV_BASE_URL = "ROBINHOOD_BASE_URL"
ENV_TIMEOUT = "ROBINHOOD_TIMEOUT"

REQUIRED_ENV = (ENV_API_KEY, ENV_PRIVATE_KEY, ENV_PUBLIC_KEY)


class ClientConfig(BaseModel):
    """Credentials and connection settings for one client instance."""

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(..., min_length=1)
    private_key_b64: SecretStr
    public_key: str = Field(..., min_length=1)
    base_url: str = DEFAULT_BASE_URL
    timeout: float = Field(10.0, gt=0)

    @field_validator("private_key_b64")
    @classmethod
    def _seed_not_blank(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("signing key must not be empty")
        return value

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        if not value.startswith(("https://", "http://")):
            raise ValueError("base_url must be an http(s) URL")
        return value.rstrip("/")

    @classmethod
    def create(cls, **values) -> "ClientConfig":
        """Validate ``values`` and raise :class:`ConfigError` on failure."""
        try:
            return cls(**values)
        except ValidationError as exc:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
            raise ConfigError(f"invalid client configuration: {fields}") from exc

    @classmethod
    def from_env(cls, secrets: Optional[BaseSecretsManager] = None) -> "ClientConfig":
        """Build a config from the environment.

        All three credentials must be present; the error names every
        missing variable at once.
        """
        secrets = secrets or EnvFileSecretsManager()
        missing = [name for name in REQUIRED_ENV if not secrets.get_secret(name)]
        if missing:
            raise ConfigError(f"missing credentials: {', '.join(missing)}")
        values = {
            "api_key": secrets.get_secret(ENV_API_KEY),
            "private_key_b64": secrets.get_secret(ENV_PRIVATE_KEY),
            "public_key": secrets.get_secret(ENV_PUBLIC_KEY),
        }
        base_url = secrets.get_secret(ENV_BASE_URL)
        if base_url:
            values["base_url"] = base_url
        timeout = secrets.get_secret(ENV_TIMEOUT)
        if timeout:
            values["timeout"] = timeout
        return cls.create(**values)
