#!/usr/bin/env python
"""Simple health check utility.

Prints whether each credential and setting the client reads is present,
and whether the signing key decodes to a usable Ed25519 seed.  Values are
never printed.  Run it before pointing the client at the live API.
"""

from __future__ import annotations

from rhcrypto.clients.auth_providers import SigningIdentity
from rhcrypto.config import ENV_BASE_URL, ENV_TIMEOUT, REQUIRED_ENV, ClientConfig
from rhcrypto.errors import ConfigError
from rhcrypto.secrets_manager import EnvFileSecretsManager


def main() -> int:
    secrets = EnvFileSecretsManager()
    print("Health Check:")
    for key in (*REQUIRED_ENV, ENV_BASE_URL, ENV_TIMEOUT):
        status = "set" if secrets.get_secret(key) else "missing"
        print(f"{key}: {status}")
    try:
        config = ClientConfig.from_env(secrets)
        SigningIdentity.from_base64(
            config.api_key, config.private_key_b64.get_secret_value(), config.public_key
        )
    except ConfigError as exc:
        print(f"signing key: unusable ({exc})")
        return 1
    print("signing key: ok")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
