"""
secrets_manager
================

Credential lookup for the Robinhood Crypto client.  A value is read from
the environment, or from a file when ``{NAME}_FILE`` is set, so the Ed25519
seed can be mounted as a Docker/Kubernetes secret instead of living in the
process environment.  The file wins when both are present.

Example usage::

    from rhcrypto.secrets_manager import EnvFileSecretsManager

    secrets = EnvFileSecretsManager()
    api_key = secrets.get_secret("ROBINHOOD_API_KEY")
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Mapping, Optional

logger = logging.getLogger(__name__)


class BaseSecretsManager:
    """Abstract base class for secrets managers."""

    def get_secret(self, name: str) -> Optional[str]:  # pragma: no cover - override
        """Return the secret value for ``name`` or ``None`` if unavailable."""
        raise NotImplementedError


class EnvFileSecretsManager(BaseSecretsManager):
    """
    Loads secrets from environment variables and optional ``*_FILE`` paths.

    ``environ`` defaults to ``os.environ``; tests pass a plain dict.
    Relative file paths are resolved against ``base_path`` when given.
    Empty values are reported as ``None`` so that a blank variable counts
    as missing.
    """

    def __init__(
        self,
        base_path: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.base_path = base_path
        self._environ = environ if environ is not None else os.environ
        self._cache: Dict[str, Optional[str]] = {}

    def get_secret(self, name: str) -> Optional[str]:
        if name in self._cache:
            return self._cache[name]

        file_path = self._environ.get(f"{name}_FILE")
        if file_path:
            path = Path(file_path)
            if not path.is_absolute() and self.base_path is not None:
                path = self.base_path / path
            try:
                value: Optional[str] = path.read_text(encoding="utf-8").strip()
                logger.debug("Loaded %s from %s", name, path)
            except OSError as exc:
                # Never log the secret itself, only where we looked for it
                logger.warning("Failed to read %s_FILE at %s: %s", name, path, exc)
                value = None
        else:
            value = self._environ.get(name)

        value = value or None
        self._cache[name] = value
        return value
