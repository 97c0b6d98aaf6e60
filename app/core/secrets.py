"""
Secret access for upstream credentials.

The query handler receives a SecretProvider at construction time instead of
reading the environment itself, so tests can hand it a fake.
"""

import logging
import os
from typing import Protocol

logger = logging.getLogger(__name__)


class SecretProvider(Protocol):
    def get_secret(self, name: str) -> str:
        """Return the secret value. Raises KeyError when it is not available."""
        ...


class EnvSecretProvider:
    """Reads secrets from environment variables (populated from .env by app.core.config)."""

    def get_secret(self, name: str) -> str:
        value = os.getenv(name, "").strip()
        if not value:
            logger.error("[secrets:get_secret] secret %s is not set", name)
            raise KeyError(name)
        return value
