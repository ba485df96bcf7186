"""Configuration helpers for endpoints and runtime settings."""

from __future__ import annotations

import logging
import os
from typing import Dict, Optional

from dotenv import load_dotenv

LOGGER = logging.getLogger(__name__)


def _load_env_file() -> None:
    """Load variables from a local ``.env`` file when available."""

    env_path = os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env")
    if not os.path.exists(env_path):
        LOGGER.debug("No .env file found at %s", env_path)
        return

    load_dotenv(env_path)
    LOGGER.info("Loaded environment variables from %s", env_path)


def _read_optional_int(name: str) -> Optional[int]:
    """Return ``name`` from the environment as an int, or None when unset."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        LOGGER.warning("Ignoring non-integer value for %s: %r", name, raw)
        return None


_load_env_file()


class Config:
    """Central access point for runtime configuration."""

    # Marketplace API ----------------------------------------------------------
    MARKETPLACE_API_URL: str = os.getenv("MARKETPLACE_API_URL", "https://api.mercadolibre.com")
    REFERENCE_CURRENCY: str = os.getenv("REFERENCE_CURRENCY", "USD")
    DEFAULT_SEARCH_TERM: str = os.getenv("DEFAULT_SEARCH_TERM", "iPhone 11 Pro Max")

    # HTTP ---------------------------------------------------------------------
    REQUEST_TIMEOUT_SECONDS: float = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "30"))
    USER_AGENT: str = os.getenv(
        "USER_AGENT",
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36",
    )

    # Concurrency --------------------------------------------------------------
    OUTCOME_QUEUE_SIZE: int = int(os.getenv("OUTCOME_QUEUE_SIZE", "1"))
    MAX_SITE_WORKERS: Optional[int] = _read_optional_int("MAX_SITE_WORKERS")

    # Bank scraping ------------------------------------------------------------
    BNA_URL: str = os.getenv("BNA_URL", "http://www.bna.com.ar/Personas")

    # Feature flags ------------------------------------------------------------
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"

    @classmethod
    def validate(cls) -> bool:
        """Validate that the active configuration is usable."""

        valid = True
        if cls.REQUEST_TIMEOUT_SECONDS <= 0:
            LOGGER.warning("REQUEST_TIMEOUT_SECONDS must be positive, got %s", cls.REQUEST_TIMEOUT_SECONDS)
            valid = False
        if cls.OUTCOME_QUEUE_SIZE < 0:
            LOGGER.warning("OUTCOME_QUEUE_SIZE must not be negative, got %s", cls.OUTCOME_QUEUE_SIZE)
            valid = False
        if cls.MAX_SITE_WORKERS is not None and cls.MAX_SITE_WORKERS < 1:
            LOGGER.warning("MAX_SITE_WORKERS must be at least 1, got %s", cls.MAX_SITE_WORKERS)
            valid = False
        if len(cls.REFERENCE_CURRENCY) != 3:
            LOGGER.warning("REFERENCE_CURRENCY does not look like a currency code: %r", cls.REFERENCE_CURRENCY)
            valid = False
        return valid

    @classmethod
    def get_default_headers(cls) -> Dict[str, str]:
        """Return headers sent with every outbound request."""

        return {
            "User-Agent": cls.USER_AGENT,
            "Accept": "application/json, text/html;q=0.9",
        }


if not Config.validate():  # pragma: no cover - depends on the environment
    LOGGER.warning("Configuration validation failed - check your environment variables")
