"""Runtime settings read from the environment."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from typing import Mapping, Optional

from cabinet_quote.quote import QuoteSettings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    pricing_api_base_url: Optional[str] = None
    pricing_api_token: Optional[str] = None
    pricing_api_timeout: float = 8.0
    quote: QuoteSettings = QuoteSettings()
    log_level: str = "INFO"


def _env_float(env: Mapping[str, str], name: str, default: float) -> float:
    value = env.get(name, "").strip()
    if not value:
        return default
    try:
        return float(value)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {value!r}") from e


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if env is None else env
    defaults = QuoteSettings()
    return Settings(
        pricing_api_base_url=env.get("PRICING_API_BASE_URL", "").strip() or None,
        pricing_api_token=env.get("PRICING_API_TOKEN", "").strip() or None,
        pricing_api_timeout=_env_float(env, "PRICING_API_TIMEOUT", 8.0),
        quote=QuoteSettings(
            surcharge_rate=_env_float(env, "QUOTE_SURCHARGE_RATE", defaults.surcharge_rate),
            tax_rate=_env_float(env, "QUOTE_TAX_RATE", defaults.tax_rate),
        ),
        log_level=env.get("CABINET_QUOTE_LOG_LEVEL", "").strip().upper() or "INFO",
    )


def configure_logging(settings: Settings) -> None:
    """Install a root handler; only entry points call this, never the library."""
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO), format=LOG_FORMAT)
