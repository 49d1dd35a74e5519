"""FXDash — application configuration.

Loads .env variables into a typed config object.
Validates values on startup.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from fxdash.strategy.models import TIMEFRAMES_BY_ID, normalize_pair

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class Config:
    """Typed configuration loaded from environment variables."""

    log_level: str
    api_port: int
    default_pair: str
    default_timeframe: str
    synthetic_candles: int
    synthetic_volatility: float
    synthetic_seed: Optional[int]
    fallback_rates: Optional[dict[str, float]] = None


def _int_var(name: str, default: str) -> int:
    raw = os.environ.get(name, default)
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _float_var(name: str, default: str) -> float:
    raw = os.environ.get(name, default)
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _rates_var(name: str) -> Optional[dict[str, float]]:
    """Parse ``"USD=1.085,GBP=0.865"`` into ``{"USD": 1.085, "GBP": 0.865}``."""
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None

    rates: dict[str, float] = {}
    for entry in raw.split(","):
        code, sep, value = entry.partition("=")
        code = code.strip().upper()
        if not sep or len(code) != 3 or not code.isalpha():
            raise ValueError(f"{name} entries must look like USD=1.085, got {entry.strip()!r}")
        try:
            rate = float(value)
        except ValueError:
            raise ValueError(f"{name} rate for {code} must be a number, got {value.strip()!r}") from None
        if not 0 < rate < float("inf"):
            raise ValueError(f"{name} rate for {code} must be a positive finite number, got {rate}")
        rates[code] = rate
    return rates


def load_config(env_path: str | None = None) -> Config:
    """Load configuration from environment variables.

    Every variable is optional.  Raises ``ValueError`` with a message
    naming the variable when a value cannot be parsed or is out of range.
    """
    load_dotenv(dotenv_path=env_path)

    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    if log_level not in _VALID_LOG_LEVELS:
        raise ValueError(f"LOG_LEVEL must be one of {sorted(_VALID_LOG_LEVELS)}, got {log_level!r}")

    api_port = _int_var("API_PORT", "8080")
    if not 1 <= api_port <= 65535:
        raise ValueError(f"API_PORT must be 1-65535, got {api_port}")

    try:
        default_pair = normalize_pair(os.environ.get("DEFAULT_PAIR", "EUR/USD"))
    except ValueError as exc:
        raise ValueError(f"DEFAULT_PAIR: {exc}") from None

    default_timeframe = os.environ.get("DEFAULT_TIMEFRAME", "1h")
    if default_timeframe not in TIMEFRAMES_BY_ID:
        raise ValueError(
            f"DEFAULT_TIMEFRAME must be one of {list(TIMEFRAMES_BY_ID)}, got {default_timeframe!r}"
        )

    synthetic_candles = _int_var("SYNTHETIC_CANDLES", "100")
    if synthetic_candles < 1:
        raise ValueError(f"SYNTHETIC_CANDLES must be >= 1, got {synthetic_candles}")

    synthetic_volatility = _float_var("SYNTHETIC_VOLATILITY", "0.0015")
    if synthetic_volatility < 0:
        raise ValueError(f"SYNTHETIC_VOLATILITY must be >= 0, got {synthetic_volatility}")

    seed_raw = os.environ.get("SYNTHETIC_SEED")
    synthetic_seed = _int_var("SYNTHETIC_SEED", "0") if seed_raw else None

    return Config(
        log_level=log_level,
        api_port=api_port,
        default_pair=default_pair,
        default_timeframe=default_timeframe,
        synthetic_candles=synthetic_candles,
        synthetic_volatility=synthetic_volatility,
        synthetic_seed=synthetic_seed,
        fallback_rates=_rates_var("FALLBACK_RATES"),
    )
