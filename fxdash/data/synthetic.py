"""Synthetic price series — seeded random walk used when no real history exists.

The engine never calls this module.  Callers that could not fetch real
candles build a fallback series here and pass it to the engine like any
other series.
"""

import logging
from typing import Optional

import numpy as np

from fxdash.strategy.models import TIMEFRAMES_BY_ID, Candle, normalize_pair

logger = logging.getLogger("fxdash")

# Reference quotes used when the caller has no recent rates for a pair.
REFERENCE_PRICES: dict[str, float] = {
    "EUR/USD": 1.0850,
    "GBP/USD": 1.2650,
    "USD/JPY": 150.50,
    "USD/CHF": 0.8850,
    "AUD/USD": 0.6550,
    "USD/CAD": 1.3550,
    "NZD/USD": 0.6050,
    "EUR/GBP": 0.8580,
    "EUR/JPY": 163.20,
    "GBP/JPY": 190.50,
    "EUR/CHF": 0.9600,
    "AUD/JPY": 98.50,
}

# EUR-based sample rates, in the shape a rates endpoint returns them.
SAMPLE_RATES: dict[str, float] = {
    "EUR": 1.0,
    "USD": 1.085,
    "GBP": 0.865,
    "JPY": 163.5,
    "CHF": 0.912,
    "AUD": 1.655,
    "CAD": 1.475,
    "NZD": 1.785,
}


class SyntheticSeriesGenerator:
    """Random-walk OHLC generator with an explicit seed.

    Two generators built with the same seed produce identical series.

    Args:
        seed: Seed for ``numpy.random.default_rng``.  ``None`` draws fresh
            OS entropy (non-reproducible).
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self._seed = seed
        self._rng = np.random.default_rng(seed)

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    def generate(
        self,
        base_price: float,
        count: int = 100,
        volatility: float = 0.0015,
        wick: float = 0.0005,
        start_time: int = 0,
        interval_seconds: int = 3600,
    ) -> list[Candle]:
        """Generate *count* candles starting at *base_price*.

        Each bar opens at the previous close and moves by
        ``(u - 0.5) × price × volatility`` with ``u ~ U[0, 1)``.  Wicks
        extend up to ``price × wick`` beyond the body on each side.
        """
        if count < 1:
            raise ValueError(f"count must be >= 1, got {count}")
        if base_price <= 0:
            raise ValueError(f"base_price must be > 0, got {base_price}")

        candles: list[Candle] = []
        price = base_price
        for i in range(count):
            open_ = price
            change = (self._rng.random() - 0.5) * price * volatility
            close = price + change
            high = max(open_, close) + self._rng.random() * price * wick
            low = min(open_, close) - self._rng.random() * price * wick
            candles.append(
                Candle(
                    time=start_time + i * interval_seconds,
                    open=open_,
                    high=high,
                    low=low,
                    close=close,
                )
            )
            price = close
        return candles


def fallback_base_price(
    pair: str,
    last_rates: Optional[dict[str, float]] = None,
) -> float:
    """Pick a starting price for a synthetic series.

    Resolution order:
        1. Cross rate from *last_rates*, the caller's last successfully
           fetched rates, as units of each currency per one unit of a
           common base.  The base currency itself may be absent (1.0).
        2. ``REFERENCE_PRICES``.
        3. 150.0 for JPY quotes, 1.0850 otherwise.
    """
    pair = normalize_pair(pair)
    base, quote = pair.split("/")

    if last_rates and (base in last_rates or quote in last_rates):
        # A rates payload omits its own base currency
        base_rate = last_rates.get(base, 1.0)
        quote_rate = last_rates.get(quote, 1.0)
        if base_rate > 0 and quote_rate > 0:
            return quote_rate / base_rate

    if pair in REFERENCE_PRICES:
        return REFERENCE_PRICES[pair]
    return 150.0 if quote == "JPY" else 1.0850


def build_fallback_series(
    pair: str,
    generator: SyntheticSeriesGenerator,
    timeframe: str = "1h",
    count: int = 100,
    last_rates: Optional[dict[str, float]] = None,
    volatility: float = 0.0015,
    start_time: int = 0,
) -> list[Candle]:
    """Build a synthetic series for *pair* spaced at *timeframe* intervals."""
    tf = TIMEFRAMES_BY_ID.get(timeframe)
    if tf is None:
        raise ValueError(f"Unknown timeframe: {timeframe!r}")

    base_price = fallback_base_price(pair, last_rates)
    logger.info(
        "Using synthetic %s %s series (%d candles, base %.5f, seed %s)",
        normalize_pair(pair), timeframe, count, base_price, generator.seed,
    )
    return generator.generate(
        base_price,
        count=count,
        volatility=volatility,
        start_time=start_time,
        interval_seconds=tf.minutes * 60,
    )
