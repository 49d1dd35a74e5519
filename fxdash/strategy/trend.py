"""Trend detection — SMA-based directional score and the dashboard trend label.

Provides two views of the same moving averages:
- ``detect_trend()``: weighted price-vs-SMA score used by the recommendation
  engine (BULLISH / BEARISH / NEUTRAL).
- ``describe_trend()``: five-way label shown in the quick-stats block
  (strong_uptrend ... sideways).
"""

from dataclasses import dataclass

from fxdash.strategy.indicators import calculate_sma
from fxdash.strategy.models import TrendDirection


@dataclass(frozen=True)
class TrendState:
    """Snapshot of the current trend classification and SMA values."""

    direction: TrendDirection
    sma_fast_value: float
    sma_slow_value: float
    score: int


def _side(price: float, average: float) -> int:
    if price > average:
        return 1
    if price < average:
        return -1
    return 0


def detect_trend(
    closes: list[float],
    sma_fast: int = 20,
    sma_slow: int = 50,
) -> TrendState:
    """Classify the trend from price position relative to two SMAs.

    Args:
        closes: Closing prices, oldest-first.
        sma_fast: Fast SMA period (default 20).
        sma_slow: Slow SMA period (default 50).

    Returns:
        ``TrendState`` with direction "BULLISH", "BEARISH", or "NEUTRAL".

    Rules:
        - Price above / below the fast SMA scores +1 / -1.
        - Price above / below the slow SMA scores +2 / -2.
        - Price exactly on an SMA scores 0 for that SMA.
        - Score > 2 is **BULLISH**, score < -2 is **BEARISH**,
          everything else is **NEUTRAL**.

    Either SMA series having fewer than 2 points returns NEUTRAL.
    """
    fast_values = calculate_sma(closes, sma_fast)
    slow_values = calculate_sma(closes, sma_slow)

    if len(fast_values) < 2 or len(slow_values) < 2:
        return TrendState(
            direction="NEUTRAL",
            sma_fast_value=fast_values[-1] if fast_values else 0.0,
            sma_slow_value=slow_values[-1] if slow_values else 0.0,
            score=0,
        )

    sma_f = fast_values[-1]
    sma_s = slow_values[-1]
    price = closes[-1]

    score = _side(price, sma_f) + 2 * _side(price, sma_s)

    if score > 2:
        direction = "BULLISH"
    elif score < -2:
        direction = "BEARISH"
    else:
        direction = "NEUTRAL"

    return TrendState(
        direction=direction,
        sma_fast_value=sma_f,
        sma_slow_value=sma_s,
        score=score,
    )


def describe_trend(
    closes: list[float],
    sma_fast: int = 20,
    sma_slow: int = 50,
) -> str:
    """Return the quick-stats trend label for *closes*.

    ``strong_uptrend`` when price > fast SMA > slow SMA, ``strong_downtrend``
    for the mirror case, ``uptrend`` / ``downtrend`` when only the fast SMA
    agrees, ``sideways`` otherwise or when either SMA is unavailable.
    """
    fast_values = calculate_sma(closes, sma_fast)
    slow_values = calculate_sma(closes, sma_slow)
    if not fast_values or not slow_values:
        return "sideways"

    price = closes[-1]
    sma_f = fast_values[-1]
    sma_s = slow_values[-1]

    if price > sma_f and sma_f > sma_s:
        return "strong_uptrend"
    if price < sma_f and sma_f < sma_s:
        return "strong_downtrend"
    if price > sma_f:
        return "uptrend"
    if price < sma_f:
        return "downtrend"
    return "sideways"
