"""All-timeframes strip — direction and RSI per chart timeframe."""

from dataclasses import dataclass
from typing import Literal

from fxdash.strategy.indicators import calculate_rsi, calculate_sma
from fxdash.strategy.models import TIMEFRAMES, Candle


@dataclass(frozen=True)
class TimeframeSummary:
    """One cell of the all-timeframes strip."""

    timeframe: str
    label: str
    direction: Literal["up", "down"]
    rsi: float


def summarize_timeframe(timeframe: str, label: str, candles: list[Candle]) -> TimeframeSummary:
    """Summarise one series: up when the last close is above SMA(20)."""
    closes = [c.close for c in candles]
    sma20 = calculate_sma(closes, 20)
    reference = sma20[-1] if sma20 else 0.0
    last = closes[-1] if closes else 0.0

    return TimeframeSummary(
        timeframe=timeframe,
        label=label,
        direction="up" if last > reference else "down",
        rsi=calculate_rsi(closes),
    )


def summarize_timeframes(series_by_timeframe: dict[str, list[Candle]]) -> list[TimeframeSummary]:
    """Summarise every known timeframe present in *series_by_timeframe*.

    Output follows ``TIMEFRAMES`` order; unknown keys are ignored.
    """
    return [
        summarize_timeframe(tf.id, tf.label, series_by_timeframe[tf.id])
        for tf in TIMEFRAMES
        if tf.id in series_by_timeframe
    ]
