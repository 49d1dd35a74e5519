"""Quick-stats block — price change, day range, volatility and moving averages."""

from dataclasses import dataclass
from typing import Optional

from fxdash.strategy.indicators import calculate_atr, calculate_ema, calculate_sma
from fxdash.strategy.models import Candle
from fxdash.strategy.trend import describe_trend


@dataclass(frozen=True)
class MarketStats:
    """Summary figures shown above the chart."""

    current_price: float
    price_change: float
    price_change_pct: float
    day_high: float
    day_low: float
    day_range: float
    atr: float
    volatility_pct: float
    volatility_label: str  # "Low", "Medium" or "High"
    sma_20: Optional[float]
    sma_50: Optional[float]
    sma_200: Optional[float]
    ema_12: float
    ema_26: float
    trend_label: str


def volatility_label(volatility_pct: float) -> str:
    """Bucket ATR-as-percent-of-price into Low (< 0.5), Medium (< 1.0) or High."""
    if volatility_pct < 0.5:
        return "Low"
    if volatility_pct < 1.0:
        return "Medium"
    return "High"


def _last_sma(closes: list[float], period: int) -> Optional[float]:
    values = calculate_sma(closes, period)
    return values[-1] if values else None


def calculate_market_stats(candles: list[Candle], day_window: int = 24) -> MarketStats:
    """Compute the quick-stats block for a non-empty candle series.

    Args:
        candles: Candle history, oldest-first (at least one candle).
        day_window: Number of trailing candles that make up the "day"
            for the high/low/range figures (default 24).

    SMAs that need more candles than are available are ``None``.
    """
    if not candles:
        raise ValueError("Need at least 1 candle for market stats, got 0")

    closes = [c.close for c in candles]
    current = closes[-1]
    first = closes[0]

    change = current - first
    change_pct = change / first * 100.0 if first else 0.0

    recent = candles[-day_window:]
    day_high = max(c.high for c in recent)
    day_low = min(c.low for c in recent)

    atr = calculate_atr(candles)
    vol_pct = atr / current * 100.0 if current else 0.0

    return MarketStats(
        current_price=current,
        price_change=change,
        price_change_pct=change_pct,
        day_high=day_high,
        day_low=day_low,
        day_range=day_high - day_low,
        atr=atr,
        volatility_pct=vol_pct,
        volatility_label=volatility_label(vol_pct),
        sma_20=_last_sma(closes, 20),
        sma_50=_last_sma(closes, 50),
        sma_200=_last_sma(closes, 200),
        ema_12=calculate_ema(closes, 12)[-1],
        ema_26=calculate_ema(closes, 26)[-1],
        trend_label=describe_trend(closes),
    )
