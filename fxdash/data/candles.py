"""Candle payload parsing — raw dicts from a client or data provider into ``Candle`` objects."""

import math
from typing import Any

from fxdash.strategy.models import Candle

_FIELDS = ("time", "open", "high", "low", "close")


def parse_candle(raw: dict[str, Any], index: int = 0) -> Candle:
    """Convert one dict into a ``Candle`` and check its OHLC invariant.

    Raises ``ValueError`` naming *index* when a field is missing, not
    numeric or not finite, or when ``low``/``high`` do not bound the body.
    """
    missing = [f for f in _FIELDS if f not in raw]
    if missing:
        raise ValueError(f"Candle {index}: missing field(s): {', '.join(missing)}")

    try:
        candle = Candle(
            time=int(raw["time"]),
            open=float(raw["open"]),
            high=float(raw["high"]),
            low=float(raw["low"]),
            close=float(raw["close"]),
        )
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Candle {index}: non-numeric value ({exc})") from exc

    if not all(math.isfinite(v) for v in (candle.open, candle.high, candle.low, candle.close)):
        raise ValueError(f"Candle {index}: non-finite price")
    if candle.low > min(candle.open, candle.close):
        raise ValueError(f"Candle {index}: low {candle.low} is above the candle body")
    if candle.high < max(candle.open, candle.close):
        raise ValueError(f"Candle {index}: high {candle.high} is below the candle body")
    return candle


def parse_candles(raw: list[dict[str, Any]]) -> list[Candle]:
    """Convert a list of dicts into a validated, time-ordered candle series.

    Raises ``ValueError`` for an empty list, any invalid candle, or a
    timestamp that does not strictly increase.
    """
    if not raw:
        raise ValueError("Need at least 1 candle, got 0")

    candles: list[Candle] = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            raise ValueError(f"Candle {i}: expected an object, got {type(item).__name__}")
        candle = parse_candle(item, i)
        if candles and candle.time <= candles[-1].time:
            raise ValueError(
                f"Candle {i}: time {candle.time} does not follow {candles[-1].time}"
            )
        candles.append(candle)
    return candles
