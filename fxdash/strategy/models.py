"""Engine data models — typed value objects for indicator and recommendation output."""

from dataclasses import dataclass, field
from typing import Literal, Optional

Signal = Literal["bullish", "bearish", "neutral"]
Action = Literal["BUY", "SELL", "NEUTRAL"]
TrendDirection = Literal["BULLISH", "BEARISH", "NEUTRAL"]


@dataclass(frozen=True)
class Candle:
    """A single OHLC bar. ``time`` is a unix timestamp in seconds."""

    time: int
    open: float
    high: float
    low: float
    close: float


@dataclass(frozen=True)
class MACDResult:
    """Last aligned MACD reading."""

    macd: float
    signal: float
    histogram: float


@dataclass(frozen=True)
class BollingerBands:
    """Bollinger envelope at the latest bar."""

    upper: float
    middle: float
    lower: float


@dataclass(frozen=True)
class StochasticResult:
    """Stochastic oscillator. ``d`` is not computed and is always 0.0."""

    k: float
    d: float = 0.0


@dataclass(frozen=True)
class SupportResistanceLevels:
    """Range-partition levels.

    ``support`` ascends from just above the low, ``resistance`` descends
    from just below the high.
    """

    support: list[float] = field(default_factory=list)
    resistance: list[float] = field(default_factory=list)


@dataclass(frozen=True)
class IndicatorReading:
    """One row of the indicator panel, pre-formatted for display."""

    name: str
    value: str
    signal: Signal
    description: str


@dataclass(frozen=True)
class Recommendation:
    """Scored trade recommendation for one (pair, timeframe) request."""

    pair: str
    timeframe: str
    action: Action
    confidence: int
    entry_price: float
    stop_loss: float
    take_profit: float
    risk_reward_ratio: float
    summary: str
    reasons: list[str] = field(default_factory=list)
    score: int = 0
    strength: Optional[str] = None  # "strong", "mild" or None for NEUTRAL


@dataclass(frozen=True)
class Timeframe:
    """A chart timeframe offered by the dashboard."""

    id: str
    label: str
    minutes: int


TIMEFRAMES: list[Timeframe] = [
    Timeframe("1m", "1m", 1),
    Timeframe("5m", "5m", 5),
    Timeframe("15m", "15m", 15),
    Timeframe("30m", "30m", 30),
    Timeframe("1h", "1H", 60),
    Timeframe("4h", "4H", 240),
    Timeframe("1d", "1D", 1440),
    Timeframe("1w", "1W", 10080),
]

TIMEFRAMES_BY_ID: dict[str, Timeframe] = {tf.id: tf for tf in TIMEFRAMES}


# ── Pair metadata ────────────────────────────────────────────────────────


def normalize_pair(pair: str) -> str:
    """Return a pair label in ``BASE/QUOTE`` form.

    Accepts ``"EUR/USD"``, ``"EUR_USD"``, ``"eur-usd"`` and ``"EURUSD"``.
    Raises ``ValueError`` for anything that is not two 3-letter codes.
    """
    cleaned = pair.strip().upper()
    for sep in ("_", "-", " "):
        cleaned = cleaned.replace(sep, "/")
    if "/" not in cleaned and len(cleaned) == 6:
        cleaned = f"{cleaned[:3]}/{cleaned[3:]}"

    parts = cleaned.split("/")
    if len(parts) != 2 or not all(len(p) == 3 and p.isalpha() for p in parts):
        raise ValueError(f"Invalid currency pair: {pair!r}")
    return f"{parts[0]}/{parts[1]}"


def pip_value(pair: str) -> float:
    """Pip size for *pair*: 0.01 for JPY quotes, 0.0001 otherwise."""
    return 0.01 if pair.upper().endswith("JPY") else 0.0001


def price_precision(pair: str) -> int:
    """Decimal places used when displaying prices for *pair*."""
    return 3 if pair.upper().endswith("JPY") else 5
