"""Technical indicators — SMA, EMA, RSI, MACD, Stochastic, Bollinger Bands, ATR.

Pure functions, no I/O. None of them raise on short input: each one has a
documented minimum-length fallback so the recommendation engine is total
over any non-empty series.
"""

import math

from fxdash.strategy.models import (
    BollingerBands,
    Candle,
    MACDResult,
    StochasticResult,
)


def _window_mean(window: list[float]) -> float:
    # Averaged relative to the first element so a run of identical prices
    # returns that exact price.
    anchor = window[0]
    return anchor + math.fsum(v - anchor for v in window) / len(window)


# ── Moving averages ──────────────────────────────────────────────────────


def calculate_sma(prices: list[float], period: int) -> list[float]:
    """Calculate a Simple Moving Average series.

    Returns one mean per window of *period* consecutive prices, so the
    output has ``len(prices) - period + 1`` entries.  Returns ``[]`` when
    there are fewer than *period* prices.

    Raises ``ValueError`` if *period* < 1.
    """
    if period < 1:
        raise ValueError(f"SMA period must be >= 1, got {period}")
    if len(prices) < period:
        return []

    return [
        _window_mean(prices[i - period + 1 : i + 1])
        for i in range(period - 1, len(prices))
    ]


def calculate_ema(prices: list[float], period: int) -> list[float]:
    """Calculate an Exponential Moving Average series.

    ``EMA_i = (price_i - EMA_{i-1}) × k + EMA_{i-1}`` with
    ``k = 2 / (period + 1)``.

    The series is seeded with the first raw price rather than an initial
    SMA, so the output has exactly one value per input price and
    ``ema[0] == prices[0]``.

    Raises ``ValueError`` if *period* < 1.
    """
    if period < 1:
        raise ValueError(f"EMA period must be >= 1, got {period}")
    if not prices:
        return []

    k = 2.0 / (period + 1)
    ema: list[float] = [prices[0]]
    for price in prices[1:]:
        prev = ema[-1]
        ema.append((price - prev) * k + prev)
    return ema


# ── RSI ──────────────────────────────────────────────────────────────────


def calculate_rsi(prices: list[float], period: int = 14) -> float:
    """Calculate the Relative Strength Index of the latest price.

    Algorithm (trailing window, not Wilder-smoothed):
        1. Take the last *period* deltas ``close[i] - close[i-1]``.
        2. avg_gain / avg_loss = mean of the positive / |negative| deltas.
        3. RSI = 100 - 100 / (1 + avg_gain / avg_loss)

    Fallbacks:
        - fewer than ``period + 1`` prices → 50.0
        - no movement at all in the window → 50.0
        - gains but no losses → 100.0
    """
    if period < 1:
        raise ValueError(f"RSI period must be >= 1, got {period}")
    if len(prices) < period + 1:
        return 50.0

    window = prices[-(period + 1):]
    gains = 0.0
    losses = 0.0
    for i in range(1, len(window)):
        change = window[i] - window[i - 1]
        if change > 0:
            gains += change
        else:
            losses -= change

    avg_gain = gains / period
    avg_loss = losses / period

    if avg_loss == 0:
        return 50.0 if avg_gain == 0 else 100.0

    rs = avg_gain / avg_loss
    return 100.0 - 100.0 / (1.0 + rs)


# ── MACD ─────────────────────────────────────────────────────────────────


def calculate_macd(
    prices: list[float],
    fast: int = 12,
    slow: int = 26,
    signal: int = 9,
) -> MACDResult:
    """Calculate MACD, its signal line and histogram at the latest bar.

    ``macd_line = EMA(fast) - EMA(slow)`` over the overlapping tail of the
    two series, ``signal_line = EMA(macd_line, signal)`` and
    ``histogram = macd - signal`` at the last aligned index.

    Returns all zeros for an empty series.
    """
    if not prices:
        return MACDResult(macd=0.0, signal=0.0, histogram=0.0)

    ema_fast = calculate_ema(prices, fast)
    ema_slow = calculate_ema(prices, slow)

    # Align on the tail: trim the head of whichever series is longer
    overlap = min(len(ema_fast), len(ema_slow))
    ema_fast = ema_fast[-overlap:]
    ema_slow = ema_slow[-overlap:]

    macd_line = [f - s for f, s in zip(ema_fast, ema_slow)]
    signal_line = calculate_ema(macd_line, signal)

    macd_val = macd_line[-1]
    signal_val = signal_line[-1]
    return MACDResult(
        macd=macd_val,
        signal=signal_val,
        histogram=macd_val - signal_val,
    )


# ── Stochastic ───────────────────────────────────────────────────────────


def calculate_stochastic(candles: list[Candle], k_period: int = 14) -> StochasticResult:
    """Calculate Stochastic %K over the last *k_period* candles.

    ``%K = (close - lowest_low) / (highest_high - lowest_low) × 100``

    %D is not computed and is reported as 0.0.  Returns %K = 50.0 when
    there are fewer than *k_period* candles or the window has no range.
    """
    if k_period < 1:
        raise ValueError(f"Stochastic period must be >= 1, got {k_period}")
    if len(candles) < k_period:
        return StochasticResult(k=50.0)

    window = candles[-k_period:]
    lowest_low = min(c.low for c in window)
    highest_high = max(c.high for c in window)
    price_range = highest_high - lowest_low
    if price_range <= 0:
        return StochasticResult(k=50.0)

    k = (window[-1].close - lowest_low) / price_range * 100.0
    return StochasticResult(k=k)


# ── Bollinger Bands ──────────────────────────────────────────────────────


def calculate_bollinger(
    prices: list[float],
    period: int = 20,
    std_dev: float = 2.0,
) -> BollingerBands:
    """Calculate Bollinger Bands at the latest price.

    Middle = last SMA(*period*)
    Upper  = middle + *std_dev* × σ
    Lower  = middle − *std_dev* × σ

    σ is the population standard deviation of the last *period* prices
    around the middle band.  With fewer than *period* prices all three
    bands collapse onto the last price.
    """
    if not prices:
        return BollingerBands(upper=0.0, middle=0.0, lower=0.0)
    if len(prices) < period:
        last = prices[-1]
        return BollingerBands(upper=last, middle=last, lower=last)

    middle = calculate_sma(prices, period)[-1]
    window = prices[-period:]
    variance = math.fsum((p - middle) ** 2 for p in window) / period
    sigma = math.sqrt(variance)

    return BollingerBands(
        upper=middle + std_dev * sigma,
        middle=middle,
        lower=middle - std_dev * sigma,
    )


# ── ATR ──────────────────────────────────────────────────────────────────


def calculate_atr(candles: list[Candle], period: int = 14) -> float:
    """Calculate the Average True Range over *period* candles.

    Uses the standard True Range definition:
        TR = max(high - low, |high - prev_close|, |low - prev_close|)

    The first candle has no previous close and contributes ``high - low``.
    Returns the simple average of the last *period* true ranges (not
    Wilder-smoothed), or of all of them when fewer are available.
    Returns 0.0 for an empty series.
    """
    if period < 1:
        raise ValueError(f"ATR period must be >= 1, got {period}")
    if not candles:
        return 0.0

    true_ranges: list[float] = [candles[0].high - candles[0].low]
    for i in range(1, len(candles)):
        high = candles[i].high
        low = candles[i].low
        prev_close = candles[i - 1].close
        tr = max(
            high - low,
            abs(high - prev_close),
            abs(low - prev_close),
        )
        true_ranges.append(tr)

    # Use the last *period* true ranges
    recent = true_ranges[-period:]
    return sum(recent) / len(recent)
