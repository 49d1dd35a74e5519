"""Recommendation engine — weighted indicator scoring, no I/O.

Every rule below is evaluated independently against the latest indicator
readings; matching rules add their weight to a running score and append
their reason in evaluation order.

    RSI < 30                     +2   RSI > 70                     -2
    45 <= RSI <= 55              +1
    MACD hist > 0, macd > signal +2   MACD hist < 0, macd < signal -2
    price < lower Bollinger      +2   price > upper Bollinger      -2
    trend BULLISH                +3   trend BEARISH                -3
    Stochastic %K < 20           +1   Stochastic %K > 80           -1

Score >= 4 is a strong BUY, <= -4 a strong SELL, >= 1 / <= -1 a mild
BUY / SELL, anything else NEUTRAL.
"""

import logging
from dataclasses import dataclass

from fxdash.risk.sl_tp import calculate_risk_levels
from fxdash.strategy.indicators import (
    calculate_atr,
    calculate_bollinger,
    calculate_macd,
    calculate_rsi,
    calculate_stochastic,
)
from fxdash.strategy.levels import find_levels
from fxdash.strategy.market_stats import MarketStats, calculate_market_stats
from fxdash.strategy.models import (
    Action,
    BollingerBands,
    Candle,
    IndicatorReading,
    MACDResult,
    Recommendation,
    StochasticResult,
    SupportResistanceLevels,
    price_precision,
)
from fxdash.strategy.trend import TrendState, detect_trend

logger = logging.getLogger("fxdash")

STRONG_THRESHOLD = 4
MILD_THRESHOLD = 1
NO_VOLATILITY_REASON = "No volatility: stop and target cannot be placed"


@dataclass(frozen=True)
class Analysis:
    """Everything the analysis view renders for one (pair, timeframe)."""

    recommendation: Recommendation
    indicators: list[IndicatorReading]
    levels: SupportResistanceLevels
    trend: TrendState
    stats: MarketStats


def _score_readings(
    price: float,
    rsi: float,
    macd: MACDResult,
    bands: BollingerBands,
    trend: TrendState,
    stoch: StochasticResult,
) -> tuple[int, list[str]]:
    score = 0
    reasons: list[str] = []

    if rsi < 30:
        score += 2
        reasons.append("RSI in oversold territory")
    if rsi > 70:
        score -= 2
        reasons.append("RSI in overbought territory")
    if 45 <= rsi <= 55:
        score += 1
        reasons.append("RSI in neutral zone")

    if macd.histogram > 0 and macd.macd > macd.signal:
        score += 2
        reasons.append("MACD bullish signal")
    if macd.histogram < 0 and macd.macd < macd.signal:
        score -= 2
        reasons.append("MACD bearish signal")

    if price < bands.lower:
        score += 2
        reasons.append("Price near lower Bollinger Band")
    if price > bands.upper:
        score -= 2
        reasons.append("Price near upper Bollinger Band")

    if trend.direction == "BULLISH":
        score += 3
        reasons.append("Strong bullish trend")
    if trend.direction == "BEARISH":
        score -= 3
        reasons.append("Strong bearish trend")

    if stoch.k < 20:
        score += 1
        reasons.append("Stochastic oversold")
    if stoch.k > 80:
        score -= 1
        reasons.append("Stochastic overbought")

    return score, reasons


def classify_score(score: int) -> tuple[Action, str | None]:
    """Map a rule score to ``(action, strength)``."""
    if score >= STRONG_THRESHOLD:
        return "BUY", "strong"
    if score <= -STRONG_THRESHOLD:
        return "SELL", "strong"
    if score >= MILD_THRESHOLD:
        return "BUY", "mild"
    if score <= -MILD_THRESHOLD:
        return "SELL", "mild"
    return "NEUTRAL", None


def confidence_for(score: int) -> int:
    """Confidence grows 15 points per score unit from 50, capped at 95."""
    return round(min(abs(score) * 15 + 50, 95))


def _summary(pair: str, timeframe: str, action: Action, strength: str | None) -> str:
    if action == "NEUTRAL":
        return f"No clear direction for {pair} on {timeframe}"
    side = action.lower()
    if strength == "strong":
        return f"Strong {side} signal for {pair} on {timeframe}"
    return f"Mild {side} bias for {pair} on {timeframe}"


def recommend(pair: str, candles: list[Candle], timeframe: str) -> Recommendation:
    """Score the latest indicator readings into a trade recommendation.

    Args:
        pair: Currency-pair label, only used in the summary text.
        candles: Candle history, oldest-first (at least one candle).
        timeframe: Timeframe label, passed through to the output.

    Returns:
        ``Recommendation`` with action, confidence, entry (latest close),
        ATR-based stop/target and the reasons that fired.

    Short series fall back to each indicator's neutral default.  When ATR
    is 0 no stop or target can be placed, so the action is forced to
    NEUTRAL with confidence 50 and a reward-to-risk ratio of 0.

    Raises ``ValueError`` only for an empty series.
    """
    if not candles:
        raise ValueError("Need at least 1 candle for a recommendation, got 0")

    closes = [c.close for c in candles]
    entry = closes[-1]

    rsi = calculate_rsi(closes)
    macd = calculate_macd(closes)
    bands = calculate_bollinger(closes)
    trend = detect_trend(closes)
    stoch = calculate_stochastic(candles)
    atr = calculate_atr(candles)

    score, reasons = _score_readings(entry, rsi, macd, bands, trend, stoch)
    action, strength = classify_score(score)
    confidence = confidence_for(score)

    if atr == 0:
        action, strength, confidence = "NEUTRAL", None, 50
        reasons.append(NO_VOLATILITY_REASON)

    risk = calculate_risk_levels(entry, action, atr)

    logger.debug(
        "Recommendation %s %s: score=%d action=%s confidence=%d atr=%.6f",
        pair, timeframe, score, action, confidence, atr,
    )

    return Recommendation(
        pair=pair,
        timeframe=timeframe,
        action=action,
        confidence=confidence,
        entry_price=entry,
        stop_loss=risk.stop_loss,
        take_profit=risk.take_profit,
        risk_reward_ratio=risk.risk_reward_ratio,
        summary=_summary(pair, timeframe, action, strength),
        reasons=reasons,
        score=score,
        strength=strength,
    )


# ── Indicator panel ──────────────────────────────────────────────────────


def build_indicator_panel(candles: list[Candle], pair: str = "EUR/USD") -> list[IndicatorReading]:
    """Build the RSI / MACD / Bollinger / Stochastic display rows.

    Price-valued readings are formatted at the pair's precision.
    """
    closes = [c.close for c in candles]
    price = closes[-1] if closes else 0.0
    prec = price_precision(pair)

    rsi = calculate_rsi(closes)
    if rsi < 30:
        rsi_row = IndicatorReading("RSI (14)", f"{rsi:.1f}", "bullish", "Oversold")
    elif rsi > 70:
        rsi_row = IndicatorReading("RSI (14)", f"{rsi:.1f}", "bearish", "Overbought")
    else:
        rsi_row = IndicatorReading("RSI (14)", f"{rsi:.1f}", "neutral", "Neutral momentum")

    macd = calculate_macd(closes)
    macd_value = f"{macd.histogram:+.{prec}f}"
    if macd.histogram > 0 and macd.macd > macd.signal:
        macd_row = IndicatorReading("MACD (12, 26, 9)", macd_value, "bullish", "MACD above signal line")
    elif macd.histogram < 0 and macd.macd < macd.signal:
        macd_row = IndicatorReading("MACD (12, 26, 9)", macd_value, "bearish", "MACD below signal line")
    else:
        macd_row = IndicatorReading("MACD (12, 26, 9)", macd_value, "neutral", "No crossover bias")

    bands = calculate_bollinger(closes)
    band_value = f"{bands.lower:.{prec}f} / {bands.upper:.{prec}f}"
    if price < bands.lower:
        bb_row = IndicatorReading("Bollinger (20, 2)", band_value, "bullish", "Price below lower band")
    elif price > bands.upper:
        bb_row = IndicatorReading("Bollinger (20, 2)", band_value, "bearish", "Price above upper band")
    else:
        bb_row = IndicatorReading("Bollinger (20, 2)", band_value, "neutral", "Price inside the bands")

    stoch = calculate_stochastic(candles)
    if stoch.k < 20:
        st_row = IndicatorReading("Stochastic (14)", f"{stoch.k:.1f}", "bullish", "Oversold")
    elif stoch.k > 80:
        st_row = IndicatorReading("Stochastic (14)", f"{stoch.k:.1f}", "bearish", "Overbought")
    else:
        st_row = IndicatorReading("Stochastic (14)", f"{stoch.k:.1f}", "neutral", "Mid-range")

    return [rsi_row, macd_row, bb_row, st_row]


def analyze(pair: str, candles: list[Candle], timeframe: str) -> Analysis:
    """Run the full analysis view for one (pair, timeframe) request."""
    closes = [c.close for c in candles]
    return Analysis(
        recommendation=recommend(pair, candles, timeframe),
        indicators=build_indicator_panel(candles, pair),
        levels=find_levels(candles),
        trend=detect_trend(closes),
        stats=calculate_market_stats(candles),
    )
