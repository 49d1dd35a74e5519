"""CLI dashboard — prints an analysis to the console."""

from fxdash.strategy.models import pip_value, price_precision
from fxdash.strategy.recommendation import Analysis

_SIGNAL_MARKS = {"bullish": "▲", "bearish": "▼", "neutral": "•"}


def print_analysis(analysis: Analysis) -> str:
    """Format and print a recommendation with its indicator panel.

    Args:
        analysis: Result of ``analyze()``.

    Returns:
        The formatted string (also printed to stdout).
    """
    rec = analysis.recommendation
    stats = analysis.stats
    prec = price_precision(rec.pair)
    pip = pip_value(rec.pair)
    sl_pips = abs(rec.entry_price - rec.stop_loss) / pip
    tp_pips = abs(rec.take_profit - rec.entry_price) / pip

    action = rec.action if rec.strength is None else f"{rec.action} ({rec.strength})"
    rr_str = f"1:{rec.risk_reward_ratio:.1f}" if rec.risk_reward_ratio else "N/A"

    lines = [
        f"──────────────── {rec.pair} {rec.timeframe} ────────────────",
        f"  Action:          {action}",
        f"  Confidence:      {rec.confidence}%",
        f"  Entry:           {rec.entry_price:.{prec}f}",
        f"  Stop Loss:       {rec.stop_loss:.{prec}f}  ({sl_pips:.1f} pips)",
        f"  Take Profit:     {rec.take_profit:.{prec}f}  ({tp_pips:.1f} pips)",
        f"  Risk/Reward:     {rr_str}",
        f"  Trend:           {analysis.trend.direction} ({stats.trend_label})",
        f"  Volatility:      {stats.volatility_pct:.2f}% {stats.volatility_label}",
        f"  {rec.summary}",
    ]
    for reason in rec.reasons:
        lines.append(f"    - {reason}")

    lines.append("  Indicators:")
    for reading in analysis.indicators:
        mark = _SIGNAL_MARKS[reading.signal]
        lines.append(f"    {mark} {reading.name:<18} {reading.value:<24} {reading.description}")

    if analysis.levels.support:
        support = ", ".join(f"{lvl:.{prec}f}" for lvl in analysis.levels.support)
        resistance = ", ".join(f"{lvl:.{prec}f}" for lvl in analysis.levels.resistance)
        lines.append(f"  Support:         {support}")
        lines.append(f"  Resistance:      {resistance}")

    lines.append("─" * 50)
    output = "\n".join(lines)
    print(output)
    return output
