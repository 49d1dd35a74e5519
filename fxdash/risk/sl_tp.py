"""Stop-loss and take-profit calculation — pure math, no I/O.

ATR-multiple approach:
    SL is placed ``sl_atr_mult × ATR`` against the trade direction.
    TP is placed ``tp_atr_mult × ATR`` in the profit direction.

NEUTRAL recommendations get the long-side layout so the panel can still
show where a trade would sit.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class RiskLevels:
    """Computed stop-loss, take-profit and reward-to-risk ratio."""

    stop_loss: float
    take_profit: float
    risk_reward_ratio: float


def _round_half_up(value: float, digits: int = 1) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def calculate_risk_levels(
    entry_price: float,
    direction: str,
    atr: float,
    sl_atr_mult: float = 2.0,
    tp_atr_mult: float = 1.5,
) -> RiskLevels:
    """Place SL and TP at fixed ATR multiples from *entry_price*.

    Args:
        entry_price: Trade entry price (latest close).
        direction: ``"BUY"``, ``"SELL"`` or ``"NEUTRAL"``.
        atr: Current ATR value (>= 0).
        sl_atr_mult: Stop distance in ATRs (default 2.0).
        tp_atr_mult: Target distance in ATRs (default 1.5).

    Returns:
        ``RiskLevels``.  The ratio is ``|entry - TP| / |entry - SL|``
        rounded half-up to one decimal, and 0.0 when ATR is 0 (stop and
        target both sit on the entry price).
    """
    if direction not in ("BUY", "SELL", "NEUTRAL"):
        raise ValueError(
            f"direction must be 'BUY', 'SELL' or 'NEUTRAL', got '{direction}'"
        )
    if atr < 0:
        raise ValueError(f"atr must be >= 0, got {atr}")

    sl_dist = sl_atr_mult * atr
    tp_dist = tp_atr_mult * atr

    if direction == "SELL":
        sl_price = entry_price + sl_dist
        tp_price = entry_price - tp_dist
    else:
        sl_price = entry_price - sl_dist
        tp_price = entry_price + tp_dist

    if sl_dist > 0:
        # |entry - TP| / |entry - SL| with the common ATR factor cancelled
        rr = _round_half_up(tp_atr_mult / sl_atr_mult)
    else:
        rr = 0.0

    return RiskLevels(
        stop_loss=sl_price,
        take_profit=tp_price,
        risk_reward_ratio=rr,
    )
