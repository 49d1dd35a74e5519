"""Deterministic tests for the indicator module.

All tests use fixed price fixtures. Same input = same output, always.
"""

import math

import pytest

from fxdash.data.synthetic import SyntheticSeriesGenerator
from fxdash.strategy.indicators import (
    calculate_atr,
    calculate_bollinger,
    calculate_ema,
    calculate_macd,
    calculate_rsi,
    calculate_sma,
    calculate_stochastic,
)
from fxdash.strategy.models import Candle


# ── Fixtures ─────────────────────────────────────────────────────────────

def _make_candle(t: int, o: float, h: float, l: float, c: float) -> Candle:
    return Candle(time=t, open=o, high=h, low=l, close=c)


def _rising(n: int = 60) -> list[float]:
    return [1.00 + 0.10 * i / (n - 1) for i in range(n)]


def _falling(n: int = 60) -> list[float]:
    return [1.10 - 0.10 * i / (n - 1) for i in range(n)]


def _atr_candles() -> list[Candle]:
    """16 candles for ATR(14) calculation (need 15 = period+1)."""
    # Uniform candles with known ranges for easy manual calculation
    candles = []
    base = 1.0900
    for i in range(16):
        o = base + i * 0.0001
        # Each candle has a range of 0.0020 (high - low)
        h = o + 0.0010
        l = o - 0.0010
        c = o + 0.0002
        candles.append(_make_candle(i * 3600, o, h, l, c))
    return candles


# ── SMA ──────────────────────────────────────────────────────────────────


class TestSMA:
    def test_known_values(self):
        assert calculate_sma([1.0, 2.0, 3.0, 4.0, 5.0], 3) == [2.0, 3.0, 4.0]

    def test_period_one_is_identity(self):
        prices = [1.0851, 1.0849, 1.0862, 1.0803]
        assert calculate_sma(prices, 1) == prices

    @pytest.mark.parametrize("n,period", [(10, 1), (10, 5), (10, 10), (50, 20)])
    def test_output_length(self, n, period):
        prices = [1.0 + i * 0.001 for i in range(n)]
        assert len(calculate_sma(prices, period)) == n - period + 1

    def test_short_input_returns_empty(self):
        assert calculate_sma([1.0, 2.0], 3) == []

    def test_constant_window_is_exact(self):
        assert calculate_sma([1.10] * 50, 50) == [1.10]

    def test_rejects_zero_period(self):
        with pytest.raises(ValueError, match="period"):
            calculate_sma([1.0], 0)


# ── EMA ──────────────────────────────────────────────────────────────────


class TestEMA:
    def test_known_values(self):
        # k = 2 / (3 + 1) = 0.5
        assert calculate_ema([1.0, 2.0, 3.0], 3) == [1.0, 1.5, 2.25]

    def test_seeded_with_first_price(self):
        prices = _rising(30)
        ema = calculate_ema(prices, 12)
        assert len(ema) == len(prices)
        assert ema[0] == prices[0]

    def test_single_price(self):
        assert calculate_ema([1.2345], 26) == [1.2345]

    def test_empty(self):
        assert calculate_ema([], 12) == []

    def test_constant_series_stays_constant(self):
        assert calculate_ema([1.10] * 20, 9) == [1.10] * 20


# ── RSI ──────────────────────────────────────────────────────────────────


class TestRSI:
    def test_short_input_is_neutral(self):
        assert calculate_rsi([1.0] * 14, period=14) == 50.0

    def test_all_gains_is_100(self):
        assert calculate_rsi(_rising(30)) == 100.0

    def test_all_losses_is_0(self):
        assert calculate_rsi(_falling(30)) == 0.0

    def test_no_movement_is_neutral(self):
        """A window with no gains and no losses reads 50, not 100."""
        assert calculate_rsi([1.10] * 30) == 50.0

    def test_known_value(self):
        # deltas +2, -1 → avg gain 1.0, avg loss 0.5 → RS 2 → 66.67
        assert calculate_rsi([10.0, 12.0, 11.0], period=2) == pytest.approx(200.0 / 3.0)

    def test_uses_trailing_window_only(self):
        """The -90 delta is outside the last two deltas and is ignored."""
        assert calculate_rsi([100.0, 10.0, 12.0, 11.0], period=2) == pytest.approx(200.0 / 3.0)

    @pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
    def test_bounded(self, seed):
        candles = SyntheticSeriesGenerator(seed).generate(1.0850, count=80)
        rsi = calculate_rsi([c.close for c in candles])
        assert 0.0 <= rsi <= 100.0


# ── MACD ─────────────────────────────────────────────────────────────────


class TestMACD:
    def test_empty_is_zero(self):
        result = calculate_macd([])
        assert (result.macd, result.signal, result.histogram) == (0.0, 0.0, 0.0)

    def test_flat_is_zero(self):
        result = calculate_macd([1.10] * 60)
        assert result.macd == 0.0
        assert result.histogram == 0.0

    def test_rising_is_bullish(self):
        result = calculate_macd(_rising())
        assert result.macd > result.signal
        assert result.histogram > 0

    def test_falling_is_bearish(self):
        result = calculate_macd(_falling())
        assert result.macd < result.signal
        assert result.histogram < 0

    def test_histogram_is_macd_minus_signal(self):
        candles = SyntheticSeriesGenerator(11).generate(1.2650, count=60)
        result = calculate_macd([c.close for c in candles])
        assert result.histogram == pytest.approx(result.macd - result.signal)


# ── Stochastic ───────────────────────────────────────────────────────────


class TestStochastic:
    def test_known_value(self):
        candles = [_make_candle(i, 1.5, 2.0, 1.0, 1.5) for i in range(13)]
        candles.append(_make_candle(13, 1.5, 1.8, 1.2, 1.75))
        result = calculate_stochastic(candles)
        assert result.k == pytest.approx(75.0)
        assert result.d == 0.0

    def test_only_last_k_period_candles(self):
        # An extreme low outside the 14-candle window must not count
        candles = [_make_candle(0, 0.5, 0.5, 0.1, 0.5)]
        candles += [_make_candle(i + 1, 1.5, 2.0, 1.0, 1.5) for i in range(14)]
        assert calculate_stochastic(candles).k == pytest.approx(50.0)

    def test_short_input_is_neutral(self):
        candles = [_make_candle(i, 1.0, 1.1, 0.9, 1.0) for i in range(5)]
        assert calculate_stochastic(candles).k == 50.0

    def test_zero_range_is_neutral(self):
        candles = [_make_candle(i, 1.1, 1.1, 1.1, 1.1) for i in range(20)]
        assert calculate_stochastic(candles).k == 50.0


# ── Bollinger ────────────────────────────────────────────────────────────


class TestBollinger:
    def test_known_values(self):
        # mean 3, population variance 2
        bands = calculate_bollinger([1.0, 2.0, 3.0, 4.0, 5.0], period=5)
        assert bands.middle == 3.0
        assert bands.upper == pytest.approx(3.0 + 2 * math.sqrt(2))
        assert bands.lower == pytest.approx(3.0 - 2 * math.sqrt(2))

    def test_short_input_collapses_to_last_price(self):
        bands = calculate_bollinger([1.0, 1.1, 1.2], period=20)
        assert bands.upper == bands.middle == bands.lower == 1.2

    def test_flat_series_has_zero_width(self):
        bands = calculate_bollinger([1.10] * 30)
        assert bands.upper == bands.middle == bands.lower == 1.10

    @pytest.mark.parametrize("seed", [3, 8, 13])
    def test_band_ordering(self, seed):
        candles = SyntheticSeriesGenerator(seed).generate(150.50, count=40)
        bands = calculate_bollinger([c.close for c in candles])
        assert bands.lower <= bands.middle <= bands.upper


# ── ATR ──────────────────────────────────────────────────────────────────


class TestATR:
    def test_atr_calculation(self):
        """ATR(14) on uniform 0.0020-range candles = 0.0020."""
        atr = calculate_atr(_atr_candles(), period=14)
        assert abs(atr - 0.0020) < 1e-9

    def test_gap_widens_true_range(self):
        candles = [
            _make_candle(0, 1.0, 1.1, 0.9, 1.0),
            _make_candle(1, 1.5, 1.6, 1.4, 1.5),
        ]
        # TR of the second candle = |1.6 - 1.0| = 0.6
        assert calculate_atr(candles, period=1) == pytest.approx(0.6)

    def test_single_candle_uses_its_range(self):
        assert calculate_atr([_make_candle(0, 1.0820, 1.0850, 1.0800, 1.0820)]) == pytest.approx(0.0050)

    def test_short_series_averages_available_ranges(self):
        candles = _atr_candles()[:4]
        assert calculate_atr(candles, period=14) == pytest.approx(0.0020)

    def test_flat_series_is_zero(self):
        candles = [_make_candle(i, 1.1, 1.1, 1.1, 1.1) for i in range(30)]
        assert calculate_atr(candles) == 0.0

    def test_empty_is_zero(self):
        assert calculate_atr([]) == 0.0
