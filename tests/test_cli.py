"""Tests for the CLI — console dashboard output and analyze/serve modes."""

import pytest

import fxdash.api.routers as routers
import fxdash.main as main
from fxdash.cli.dashboard import print_analysis
from fxdash.main import _run_cli
from fxdash.strategy.models import Candle
from fxdash.strategy.recommendation import analyze


def _series(closes: list[float], spread: float = 0.0005) -> list[Candle]:
    return [
        Candle(time=i * 3600, open=c, high=c + spread, low=c - spread, close=c)
        for i, c in enumerate(closes)
    ]


def _range_candles(n: int = 60) -> list[Candle]:
    """high=1.0850, low=1.0800, close=1.0820 with a 1e-6 alternating wobble."""
    candles = []
    for i in range(n):
        noise = 0.000001 if i % 2 else 0.0
        close = 1.0820 + noise
        candles.append(
            Candle(time=i * 3600, open=close, high=1.0850 + noise, low=1.0800 + noise, close=close)
        )
    return candles


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in (
        "LOG_LEVEL",
        "API_PORT",
        "DEFAULT_PAIR",
        "DEFAULT_TIMEFRAME",
        "SYNTHETIC_CANDLES",
        "SYNTHETIC_VOLATILITY",
        "SYNTHETIC_SEED",
        "FALLBACK_RATES",
    ):
        monkeypatch.delenv(var, raising=False)
    yield
    routers.configure_routers()


@pytest.fixture
def env_file(tmp_path):
    """A non-existent env path so load_dotenv doesn't read a real .env file."""
    return str(tmp_path / "nonexistent.env")


# ── Console dashboard ────────────────────────────────────────────────────


class TestPrintAnalysis:
    def test_rising_series(self, capsys):
        closes = [1.00 + 0.10 * i / 59 for i in range(60)]
        output = print_analysis(analyze("EUR/USD", _series(closes), "4H"))
        assert "EUR/USD 4H" in output
        assert "BUY (mild)" in output
        assert "Confidence:      80%" in output
        assert "Entry:           1.10000" in output
        assert "1:0.8" in output
        assert "RSI (14)" in output
        assert "Support:" in output
        assert capsys.readouterr().out.strip() == output.strip()

    def test_flat_series_has_no_ratio(self, capsys):
        output = print_analysis(analyze("USD/JPY", _series([150.5] * 30, spread=0.0), "1H"))
        assert "NEUTRAL" in output
        assert "Risk/Reward:     N/A" in output
        assert "Entry:           150.500" in output
        assert "Stop Loss:       150.500  (0.0 pips)" in output
        assert "No volatility" in output

    def test_distances_in_pips(self, capsys):
        """ATR ≈ 0.0050 → stop 2 ATR = 100 pips, target 1.5 ATR = 75 pips."""
        output = print_analysis(analyze("EUR/USD", _range_candles(), "1H"))
        assert "(100.0 pips)" in output.splitlines()[4]
        assert "(75.0 pips)" in output.splitlines()[5]

    def test_jpy_pips(self, capsys):
        candles = _series([150.0 + 0.05 * i for i in range(60)], spread=0.02)
        analysis = analyze("USD/JPY", candles, "1H")
        rec = analysis.recommendation
        output = print_analysis(analysis)
        expected = abs(rec.entry_price - rec.stop_loss) / 0.01
        assert f"({expected:.1f} pips)" in output


# ── CLI modes ────────────────────────────────────────────────────────────


class TestRunCli:
    def test_analyze_mode(self, capsys, env_file):
        _run_cli(["--pair", "GBP_USD", "--timeframe", "1d", "--seed", "4", "--env-file", env_file])
        out = capsys.readouterr().out
        assert "GBP/USD 1d" in out
        assert "Action:" in out

    def test_same_seed_same_output(self, capsys, env_file):
        argv = ["--seed", "11", "--env-file", env_file]
        _run_cli(argv)
        first = capsys.readouterr().out
        _run_cli(argv)
        assert capsys.readouterr().out == first

    def test_fallback_rates_anchor_analysis(self, capsys, monkeypatch, env_file):
        monkeypatch.setenv("FALLBACK_RATES", "USD=1.2,GBP=1.0")
        monkeypatch.setenv("SYNTHETIC_CANDLES", "1")
        _run_cli(["--pair", "GBP/USD", "--seed", "1", "--env-file", env_file])
        entry_line = next(line for line in capsys.readouterr().out.splitlines() if "Entry:" in line)
        assert float(entry_line.split()[-1]) == pytest.approx(1.2, abs=0.002)

    def test_serve_mode_configures_rates(self, monkeypatch, env_file):
        ports = []
        monkeypatch.setattr(main, "_run_server", ports.append)
        monkeypatch.setenv("FALLBACK_RATES", "USD=1.085,GBP=0.865")
        monkeypatch.setenv("API_PORT", "9100")
        _run_cli(["--mode", "serve", "--env-file", env_file])
        assert ports == [9100]
        assert routers._last_rates == {"USD": 1.085, "GBP": 0.865}

    def test_bad_mode(self):
        with pytest.raises(SystemExit):
            _run_cli(["--mode", "trade"])

    def test_bad_pair_is_a_usage_error(self, capsys, env_file):
        with pytest.raises(SystemExit) as exc_info:
            _run_cli(["--pair", "EURO", "--env-file", env_file])
        assert exc_info.value.code == 2
        assert "Invalid currency pair" in capsys.readouterr().err

    def test_bad_timeframe_is_a_usage_error(self, capsys, env_file):
        with pytest.raises(SystemExit) as exc_info:
            _run_cli(["--timeframe", "2h", "--env-file", env_file])
        assert exc_info.value.code == 2
        assert "Unknown timeframe" in capsys.readouterr().err

    def test_bad_config_is_a_usage_error(self, capsys, monkeypatch, env_file):
        monkeypatch.setenv("FALLBACK_RATES", "USD")
        with pytest.raises(SystemExit):
            _run_cli(["--env-file", env_file])
        assert "FALLBACK_RATES" in capsys.readouterr().err
