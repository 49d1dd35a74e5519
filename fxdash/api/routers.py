"""Internal API routers — /timeframes and /analysis endpoints.

No indicator math here. Delegates to the recommendation engine and the
synthetic-series fallback.
"""

import logging
from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Query

from fxdash.config import Config
from fxdash.data.candles import parse_candles
from fxdash.data.synthetic import SyntheticSeriesGenerator, build_fallback_series
from fxdash.strategy.models import TIMEFRAMES, TIMEFRAMES_BY_ID, normalize_pair
from fxdash.strategy.multi_timeframe import summarize_timeframes
from fxdash.strategy.recommendation import analyze

logger = logging.getLogger("fxdash")
router = APIRouter()

# ── Shared state (set during app startup) ────────────────────────────────

_config: Optional[Config] = None       # Set via configure_routers()
_last_rates: Optional[dict] = None     # Last successfully fetched rates, if any

_DEFAULT_TIMEFRAME = "1h"
_DEFAULT_COUNT = 100
_DEFAULT_VOLATILITY = 0.0015
_SUMMARY_COUNT = 50


def configure_routers(
    config: Optional[Config] = None,
    last_rates: Optional[dict] = None,
) -> None:
    """Inject dependencies from the application startup.

    Args:
        config: Loaded ``Config``; ``None`` restores built-in defaults.
        last_rates: Last successfully fetched rates
            (``{currency: units per common base}``) used to anchor
            synthetic series, or ``None``.
    """
    global _config, _last_rates  # noqa: PLW0603
    _config = config
    _last_rates = dict(last_rates) if last_rates else None


def _error(*messages: str) -> dict:
    return {"status": "error", "errors": list(messages)}


def _seed(seed: Optional[int]) -> Optional[int]:
    if seed is not None:
        return seed
    return _config.synthetic_seed if _config else None


def _analysis_payload(pair: str, candles: list, timeframe: str, source: str) -> dict:
    result = analyze(pair, candles, timeframe)
    return {
        "status": "ok",
        "source": source,
        "pair": pair,
        "timeframe": timeframe,
        "candle_count": len(candles),
        **asdict(result),
    }


# ── Endpoints ────────────────────────────────────────────────────────────


@router.get("/timeframes")
async def get_timeframes():
    """Return the chart timeframes the dashboard offers."""
    return {"timeframes": [asdict(tf) for tf in TIMEFRAMES]}


@router.get("/analysis/{pair}")
async def get_analysis(
    pair: str,
    timeframe: Optional[str] = Query(default=None),
    count: Optional[int] = Query(default=None, ge=1, le=1000),
    seed: Optional[int] = Query(default=None),
):
    """Analyse a synthetic series for *pair* (path form ``EUR_USD``).

    Live market data is not fetched here; the series is built from the
    last known rates (or reference quotes) with a seeded random walk.
    """
    try:
        label = normalize_pair(pair)
    except ValueError as exc:
        return _error(str(exc))

    if timeframe is None:
        timeframe = _config.default_timeframe if _config else _DEFAULT_TIMEFRAME
    if timeframe not in TIMEFRAMES_BY_ID:
        return _error(f"Unknown timeframe: {timeframe}")

    if count is None:
        count = _config.synthetic_candles if _config else _DEFAULT_COUNT
    volatility = _config.synthetic_volatility if _config else _DEFAULT_VOLATILITY

    generator = SyntheticSeriesGenerator(_seed(seed))
    candles = build_fallback_series(
        label,
        generator,
        timeframe=timeframe,
        count=count,
        last_rates=_last_rates,
        volatility=volatility,
    )
    return _analysis_payload(label, candles, timeframe, source="synthetic")


@router.post("/analysis")
async def post_analysis(body: dict):
    """Analyse a client-supplied candle series.

    Body: ``{"pair": "EUR/USD", "timeframe": "1h", "candles": [...]}``
    where each candle has ``time``, ``open``, ``high``, ``low``, ``close``.
    """
    errors = []

    try:
        label = normalize_pair(str(body.get("pair", "")))
    except ValueError as exc:
        errors.append(str(exc))
        label = None

    timeframe = str(body.get("timeframe") or _DEFAULT_TIMEFRAME)

    raw_candles = body.get("candles")
    candles = None
    if not isinstance(raw_candles, list):
        errors.append("candles must be a list")
    else:
        try:
            candles = parse_candles(raw_candles)
        except ValueError as exc:
            errors.append(str(exc))

    if errors:
        logger.warning("Rejected analysis payload: %s", "; ".join(errors))
        return _error(*errors)

    return _analysis_payload(label, candles, timeframe, source="client")


@router.get("/analysis/{pair}/timeframes")
async def get_timeframe_summary(
    pair: str,
    seed: Optional[int] = Query(default=None),
):
    """Return direction and RSI for every timeframe of *pair*."""
    try:
        label = normalize_pair(pair)
    except ValueError as exc:
        return _error(str(exc))

    volatility = _config.synthetic_volatility if _config else _DEFAULT_VOLATILITY
    generator = SyntheticSeriesGenerator(_seed(seed))
    series = {
        tf.id: build_fallback_series(
            label,
            generator,
            timeframe=tf.id,
            count=_SUMMARY_COUNT,
            last_rates=_last_rates,
            volatility=volatility,
        )
        for tf in TIMEFRAMES
    }
    return {
        "pair": label,
        "timeframes": [asdict(s) for s in summarize_timeframes(series)],
    }
