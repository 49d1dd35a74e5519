"""FXDash — application entry point.

Boots the FastAPI internal server and provides the CLI entry point for
serve and analyze modes.
"""

import logging

from fastapi import FastAPI

from fxdash.api.routers import router

app = FastAPI(title="FXDash Analysis API", version="0.1.0")
app.include_router(router)

logger = logging.getLogger("fxdash")


@app.get("/health")
async def health():
    """Liveness probe."""
    return {"status": "ok"}


# ── CLI ──────────────────────────────────────────────────────────────────


def _run_cli(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and dispatch to the appropriate mode."""
    import argparse

    from fxdash.api.routers import configure_routers
    from fxdash.config import load_config

    parser = argparse.ArgumentParser(description="FXDash technical analysis")
    parser.add_argument(
        "--mode",
        choices=["serve", "analyze"],
        default="analyze",
        help="Run the API server or print one analysis (default: analyze)",
    )
    parser.add_argument("--pair", help="Currency pair, e.g. EUR/USD")
    parser.add_argument("--timeframe", help="Timeframe id, e.g. 1h")
    parser.add_argument("--seed", type=int, help="Seed for the synthetic series")
    parser.add_argument("--env-file", help="Path to a .env file")
    args = parser.parse_args(argv)

    try:
        config = load_config(args.env_file)
    except ValueError as exc:
        parser.error(str(exc))

    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.mode == "serve":
        configure_routers(config=config, last_rates=config.fallback_rates)
        _run_server(config.api_port)
        return

    try:
        _run_analysis(
            config,
            pair=args.pair or config.default_pair,
            timeframe=args.timeframe or config.default_timeframe,
            seed=args.seed if args.seed is not None else config.synthetic_seed,
        )
    except ValueError as exc:
        parser.error(str(exc))


def _run_server(port: int) -> None:
    """Serve the API with uvicorn until interrupted."""
    import uvicorn

    logger.info("API available at http://localhost:%d", port)
    uvicorn.run(app, host="0.0.0.0", port=port, log_level="info")


def _run_analysis(config, pair: str, timeframe: str, seed) -> str:
    """Analyse a synthetic series and print the result."""
    from fxdash.cli.dashboard import print_analysis
    from fxdash.data.synthetic import SyntheticSeriesGenerator, build_fallback_series
    from fxdash.strategy.models import normalize_pair
    from fxdash.strategy.recommendation import analyze

    label = normalize_pair(pair)
    candles = build_fallback_series(
        label,
        SyntheticSeriesGenerator(seed),
        timeframe=timeframe,
        count=config.synthetic_candles,
        last_rates=config.fallback_rates,
        volatility=config.synthetic_volatility,
    )
    return print_analysis(analyze(label, candles, timeframe))


if __name__ == "__main__":
    _run_cli()
