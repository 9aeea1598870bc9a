#!/usr/bin/env python
"""Scan option chains for overpriced income-strategy contracts."""

from __future__ import annotations

import argparse
import logging
from typing import Any

import polars as pl

from option_scanner.apps._cli import (
    add_dry_run_arg,
    add_print_config_arg,
    collect_logging_overrides,
    log_dry_run,
    log_run_header,
    print_config,
    progress_logger,
)
from option_scanner.cli import (
    DEFAULT_LOGGING,
    add_config_arg,
    add_logging_args,
    build_config,
    resolve_path,
    setup_logging_from_config,
)
from option_scanner.data import (
    MarketDataProvider,
    demo_market_data,
    format_symbols,
    parse_symbols,
)
from option_scanner.options import DEFAULT_RISK_FREE_RATE, BlackScholesPricer
from option_scanner.scanner import (
    SORT_KEYS,
    AnalyzedOption,
    Clock,
    OptionAnalyzer,
    SearchFilters,
    SystemClock,
    filter_view,
    opportunities_to_frame,
    rank_opportunities,
    run_search,
    summarize,
)
from option_scanner.scanner.ranking import OPTION_TYPE_VIEWS, STRATEGY_VIEWS
from option_scanner.scanner.reporting import DISPLAY_COLUMNS

PROVIDERS = ("static", "yfinance")

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": DEFAULT_LOGGING,
    "dry_run": False,
    "symbols": ["AAPL", "MSFT", "NVDA", "TSLA", "GOOGL"],
    "provider": "static",
    "max_expirations": 2,
    "risk_free_rate": DEFAULT_RISK_FREE_RATE,
    "stale_after_minutes": 15.0,
    "classifier": "kind",
    "filters": SearchFilters().to_dict(),
    "view": {
        "sort_by": "edge",
        "option_type": "all",
        "strategy": "all",
        "max_rows": 50,
    },
    "output": None,
}

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Rank option contracts by edge over Black-Scholes value."
    )
    add_config_arg(parser)
    add_logging_args(parser)
    add_print_config_arg(parser)
    add_dry_run_arg(parser)

    parser.add_argument(
        "--symbols",
        nargs="+",
        default=None,
        help='Tickers, comma or space separated (e.g. "AAPL, MSFT").',
    )
    parser.add_argument("--provider", choices=PROVIDERS, default=None)
    parser.add_argument("--max-expirations", type=int, default=None)
    parser.add_argument("--rate", type=float, default=None, help="Risk-free rate.")
    parser.add_argument("--min-edge", type=float, default=None)
    parser.add_argument("--min-volume", type=int, default=None)
    parser.add_argument("--min-price", type=float, default=None)
    parser.add_argument("--classifier", choices=("kind", "moneyness"), default=None)
    parser.add_argument("--sort-by", choices=sorted(SORT_KEYS), default=None)
    parser.add_argument("--option-type", choices=sorted(OPTION_TYPE_VIEWS), default=None)
    parser.add_argument("--strategy", choices=sorted(STRATEGY_VIEWS), default=None)
    parser.add_argument("--max-rows", type=int, default=None)
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Optional CSV path for the full result table.",
    )
    return parser.parse_args(argv)


def _build_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}

    if args.symbols is not None:
        overrides["symbols"] = parse_symbols(args.symbols)
    if args.provider is not None:
        overrides["provider"] = args.provider
    if args.max_expirations is not None:
        overrides["max_expirations"] = args.max_expirations
    if args.rate is not None:
        overrides["risk_free_rate"] = args.rate
    if args.classifier is not None:
        overrides["classifier"] = args.classifier
    if args.output is not None:
        overrides["output"] = args.output
    if args.dry_run:
        overrides["dry_run"] = True

    filters: dict[str, Any] = {}
    if args.min_edge is not None:
        filters["min_edge"] = args.min_edge
    if args.min_volume is not None:
        filters["min_volume"] = args.min_volume
    if args.min_price is not None:
        filters["min_price"] = args.min_price
    if filters:
        overrides["filters"] = filters

    view: dict[str, Any] = {}
    if args.sort_by is not None:
        view["sort_by"] = args.sort_by
    if args.option_type is not None:
        view["option_type"] = args.option_type
    if args.strategy is not None:
        view["strategy"] = args.strategy
    if args.max_rows is not None:
        view["max_rows"] = args.max_rows
    if view:
        overrides["view"] = view

    logging_overrides = collect_logging_overrides(args)
    if logging_overrides:
        overrides["logging"] = logging_overrides

    return overrides


def build_provider(config: dict[str, Any], clock: Clock) -> MarketDataProvider:
    name = config.get("provider", "static")
    if name == "static":
        return demo_market_data(clock.now().date())
    if name == "yfinance":
        from option_scanner.data.yfinance_provider import YFinanceMarketData

        return YFinanceMarketData(
            max_expirations=int(config.get("max_expirations", 2)),
            clock=clock,
        )
    raise ValueError(f"provider must be one of {PROVIDERS}, got {name!r}")


def run_scan(
    config: dict[str, Any],
    *,
    clock: Clock | None = None,
    provider: MarketDataProvider | None = None,
) -> list[AnalyzedOption]:
    """Run one search from a merged config and return the ranked view."""
    clock = clock if clock is not None else SystemClock()
    symbols = parse_symbols(config.get("symbols"))
    if not symbols:
        raise ValueError("symbols must contain at least one valid ticker.")

    filters = SearchFilters.from_mapping(config.get("filters"))
    analyzer = OptionAnalyzer(
        BlackScholesPricer(float(config.get("risk_free_rate", DEFAULT_RISK_FREE_RATE))),
        clock=clock,
        stale_after_minutes=float(config.get("stale_after_minutes", 15.0)),
        classifier=config.get("classifier", "kind"),
    )
    provider = provider if provider is not None else build_provider(config, clock)

    results = run_search(
        symbols,
        provider,
        analyzer=analyzer,
        filters=filters,
        on_progress=progress_logger(logger),
    )

    view = config.get("view") or {}
    narrowed = filter_view(
        results,
        option_type=view.get("option_type", "all"),
        strategy=view.get("strategy", "all"),
    )
    return rank_opportunities(narrowed, view.get("sort_by", "edge"))


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    config = build_config(
        DEFAULT_CONFIG, args.config, _build_overrides(args), strict=True
    )
    if args.print_config:
        print_config(config)
        return

    setup_logging_from_config(config.get("logging"))

    symbols = parse_symbols(config.get("symbols"))
    filters = SearchFilters.from_mapping(config.get("filters"))
    output = resolve_path(config.get("output"))

    log_run_header(
        logger,
        {
            "Symbols": format_symbols(symbols),
            "Provider": config.get("provider"),
            "Rate": config.get("risk_free_rate"),
            "Classifier": config.get("classifier"),
            "Filters": filters,
            "View": config.get("view"),
            "Output": output,
        },
    )

    if config.get("dry_run"):
        log_dry_run(
            logger,
            {
                "action": "option_scan",
                "symbols": symbols,
                "provider": config.get("provider"),
                "filters": filters.to_dict(),
                "view": config.get("view"),
                "output": output,
            },
        )
        return

    results = run_scan(config)
    summary = summarize(results)
    if summary.count == 0:
        logger.info("No opportunities matched the filters.")
    else:
        logger.info(
            "Opportunities: %d | best edge: %.1f%% | avg volume: %d",
            summary.count,
            summary.best_edge,
            summary.average_volume,
        )

    max_rows = int((config.get("view") or {}).get("max_rows", 50))
    table = opportunities_to_frame(results[:max_rows], columns=DISPLAY_COLUMNS)
    with pl.Config(tbl_rows=max_rows, tbl_cols=-1):
        print(table)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        opportunities_to_frame(results).write_csv(output)
        logger.info("Wrote %d rows to %s", len(results), output)


if __name__ == "__main__":
    main()
