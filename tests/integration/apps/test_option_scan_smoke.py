from __future__ import annotations

import datetime as dt
import importlib
from pathlib import Path

import polars as pl
import pytest

from option_scanner.data import MarketSnapshot, StaticMarketData
from option_scanner.options import OptionType, RawContract
from option_scanner.scanner import FixedClock

pytestmark = pytest.mark.integration

NOW = dt.datetime(2025, 1, 2, 15, 0, tzinfo=dt.timezone.utc)


def _rich_provider(today: dt.date) -> StaticMarketData:
    # last prices sit well above Black-Scholes value at the quoted IVs
    expiration = today + dt.timedelta(days=45)

    def quote(symbol, option_type, strike, last, volume):
        return RawContract(
            contract_symbol=symbol,
            strike=strike,
            expiration=expiration,
            option_type=option_type,
            last_price=last,
            bid=last - 0.2,
            ask=last + 0.2,
            volume=volume,
            open_interest=800,
            implied_volatility=0.28,
        )

    return StaticMarketData(
        [
            MarketSnapshot(
                symbol="AAPL",
                price=185.50,
                contracts=[
                    quote("AAPL-C180", OptionType.CALL, 180.0, 16.0, 300),
                    quote("AAPL-P175", OptionType.PUT, 175.0, 9.0, 150),
                ],
            ),
            MarketSnapshot(
                symbol="MSFT",
                price=415.20,
                contracts=[quote("MSFT-C410", OptionType.CALL, 410.0, 40.0, 90)],
            ),
        ]
    )


def test_option_scan_help_exits_cleanly(run_help) -> None:
    mod = importlib.import_module("option_scanner.apps.scan")
    run_help(mod, "Rank option contracts by edge over Black-Scholes value.")


def test_option_scan_print_config_merges_yaml_and_cli(
    run_print_config, scan_config_path
) -> None:
    mod = importlib.import_module("option_scanner.apps.scan")
    cfg = run_print_config(
        mod,
        "--config",
        scan_config_path,
        "--symbols",
        "aapl, msft",
        "TSLA",
        "--min-edge",
        "2.5",
        "--sort-by",
        "annual-return",
        "--no-color",
    )

    assert cfg["symbols"] == ["AAPL", "MSFT", "TSLA"]
    assert cfg["filters"] == {"min_edge": 2.5, "min_volume": 1, "min_price": 0.1}
    assert cfg["view"]["sort_by"] == "annual-return"
    assert cfg["view"]["max_rows"] == 50
    assert cfg["logging"]["color"] is False
    assert cfg["provider"] == "static"


def test_option_scan_dry_run_does_not_fetch(monkeypatch) -> None:
    mod = importlib.import_module("option_scanner.apps.scan")
    monkeypatch.setattr(
        mod,
        "run_scan",
        lambda *args, **kwargs: pytest.fail("run_scan() should not be called in dry-run"),
    )
    mod.main(["--symbols", "AAPL", "--dry-run", "--no-color"])


def test_run_scan_ranks_and_filters_view() -> None:
    mod = importlib.import_module("option_scanner.apps.scan")
    config = mod.build_config(
        mod.DEFAULT_CONFIG,
        None,
        {"symbols": ["AAPL", "ZZZZ", "MSFT"], "view": {"option_type": "calls"}},
    )

    results = mod.run_scan(
        config, clock=FixedClock(NOW), provider=_rich_provider(NOW.date())
    )

    assert [o.contract_symbol for o in results] == ["MSFT-C410", "AAPL-C180"]
    assert all(o.option_type is OptionType.CALL for o in results)
    assert all(o.edge >= 5.0 for o in results)
    assert all(o.evaluated_at == NOW for o in results)


def test_run_scan_sort_by_volume() -> None:
    mod = importlib.import_module("option_scanner.apps.scan")
    config = mod.build_config(
        mod.DEFAULT_CONFIG,
        None,
        {"symbols": ["AAPL", "MSFT"], "view": {"sort_by": "volume"}},
    )
    results = mod.run_scan(
        config, clock=FixedClock(NOW), provider=_rich_provider(NOW.date())
    )
    assert [o.volume for o in results] == [300, 150, 90]


def test_run_scan_on_demo_chain_respects_filters() -> None:
    mod = importlib.import_module("option_scanner.apps.scan")
    config = mod.build_config(mod.DEFAULT_CONFIG, None, {"filters": {"min_edge": 0.0}})

    results = mod.run_scan(config, clock=FixedClock(NOW))

    edges = [o.edge for o in results]
    assert edges == sorted(edges, reverse=True)
    assert all(o.edge >= 0.0 and o.volume >= 1 for o in results)
    assert {o.ticker for o in results} <= {"AAPL", "MSFT", "NVDA", "TSLA", "GOOGL"}


def test_run_scan_requires_symbols() -> None:
    mod = importlib.import_module("option_scanner.apps.scan")
    config = mod.build_config(mod.DEFAULT_CONFIG, None, {"symbols": "123, TOOLONG"})
    with pytest.raises(ValueError, match="symbols"):
        mod.run_scan(config, clock=FixedClock(NOW), provider=StaticMarketData())


def test_build_provider_rejects_unknown_name() -> None:
    mod = importlib.import_module("option_scanner.apps.scan")
    with pytest.raises(ValueError, match="provider"):
        mod.build_provider({"provider": "bloomberg"}, FixedClock(NOW))


def test_option_scan_writes_csv(monkeypatch, tmp_path: Path, capsys) -> None:
    mod = importlib.import_module("option_scanner.apps.scan")
    provider = _rich_provider(dt.datetime.now(dt.timezone.utc).date())
    monkeypatch.setattr(mod, "build_provider", lambda config, clock: provider)

    out_path = tmp_path / "scans" / "latest.csv"
    mod.main(
        [
            "--symbols",
            "AAPL",
            "MSFT",
            "--output",
            str(out_path),
            "--max-rows",
            "1",
            "--no-color",
        ]
    )

    printed = capsys.readouterr().out
    assert "contract_symbol" in printed
    frame = pl.read_csv(out_path)
    assert frame.height == 3
    assert "theoretical_price" in frame.columns
