"""Market-data providers and input parsing."""

from .demo import demo_market_data, demo_snapshots, next_friday, occ_symbol
from .providers import (
    MarketDataProvider,
    MarketSnapshot,
    StaticMarketData,
    contract_from_mapping,
)
from .symbols import format_symbols, is_valid_symbol, parse_symbols

__all__ = [
    "MarketDataProvider",
    "MarketSnapshot",
    "StaticMarketData",
    "contract_from_mapping",
    "demo_market_data",
    "demo_snapshots",
    "next_friday",
    "occ_symbol",
    "parse_symbols",
    "is_valid_symbol",
    "format_symbols",
]
