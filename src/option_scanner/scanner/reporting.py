"""Tabular views and headline statistics for search results."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, fields

import polars as pl

from option_scanner.scanner.records import AnalyzedOption

DISPLAY_COLUMNS: tuple[str, ...] = (
    "ticker",
    "contract_symbol",
    "option_type",
    "strike",
    "expiration",
    "spot",
    "last_price",
    "theoretical_price",
    "edge",
    "delta",
    "annualized_return",
    "assignment_probability",
    "volume",
    "open_interest",
    "strategy_type",
)


@dataclass(frozen=True)
class SearchSummary:
    count: int
    best_edge: float | None
    average_volume: int | None


def summarize(options: Sequence[AnalyzedOption]) -> SearchSummary:
    """Opportunity count, best edge and rounded average volume."""
    if not options:
        return SearchSummary(count=0, best_edge=None, average_volume=None)
    best = max(o.edge for o in options)
    avg_volume = round(sum(o.volume for o in options) / len(options))
    return SearchSummary(count=len(options), best_edge=best, average_volume=avg_volume)


def opportunities_to_frame(
    options: Sequence[AnalyzedOption],
    columns: Sequence[str] | None = None,
) -> pl.DataFrame:
    """Flatten analyzed options into a polars frame (one row per contract)."""
    all_columns = [f.name for f in fields(AnalyzedOption)]
    selected = list(columns) if columns is not None else all_columns
    unknown = set(selected) - set(all_columns)
    if unknown:
        raise ValueError(f"Unknown columns: {sorted(unknown)}")

    if not options:
        return pl.DataFrame({name: [] for name in selected})

    rows = [o.to_dict() for o in options]
    return pl.DataFrame(rows, infer_schema_length=None).select(selected)
