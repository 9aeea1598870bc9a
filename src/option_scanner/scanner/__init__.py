"""Metrics pipeline, batch search and result views."""

from .analyzer import OptionAnalyzer, analyze_contract, validate_contract
from .clock import Clock, FixedClock, SystemClock
from .filters import SearchFilters
from .ranking import SORT_KEYS, filter_view, rank_opportunities, sort_by_edge
from .records import AnalyzedOption
from .reporting import SearchSummary, opportunities_to_frame, summarize
from .search import CancellationToken, OptionSearch, ProgressCallback, run_search

__all__ = [
    "AnalyzedOption",
    "OptionAnalyzer",
    "analyze_contract",
    "validate_contract",
    "Clock",
    "SystemClock",
    "FixedClock",
    "SearchFilters",
    "SORT_KEYS",
    "filter_view",
    "rank_opportunities",
    "sort_by_edge",
    "SearchSummary",
    "summarize",
    "opportunities_to_frame",
    "OptionSearch",
    "ProgressCallback",
    "CancellationToken",
    "run_search",
]
