"""View-level filters and sort orders over analyzed results."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Any

from option_scanner.options.types import OptionType, StrategyType
from option_scanner.scanner.records import AnalyzedOption

OPTION_TYPE_VIEWS: dict[str, OptionType | None] = {
    "all": None,
    "calls": OptionType.CALL,
    "puts": OptionType.PUT,
}

STRATEGY_VIEWS: dict[str, StrategyType | None] = {
    "all": None,
    "covered-calls": StrategyType.COVERED_CALL,
    "cash-secured-puts": StrategyType.CASH_SECURED_PUT,
}

_SortKey = Callable[[AnalyzedOption], Any]


def _group_first(predicate: Callable[[AnalyzedOption], bool]) -> _SortKey:
    # matching group first, then edge descending within each group
    return lambda o: (0 if predicate(o) else 1, -o.edge)


SORT_KEYS: dict[str, _SortKey] = {
    "edge": lambda o: -o.edge,
    "annual-return": lambda o: -o.annualized_return,
    "volume": lambda o: -o.volume,
    "premium": lambda o: -o.last_price,
    "delta": lambda o: -abs(o.delta),
    "expiration": lambda o: o.expiration,
    "ticker": lambda o: o.ticker,
    "calls": _group_first(lambda o: o.option_type is OptionType.CALL),
    "puts": _group_first(lambda o: o.option_type is OptionType.PUT),
    "covered-calls": _group_first(
        lambda o: o.strategy_type is StrategyType.COVERED_CALL
    ),
    "cash-secured-puts": _group_first(
        lambda o: o.strategy_type is StrategyType.CASH_SECURED_PUT
    ),
}
DEFAULT_SORT = "edge"


def sort_by_edge(options: Iterable[AnalyzedOption]) -> list[AnalyzedOption]:
    """Stable sort, highest edge first; ties keep arrival order."""
    return sorted(options, key=SORT_KEYS[DEFAULT_SORT])


def filter_view(
    options: Iterable[AnalyzedOption],
    *,
    option_type: str = "all",
    strategy: str = "all",
    min_edge: float | None = None,
) -> list[AnalyzedOption]:
    """Narrow results the way a results table does."""
    if option_type not in OPTION_TYPE_VIEWS:
        raise ValueError(
            f"option_type must be one of {sorted(OPTION_TYPE_VIEWS)}, got {option_type!r}"
        )
    if strategy not in STRATEGY_VIEWS:
        raise ValueError(
            f"strategy must be one of {sorted(STRATEGY_VIEWS)}, got {strategy!r}"
        )

    wanted_type = OPTION_TYPE_VIEWS[option_type]
    wanted_strategy = STRATEGY_VIEWS[strategy]

    out: list[AnalyzedOption] = []
    for opt in options:
        if min_edge is not None and opt.edge < min_edge:
            continue
        if wanted_type is not None and opt.option_type is not wanted_type:
            continue
        if wanted_strategy is not None and opt.strategy_type is not wanted_strategy:
            continue
        out.append(opt)
    return out


def rank_opportunities(
    options: Sequence[AnalyzedOption],
    sort_by: str = DEFAULT_SORT,
) -> list[AnalyzedOption]:
    """Return a new list ordered by `sort_by`; unknown keys fall back to edge."""
    key = SORT_KEYS.get(sort_by, SORT_KEYS[DEFAULT_SORT])
    return sorted(options, key=key)
