"""Output record emitted by the metrics pipeline."""

from __future__ import annotations

import datetime as dt
from dataclasses import asdict, dataclass
from typing import Any

from option_scanner.options.types import (
    OptionType,
    PriceSource,
    StrategyType,
)


@dataclass(frozen=True, slots=True)
class AnalyzedOption:
    """One contract evaluated at one instant.

    Combines the raw quote, the underlying spot used, model outputs and the
    derived screening metrics. Percent fields are in percent units.
    """

    # contract
    ticker: str
    contract_symbol: str
    option_type: OptionType
    strike: float
    expiration: dt.date
    last_price: float
    bid: float
    ask: float
    volume: int
    open_interest: int
    implied_volatility: float

    # market / model inputs
    spot: float
    time_to_expiry: float
    days_to_expiration: float
    risk_free_rate: float
    evaluated_at: dt.datetime

    # model outputs
    theoretical_price: float
    d1: float
    d2: float
    nd1: float
    nd2: float
    delta: float
    gamma: float
    theta: float
    vega: float
    rho: float

    # screening metrics
    edge: float
    moneyness: float
    bid_ask_spread: float
    bid_ask_spread_percent: float
    strategy_type: StrategyType
    breakeven_price: float
    max_profit: float
    collateral_required: float
    annualized_return: float
    assignment_probability: float

    # data quality
    price_source: PriceSource
    data_age_minutes: float | None
    has_liquidity_warning: bool
    has_spread_warning: bool
    has_stale_data_warning: bool

    def to_dict(self) -> dict[str, Any]:
        """Flat mapping with enum members rendered as their string values."""
        out = asdict(self)
        for key in ("option_type", "strategy_type", "price_source"):
            out[key] = str(out[key])
        return out
