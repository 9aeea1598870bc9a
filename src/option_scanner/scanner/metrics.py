"""Per-contract derived metrics for income-strategy screening.

All helpers are pure functions of their arguments. Percent-valued metrics are
expressed in percent units (5.0 == 5%), matching how results are displayed.
"""

from __future__ import annotations

import datetime as dt
from zoneinfo import ZoneInfo

from option_scanner.options.types import (
    OptionType,
    OptionTypeInput,
    StrategyType,
    normalize_option_type,
)

CONTRACT_MULTIPLIER = 100
DAYS_PER_YEAR = 365.0
DAYS_PER_YEAR_EXPIRY = 365.25

EXPIRY_TZ = ZoneInfo("America/New_York")
EXPIRY_CUTOFF = dt.time(16, 0)

LIQUIDITY_MIN_VOLUME = 1
LIQUIDITY_MIN_OPEN_INTEREST = 10
SPREAD_WARNING_PERCENT = 10.0
STALE_AFTER_MINUTES = 15.0


def expiry_datetime(expiration: dt.date) -> dt.datetime:
    """Return the 16:00 New York close on the expiration date."""
    return dt.datetime.combine(expiration, EXPIRY_CUTOFF, tzinfo=EXPIRY_TZ)


def time_to_expiration(expiration: dt.date, now: dt.datetime) -> float:
    """Years from `now` to the expiry close, clamped at zero.

    Naive `now` values are interpreted as UTC.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=dt.timezone.utc)
    seconds = (expiry_datetime(expiration) - now).total_seconds()
    days = seconds / 86_400.0
    return max(0.0, days / DAYS_PER_YEAR_EXPIRY)


def calculate_moneyness(spot: float, strike: float) -> float:
    return (strike - spot) / spot * 100.0


def calculate_spread_percent(bid: float, ask: float) -> float:
    """Bid/ask width relative to the mid, 0 when either side is missing."""
    if bid == 0 or ask == 0:
        return 0.0
    mid = (bid + ask) / 2.0
    return (ask - bid) / mid * 100.0


def calculate_edge(market_price: float, theoretical_price: float) -> float:
    """Percent premium of the market price over the model value."""
    if theoretical_price == 0:
        return 0.0
    return (market_price - theoretical_price) / theoretical_price * 100.0


def calculate_assignment_probability(delta: float) -> float:
    # |delta| as exercise-likelihood proxy; same for calls and puts
    return abs(delta) * 100.0


def classify_strategy(option_type: OptionTypeInput) -> StrategyType:
    """Kind-based classification used for batch ranking."""
    if normalize_option_type(option_type) is OptionType.CALL:
        return StrategyType.COVERED_CALL
    return StrategyType.CASH_SECURED_PUT


def classify_strategy_by_moneyness(
    option_type: OptionTypeInput, moneyness: float
) -> StrategyType:
    """Direction-aware classification.

    Calls count as covered calls only when the strike is below spot
    (negative moneyness), puts as cash-secured puts only when the strike is
    above spot; anything else is tagged speculative.
    """
    opt_type = normalize_option_type(option_type)
    if opt_type is OptionType.CALL and moneyness < 0:
        return StrategyType.COVERED_CALL
    if opt_type is OptionType.PUT and moneyness > 0:
        return StrategyType.CASH_SECURED_PUT
    return StrategyType.SPECULATIVE


def breakeven_price(
    option_type: OptionTypeInput, strike: float, premium: float
) -> float:
    if normalize_option_type(option_type) is OptionType.CALL:
        return strike + premium
    return strike - premium


def collateral_required(
    option_type: OptionTypeInput, spot: float, strike: float
) -> float:
    """Capital tied up per contract: 100 shares for calls, cash for puts."""
    if normalize_option_type(option_type) is OptionType.CALL:
        return spot * CONTRACT_MULTIPLIER
    return strike * CONTRACT_MULTIPLIER


def max_profit(premium: float) -> float:
    return premium * CONTRACT_MULTIPLIER


def annualized_return(
    profit: float, collateral: float, days_to_expiration: float
) -> float:
    if days_to_expiration <= 0 or collateral <= 0:
        return 0.0
    return (profit / collateral) * (DAYS_PER_YEAR / days_to_expiration) * 100.0


def has_liquidity_warning(volume: int, open_interest: int) -> bool:
    return volume < LIQUIDITY_MIN_VOLUME or open_interest < LIQUIDITY_MIN_OPEN_INTEREST


def has_spread_warning(spread_percent: float) -> bool:
    return spread_percent > SPREAD_WARNING_PERCENT


def has_stale_data_warning(
    data_age_minutes: float | None,
    stale_after_minutes: float = STALE_AFTER_MINUTES,
) -> bool:
    if data_age_minutes is None:
        return False
    return data_age_minutes > stale_after_minutes
