"""Metrics pipeline: raw quote + spot -> fully analyzed option record."""

from __future__ import annotations

import datetime as dt
import math
import numbers
from typing import Literal, TypeAlias

from option_scanner.errors import InvalidInputError
from option_scanner.options.engines import (
    DEFAULT_RISK_FREE_RATE,
    BlackScholesPricer,
    GreeksModel,
    PriceModel,
)
from option_scanner.options.types import (
    PriceSource,
    PricingInputs,
    RawContract,
    StrategyType,
)
from option_scanner.scanner import metrics
from option_scanner.scanner.clock import Clock, SystemClock
from option_scanner.scanner.records import AnalyzedOption

Classifier: TypeAlias = Literal["kind", "moneyness"]
CLASSIFIERS: tuple[str, ...] = ("kind", "moneyness")


def _is_number(value: object) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def validate_contract(contract: RawContract, spot: float) -> None:
    """Raise `InvalidInputError` if the quote cannot be priced."""
    symbol = contract.contract_symbol
    if not isinstance(contract.expiration, dt.date):
        raise InvalidInputError(
            f"{symbol}: expiration must be a date, got {contract.expiration!r}"
        )

    positive = {
        "spot": spot,
        "strike": contract.strike,
        "implied_volatility": contract.implied_volatility,
    }
    for name, value in positive.items():
        if not _is_number(value) or not math.isfinite(value) or value <= 0:
            raise InvalidInputError(f"{symbol}: {name} must be finite and > 0, got {value!r}")

    non_negative = {
        "last_price": contract.last_price,
        "bid": contract.bid,
        "ask": contract.ask,
        "volume": contract.volume,
        "open_interest": contract.open_interest,
    }
    for name, value in non_negative.items():
        if not _is_number(value) or not math.isfinite(value) or value < 0:
            raise InvalidInputError(f"{symbol}: {name} must be finite and >= 0, got {value!r}")


class OptionAnalyzer:
    """Price one contract and derive its screening metrics.

    Parameters
    - pricer: engine providing call/put values and Greeks; carries the
      risk-free rate.
    - clock: source of "now" when `analyze` is called without one.
    - stale_after_minutes: quote age above which the stale flag is set.
    - classifier: "kind" (call -> covered call, put -> cash-secured put) or
      "moneyness" (direction-aware, may tag contracts as speculative).
    """

    def __init__(
        self,
        pricer: PriceModel | None = None,
        *,
        clock: Clock | None = None,
        stale_after_minutes: float = metrics.STALE_AFTER_MINUTES,
        classifier: Classifier = "kind",
    ) -> None:
        self.pricer = pricer if pricer is not None else BlackScholesPricer()
        if not isinstance(self.pricer, GreeksModel):
            raise TypeError("pricer must provide greeks(inputs, option_type)")
        if classifier not in CLASSIFIERS:
            raise ValueError(f"classifier must be one of {CLASSIFIERS}, got {classifier!r}")
        self.clock = clock if clock is not None else SystemClock()
        self.stale_after_minutes = float(stale_after_minutes)
        self.classifier = classifier

    def _classify(self, contract: RawContract, moneyness: float) -> StrategyType:
        if self.classifier == "moneyness":
            return metrics.classify_strategy_by_moneyness(contract.option_type, moneyness)
        return metrics.classify_strategy(contract.option_type)

    def analyze(
        self,
        contract: RawContract,
        spot: float,
        *,
        ticker: str = "",
        now: dt.datetime | None = None,
    ) -> AnalyzedOption:
        validate_contract(contract, spot)
        now = now if now is not None else self.clock.now()

        tte = metrics.time_to_expiration(contract.expiration, now)
        inputs = PricingInputs(
            spot=spot,
            strike=contract.strike,
            time_to_expiry=tte,
            rate=self.pricer.rate,
            volatility=contract.implied_volatility,
        )
        pricing = self.pricer.price(inputs)
        greeks = self.pricer.greeks(inputs, contract.option_type)
        theoretical = pricing.price_for(contract.option_type)

        moneyness = metrics.calculate_moneyness(spot, contract.strike)
        spread_pct = metrics.calculate_spread_percent(contract.bid, contract.ask)
        profit = metrics.max_profit(contract.last_price)
        collateral = metrics.collateral_required(
            contract.option_type, spot, contract.strike
        )
        days = tte * metrics.DAYS_PER_YEAR

        return AnalyzedOption(
            ticker=ticker,
            contract_symbol=contract.contract_symbol,
            option_type=contract.option_type,
            strike=contract.strike,
            expiration=contract.expiration,
            last_price=contract.last_price,
            bid=contract.bid,
            ask=contract.ask,
            volume=contract.volume,
            open_interest=contract.open_interest,
            implied_volatility=contract.implied_volatility,
            spot=spot,
            time_to_expiry=tte,
            days_to_expiration=days,
            risk_free_rate=inputs.rate,
            evaluated_at=now,
            theoretical_price=theoretical,
            d1=pricing.d1,
            d2=pricing.d2,
            nd1=pricing.nd1,
            nd2=pricing.nd2,
            delta=greeks.delta,
            gamma=greeks.gamma,
            theta=greeks.theta,
            vega=greeks.vega,
            rho=greeks.rho,
            edge=metrics.calculate_edge(contract.last_price, theoretical),
            moneyness=moneyness,
            bid_ask_spread=contract.ask - contract.bid,
            bid_ask_spread_percent=spread_pct,
            strategy_type=self._classify(contract, moneyness),
            breakeven_price=metrics.breakeven_price(
                contract.option_type, contract.strike, contract.last_price
            ),
            max_profit=profit,
            collateral_required=collateral,
            annualized_return=metrics.annualized_return(profit, collateral, days),
            assignment_probability=metrics.calculate_assignment_probability(
                greeks.delta
            ),
            price_source=PriceSource.LAST,
            data_age_minutes=contract.data_age_minutes,
            has_liquidity_warning=metrics.has_liquidity_warning(
                contract.volume, contract.open_interest
            ),
            has_spread_warning=metrics.has_spread_warning(spread_pct),
            has_stale_data_warning=metrics.has_stale_data_warning(
                contract.data_age_minutes, self.stale_after_minutes
            ),
        )


def analyze_contract(
    contract: RawContract,
    spot: float,
    risk_free_rate: float = DEFAULT_RISK_FREE_RATE,
    now: dt.datetime | None = None,
    *,
    ticker: str = "",
) -> AnalyzedOption:
    """Functional form of `OptionAnalyzer.analyze` with a Black-Scholes pricer."""
    analyzer = OptionAnalyzer(BlackScholesPricer(risk_free_rate))
    return analyzer.analyze(contract, spot, ticker=ticker, now=now)
