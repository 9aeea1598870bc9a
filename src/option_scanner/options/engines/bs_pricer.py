"""Black-Scholes pricing engine."""

from __future__ import annotations

from option_scanner.options.models.black_scholes import bs_greeks, bs_price
from option_scanner.options.types import (
    GreeksResult,
    OptionTypeInput,
    PricingInputs,
    PricingResult,
)

DEFAULT_RISK_FREE_RATE = 0.045


class BlackScholesPricer:
    """Exact Black-Scholes pricer backed by analytical formulas.

    The risk-free rate is fixed at construction and exposed as `rate`;
    `OptionAnalyzer` copies it into each `PricingInputs` it builds.
    """

    def __init__(self, rate: float = DEFAULT_RISK_FREE_RATE) -> None:
        self._rate = float(rate)

    @property
    def rate(self) -> float:
        return self._rate

    def price(self, inputs: PricingInputs) -> PricingResult:
        return bs_price(
            S=inputs.spot,
            K=inputs.strike,
            T=inputs.time_to_expiry,
            sigma=inputs.volatility,
            r=inputs.rate,
        )

    def greeks(
        self, inputs: PricingInputs, option_type: OptionTypeInput
    ) -> GreeksResult:
        return bs_greeks(
            S=inputs.spot,
            K=inputs.strike,
            T=inputs.time_to_expiry,
            sigma=inputs.volatility,
            r=inputs.rate,
            option_type=option_type,
        )

    def __repr__(self) -> str:
        return f"BlackScholesPricer(rate={self._rate!r})"
