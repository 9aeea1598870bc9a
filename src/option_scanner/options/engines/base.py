"""Interface for option-pricing engines."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from option_scanner.options.types import (
    GreeksResult,
    OptionTypeInput,
    PricingInputs,
    PricingResult,
)


@runtime_checkable
class PriceModel(Protocol):
    """Minimum pricing capability required by the metrics pipeline."""

    @property
    def rate(self) -> float:
        """Annualized risk-free rate the engine was configured with."""

    def price(self, inputs: PricingInputs) -> PricingResult:
        """Return call/put values for one set of inputs."""


@runtime_checkable
class GreeksModel(Protocol):
    """Extension for engines that also provide sensitivities."""

    def greeks(
        self, inputs: PricingInputs, option_type: OptionTypeInput
    ) -> GreeksResult:
        """Return sensitivities for one contract side."""
