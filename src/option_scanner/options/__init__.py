"""Option pricing models, engines, and shared types."""

from .engines import (
    DEFAULT_RISK_FREE_RATE,
    BlackScholesPricer,
    GreeksModel,
    PriceModel,
)
from .models import bs_d1_d2, bs_greeks, bs_price, normal_cdf, normal_pdf
from .types import (
    GreeksResult,
    OptionType,
    OptionTypeInput,
    PriceSource,
    PricingInputs,
    PricingResult,
    RawContract,
    StrategyType,
    normalize_option_type,
)

__all__ = [
    "OptionType",
    "OptionTypeInput",
    "StrategyType",
    "PriceSource",
    "RawContract",
    "PricingInputs",
    "PricingResult",
    "GreeksResult",
    "normalize_option_type",
    "PriceModel",
    "GreeksModel",
    "BlackScholesPricer",
    "DEFAULT_RISK_FREE_RATE",
    "normal_cdf",
    "normal_pdf",
    "bs_d1_d2",
    "bs_price",
    "bs_greeks",
]
