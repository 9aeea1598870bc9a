"""Pricing engines used by the metrics pipeline."""

from .base import GreeksModel, PriceModel
from .bs_pricer import DEFAULT_RISK_FREE_RATE, BlackScholesPricer

__all__ = [
    "PriceModel",
    "GreeksModel",
    "BlackScholesPricer",
    "DEFAULT_RISK_FREE_RATE",
]
