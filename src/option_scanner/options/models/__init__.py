"""Analytical option-pricing models."""

from .black_scholes import bs_d1_d2, bs_greeks, bs_price
from .normal import normal_cdf, normal_pdf

__all__ = [
    "bs_d1_d2",
    "bs_price",
    "bs_greeks",
    "normal_cdf",
    "normal_pdf",
]
