"""Black-Scholes-Merton pricing and Greeks for European options."""

from __future__ import annotations

import numpy as np

from option_scanner.options.models.normal import normal_cdf, normal_pdf
from option_scanner.options.types import (
    GreeksResult,
    OptionType,
    OptionTypeInput,
    PricingResult,
    normalize_option_type,
)


def bs_d1_d2(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
) -> tuple[float, float]:
    """Compute d1 and d2; requires T > 0 and sigma > 0."""
    if T <= 0 or sigma <= 0:
        raise ValueError("T and sigma must be positive")
    sigma_sqrt_t = sigma * np.sqrt(T)
    d1 = (np.log(S / K) + (r + 0.5 * sigma**2) * T) / sigma_sqrt_t
    d2 = d1 - sigma_sqrt_t
    return float(d1), float(d2)


def _expired_result(S: float, K: float) -> PricingResult:
    itm = 1.0 if S > K else 0.0
    return PricingResult(
        call_price=max(S - K, 0.0),
        put_price=max(K - S, 0.0),
        d1=0.0,
        d2=0.0,
        nd1=itm,
        nd2=itm,
        n_minus_d1=1.0 - itm,
        n_minus_d2=1.0 - itm,
    )


def bs_price(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
) -> PricingResult:
    """Black-Scholes call and put values.

    At or past expiry (T <= 0) both values collapse to intrinsic value and the
    N(.) terms become the moneyness indicator.
    """
    if T <= 0:
        return _expired_result(S, K)

    d1, d2 = bs_d1_d2(S, K, T, sigma, r)
    nd1 = normal_cdf(d1)
    nd2 = normal_cdf(d2)
    n_minus_d1 = normal_cdf(-d1)
    n_minus_d2 = normal_cdf(-d2)
    discount = np.exp(-r * T)

    return PricingResult(
        call_price=float(S * nd1 - K * discount * nd2),
        put_price=float(K * discount * n_minus_d2 - S * n_minus_d1),
        d1=d1,
        d2=d2,
        nd1=nd1,
        nd2=nd2,
        n_minus_d1=n_minus_d1,
        n_minus_d2=n_minus_d2,
    )


def bs_greeks(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    option_type: OptionTypeInput = "call",
) -> GreeksResult:
    """Black-Scholes Greeks in per-day / per-point units.

    Theta is per calendar day; vega and rho are per 1 percentage point.
    """
    opt_type = normalize_option_type(option_type)
    if T <= 0:
        return GreeksResult.zero()

    d1, d2 = bs_d1_d2(S, K, T, sigma, r)
    sqrt_t = np.sqrt(T)
    pdf_d1 = normal_pdf(d1)
    discount = np.exp(-r * T)

    if opt_type is OptionType.CALL:
        delta = normal_cdf(d1)
        n_d2 = normal_cdf(d2)
        rho = K * T * discount * n_d2 / 100.0
    else:
        delta = -normal_cdf(-d1)
        n_d2 = normal_cdf(-d2)
        rho = -K * T * discount * n_d2 / 100.0

    gamma = pdf_d1 / (S * sigma * sqrt_t)
    theta = (-S * pdf_d1 * sigma / (2.0 * sqrt_t) - r * K * discount * n_d2) / 365.0
    vega = S * pdf_d1 * sqrt_t / 100.0

    return GreeksResult(
        delta=float(delta),
        gamma=float(gamma),
        theta=float(theta),
        vega=float(vega),
        rho=float(rho),
    )
