"""Standard normal distribution helpers.

The cumulative distribution uses the Abramowitz & Stegun formula 7.1.26
(absolute error below 7.5e-8), which keeps the pricing path free of special
function calls and bit-reproducible across platforms.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

_A1 = 0.254829592
_A2 = -0.284496736
_A3 = 1.421413741
_A4 = -1.453152027
_A5 = 1.061405429
_P = 0.3275911

_INV_SQRT_2PI = 1.0 / np.sqrt(2.0 * np.pi)


def normal_cdf(x: ArrayLike) -> float | np.ndarray:
    """Approximate N(x); returns a float for scalar input."""
    arr = np.asarray(x, dtype=float)
    sign = np.where(arr < 0, -1.0, 1.0)
    z = np.abs(arr) / np.sqrt(2.0)

    t = 1.0 / (1.0 + _P * z)
    poly = ((((_A5 * t + _A4) * t + _A3) * t + _A2) * t + _A1) * t
    y = 1.0 - poly * np.exp(-z * z)

    out = 0.5 * (1.0 + sign * y)
    if out.ndim == 0:
        return float(out)
    return out


def normal_pdf(x: ArrayLike) -> float | np.ndarray:
    """Standard normal density exp(-x^2/2)/sqrt(2*pi)."""
    arr = np.asarray(x, dtype=float)
    out = _INV_SQRT_2PI * np.exp(-0.5 * arr * arr)
    if out.ndim == 0:
        return float(out)
    return out
