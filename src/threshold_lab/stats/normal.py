"""Closed-form Gaussian helpers: density, CDF and inverse CDF approximations."""
from __future__ import annotations

import math
from typing import Union

import numpy as np

ArrayLike = Union[float, np.ndarray]

# Abramowitz & Stegun 26.2.17 (Zelen & Severo), |error| < 7.5e-8
_ZS_P = 0.2316419
_ZS_D = 0.3989423
_ZS_B = (0.3193815, -0.3565638, 1.781478, -1.821256, 1.330274)

# Acklam's rational approximation coefficients
_A = (
    -3.969683028665376e01,
    2.209460984245205e02,
    -2.759285104469687e02,
    1.383577518672690e02,
    -3.066479806614716e01,
    2.506628277459239e00,
)
_B = (
    -5.447609879822406e01,
    1.615858368580409e02,
    -1.556989798598866e02,
    6.680131188771972e01,
    -1.328068155288572e01,
)
_C = (
    -7.784894002430293e-03,
    -3.223964580411365e-01,
    -2.400758277161838e00,
    -2.549732539343734e00,
    4.374664141464968e00,
    2.938163982698783e00,
)
_D = (
    7.784695709041462e-03,
    3.224671290700398e-01,
    2.445134137142996e00,
    3.754408661907416e00,
)

P_LOW = 0.02425
P_HIGH = 1.0 - P_LOW

# Returned instead of +/- infinity at the edges of (0, 1).
TAIL_SENTINEL = 5.0


def _as_output(values: np.ndarray) -> ArrayLike:
    if values.ndim == 0:
        return float(values)
    return values


def density(x: ArrayLike, mean: float, std: float) -> ArrayLike:
    """Gaussian probability density. ``std`` must be positive."""
    z = (np.asarray(x, dtype=float) - mean) / std
    values = np.exp(-0.5 * z * z) / (std * math.sqrt(2.0 * math.pi))
    return _as_output(values)


def cdf(x: ArrayLike, mean: float, std: float) -> ArrayLike:
    """
    Approximate Gaussian CDF using the Zelen-Severo polynomial fit.

    Accurate to roughly seven decimal places; works on scalars and arrays.
    """
    z = (np.asarray(x, dtype=float) - mean) / std
    t = 1.0 / (1.0 + _ZS_P * np.abs(z))
    d = _ZS_D * np.exp(-z * z / 2.0)
    b1, b2, b3, b4, b5 = _ZS_B
    tail = d * t * (b1 + t * (b2 + t * (b3 + t * (b4 + t * b5))))
    values = np.where(z > 0, 1.0 - tail, tail)
    return _as_output(values)


def _tail_quantile(q: float) -> float:
    c1, c2, c3, c4, c5, c6 = _C
    d1, d2, d3, d4 = _D
    num = ((((c1 * q + c2) * q + c3) * q + c4) * q + c5) * q + c6
    den = (((d1 * q + d2) * q + d3) * q + d4) * q + 1.0
    return num / den


def inverse_cdf(p: float, *, refine: bool = False) -> float:
    """
    Approximate inverse of the standard normal CDF (Acklam).

    ``p <= 0`` returns -5 and ``p >= 1`` returns +5 so that downstream
    values stay finite. Callers needing real tail behaviour should keep
    ``p`` away from 0 and 1. With ``refine=True`` one Halley step against
    the exact erfc-based CDF is applied.
    """
    if p <= 0:
        return -TAIL_SENTINEL
    if p >= 1:
        return TAIL_SENTINEL

    if p < P_LOW:
        x = _tail_quantile(math.sqrt(-2.0 * math.log(p)))
    elif p <= P_HIGH:
        q = p - 0.5
        r = q * q
        a1, a2, a3, a4, a5, a6 = _A
        b1, b2, b3, b4, b5 = _B
        x = (((((a1 * r + a2) * r + a3) * r + a4) * r + a5) * r + a6) * q / (
            ((((b1 * r + b2) * r + b3) * r + b4) * r + b5) * r + 1.0
        )
    else:
        x = -_tail_quantile(math.sqrt(-2.0 * math.log(1.0 - p)))

    if refine:
        e = 0.5 * math.erfc(-x / math.sqrt(2.0)) - p
        u = e * math.sqrt(2.0 * math.pi) * math.exp(x * x / 2.0)
        x = x - u / (1.0 + x * u / 2.0)
    return float(x)
