from __future__ import annotations

from .forward import class_rates, compute_matrix
from .inverse import SIGMA, estimate_params
from .types import (
    ConfusionMatrix,
    CurvePoint,
    DistributionParams,
    DistributionPoint,
    EstimatedParams,
    RawCounts,
)

__all__ = [
    "ConfusionMatrix",
    "CurvePoint",
    "DistributionParams",
    "DistributionPoint",
    "EstimatedParams",
    "RawCounts",
    "SIGMA",
    "class_rates",
    "compute_matrix",
    "estimate_params",
]
