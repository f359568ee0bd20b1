"""Threshold Lab: confusion matrices, metrics and ROC/PR curves from two Gaussians."""
from __future__ import annotations

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from threshold_lab.analysis import CurveSet, density_profile, generate_curves
from threshold_lab.engine import Manual, Simulated, Snapshot, evaluate
from threshold_lab.metrics import compute_metrics, list_metrics
from threshold_lab.model import (
    ConfusionMatrix,
    DistributionParams,
    RawCounts,
    compute_matrix,
    estimate_params,
)

__all__ = [
    "__version__",
    "ConfusionMatrix",
    "CurveSet",
    "DistributionParams",
    "Manual",
    "RawCounts",
    "Simulated",
    "Snapshot",
    "compute_matrix",
    "compute_metrics",
    "density_profile",
    "estimate_params",
    "evaluate",
    "generate_curves",
    "list_metrics",
]
