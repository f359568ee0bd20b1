from __future__ import annotations

from .core import (
    METRIC_FORMULAS,
    METRICS,
    MetricSet,
    compute_metrics,
    list_metrics,
    safe_divide,
)

__all__ = [
    "METRIC_FORMULAS",
    "METRICS",
    "MetricSet",
    "compute_metrics",
    "list_metrics",
    "safe_divide",
]
