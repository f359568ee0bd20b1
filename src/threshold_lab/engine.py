"""
Evaluation pipeline shared by simulation and manual mode.

Both modes are normalised into one ``(params, threshold, matrix)`` triple
before metrics and curves are derived, so everything downstream runs the
same way regardless of where the numbers came from.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Union

from threshold_lab.analysis.curves import CurveSet, generate_curves, nearest_point
from threshold_lab.metrics.core import MetricSet, compute_metrics
from threshold_lab.model.forward import compute_matrix
from threshold_lab.model.inverse import estimate_params
from threshold_lab.model.types import ConfusionMatrix, DistributionParams, RawCounts
from threshold_lab.spec import EvaluationSpec

logger = logging.getLogger(__name__)

DEFAULT_TOTAL_SAMPLES = 1000


@dataclass(frozen=True)
class Simulated:
    params: DistributionParams
    threshold: float = 0.5


@dataclass(frozen=True)
class Manual:
    counts: RawCounts


ActiveModel = Union[Simulated, Manual]


@dataclass(frozen=True)
class Snapshot:
    mode: str
    params: DistributionParams
    threshold: float
    matrix: ConfusionMatrix
    metrics: MetricSet
    curves: CurveSet

    def to_jsonable(self) -> dict:
        roc_here = nearest_point(self.curves.roc_points, self.threshold)
        pr_here = nearest_point(self.curves.pr_points, self.threshold)
        return {
            "mode": self.mode,
            "params": self.params.to_jsonable(),
            "threshold": self.threshold,
            "matrix": self.matrix.to_jsonable(),
            "metrics": self.metrics.to_jsonable(),
            "curves": self.curves.to_jsonable(),
            "highlight": {
                "roc": None if roc_here is None else {"fpr": roc_here.fpr, "tpr": roc_here.tpr},
                "pr": None
                if pr_here is None
                else {"tpr": pr_here.tpr, "precision": pr_here.precision},
            },
        }


@lru_cache(maxsize=128)
def _cached_curves(params: DistributionParams, total_samples: float) -> CurveSet:
    # Curves do not depend on the active threshold.
    return generate_curves(params, total_samples)


def resolve(
    active: ActiveModel, total_samples: float = DEFAULT_TOTAL_SAMPLES
) -> tuple[DistributionParams, float, ConfusionMatrix]:
    """Normalise either mode into distribution params, threshold and matrix."""
    if isinstance(active, Manual):
        est = estimate_params(active.counts)
        logger.debug(
            "Estimated params from counts: separation=%.4f balance=%.4f threshold=%.4f",
            est.separation,
            est.balance,
            est.threshold,
        )
        matrix = ConfusionMatrix.from_counts(active.counts, threshold=est.threshold)
        return est.params, est.threshold, matrix
    matrix = compute_matrix(active.params, active.threshold, total_samples)
    return active.params, active.threshold, matrix


def evaluate(
    active: ActiveModel, total_samples: float = DEFAULT_TOTAL_SAMPLES
) -> Snapshot:
    params, threshold, matrix = resolve(active, total_samples)
    return Snapshot(
        mode="manual" if isinstance(active, Manual) else "simulation",
        params=params,
        threshold=threshold,
        matrix=matrix,
        metrics=compute_metrics(matrix),
        curves=_cached_curves(params, float(total_samples)),
    )


def active_model_from_spec(spec: EvaluationSpec) -> ActiveModel:
    if spec.mode == "manual":
        return Manual(counts=spec.counts.to_counts())
    return Simulated(params=spec.simulation.to_params(), threshold=spec.threshold)


def evaluate_spec(spec: EvaluationSpec) -> Snapshot:
    return evaluate(active_model_from_spec(spec), spec.total_samples)
