from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Sequence

import numpy as np
from sklearn.metrics import auc

from threshold_lab.model.forward import class_rates
from threshold_lab.model.types import CurvePoint, DistributionParams

SWEEP_START = 0.0
SWEEP_STOP = 1.0
SWEEP_STEP = 0.01


@dataclass(frozen=True)
class CurveSet:
    """ROC and Precision-Recall points for one parameter set, with AUCs."""

    roc_points: list[CurvePoint]
    pr_points: list[CurvePoint]
    roc_auc: float
    pr_auc: float

    def to_jsonable(self) -> dict:
        return {
            "roc_points": [
                {"threshold": p.threshold, "fpr": p.fpr, "tpr": p.tpr}
                for p in self.roc_points
            ],
            "pr_points": [
                {"threshold": p.threshold, "tpr": p.tpr, "precision": p.precision}
                for p in self.pr_points
            ],
            "roc_auc": self.roc_auc,
            "pr_auc": self.pr_auc,
        }

    def to_frame(self):
        """Sweep points as a DataFrame, one row per threshold, ascending."""
        import pandas as pd

        df = pd.DataFrame([asdict(p) for p in self.roc_points])
        if df.empty:
            return df
        return df.sort_values("threshold", kind="stable").reset_index(drop=True)


def threshold_grid(
    start: float = SWEEP_START, stop: float = SWEEP_STOP, step: float = SWEEP_STEP
) -> np.ndarray:
    """
    Thresholds ``start, start + step, ...`` up to ``stop``.

    ``stop`` is included only when ``step`` divides the range; the spacing
    is always exactly ``step``.
    """
    if step <= 0:
        raise ValueError("step must be > 0")
    if stop < start:
        raise ValueError("stop must be >= start")
    n_points = math.floor((stop - start) / step + 1e-9) + 1
    return start + step * np.arange(n_points)


def curve_precision(tp: np.ndarray, fp: np.ndarray, tpr: np.ndarray) -> np.ndarray:
    """
    tp / (tp + fp), or 1 when nothing is predicted positive and no positive
    was recalled (tpr == 0), else 0.
    """
    predicted = tp + fp
    empty = predicted == 0
    ratio = tp / np.where(empty, 1.0, predicted)
    return np.where(empty, np.where(tpr == 0, 1.0, 0.0), ratio)


def trapezoid_auc(x: Sequence[float], y: Sequence[float]) -> float:
    """Absolute trapezoidal area under ``y(x)`` after sorting by ``x``."""
    xs = np.asarray(x, dtype=float)
    ys = np.asarray(y, dtype=float)
    if xs.size < 2:
        return 0.0
    order = np.argsort(xs, kind="stable")
    return float(abs(auc(xs[order], ys[order])))


def _sorted_points(points: list[CurvePoint], key: str) -> list[CurvePoint]:
    return sorted(points, key=lambda p: getattr(p, key))


def generate_curves(
    params: DistributionParams,
    total_samples: float = 1000,
    *,
    start: float = SWEEP_START,
    stop: float = SWEEP_STOP,
    step: float = SWEEP_STEP,
) -> CurveSet:
    """
    Sweep the threshold grid and build ROC / PR curves for ``params``.

    The result depends only on the distribution parameters, never on the
    active threshold, so callers may cache it per parameter set.
    """
    thresholds = threshold_grid(start, stop, step)
    tpr, tnr = class_rates(params, thresholds)
    fpr = 1.0 - tnr

    pos_count = total_samples * params.balance
    neg_count = total_samples * (1.0 - params.balance)
    tp = pos_count * tpr
    fp = neg_count * fpr
    precision = curve_precision(tp, fp, tpr)

    points = [
        CurvePoint(
            threshold=float(t),
            tpr=float(r),
            fpr=float(f),
            precision=float(p),
        )
        for t, r, f, p in zip(thresholds, tpr, fpr, precision)
    ]

    roc_points = _sorted_points(points, "fpr")
    pr_points = _sorted_points(points, "tpr")

    return CurveSet(
        roc_points=roc_points,
        pr_points=pr_points,
        roc_auc=trapezoid_auc([p.fpr for p in roc_points], [p.tpr for p in roc_points]),
        pr_auc=trapezoid_auc(
            [p.tpr for p in pr_points], [p.precision for p in pr_points]
        ),
    )


def nearest_point(points: Sequence[CurvePoint], threshold: float) -> CurvePoint | None:
    """The sweep point whose threshold is closest to ``threshold``."""
    if not points:
        return None
    return min(points, key=lambda p: abs(p.threshold - threshold))
