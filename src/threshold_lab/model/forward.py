from __future__ import annotations

from typing import Tuple

from threshold_lab.model.types import ConfusionMatrix, DistributionParams
from threshold_lab.stats.normal import ArrayLike, cdf


def class_rates(
    params: DistributionParams, threshold: ArrayLike
) -> Tuple[ArrayLike, ArrayLike]:
    """
    True positive and true negative rates at ``threshold``.

    Scores >= threshold are predicted positive. Works on a scalar threshold
    or a numpy array of thresholds.
    """
    tpr = 1.0 - cdf(threshold, params.pos_mean, params.noise)
    tnr = cdf(threshold, params.neg_mean, params.noise)
    return tpr, tnr


def compute_matrix(
    params: DistributionParams,
    threshold: float,
    total_samples: float = 1000,
) -> ConfusionMatrix:
    """Expected confusion-matrix counts for a population of ``total_samples``."""
    pos_count = total_samples * params.balance
    neg_count = total_samples * (1.0 - params.balance)

    tpr, tnr = class_rates(params, threshold)
    return ConfusionMatrix(
        tp=pos_count * tpr,
        fn=pos_count * (1.0 - tpr),
        tn=neg_count * tnr,
        fp=neg_count * (1.0 - tnr),
        threshold=float(threshold),
    )
