from __future__ import annotations

from threshold_lab.model.types import EstimatedParams, RawCounts
from threshold_lab.stats.normal import inverse_cdf

# Two observed rates cannot pin down separation, threshold and noise at once,
# so noise is held fixed and the other two are solved exactly.
SIGMA = 0.15

RATE_FLOOR = 0.001
RATE_CEIL = 0.999
MAX_SEPARATION = 0.9


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def estimate_params(counts: RawCounts) -> EstimatedParams:
    """
    Recover ``(separation, balance, threshold)`` from raw confusion counts.

    Noise is fixed at ``SIGMA``. Observed rates are clamped to
    [0.001, 0.999] before inversion so the inverse CDF never hits its
    +/-5 sentinel. The result only round-trips approximately: separation
    is clamped to [0, 0.9] and threshold to [0, 1].
    """
    total = counts.total or 1
    pos_count = counts.tp + counts.fn
    neg_count = counts.tn + counts.fp

    balance = pos_count / total

    tpr = _clamp(counts.tp / (pos_count or 1), RATE_FLOOR, RATE_CEIL)
    tnr = _clamp(counts.tn / (neg_count or 1), RATE_FLOOR, RATE_CEIL)

    # threshold = pos_mean + z_pos * sigma = neg_mean + z_neg * sigma
    z_pos = inverse_cdf(1.0 - tpr)
    z_neg = inverse_cdf(tnr)

    separation = _clamp(SIGMA * (z_neg - z_pos), 0.0, MAX_SEPARATION)
    threshold = _clamp((0.5 - separation / 2.0) + z_neg * SIGMA, 0.0, 1.0)

    return EstimatedParams(
        separation=separation,
        noise=SIGMA,
        balance=balance,
        threshold=threshold,
    )
