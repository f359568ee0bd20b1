from __future__ import annotations

import numpy as np

from threshold_lab.model.types import DistributionParams, DistributionPoint
from threshold_lab.stats.normal import density


def density_profile(
    params: DistributionParams, n_points: int = 101
) -> list[DistributionPoint]:
    """
    Both class densities sampled on an even grid over the [0, 1] score axis.

    Densities are unweighted by class balance; the axis window is a display
    convention, the distributions themselves are not truncated.
    """
    if n_points < 2:
        raise ValueError("n_points must be >= 2")
    xs = np.linspace(0.0, 1.0, n_points)
    pos = density(xs, params.pos_mean, params.noise)
    neg = density(xs, params.neg_mean, params.noise)
    return [
        DistributionPoint(x=float(x), pos_density=float(p), neg_density=float(n))
        for x, p, n in zip(xs, pos, neg)
    ]
