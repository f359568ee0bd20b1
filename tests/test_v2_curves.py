from __future__ import annotations

import math

import numpy as np
import pytest

from threshold_lab.analysis.curves import (
    curve_precision,
    generate_curves,
    nearest_point,
    threshold_grid,
    trapezoid_auc,
)
from threshold_lab.analysis.density import density_profile
from threshold_lab.model.types import DistributionParams


def _params(separation: float = 0.4, noise: float = 0.15, balance: float = 0.5) -> DistributionParams:
    return DistributionParams(separation=separation, noise=noise, balance=balance)


def test_default_grid_has_101_points() -> None:
    grid = threshold_grid()
    assert grid.shape[0] == 101
    assert grid[0] == 0.0
    assert grid[-1] == 1.0


def test_grid_rejects_bad_step() -> None:
    with pytest.raises(ValueError):
        threshold_grid(step=0.0)
    with pytest.raises(ValueError):
        threshold_grid(start=1.0, stop=0.0)


def test_grid_keeps_requested_step() -> None:
    grid = threshold_grid(0.0, 1.0, 0.3)
    assert grid.shape[0] == 4
    assert np.allclose(np.diff(grid), 0.3)
    assert grid[-1] <= 1.0

    wide = threshold_grid(-1.0, 2.0, 0.01)
    assert wide.shape[0] == 301
    assert np.allclose(np.diff(wide), 0.01)
    assert wide[-1] == pytest.approx(2.0)


def test_grid_with_equal_bounds_is_single_point() -> None:
    grid = threshold_grid(0.5, 0.5, 0.1)
    assert grid.tolist() == [0.5]


def test_curves_are_sorted_by_plot_axis() -> None:
    res = generate_curves(_params())
    assert len(res.roc_points) == 101
    assert len(res.pr_points) == 101
    fprs = [p.fpr for p in res.roc_points]
    recalls = [p.tpr for p in res.pr_points]
    assert fprs == sorted(fprs)
    assert recalls == sorted(recalls)


@pytest.mark.parametrize(
    "separation,noise,balance",
    [(0.0, 0.15, 0.5), (0.4, 0.15, 0.5), (0.9, 0.1, 0.05), (0.2, 0.3, 0.95), (1.0, 0.01, 0.5)],
)
def test_auc_within_unit_interval(separation, noise, balance) -> None:
    res = generate_curves(_params(separation, noise, balance))
    assert 0.0 <= res.roc_auc <= 1.0
    assert 0.0 <= res.pr_auc <= 1.0
    assert not any(math.isnan(p.precision) for p in res.pr_points)


def test_no_separation_gives_chance_level_auc() -> None:
    res = generate_curves(_params(separation=0.0))
    assert res.roc_auc == pytest.approx(0.5, abs=0.01)
    # precision equals the prevalence everywhere
    assert res.pr_auc == pytest.approx(0.5, abs=0.01)


def test_auc_grows_with_separation() -> None:
    low = generate_curves(_params(separation=0.2))
    high = generate_curves(_params(separation=0.6))
    assert high.roc_auc > low.roc_auc
    assert high.pr_auc > low.pr_auc


def test_wide_sweep_matches_binormal_auc() -> None:
    # AUC of two equal-variance Gaussians is Phi(d / (sigma * sqrt(2)))
    sep, noise = 0.4, 0.15
    expected = 0.5 * math.erfc(-(sep / (noise * math.sqrt(2.0))) / math.sqrt(2.0))
    res = generate_curves(_params(sep, noise), start=-1.0, stop=2.0)
    assert len(res.roc_points) == 301
    assert res.roc_auc == pytest.approx(expected, abs=0.005)


def test_precision_is_one_when_nothing_predicted_positive() -> None:
    res = generate_curves(_params(separation=0.4, noise=0.01), start=0.0, stop=2.0)
    beyond = nearest_point(res.pr_points, 2.0)
    assert beyond.tpr == 0.0
    assert beyond.fpr == 0.0
    assert beyond.precision == 1.0


def test_curve_precision_edge_cases() -> None:
    tp = np.array([0.0, 0.0, 30.0])
    fp = np.array([0.0, 0.0, 10.0])
    tpr = np.array([0.0, 0.2, 0.5])
    assert curve_precision(tp, fp, tpr).tolist() == [1.0, 0.0, 0.75]


def test_trapezoid_auc_sorts_and_takes_magnitude() -> None:
    assert trapezoid_auc([0.0, 1.0], [0.0, 1.0]) == pytest.approx(0.5)
    assert trapezoid_auc([1.0, 0.5, 0.0], [1.0, 0.5, 0.0]) == pytest.approx(0.5)
    assert trapezoid_auc([0.3], [0.9]) == 0.0


def test_curves_are_independent_of_population_size() -> None:
    a = generate_curves(_params(), 1000)
    b = generate_curves(_params(), 50)
    assert a.roc_auc == pytest.approx(b.roc_auc)
    assert a.pr_auc == pytest.approx(b.pr_auc)


def test_nearest_point() -> None:
    res = generate_curves(_params())
    p = nearest_point(res.roc_points, 0.503)
    assert p.threshold == pytest.approx(0.5)
    assert nearest_point([], 0.5) is None


def test_exports() -> None:
    res = generate_curves(_params())
    payload = res.to_jsonable()
    assert set(payload) == {"roc_points", "pr_points", "roc_auc", "pr_auc"}
    assert set(payload["roc_points"][0]) == {"threshold", "fpr", "tpr"}
    assert set(payload["pr_points"][0]) == {"threshold", "tpr", "precision"}

    df = res.to_frame()
    assert list(df.columns) == ["threshold", "tpr", "fpr", "precision"]
    assert len(df) == 101
    assert df["threshold"].is_monotonic_increasing


def test_density_profile_peaks_at_class_means() -> None:
    points = density_profile(_params(separation=0.4))
    assert len(points) == 101
    xs = [p.x for p in points]
    assert xs[0] == 0.0 and xs[-1] == 1.0
    pos_peak = max(points, key=lambda p: p.pos_density)
    neg_peak = max(points, key=lambda p: p.neg_density)
    assert pos_peak.x == pytest.approx(0.7)
    assert neg_peak.x == pytest.approx(0.3)


def test_density_profile_rejects_single_point() -> None:
    with pytest.raises(ValueError):
        density_profile(_params(), n_points=1)
