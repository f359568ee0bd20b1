from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Callable, Dict

from threshold_lab.model.types import ConfusionMatrix


def safe_divide(numerator: float, denominator: float) -> float:
    # Zero denominators yield 0 rather than NaN or an exception.
    if denominator == 0:
        return 0.0
    return numerator / denominator


def metric_accuracy(m: ConfusionMatrix) -> float:
    return safe_divide(m.tp + m.tn, m.total)


def metric_precision(m: ConfusionMatrix) -> float:
    return safe_divide(m.tp, m.tp + m.fp)


def metric_recall(m: ConfusionMatrix) -> float:
    """Sensitivity, the true positive rate."""
    return safe_divide(m.tp, m.tp + m.fn)


def metric_specificity(m: ConfusionMatrix) -> float:
    return safe_divide(m.tn, m.tn + m.fp)


def metric_f1(m: ConfusionMatrix) -> float:
    p = metric_precision(m)
    r = metric_recall(m)
    return safe_divide(2 * p * r, p + r)


@dataclass(frozen=True)
class MetricSet:
    accuracy: float
    precision: float
    recall: float
    specificity: float
    f1: float

    def to_jsonable(self) -> dict:
        return asdict(self)


METRICS: Dict[str, Callable[[ConfusionMatrix], float]] = {
    "accuracy": metric_accuracy,
    "precision": metric_precision,
    "recall": metric_recall,
    "specificity": metric_specificity,
    "f1": metric_f1,
}

# Human-readable formulas, as printed next to each metric.
METRIC_FORMULAS: Dict[str, str] = {
    "accuracy": "(TP + TN) / Total",
    "precision": "TP / (TP + FP)",
    "recall": "TP / (TP + FN)",
    "specificity": "TN / (TN + FP)",
    "f1": "2*P*R / (P+R)",
}


def compute_metrics(matrix: ConfusionMatrix) -> MetricSet:
    return MetricSet(**{metric_id: fn(matrix) for metric_id, fn in METRICS.items()})


def list_metrics() -> list[str]:
    return list(METRICS.keys())
