from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class DistributionParams:
    """
    Two class-conditional Gaussian score distributions sharing one std.

    The negative class is centred at ``0.5 - separation/2`` and the positive
    class at ``0.5 + separation/2``. ``balance`` is the positive fraction.
    """

    separation: float
    noise: float
    balance: float

    @property
    def neg_mean(self) -> float:
        return 0.5 - self.separation / 2.0

    @property
    def pos_mean(self) -> float:
        return 0.5 + self.separation / 2.0

    def to_jsonable(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class EstimatedParams(DistributionParams):
    """Distribution parameters recovered from raw counts, plus the threshold."""

    threshold: float = 0.5

    @property
    def params(self) -> DistributionParams:
        return DistributionParams(
            separation=self.separation, noise=self.noise, balance=self.balance
        )


@dataclass(frozen=True)
class RawCounts:
    tp: float
    tn: float
    fp: float
    fn: float

    @property
    def total(self) -> float:
        return self.tp + self.tn + self.fp + self.fn

    def to_jsonable(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ConfusionMatrix:
    """Confusion-matrix cells, possibly fractional, at a given threshold."""

    tp: float
    tn: float
    fp: float
    fn: float
    threshold: float

    @property
    def total(self) -> float:
        return self.tp + self.tn + self.fp + self.fn

    @property
    def pos_count(self) -> float:
        return self.tp + self.fn

    @property
    def neg_count(self) -> float:
        return self.tn + self.fp

    @classmethod
    def from_counts(cls, counts: RawCounts, threshold: float) -> "ConfusionMatrix":
        return cls(
            tp=counts.tp, tn=counts.tn, fp=counts.fp, fn=counts.fn, threshold=threshold
        )

    def to_jsonable(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class CurvePoint:
    threshold: float
    tpr: float
    fpr: float
    precision: float


@dataclass(frozen=True)
class DistributionPoint:
    x: float
    pos_density: float
    neg_density: float
