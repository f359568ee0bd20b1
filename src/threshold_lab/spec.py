from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from threshold_lab.model.types import DistributionParams, RawCounts


class SimulationSettings(BaseModel):
    """
    Validated distribution parameters from an external source
    (a spec file, the CLI, or a generated scenario).
    """

    separation: float = Field(
        ..., ge=0.0, le=1.0, description="Distance between class means (0..1)."
    )
    noise: float = Field(..., gt=0.0, description="Shared standard deviation.")
    balance: float = Field(
        ..., gt=0.0, lt=1.0, description="Fraction of the population that is positive."
    )

    def to_params(self) -> DistributionParams:
        return DistributionParams(
            separation=self.separation, noise=self.noise, balance=self.balance
        )


class CountsSpec(BaseModel):
    tp: float = Field(..., ge=0)
    tn: float = Field(..., ge=0)
    fp: float = Field(..., ge=0)
    fn: float = Field(..., ge=0)

    def to_counts(self) -> RawCounts:
        return RawCounts(tp=self.tp, tn=self.tn, fp=self.fp, fn=self.fn)


class EvaluationSpec(BaseModel):
    """
    One evaluation request: either simulated distributions plus a threshold,
    or manually entered confusion counts.
    """

    model_config = ConfigDict(extra="forbid")

    mode: Literal["simulation", "manual"] = "simulation"
    simulation: Optional[SimulationSettings] = None
    threshold: float = Field(
        default=0.5, description="Decision threshold (simulation mode only)."
    )
    counts: Optional[CountsSpec] = None
    total_samples: int = Field(
        default=1000, ge=1, description="Population size for simulated counts."
    )

    @model_validator(mode="after")
    def _validate_mode_inputs(self) -> "EvaluationSpec":
        if self.mode == "simulation" and self.simulation is None:
            raise ValueError("mode='simulation' requires a 'simulation' block.")
        if self.mode == "manual" and self.counts is None:
            raise ValueError("mode='manual' requires a 'counts' block.")
        return self


def load_evaluation_spec(data: Dict[str, Any]) -> EvaluationSpec:
    return EvaluationSpec.model_validate(data)
