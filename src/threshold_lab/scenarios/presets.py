"""Built-in scenarios."""
from __future__ import annotations

from threshold_lab.scenarios.schema import Scenario
from threshold_lab.spec import SimulationSettings

DEFAULT_SCENARIO = Scenario(
    topic="Quality control",
    positive_label="Defective",
    negative_label="Normal",
    description="An automated system flags defective products on a production line.",
    fp_consequence="False alarm: a good product is discarded, wasting production cost.",
    fn_consequence=(
        "Missed defect: a faulty product reaches customers, "
        "hurting reputation and causing complaints."
    ),
)

# Served whenever scenario generation fails.
FALLBACK_SCENARIO = Scenario(
    topic="Default: disease screening",
    positive_label="Diseased",
    negative_label="Healthy",
    description="An AI model reads X-ray images to detect tumours.",
    fp_consequence="Patients worry needlessly and pay for extra tests.",
    fn_consequence="The disease is missed and treatment is delayed, which can be life-threatening.",
    simulation=SimulationSettings(separation=0.4, noise=0.15, balance=0.3),
)
