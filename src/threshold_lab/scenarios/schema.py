from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from threshold_lab.spec import SimulationSettings


class Scenario(BaseModel):
    """
    Narrative framing for the two classes. Display text only, except for
    ``simulation``, which can seed the initial distribution parameters.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    topic: str
    positive_label: str
    negative_label: str
    description: str
    fp_consequence: str = Field(..., description="What a false positive costs.")
    fn_consequence: str = Field(..., description="What a false negative costs.")
    simulation: Optional[SimulationSettings] = None
