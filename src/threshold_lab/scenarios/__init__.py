from __future__ import annotations

from .presets import DEFAULT_SCENARIO, FALLBACK_SCENARIO
from .provider import LLMScenarioProvider, ScenarioProvider, initial_params, parse_scenario
from .schema import Scenario

__all__ = [
    "DEFAULT_SCENARIO",
    "FALLBACK_SCENARIO",
    "LLMScenarioProvider",
    "Scenario",
    "ScenarioProvider",
    "initial_params",
    "parse_scenario",
]
