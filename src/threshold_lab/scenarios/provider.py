from __future__ import annotations

import json
import logging
import re
from typing import Callable, Optional, Protocol

import requests
from pydantic import ValidationError

from threshold_lab.config import get_settings
from threshold_lab.errors import LLMConfigError, ScenarioParseError
from threshold_lab.model.types import DistributionParams
from threshold_lab.scenarios.presets import FALLBACK_SCENARIO
from threshold_lab.scenarios.schema import Scenario
from threshold_lab.services.llm_client import get_llm_response

logger = logging.getLogger(__name__)

LLMCall = Callable[[str, str], str]

EXPLANATION_FAILED = "Could not reach the explanation service."
EXPLANATION_EMPTY = "No explanation could be generated."

SCENARIO_SYSTEM_PROMPT = (
    "You write realistic binary classification scenarios for teaching "
    "evaluation metrics. Reply with a single JSON object and nothing else."
)

SCENARIO_PROMPT = """Create a realistic binary classification scenario about: "{topic}".
Return JSON with these fields:
1. topic: short name.
2. positiveLabel: the positive class (e.g. "Fraud").
3. negativeLabel: the negative class (e.g. "Legitimate").
4. description: one-sentence description.
5. fpConsequence: consequence of a false positive.
6. fnConsequence: consequence of a false negative.
7. simulation: object with realistic estimates for this problem:
   - separation (0.1 to 0.9): how separable the classes are (0.2 = heavy overlap, 0.8 = clearly separated).
   - noise (0.1 to 0.3): score noise, usually around 0.15.
   - balance (0.05 to 0.95): share of positives in practice (fraud or cancer ~0.05-0.1, spam ~0.3-0.5)."""

EXPLAIN_SYSTEM_PROMPT = "You explain classification metrics to students in plain language."

EXPLAIN_PROMPT = """In under 60 words, explain what the parameter or metric "{concept}" means in this problem:
- Problem: {description}
- Positive: {positive_label}
- Negative: {negative_label}

Say how increasing or decreasing it changes classification (easier or harder, more or fewer errors)."""

_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


class ScenarioProvider(Protocol):
    def generate(self, topic: str) -> Scenario: ...

    def explain(self, concept: str, scenario: Scenario) -> str: ...


def parse_scenario(text: str) -> Scenario:
    """Parse a JSON scenario reply, tolerating a surrounding code fence."""
    cleaned = _FENCE.sub("", text.strip())
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise ScenarioParseError(f"Scenario reply is not valid JSON: {exc}") from exc
    try:
        return Scenario.model_validate(data)
    except ValidationError as exc:
        raise ScenarioParseError(f"Scenario reply failed validation: {exc}") from exc


class LLMScenarioProvider:
    """
    Scenario and explanation provider backed by the text-generation service.

    Service, configuration and parse failures are logged and replaced with
    fixed fallbacks; they never propagate to the caller.
    """

    def __init__(
        self,
        *,
        llm_call: Optional[LLMCall] = None,
        fallback: Scenario = FALLBACK_SCENARIO,
    ) -> None:
        self._llm_call = llm_call
        self._fallback = fallback

    def _complete(self, system_prompt: str, user_content: str) -> str:
        if self._llm_call is not None:
            return self._llm_call(system_prompt, user_content)
        if not get_settings().llm_enabled:
            raise LLMConfigError("text service disabled: ANTHROPIC_API_KEY is not set")
        return get_llm_response(system_prompt, user_content)

    def generate(self, topic: str) -> Scenario:
        try:
            reply = self._complete(SCENARIO_SYSTEM_PROMPT, SCENARIO_PROMPT.format(topic=topic))
            return parse_scenario(reply)
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Scenario generation failed for %r: %s", topic, exc)
            return self._fallback

    def explain(self, concept: str, scenario: Scenario) -> str:
        prompt = EXPLAIN_PROMPT.format(
            concept=concept,
            description=scenario.description,
            positive_label=scenario.positive_label,
            negative_label=scenario.negative_label,
        )
        try:
            reply = self._complete(EXPLAIN_SYSTEM_PROMPT, prompt)
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Explanation request failed for %r: %s", concept, exc)
            return EXPLANATION_FAILED
        return reply.strip() or EXPLANATION_EMPTY


def initial_params(
    scenario: Scenario, default: DistributionParams
) -> DistributionParams:
    """The scenario's suggested distribution parameters, or ``default``."""
    if scenario.simulation is None:
        return default
    return scenario.simulation.to_params()
