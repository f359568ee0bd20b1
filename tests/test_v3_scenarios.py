from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from threshold_lab.errors import LLMConfigError, ScenarioParseError
from threshold_lab.model.types import DistributionParams
from threshold_lab.scenarios import (
    DEFAULT_SCENARIO,
    FALLBACK_SCENARIO,
    LLMScenarioProvider,
    initial_params,
    parse_scenario,
)
from threshold_lab.scenarios.provider import EXPLANATION_EMPTY, EXPLANATION_FAILED

SCENARIO_JSON = {
    "topic": "Card fraud",
    "positiveLabel": "Fraud",
    "negativeLabel": "Legitimate",
    "description": "Flag fraudulent card transactions.",
    "fpConsequence": "A customer's card is blocked.",
    "fnConsequence": "Money is stolen.",
    "simulation": {"separation": 0.6, "noise": 0.12, "balance": 0.05},
}


def _raises(exc: Exception):
    def _call(system_prompt: str, user_content: str) -> str:
        raise exc

    return _call


def test_parse_camel_case_scenario() -> None:
    scenario = parse_scenario(json.dumps(SCENARIO_JSON))
    assert scenario.positive_label == "Fraud"
    assert scenario.fn_consequence == "Money is stolen."
    assert scenario.simulation.balance == 0.05


def test_parse_fenced_reply() -> None:
    reply = "```json\n" + json.dumps(SCENARIO_JSON) + "\n```"
    assert parse_scenario(reply).topic == "Card fraud"


def test_parse_rejects_bad_replies() -> None:
    with pytest.raises(ScenarioParseError):
        parse_scenario("not json")
    bad = dict(SCENARIO_JSON, simulation={"separation": 3.0, "noise": 0.1, "balance": 0.5})
    with pytest.raises(ScenarioParseError):
        parse_scenario(json.dumps(bad))


def test_scenario_dumps_with_aliases() -> None:
    dumped = DEFAULT_SCENARIO.model_dump(by_alias=True)
    assert "positiveLabel" in dumped
    assert dumped["simulation"] is None


def test_generate_uses_llm_reply() -> None:
    seen = {}

    def _call(system_prompt: str, user_content: str) -> str:
        seen["prompt"] = user_content
        return json.dumps(SCENARIO_JSON)

    scenario = LLMScenarioProvider(llm_call=_call).generate("credit card fraud")
    assert scenario.topic == "Card fraud"
    assert "credit card fraud" in seen["prompt"]


@pytest.mark.parametrize(
    "exc",
    [
        LLMConfigError("no key"),
        requests.ConnectionError("down"),
        requests.HTTPError("500"),
        ValueError("Unexpected response format"),
    ],
)
def test_generate_falls_back_on_failure(exc) -> None:
    assert LLMScenarioProvider(llm_call=_raises(exc)).generate("x") == FALLBACK_SCENARIO


def test_generate_falls_back_on_unparseable_reply() -> None:
    provider = LLMScenarioProvider(llm_call=lambda s, u: "sorry, I can't")
    assert provider.generate("x") == FALLBACK_SCENARIO


def test_explain() -> None:
    provider = LLMScenarioProvider(llm_call=lambda s, u: "  Precision is ...  ")
    assert provider.explain("precision", DEFAULT_SCENARIO) == "Precision is ..."

    empty = LLMScenarioProvider(llm_call=lambda s, u: "   ")
    assert empty.explain("precision", DEFAULT_SCENARIO) == EXPLANATION_EMPTY

    failing = LLMScenarioProvider(llm_call=_raises(requests.Timeout("slow")))
    assert failing.explain("precision", DEFAULT_SCENARIO) == EXPLANATION_FAILED


def test_initial_params() -> None:
    default = DistributionParams(separation=0.4, noise=0.15, balance=0.5)
    assert initial_params(DEFAULT_SCENARIO, default) is default
    assert initial_params(FALLBACK_SCENARIO, default) == DistributionParams(0.4, 0.15, 0.3)


def _service_response(payload):
    resp = MagicMock()
    resp.status_code = 200
    resp.json.return_value = payload
    return resp


@pytest.mark.parametrize(
    "payload",
    [{"content": {"text": "x"}}, {"content": "x"}, ["not", "an", "object"]],
)
def test_generate_falls_back_on_malformed_service_payload(monkeypatch, payload) -> None:
    monkeypatch.setenv("ANTHROPIC_API_KEY", "test-key")
    with patch("requests.post") as mock_post:
        mock_post.return_value = _service_response(payload)
        assert LLMScenarioProvider().generate("fraud") == FALLBACK_SCENARIO
    mock_post.assert_called_once()


def test_no_request_sent_without_key(monkeypatch) -> None:
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    provider = LLMScenarioProvider()
    with patch("requests.post") as mock_post:
        assert provider.generate("fraud") == FALLBACK_SCENARIO
        assert provider.explain("precision", DEFAULT_SCENARIO) == EXPLANATION_FAILED
    mock_post.assert_not_called()


def test_injected_call_bypasses_key_check(monkeypatch) -> None:
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    provider = LLMScenarioProvider(llm_call=lambda s, u: json.dumps(SCENARIO_JSON))
    assert provider.generate("fraud").topic == "Card fraud"
