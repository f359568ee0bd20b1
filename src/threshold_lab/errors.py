from __future__ import annotations


class LLMConfigError(ValueError):
    pass


class ScenarioParseError(ValueError):
    pass
