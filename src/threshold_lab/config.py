"""Runtime settings for Threshold Lab.

Everything is read from environment variables; nothing is required for the
numeric engine. Only the scenario and explanation helpers need an API key.
"""
from __future__ import annotations

import os
from functools import lru_cache


class Settings:
    """Application settings derived from environment variables."""

    @property
    def total_samples(self) -> int:
        """Population size used for simulated counts. Default: 1000."""
        raw = os.getenv("THRESHOLD_LAB_TOTAL_SAMPLES", "1000")
        try:
            return int(raw)
        except ValueError:
            raise RuntimeError(
                f"THRESHOLD_LAB_TOTAL_SAMPLES must be a positive integer, got {raw!r}"
            ) from None

    @property
    def llm_api_key(self) -> str | None:
        return os.getenv("ANTHROPIC_API_KEY")

    @property
    def llm_model(self) -> str:
        return os.getenv("THRESHOLD_LAB_LLM_MODEL", "claude-sonnet-4-20250514")

    @property
    def llm_timeout(self) -> float:
        raw = os.getenv("THRESHOLD_LAB_LLM_TIMEOUT", "30")
        try:
            return float(raw)
        except ValueError:
            raise RuntimeError(
                f"THRESHOLD_LAB_LLM_TIMEOUT must be a number > 0, got {raw!r}"
            ) from None

    @property
    def llm_enabled(self) -> bool:
        return bool(self.llm_api_key)

    def validate_startup(self) -> None:
        """Fail fast with a clear message on invalid numeric settings."""
        total = self.total_samples
        if total < 1:
            raise RuntimeError(
                f"THRESHOLD_LAB_TOTAL_SAMPLES must be a positive integer, got {total!r}"
            )
        timeout = self.llm_timeout
        if timeout <= 0:
            raise RuntimeError(
                f"THRESHOLD_LAB_LLM_TIMEOUT must be a number > 0, got {timeout!r}"
            )


@lru_cache
def get_settings() -> Settings:
    return Settings()
