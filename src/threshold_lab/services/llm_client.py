"""HTTP client for the text-generation service behind scenarios and explanations."""
from __future__ import annotations

import logging
from typing import Optional

import requests

from threshold_lab.config import get_settings
from threshold_lab.errors import LLMConfigError

logger = logging.getLogger(__name__)

API_URL = "https://api.anthropic.com/v1/messages"


def get_llm_response(
    system_prompt: str,
    user_content: str,
    model: Optional[str] = None,
    max_tokens: int = 1024,
) -> str:
    """
    Send one user message and return the assistant's text.

    Raises:
        LLMConfigError: If ANTHROPIC_API_KEY is not set
        requests.HTTPError: If the API call fails
        ValueError: If the response has no text content
    """
    settings = get_settings()
    api_key = settings.llm_api_key
    if not api_key:
        raise LLMConfigError("ANTHROPIC_API_KEY environment variable is not set")

    model = model or settings.llm_model

    headers = {
        "x-api-key": api_key,
        "anthropic-version": "2023-06-01",
        "content-type": "application/json",
    }

    payload = {
        "model": model,
        "max_tokens": max_tokens,
        "system": system_prompt,
        "messages": [
            {
                "role": "user",
                "content": user_content,
            }
        ],
    }

    logger.debug("Requesting completion from %s", model)
    response = requests.post(
        API_URL, headers=headers, json=payload, timeout=settings.llm_timeout
    )
    response.raise_for_status()
    data = response.json()

    content = data.get("content") if isinstance(data, dict) else None
    if isinstance(content, list) and len(content) > 0:
        content_item = content[0]
        if isinstance(content_item, dict) and "text" in content_item:
            return content_item["text"]
    raise ValueError("Unexpected response format from LLM API")
