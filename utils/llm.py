"""
OpenAI LLM helpers — multimodal frame analysis.
"""

from __future__ import annotations

import logging
import time
from openai import OpenAI, RateLimitError

import config

log = logging.getLogger(__name__)

_client: OpenAI | None = None


def get_client() -> OpenAI:
    global _client
    if _client is None:
        _client = OpenAI(api_key=config.OPENAI_API_KEY)
    return _client


MAX_RETRIES = 5
BASE_DELAY = 10  # seconds


def chat(
    system: str,
    user: str | list[dict],
    model: str | None = None,
    temperature: float = 0.3,
    max_tokens: int = 512,
) -> str:
    """Send a chat completion request and return the assistant message.

    ``user`` may be plain text or a list of content parts (text + image).
    Retries up to MAX_RETRIES times on rate limit (429) errors with
    exponential backoff.
    """
    client = get_client()
    kwargs: dict = {
        "model": model or config.OPENAI_MODEL,
        "messages": [
            {"role": "system", "content": system},
            {"role": "user", "content": user},
        ],
        "temperature": temperature,
        "max_tokens": max_tokens,
    }

    for attempt in range(MAX_RETRIES):
        try:
            resp = client.chat.completions.create(**kwargs)
            return resp.choices[0].message.content or ""
        except RateLimitError as e:
            delay = BASE_DELAY * (2 ** attempt)
            log.warning(
                "Rate limited (attempt %d/%d), retrying in %ds: %s",
                attempt + 1, MAX_RETRIES, delay, e,
            )
            if attempt == MAX_RETRIES - 1:
                raise
            time.sleep(delay)

    return ""  # unreachable but satisfies type checker


def chat_with_image(system: str, prompt: str, image_b64: str, mime_type: str = "image/jpeg", **kwargs) -> str:
    """Send a text prompt plus one still image."""
    if not image_b64.startswith("data:"):
        image_b64 = f"data:{mime_type};base64,{image_b64}"
    parts = [
        {"type": "text", "text": prompt},
        {"type": "image_url", "image_url": {"url": image_b64}},
    ]
    return chat(system, parts, **kwargs)
