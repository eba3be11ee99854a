# src/zenith_tasks/llm/client.py

from __future__ import annotations

import logging
from typing import Any

import httpx
import openai
from openai import OpenAI

logger = logging.getLogger(__name__)

# Values that deployment templates leave behind when no key was provided.
_PLACEHOLDER_KEYS = {"undefined", "null", "none", "your_api_key"}


def is_key_configured(api_key: str | None) -> bool:
    """True if the access credential is present and not a template placeholder."""
    if api_key is None:
        return False
    s = str(api_key).strip()
    return bool(s) and s.lower() not in _PLACEHOLDER_KEYS


def is_auth_error(exc: Exception) -> bool:
    if isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError)):
        return True
    return exc.__class__.__name__ in {
        "AuthenticationError",
        "PermissionDeniedError",
        "UnauthorizedError",
    }


def is_connection_error(exc: Exception) -> bool:
    # APITimeoutError is a subclass of APIConnectionError.
    if isinstance(exc, (openai.APIConnectionError, httpx.TransportError)):
        return True
    return exc.__class__.__name__ in {
        "APIConnectionError",
        "APITimeoutError",
        "Timeout",
        "ConnectTimeout",
        "ReadTimeout",
        "WriteTimeout",
        "ConnectError",
    }


def mentions_api_key(exc: Exception) -> bool:
    # Gemini reports a bad key as HTTP 400 "API key not valid".
    return "api key" in str(exc).lower()


def make_timeout(total_s: float, connect_s: float = 5.0) -> httpx.Timeout:
    connect_s = min(connect_s, total_s)
    return httpx.Timeout(total_s, connect=connect_s)


def build_client(*, api_key: str, base_url: str, timeout_s: float) -> OpenAI:
    """
    Create an OpenAI-compatible client.

    Automatic retries are disabled: one attempt per user action, the caller decides
    whether to try again.
    """
    if not is_key_configured(api_key):
        raise RuntimeError("AI API key is not set. Set ZENITH_AI_API_KEY in your .env.")
    if not base_url.strip():
        raise RuntimeError("AI base URL is not set. Set ZENITH_AI_BASE_URL in your .env.")

    return OpenAI(
        base_url=base_url.strip(),
        api_key=str(api_key).strip(),
        timeout=make_timeout(timeout_s),
        max_retries=0,
    )


def string_list_response_format(name: str) -> dict[str, Any]:
    """Structured-output constraint: {"<name>": [str, ...]}."""
    return {
        "type": "json_schema",
        "json_schema": {
            "name": name,
            "strict": True,
            "schema": {
                "type": "object",
                "properties": {name: {"type": "array", "items": {"type": "string"}}},
                "required": [name],
                "additionalProperties": False,
            },
        },
    }


def complete_once(
    client: Any,
    *,
    model: str,
    prompt: str,
    response_format: dict[str, Any] | None = None,
) -> tuple[str, int]:
    """
    Single non-streaming chat completion.

    Returns (content, total_tokens). Exceptions from the SDK propagate unchanged.
    """
    kwargs: dict[str, Any] = {
        "model": model,
        "messages": [{"role": "user", "content": prompt}],
    }
    if response_format is not None:
        kwargs["response_format"] = response_format

    resp = client.chat.completions.create(**kwargs)

    content = ""
    try:
        content = resp.choices[0].message.content or ""
    except (AttributeError, IndexError, TypeError):
        logger.debug("AI response has no message content (model=%s)", model)

    usage = getattr(resp, "usage", None)
    tokens = int(getattr(usage, "total_tokens", 0) or 0) if usage is not None else 0
    return content, tokens
