# src/zenith_tasks/llm/advisor.py

"""
AI subtask advisor.

suggest() asks the configured text-generation service to break a task into N
subtasks. Every failure is returned as an AdvisorResult with an error kind;
nothing raises except the empty-title guard (ValidationError).
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from ..core.errors import ValidationError
from .client import (
    build_client,
    complete_once,
    is_auth_error,
    is_connection_error,
    is_key_configured,
    mentions_api_key,
    string_list_response_format,
)

logger = logging.getLogger(__name__)

SUBTASKS_PROMPT = """
You are a professional project manager. Break the task below into exactly {count} subtasks, written in {language}.
Each subtask is one short actionable sentence.

Task: {title}
Description: {description}

Return a JSON object {{"subtasks": [...]}} holding the list of strings.
""".strip()

_BULLET_RE = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s*(?:\[[ xX]\]\s*)?")


class AdvisorErrorKind(StrEnum):
    NOT_CONFIGURED = "not_configured"
    INVALID_CREDENTIAL = "invalid_credential"
    NETWORK_FAILURE = "network_failure"
    SERVICE_ERROR = "service_error"


@dataclass(frozen=True, slots=True)
class AdvisorResult:
    suggestions: list[str] = field(default_factory=list)
    tokens: int = 0
    error: AdvisorErrorKind | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, kind: AdvisorErrorKind, message: str = "") -> AdvisorResult:
        return cls(error=kind, message=message)


def friendly_advisor_message(result: AdvisorResult) -> str:
    if result.error is None:
        return f"{len(result.suggestions)} suggestion(s), {result.tokens} tokens used."
    if result.error is AdvisorErrorKind.NOT_CONFIGURED:
        return "AI is not configured (missing API key). Set ZENITH_AI_API_KEY in .env."
    if result.error is AdvisorErrorKind.INVALID_CREDENTIAL:
        return "The AI service rejected the API key. Check ZENITH_AI_API_KEY."
    if result.error is AdvisorErrorKind.NETWORK_FAILURE:
        return "Could not reach the AI service. Check your connection and try again."
    return f"AI service error: {result.message or 'unknown error'}"


def parse_suggestions(raw: str) -> list[str]:
    """
    Lenient decoding of the model output.

    - JSON array, or an object holding an array -> items as strings
    - anything else -> one suggestion per non-empty line, bullets stripped
    """
    text = (raw or "").strip()
    if not text:
        return []

    try:
        data: Any = json.loads(text)
    except ValueError:
        data = None

    if isinstance(data, dict):
        data = data.get("subtasks", next((v for v in data.values() if isinstance(v, list)), None))

    if isinstance(data, list):
        out = [s if isinstance(s, str) else json.dumps(s, ensure_ascii=False) for s in data]
        return [s.strip() for s in out if s and s.strip()]

    lines = [_BULLET_RE.sub("", line).strip() for line in text.splitlines()]
    return [line for line in lines if line and line not in ("```", "```json")]


class OpenAISubtaskAdvisor:
    """
    Subtask advisor over an OpenAI-compatible chat-completions endpoint.

    `client` may be injected (tests); otherwise it is created lazily on the first
    request, so a missing key never fails at start-up.
    """

    def __init__(self, settings: Any, client: Any | None = None) -> None:
        self._settings = settings
        self._client = client

    def is_configured(self) -> bool:
        return is_key_configured(getattr(self._settings, "ai_api_key", None))

    def _get_client(self) -> Any:
        if self._client is None:
            s = self._settings
            self._client = build_client(
                api_key=str(s.ai_api_key),
                base_url=str(getattr(s, "ai_base_url", "")),
                timeout_s=float(getattr(s, "ai_timeout_seconds", 30.0)),
            )
        return self._client

    def build_prompt(self, title: str, description: str) -> str:
        s = self._settings
        return SUBTASKS_PROMPT.format(
            count=int(getattr(s, "ai_subtask_count", 5)),
            language=str(getattr(s, "ai_language", "English")),
            title=title.strip(),
            description=(description or "").strip() or "-",
        )

    def suggest(self, title: str, description: str) -> AdvisorResult:
        if not title or not title.strip():
            raise ValidationError("title is required to request subtasks")

        if not self.is_configured():
            logger.info("AI advisor: not configured, skipping request")
            return AdvisorResult.failure(AdvisorErrorKind.NOT_CONFIGURED)

        model = str(getattr(self._settings, "ai_model", ""))
        logger.info("AI advisor: requesting subtasks model=%s", model)

        try:
            client = self._get_client()
            raw, tokens = complete_once(
                client,
                model=model,
                prompt=self.build_prompt(title, description),
                response_format=string_list_response_format("subtasks"),
            )
        except Exception as e:
            if is_auth_error(e) or mentions_api_key(e):
                logger.warning("AI advisor: credential rejected (%s)", e.__class__.__name__)
                return AdvisorResult.failure(AdvisorErrorKind.INVALID_CREDENTIAL, str(e))
            if is_connection_error(e):
                logger.warning("AI advisor: network/timeout error (%s)", e.__class__.__name__)
                return AdvisorResult.failure(AdvisorErrorKind.NETWORK_FAILURE, str(e))
            logger.warning("AI advisor: service error (%s: %s)", e.__class__.__name__, e)
            return AdvisorResult.failure(AdvisorErrorKind.SERVICE_ERROR, str(e) or e.__class__.__name__)

        suggestions = parse_suggestions(raw)
        logger.info("AI advisor: %d suggestion(s), tokens=%d", len(suggestions), tokens)
        return AdvisorResult(suggestions=suggestions, tokens=max(0, tokens))
