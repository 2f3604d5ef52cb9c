# -*- coding: utf-8 -*-
"""Minimal chat-completions probe against a candidate provider.

The probe sends one tiny request (``"Reply with OK."``, 16 tokens,
temperature 0) under a fixed deadline and folds any failure into a small
set of user-facing reasons. It never retries.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional, Protocol

import httpx
from pydantic import Field

from ..constant import (
    OPENAI_COMPLETIONS_API,
    PROBE_MAX_TOKENS,
    PROBE_PROMPT,
    PROBE_TEMPERATURE,
    VALIDATE_TIMEOUT_SECONDS,
)
from .errors import (
    FailureKind,
    NotFoundError,
    ProbeError,
    TimedOutError,
    UnauthorizedError,
    UnclassifiedProbeError,
    UnreachableError,
)
from .models import ModelCost, ModelSpec, ValidationOutcome

logger = logging.getLogger(__name__)

PROBE_PROVIDER_ID = "_validate"

_UNREACHABLE_MARKERS = ("econnrefused", "connection refused", "fetch failed")
_TIMEOUT_MARKERS = ("abort", "timeout", "timed out")
_REDACTED = "***"


class ProbeModel(ModelSpec):
    """Model descriptor used only for the probe request."""

    base_url: str = Field(..., alias="baseUrl")
    api: str = OPENAI_COMPLETIONS_API
    provider: str = PROBE_PROVIDER_ID


class ChatCompletionError(Exception):
    """Non-2xx answer from a chat-completions endpoint."""

    def __init__(self, status_code: int, reason: str, detail: str = ""):
        self.status_code = status_code
        self.detail = detail
        message = f"{status_code} {reason}".strip()
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ChatCompletionClient(Protocol):
    async def complete(
        self,
        model: ProbeModel,
        messages: List[Dict[str, Any]],
        *,
        api_key: Optional[str] = None,
        max_tokens: int,
        temperature: float,
    ) -> Dict[str, Any]:
        ...


def _error_detail(response: httpx.Response) -> str:
    """Pull a readable message out of an error body."""
    text = response.text.strip()
    if not text:
        return ""
    try:
        body = json.loads(text)
    except ValueError:
        return text[:500]
    if isinstance(body, dict):
        err = body.get("error", body)
        if isinstance(err, dict):
            detail = err.get("message") or err.get("detail")
            return str(detail) if detail else ""
        return str(err)
    return text[:500]


class OpenAIChatClient:
    """Chat-completions client for OpenAI-compatible endpoints."""

    def __init__(
        self,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._transport = transport

    async def complete(
        self,
        model: ProbeModel,
        messages: List[Dict[str, Any]],
        *,
        api_key: Optional[str] = None,
        max_tokens: int,
        temperature: float,
    ) -> Dict[str, Any]:
        headers = {"Content-Type": "application/json"}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        payload = {
            "model": model.id,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "stream": False,
        }
        # The caller owns the deadline; no client-side timeout here.
        async with httpx.AsyncClient(
            transport=self._transport,
            timeout=None,
        ) as client:
            response = await client.post(
                f"{model.base_url}/chat/completions",
                json=payload,
                headers=headers,
            )
        if response.is_error:
            raise ChatCompletionError(
                response.status_code,
                response.reason_phrase,
                _error_detail(response),
            )
        return response.json()


def normalize_base_url(url: Optional[str]) -> str:
    """Trim *url* and strip trailing slashes."""
    trimmed = (url or "").strip()
    if not trimmed:
        return ""
    return trimmed.rstrip("/")


def build_probe_model(base_url: str, model_id: str) -> ProbeModel:
    """Synthesize a text-only descriptor with a tiny token budget."""
    return ProbeModel(
        id=model_id,
        name=model_id,
        base_url=base_url,
        reasoning=False,
        input=["text"],
        cost=ModelCost(),
        context_window=8192,
        max_tokens=64,
    )


def classify_probe_error(
    exc: BaseException,
    secret: Optional[str] = None,
) -> ProbeError:
    """Map a raw probe failure onto the user-facing vocabulary.

    Checked in order: unauthorized, not found, unreachable, timed out.
    Anything else keeps its own message, with every occurrence of
    *secret* replaced by ``***``.
    """
    message = str(exc)
    lowered = message.lower()
    if "401" in message or "unauthorized" in lowered:
        return UnauthorizedError()
    if "404" in message or "not found" in lowered:
        return NotFoundError()
    if isinstance(exc, httpx.ConnectError) or any(
        marker in lowered for marker in _UNREACHABLE_MARKERS
    ):
        return UnreachableError()
    if isinstance(exc, (asyncio.TimeoutError, httpx.TimeoutException)) or any(
        marker in lowered for marker in _TIMEOUT_MARKERS
    ):
        return TimedOutError()
    if not message:
        message = type(exc).__name__
    if secret and secret in message:
        message = message.replace(secret, _REDACTED)
    return UnclassifiedProbeError(message)


async def probe(
    base_url: str,
    model_id: str,
    api_key: Optional[str] = None,
    *,
    client: Optional[ChatCompletionClient] = None,
    timeout: float = VALIDATE_TIMEOUT_SECONDS,
) -> ValidationOutcome:
    """Send one minimal chat request and report whether it succeeded.

    *api_key* must already be resolved. On deadline expiry the in-flight
    request is cancelled and reported as a timeout.
    """
    base_url = normalize_base_url(base_url)
    model_id = (model_id or "").strip()
    if not base_url or not model_id:
        return ValidationOutcome.failure(
            "baseUrl and modelId are required",
            FailureKind.PARAMETER,
        )

    model = build_probe_model(base_url, model_id)
    if client is None:
        client = OpenAIChatClient()

    try:
        await asyncio.wait_for(
            client.complete(
                model,
                [{"role": "user", "content": PROBE_PROMPT}],
                api_key=api_key or None,
                max_tokens=PROBE_MAX_TOKENS,
                temperature=PROBE_TEMPERATURE,
            ),
            timeout=timeout,
        )
    except Exception as exc:  # every failure is reported, never raised
        err = classify_probe_error(exc, api_key)
        logger.debug(
            "Probe of %s (%s) failed: %s",
            base_url,
            model_id,
            type(exc).__name__,
        )
        return ValidationOutcome.failure(str(err), err.kind)
    return ValidationOutcome.success()
