# -*- coding: utf-8 -*-
"""Validate an OpenAI-compatible provider before its config is saved."""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

from ..constant import VALIDATE_TIMEOUT_SECONDS
from .errors import FailureKind, MissingEnvVarError
from .models import ProviderCandidate, ValidationOutcome
from .probe import ChatCompletionClient, normalize_base_url, probe
from .secrets import resolve_api_key

logger = logging.getLogger(__name__)


class ProviderValidator:
    """Resolve the credential, then probe the candidate once.

    Holds no state between calls; concurrent validations each run their
    own probe.
    """

    def __init__(
        self,
        client: Optional[ChatCompletionClient] = None,
        env: Optional[Mapping[str, str]] = None,
        timeout: float = VALIDATE_TIMEOUT_SECONDS,
    ) -> None:
        self.client = client
        self.env = env
        self.timeout = timeout

    async def validate(
        self,
        base_url: str,
        model_id: str,
        api_key: Optional[str] = None,
    ) -> ValidationOutcome:
        candidate = ProviderCandidate(
            base_url=normalize_base_url(base_url),
            model_id=(model_id or "").strip(),
            api_key=api_key,
        )
        if not candidate.base_url or not candidate.model_id:
            return ValidationOutcome.failure(
                "baseUrl and modelId are required",
                FailureKind.PARAMETER,
            )

        env = self.env if self.env is not None else os.environ
        try:
            resolved_key = resolve_api_key(candidate.api_key, env)
        except MissingEnvVarError as err:
            logger.warning(
                "Cannot validate %s: env var %s is not set",
                candidate.base_url,
                err.var_name,
            )
            return ValidationOutcome.failure(
                f'Missing env var "{err.var_name}" in API key',
                err.kind,
            )

        logger.info(
            "Validating provider %s with model %s",
            candidate.base_url,
            candidate.model_id,
        )
        outcome = await probe(
            candidate.base_url,
            candidate.model_id,
            resolved_key,
            client=self.client,
            timeout=self.timeout,
        )
        if outcome.ok:
            logger.info("Provider %s is reachable", candidate.base_url)
        else:
            logger.warning(
                "Provider %s failed validation: %s",
                candidate.base_url,
                outcome.reason,
            )
        return outcome


async def validate_model_provider(
    base_url: str,
    model_id: str,
    api_key: Optional[str] = None,
    *,
    env: Optional[Mapping[str, str]] = None,
    client: Optional[ChatCompletionClient] = None,
    timeout: float = VALIDATE_TIMEOUT_SECONDS,
) -> ValidationOutcome:
    """Validate one ``(baseUrl, modelId, apiKey)`` triple."""
    validator = ProviderValidator(client=client, env=env, timeout=timeout)
    return await validator.validate(base_url, model_id, api_key)
