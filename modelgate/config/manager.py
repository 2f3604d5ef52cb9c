# -*- coding: utf-8 -*-
"""Provider lifecycle: validate, then patch the stored configuration."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..constant import OPENAI_COMPLETIONS_API
from ..providers.errors import ProviderNotFoundError, ProviderValidationError
from ..providers.models import ModelSpec, ProviderEntry
from ..providers.secrets import mask_api_key
from ..providers.validation import ProviderValidator
from .document import get_default_model_ref, get_providers, split_model_ref
from .patch import build_add_or_update, build_delete, build_set_default
from .store import ConfigStore

logger = logging.getLogger(__name__)


def _display_api_key(api_key: Optional[str]) -> str:
    """Templated keys (``${VAR}``) hold no secret and are shown as-is."""
    if api_key and "${" in api_key:
        return api_key
    return mask_api_key(api_key)


def _build_provider_entry(
    provider_id: str,
    config: Dict[str, Any],
    default_ref: Optional[str],
) -> ProviderEntry:
    models: List[ModelSpec] = []
    for raw in config.get("models", []):
        try:
            models.append(ModelSpec.model_validate(raw))
        except ValidationError:
            logger.warning(
                "Skipping malformed model entry in provider %s",
                provider_id,
            )
    default_pid, default_mid = split_model_ref(default_ref)
    api_key = config.get("apiKey")
    return ProviderEntry(
        id=provider_id,
        base_url=str(config.get("baseUrl", "")),
        api=str(config.get("api") or OPENAI_COMPLETIONS_API),
        models=models,
        has_api_key=bool(api_key),
        current_api_key=_display_api_key(api_key),
        default_model=default_mid if default_pid == provider_id else None,
    )


class ProviderManager:
    """Add, edit, delete and mark-default model providers.

    Add and edit probe the provider first; nothing is written unless the
    probe succeeds. Validation and the later write are not atomic.
    """

    def __init__(
        self,
        store: Optional[ConfigStore] = None,
        validator: Optional[ProviderValidator] = None,
    ) -> None:
        self.store = store if store is not None else ConfigStore()
        self.validator = (
            validator if validator is not None else ProviderValidator()
        )

    async def _validate_and_apply(
        self,
        provider_id: str,
        model_id: str,
        model_name: str,
        base_url: str,
        api_key: Optional[str],
        set_as_default: bool,
        probe_key: Optional[str] = None,
    ) -> Dict[str, Any]:
        # Building first rejects blank parameters before any network call.
        patch = build_add_or_update(
            provider_id,
            model_id,
            model_name,
            base_url,
            api_key,
            set_as_default,
        )
        outcome = await self.validator.validate(
            base_url.strip(),
            model_id.strip(),
            (api_key or "").strip() or probe_key or None,
        )
        if not outcome.ok:
            raise ProviderValidationError(outcome)
        return self.store.apply_patch(patch)

    async def add_provider(
        self,
        provider_id: str,
        model_id: str,
        base_url: str,
        *,
        model_name: str = "",
        api_key: Optional[str] = None,
        set_as_default: bool = False,
    ) -> Dict[str, Any]:
        """Validate and store a new provider. Returns the new document."""
        document = await self._validate_and_apply(
            provider_id,
            model_id,
            model_name,
            base_url,
            api_key,
            set_as_default,
        )
        logger.info("Added provider %s", provider_id.strip())
        return document

    async def update_provider(
        self,
        provider_id: str,
        model_id: str,
        base_url: str,
        *,
        model_name: str = "",
        api_key: Optional[str] = None,
        set_as_default: bool = False,
    ) -> Dict[str, Any]:
        """Validate and rewrite an existing provider.

        A blank *api_key* keeps the stored key, which is then also the one
        used for the probe.
        """
        current = self.store.providers().get(provider_id.strip())
        if current is None:
            raise ProviderNotFoundError(provider_id.strip())
        document = await self._validate_and_apply(
            provider_id,
            model_id,
            model_name,
            base_url,
            api_key,
            set_as_default,
            probe_key=current.get("apiKey"),
        )
        logger.info("Updated provider %s", provider_id.strip())
        return document

    def delete_provider(self, provider_id: str) -> Dict[str, Any]:
        """Remove a provider.

        A default reference pointing at it is left as is.
        """
        document = self.store.apply_patch(build_delete(provider_id))
        logger.info("Deleted provider %s", provider_id.strip())
        return document

    def set_default_model(
        self,
        provider_id: str,
        model_id: str,
    ) -> Dict[str, Any]:
        document = self.store.apply_patch(
            build_set_default(provider_id, model_id),
        )
        logger.info(
            "Default model set to %s/%s",
            provider_id.strip(),
            model_id.strip(),
        )
        return document

    def list_providers(self) -> List[ProviderEntry]:
        """Return all configured providers (keys masked), sorted by id."""
        document = self.store.load()
        default_ref = get_default_model_ref(document)
        return [
            _build_provider_entry(pid, config, default_ref)
            for pid, config in sorted(get_providers(document).items())
        ]

    def get_default_model_ref(self) -> Optional[str]:
        return self.store.default_model_ref()
