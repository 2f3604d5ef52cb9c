# -*- coding: utf-8 -*-
"""Gateway model catalog built from the configured providers."""

from __future__ import annotations

from typing import Any, Dict, List

from ..config.document import get_providers
from .models import ModelCatalogEntry


def build_model_catalog(document: Dict[str, Any]) -> List[ModelCatalogEntry]:
    """Return every model of every configured provider, sorted."""
    entries: List[ModelCatalogEntry] = []
    for provider_id, provider in get_providers(document).items():
        for model in provider.get("models", []):
            if not isinstance(model, dict) or not model.get("id"):
                continue
            entries.append(
                ModelCatalogEntry(
                    id=model["id"],
                    name=model.get("name") or model["id"],
                    provider=provider_id,
                    context_window=model.get("contextWindow"),
                    reasoning=model.get("reasoning"),
                ),
            )
    entries.sort(key=lambda e: (e.provider, e.id))
    return entries
