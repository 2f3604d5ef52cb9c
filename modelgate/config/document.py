# -*- coding: utf-8 -*-
"""Read helpers for the untyped configuration document."""

from __future__ import annotations

from typing import Any, Dict, Optional

PROVIDERS_PATH = ("models", "providers")
DEFAULT_MODEL_PATH = ("agents", "defaults", "model", "primary")


def get_providers(document: Optional[Dict[str, Any]]) -> Dict[str, Dict]:
    """Return ``models.providers`` entries that look like provider configs."""
    if not isinstance(document, dict):
        return {}
    models = document.get("models")
    providers = models.get("providers") if isinstance(models, dict) else None
    if not isinstance(providers, dict):
        return {}
    return {
        pid: cfg
        for pid, cfg in providers.items()
        if isinstance(cfg, dict) and isinstance(cfg.get("models"), list)
    }


def get_default_model_ref(document: Optional[Dict[str, Any]]) -> Optional[str]:
    """Return ``agents.defaults.model.primary`` or ``None`` when unset."""
    node: Any = document
    for key in DEFAULT_MODEL_PATH:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    if isinstance(node, str) and node.strip():
        return node.strip()
    return None


def split_model_ref(ref: Optional[str]) -> tuple[str, str]:
    """Split ``"provider/model"`` into its parts (model ids may contain ``/``)."""
    if not ref or "/" not in ref:
        return "", ""
    provider_id, model_id = ref.split("/", 1)
    return provider_id, model_id
