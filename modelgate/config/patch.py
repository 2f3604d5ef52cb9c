# -*- coding: utf-8 -*-
"""Declarative patches against the gateway configuration document.

A patch mirrors the part of the config tree it changes. When rendered with
``ConfigPatch.to_document()``:

- a key set to ``None`` deletes that key from the stored tree
- an object merges recursively into the stored tree, overriding leaves
- keys that are absent are left untouched

Builders are pure: the same intent always yields an equal patch, so a
submit can be retried safely.
"""

from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field

from ..constant import OPENAI_COMPLETIONS_API
from ..providers.errors import ParameterError
from ..providers.models import ModelCost, ModelProviderConfig, ModelSpec


class DefaultModelPatch(BaseModel):
    model_config = {"frozen": True}

    primary: str = Field(..., description="Default model as provider/model")


class AgentDefaultsPatch(BaseModel):
    model_config = {"frozen": True}

    model: DefaultModelPatch


class AgentsPatch(BaseModel):
    model_config = {"frozen": True}

    defaults: AgentDefaultsPatch


class ModelsPatch(BaseModel):
    """Patch of ``models``; a ``None`` provider entry deletes it."""

    model_config = {"frozen": True}

    mode: Literal["merge"] = "merge"
    providers: Dict[str, Optional[ModelProviderConfig]] = Field(
        default_factory=dict,
    )


class ConfigPatch(BaseModel):
    """Root of a patch; unset sections are not touched."""

    model_config = {"frozen": True}

    models: Optional[ModelsPatch] = None
    agents: Optional[AgentsPatch] = None

    def to_document(self) -> Dict[str, Any]:
        """Render the patch as the JSON document submitted for merging."""
        document: Dict[str, Any] = {}
        if self.models is not None:
            document["models"] = {
                "mode": self.models.mode,
                "providers": {
                    pid: (
                        None
                        if cfg is None
                        else cfg.model_dump(by_alias=True, exclude_none=True)
                    )
                    for pid, cfg in self.models.providers.items()
                },
            }
        if self.agents is not None:
            document["agents"] = self.agents.model_dump()
        return document


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def _require(**values: str) -> Dict[str, str]:
    """Trim every value; raise ``ParameterError`` naming the blank ones."""
    trimmed = {key: (value or "").strip() for key, value in values.items()}
    missing = [key for key, value in trimmed.items() if not value]
    if missing:
        verb = "is" if len(missing) == 1 else "are"
        raise ParameterError(f"{' and '.join(missing)} {verb} required")
    return trimmed


def _default_model_patch(provider_id: str, model_id: str) -> AgentsPatch:
    return AgentsPatch(
        defaults=AgentDefaultsPatch(
            model=DefaultModelPatch(primary=f"{provider_id}/{model_id}"),
        ),
    )


def build_provider_config(
    model_id: str,
    model_name: str,
    base_url: str,
    api_key: Optional[str],
) -> ModelProviderConfig:
    """Provider config holding a single model with minimal capabilities."""
    key = (api_key or "").strip()
    return ModelProviderConfig(
        base_url=base_url,
        api=OPENAI_COMPLETIONS_API,
        # A blank key is left out so a stored key survives an update.
        api_key=key or None,
        models=[
            ModelSpec(
                id=model_id,
                name=(model_name or "").strip() or model_id,
                reasoning=False,
                input=["text"],
                cost=ModelCost(),
            ),
        ],
    )


def build_add_or_update(
    provider_id: str,
    model_id: str,
    model_name: str,
    base_url: str,
    api_key: Optional[str],
    set_as_default: bool = False,
) -> ConfigPatch:
    """Patch that writes one provider (add or edit), optionally as default.

    ``api_key`` is stored as given (unresolved ``${VAR}`` form).
    """
    args = _require(
        providerId=provider_id,
        modelId=model_id,
        baseUrl=base_url,
    )
    pid, mid = args["providerId"], args["modelId"]
    config = build_provider_config(mid, model_name, args["baseUrl"], api_key)
    return ConfigPatch(
        models=ModelsPatch(providers={pid: config}),
        agents=_default_model_patch(pid, mid) if set_as_default else None,
    )


def build_delete(provider_id: str) -> ConfigPatch:
    """Patch that removes a provider. The default reference is kept."""
    pid = _require(providerId=provider_id)["providerId"]
    return ConfigPatch(models=ModelsPatch(providers={pid: None}))


def build_set_default(provider_id: str, model_id: str) -> ConfigPatch:
    """Patch that only points the default model at ``provider/model``."""
    args = _require(providerId=provider_id, modelId=model_id)
    return ConfigPatch(
        agents=_default_model_patch(args["providerId"], args["modelId"]),
    )
