# -*- coding: utf-8 -*-
"""Reading, writing and patching the gateway configuration (config.json)."""

from __future__ import annotations

import json
import logging
import threading
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..constant import get_config_path
from ..providers.errors import ConfigUnreadableError
from .document import get_default_model_ref, get_providers
from .patch import ConfigPatch

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Merge
# ---------------------------------------------------------------------------


def _is_keyed_list(items: List[Any]) -> bool:
    return bool(items) and all(
        isinstance(item, dict) and "id" in item for item in items
    )


def _merge_keyed_lists(
    target: List[Dict[str, Any]],
    patch: List[Dict[str, Any]],
) -> List[Dict[str, Any]]:
    """Merge two lists of ``{"id": ...}`` objects by id, keeping order."""
    merged = [deepcopy(item) for item in target]
    index = {item["id"]: pos for pos, item in enumerate(merged)}
    for item in patch:
        pos = index.get(item["id"])
        if pos is None:
            index[item["id"]] = len(merged)
            merged.append(deepcopy(item))
        else:
            merged[pos] = merge_patch(merged[pos], item)
    return merged


def merge_patch(target: Any, patch: Any) -> Any:
    """Apply *patch* to *target* and return the result.

    ``None`` deletes a key, objects merge recursively, lists whose items all
    carry an ``id`` merge by id, anything else replaces. Neither argument is
    mutated.
    """
    if not isinstance(patch, dict):
        if (
            isinstance(patch, list)
            and isinstance(target, list)
            and _is_keyed_list(patch)
            and _is_keyed_list(target)
        ):
            return _merge_keyed_lists(target, patch)
        return deepcopy(patch)

    result: Dict[str, Any] = (
        deepcopy(target) if isinstance(target, dict) else {}
    )
    for key, value in patch.items():
        if value is None:
            result.pop(key, None)
        else:
            result[key] = merge_patch(result.get(key), value)
    return result


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class ConfigStore:
    """JSON-file backed configuration document.

    Every mutation is load → merge → save under one lock.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else get_config_path()
        self._lock = threading.Lock()

    def load(self) -> Dict[str, Any]:
        """Load config.json; a missing file yields ``{}``.

        Raises ``ConfigUnreadableError`` when the file is not valid JSON or
        its root is not an object.
        """
        if not self.path.is_file():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                raw = json.load(fh)
        except ValueError as exc:
            logger.warning("Config %s is not valid JSON: %s", self.path, exc)
            raise ConfigUnreadableError(self.path, "invalid JSON") from exc
        if not isinstance(raw, dict):
            logger.warning("Config %s is not an object", self.path)
            raise ConfigUnreadableError(self.path, "root is not an object")
        logger.debug("Loaded config from %s", self.path)
        return raw

    def save(self, document: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as fh:
            json.dump(document, fh, indent=2, ensure_ascii=False)
        logger.debug("Saved config to %s", self.path)

    def apply_patch(
        self,
        patch: Union[ConfigPatch, Dict[str, Any]],
    ) -> Dict[str, Any]:
        """Merge *patch* into the stored document. Returns the new document.

        Nothing is written when the stored document cannot be read.
        """
        if isinstance(patch, ConfigPatch):
            patch = patch.to_document()
        with self._lock:
            document = merge_patch(self.load(), patch)
            self.save(document)
        return document

    def providers(self) -> Dict[str, Dict[str, Any]]:
        return get_providers(self.load())

    def default_model_ref(self) -> Optional[str]:
        return get_default_model_ref(self.load())
