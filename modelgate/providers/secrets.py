# -*- coding: utf-8 -*-
"""Resolving ``${VAR}`` placeholders in credentials, and masking them."""

from __future__ import annotations

import re
from typing import Mapping, Optional

from .errors import MissingEnvVarError

# ``$${NAME}`` escapes a placeholder, ``${NAME}`` substitutes it.
_PLACEHOLDER_RE = re.compile(r"\$(\$?)\{([A-Z_][A-Z0-9_]*)\}")


def substitute_env_vars(value: str, env: Mapping[str, str]) -> str:
    """Replace every ``${NAME}`` in *value* with ``env[NAME]``.

    Raises ``MissingEnvVarError`` for the first placeholder whose variable
    is unset or empty. Nothing is returned on failure.
    """

    def _replace(match: re.Match) -> str:
        escaped, name = match.group(1), match.group(2)
        if escaped:
            return "${" + name + "}"
        resolved = env.get(name)
        if not resolved:
            raise MissingEnvVarError(name)
        return resolved

    return _PLACEHOLDER_RE.sub(_replace, value)


def resolve_api_key(raw: Optional[str], env: Mapping[str, str]) -> str:
    """Resolve a raw credential string against *env*.

    Blank input means "no credential" and resolves to ``""``. Input without
    ``$`` is returned trimmed. Otherwise placeholders are substituted, all
    or nothing.
    """
    if not raw or not raw.strip():
        return ""
    trimmed = raw.strip()
    if "$" not in trimmed:
        return trimmed
    return substitute_env_vars(trimmed, env)


def mask_api_key(api_key: Optional[str], visible_chars: int = 4) -> str:
    """Mask an API key for safe display.

    Example: ``"sk-abcdefghijk"`` → ``"sk-*******hijk"``
    """
    if not api_key:
        return ""
    if len(api_key) <= visible_chars:
        return "*" * len(api_key)
    prefix = api_key[:3] if len(api_key) > 3 else ""
    suffix = api_key[-visible_chars:]
    hidden_len = len(api_key) - len(prefix) - visible_chars
    return f"{prefix}{'*' * max(hidden_len, 4)}{suffix}"
