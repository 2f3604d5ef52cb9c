# -*- coding: utf-8 -*-
import os
from pathlib import Path

WORKING_DIR = (
    Path(os.environ.get("MODELGATE_WORKING_DIR", "~/.modelgate"))
    .expanduser()
    .resolve()
)

CONFIG_FILE = os.environ.get("MODELGATE_CONFIG_FILE", "config.json")

ENV_FILE = os.environ.get("MODELGATE_ENV_FILE", ".env")

# Env key for app log level (used by CLI and app load).
LOG_LEVEL_ENV = "MODELGATE_LOG_LEVEL"

# When True, expose /docs, /redoc, /openapi.json
# (dev only; keep False in prod).
DOCS_ENABLED = os.environ.get("MODELGATE_OPENAPI_DOCS", "false").lower() in (
    "true",
    "1",
    "yes",
)

# ---------------------------------------------------------------------------
# Provider validation probe
# ---------------------------------------------------------------------------

VALIDATE_TIMEOUT_SECONDS = 15.0

PROBE_PROMPT = "Reply with OK."
PROBE_MAX_TOKENS = 16
PROBE_TEMPERATURE = 0

# Only providers speaking the OpenAI chat-completions protocol are authored.
OPENAI_COMPLETIONS_API = "openai-completions"

# Capabilities written for a newly added model: unknown, so assume the
# minimum and a generous window.
DEFAULT_CONTEXT_WINDOW = 200000
DEFAULT_MAX_TOKENS = 8192


def get_config_path() -> Path:
    """Return the config.json path (absolute or relative to WORKING_DIR)."""
    path = Path(CONFIG_FILE).expanduser()
    if path.is_absolute():
        return path
    return WORKING_DIR / path
