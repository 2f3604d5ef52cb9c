# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv

from ..config.store import ConfigStore
from ..constant import ENV_FILE, LOG_LEVEL_ENV, WORKING_DIR
from .models_cmd import models_group


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to config.json (default: working dir)",
)
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(
        ["debug", "info", "warning", "error"],
        case_sensitive=False,
    ),
    help=f"Log level (default: ${LOG_LEVEL_ENV} or info)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[Path],
    log_level: Optional[str],
) -> None:
    """Manage the gateway's model providers."""
    level = (log_level or os.environ.get(LOG_LEVEL_ENV, "info")).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # API keys may reference ${VAR}s defined in the working dir's .env.
    env_path = WORKING_DIR / ENV_FILE
    if env_path.is_file():
        load_dotenv(env_path)
    ctx.ensure_object(dict)
    if config_path is not None or "store" not in ctx.obj:
        ctx.obj["store"] = ConfigStore(config_path)


cli.add_command(models_group)


if __name__ == "__main__":
    cli()
