# -*- coding: utf-8 -*-
"""CLI commands for managing model providers."""
from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

import click

from ..config.manager import ProviderManager
from ..config.store import ConfigStore
from ..providers import (
    ConfigUnreadableError,
    ModelGateError,
    ProviderValidationError,
    validate_model_provider,
)


def _manager(ctx: click.Context) -> ProviderManager:
    store = (ctx.obj or {}).get("store") or ConfigStore()
    return ProviderManager(store=store)


def _fail(message: str) -> None:
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    raise SystemExit(1)


def _stored_providers(manager: ProviderManager) -> Dict[str, Dict[str, Any]]:
    try:
        return manager.store.providers()
    except ConfigUnreadableError as exc:
        _fail(str(exc))


def _prompt_api_key(current_set: bool) -> str:
    """Hidden prompt; blank means no key (or keep the stored one)."""
    return click.prompt(
        "API key (optional, may use ${VAR})",
        default="",
        hide_input=True,
        show_default=False,
        prompt_suffix=f" [{'set' if current_set else 'not set'}]: ",
    ).strip()


@click.group("models")
def models_group() -> None:
    """Manage model providers and the default model."""


# ---------------------------------------------------------------------------
# list
# ---------------------------------------------------------------------------


@models_group.command("list")
@click.pass_context
def list_cmd(ctx: click.Context) -> None:
    """Show all configured providers and the default model."""
    manager = _manager(ctx)
    try:
        entries = manager.list_providers()
    except ConfigUnreadableError as exc:
        _fail(str(exc))

    click.echo("\n=== Providers ===")
    if not entries:
        click.echo("  (none configured)")
    for entry in entries:
        click.echo(f"\n{'─' * 44}")
        click.echo(f"  {entry.id}")
        click.echo(f"{'─' * 44}")
        click.echo(f"  {'base_url':16s}: {entry.base_url}")
        click.echo(
            f"  {'api_key':16s}: {entry.current_api_key or '(not set)'}",
        )
        for model in entry.models:
            mark = " (default)" if model.id == entry.default_model else ""
            click.echo(f"  {'model':16s}: {model.id} — {model.name}{mark}")

    click.echo(f"\n{'═' * 44}")
    ref = manager.get_default_model_ref()
    click.echo(f"  {'Default model':16s}: {ref or '(not configured)'}")
    click.echo()


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------


@models_group.command("validate")
@click.option("--base-url", required=True, help="OpenAI-compatible base URL")
@click.option("--model-id", required=True, help="Model identifier")
@click.option("--api-key", default=None, help="API key (may use ${VAR})")
def validate_cmd(
    base_url: str,
    model_id: str,
    api_key: Optional[str],
) -> None:
    """Probe a provider without saving anything."""
    outcome = asyncio.run(
        validate_model_provider(base_url, model_id, api_key),
    )
    if not outcome.ok:
        _fail(outcome.reason or "validation failed")
    click.echo(f"✓ {base_url} answered for model {model_id}")


# ---------------------------------------------------------------------------
# add / edit
# ---------------------------------------------------------------------------


@models_group.command("add")
@click.argument("provider_id")
@click.option("--model-id", required=True, help="Model identifier")
@click.option("--base-url", required=True, help="OpenAI-compatible base URL")
@click.option("--model-name", default="", help="Display name")
@click.option("--api-key", default=None, help="API key (may use ${VAR})")
@click.option(
    "--default",
    "set_as_default",
    is_flag=True,
    help="Also make this the default model",
)
@click.pass_context
def add_cmd(
    ctx: click.Context,
    provider_id: str,
    model_id: str,
    base_url: str,
    model_name: str,
    api_key: Optional[str],
    set_as_default: bool,
) -> None:
    """Validate and add a provider."""
    manager = _manager(ctx)
    if provider_id.strip() in _stored_providers(manager):
        _fail(f"provider '{provider_id}' already exists, use 'edit'")
    if api_key is None:
        api_key = _prompt_api_key(current_set=False)
    click.echo("Validating provider...")
    try:
        asyncio.run(
            manager.add_provider(
                provider_id,
                model_id,
                base_url,
                model_name=model_name,
                api_key=api_key,
                set_as_default=set_as_default,
            ),
        )
    except ProviderValidationError as exc:
        _fail(f"validation failed: {exc}")
    except ModelGateError as exc:
        _fail(str(exc))
    click.echo(f"✓ Added {provider_id.strip()} / {model_id.strip()}")


@models_group.command("edit")
@click.argument("provider_id")
@click.option("--model-id", default=None, help="Model identifier")
@click.option("--base-url", default=None, help="OpenAI-compatible base URL")
@click.option("--model-name", default=None, help="Display name")
@click.option(
    "--api-key",
    default=None,
    help="New API key; leave blank to keep the stored one",
)
@click.option(
    "--default",
    "set_as_default",
    is_flag=True,
    help="Also make this the default model",
)
@click.pass_context
def edit_cmd(
    ctx: click.Context,
    provider_id: str,
    model_id: Optional[str],
    base_url: Optional[str],
    model_name: Optional[str],
    api_key: Optional[str],
    set_as_default: bool,
) -> None:
    """Validate and rewrite an existing provider.

    Options that are left out keep their stored values.
    """
    manager = _manager(ctx)
    current = _stored_providers(manager).get(provider_id.strip())
    if current is None:
        _fail(f"provider '{provider_id}' not found")
    models = current.get("models") or [{}]
    if model_id is None:
        model_id = models[0].get("id", "")
    if model_name is None:
        model_name = next(
            (
                m.get("name") or ""
                for m in models
                if isinstance(m, dict) and m.get("id") == model_id.strip()
            ),
            "",
        )
    if base_url is None:
        base_url = current.get("baseUrl", "")
    if api_key is None:
        api_key = _prompt_api_key(current_set=bool(current.get("apiKey")))

    click.echo("Validating provider...")
    try:
        asyncio.run(
            manager.update_provider(
                provider_id,
                model_id,
                base_url,
                model_name=model_name,
                api_key=api_key,
                set_as_default=set_as_default,
            ),
        )
    except ProviderValidationError as exc:
        _fail(f"validation failed: {exc}")
    except ModelGateError as exc:
        _fail(str(exc))
    click.echo(f"✓ Updated {provider_id.strip()} / {model_id.strip()}")


# ---------------------------------------------------------------------------
# delete / set-default
# ---------------------------------------------------------------------------


@models_group.command("delete")
@click.argument("provider_id")
@click.option("--yes", "-y", is_flag=True, help="Do not ask to confirm")
@click.pass_context
def delete_cmd(ctx: click.Context, provider_id: str, yes: bool) -> None:
    """Delete a provider (the default model reference is kept)."""
    manager = _manager(ctx)
    if provider_id.strip() not in _stored_providers(manager):
        _fail(f"provider '{provider_id}' not found")
    if not yes and not click.confirm(
        f"Delete provider '{provider_id}'?",
        default=False,
    ):
        click.echo("Aborted.")
        return
    manager.delete_provider(provider_id)
    click.echo(f"✓ Deleted {provider_id.strip()}")
    ref = manager.get_default_model_ref()
    if ref and ref.split("/", 1)[0] == provider_id.strip():
        click.echo(
            click.style(
                f"Note: default model still points at {ref}.",
                fg="yellow",
            ),
        )


@models_group.command("set-default")
@click.argument("provider_id")
@click.argument("model_id")
@click.pass_context
def set_default_cmd(
    ctx: click.Context,
    provider_id: str,
    model_id: str,
) -> None:
    """Make PROVIDER_ID/MODEL_ID the default model."""
    manager = _manager(ctx)
    try:
        manager.set_default_model(provider_id, model_id)
    except ModelGateError as exc:
        _fail(str(exc))
    click.echo(f"✓ Default model: {manager.get_default_model_ref()}")
