"""``doors94 prompt``: compile manifests and preview personalized context."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import click
import yaml

from doors94.cli_commands._output import console, print_errors
from doors94.core.context.personalization import build_system_prompt, serialize_user_context
from doors94.core.manifest.counter import estimate_prompt_tokens
from doors94.core.manifest.models import AgentManifest
from doors94.core.manifest.validator import validate_manifest
from doors94.core.profile import Profile
from doors94.gateway.config import DEFAULT_MODEL, MAX_PROMPT_LENGTH


@click.group()
def prompt() -> None:
    """Inspect compiled system prompts."""


@prompt.command("compile")
@click.argument("source")
@click.option(
    "--with-context",
    is_flag=True,
    help="Append the profile's user context and the agent's override.",
)
@click.option("--model", default=DEFAULT_MODEL, show_default=True, help="Model for token estimate.")
@click.pass_context
def compile_cmd(ctx: click.Context, source: str, with_context: bool, model: str) -> None:
    """Compile SOURCE (a manifest file or an agent id) into a system prompt."""
    from doors94.core.manifest.loader import read_manifest_file

    profile = Profile.open(ctx.obj.get("profile_dir") if ctx.obj else None)

    path = Path(source)
    data: AgentManifest | dict[str, Any]
    if path.is_file():
        try:
            data = read_manifest_file(path)
        except (ValueError, OSError, yaml.YAMLError) as exc:
            console.print(f"[red]Could not read manifest:[/red] {exc}")
            sys.exit(1)
    else:
        agent = profile.agents.get_agent(source)
        if agent is None:
            console.print(f"[red]No manifest file or agent named {source}[/red]")
            sys.exit(1)
        data = agent.manifest()

    validation = validate_manifest(data)
    if not validation.valid:
        print_errors(validation.errors)
        sys.exit(1)
    manifest = AgentManifest.model_validate(data)

    if with_context:
        text = build_system_prompt(
            manifest, profile.user_context.get(), profile.overrides.get(manifest.id)
        )
    else:
        text = build_system_prompt(manifest)

    click.echo(text)
    tokens = estimate_prompt_tokens(text, model)
    console.print(f"\n[dim]{len(text)} chars, ~{tokens} tokens[/dim]")
    if len(text) > MAX_PROMPT_LENGTH:
        console.print(
            f"[yellow]Prompt exceeds the {MAX_PROMPT_LENGTH}-character gateway limit.[/yellow]"
        )


@prompt.command("context")
@click.option("--agent", "agent_id", default=None, help="Agent id to tailor the context for.")
@click.pass_context
def context_cmd(ctx: click.Context, agent_id: str | None) -> None:
    """Show the user context paragraph an agent would receive."""
    profile = Profile.open(ctx.obj.get("profile_dir") if ctx.obj else None)
    text = serialize_user_context(profile.user_context.get(), agent_id)
    if not text:
        console.print("[yellow]No user context saved.[/yellow]")
        return
    click.echo(text)
