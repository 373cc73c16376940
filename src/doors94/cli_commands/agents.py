"""``doors94 agents``: list, inspect and manage agents in a profile."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click
import yaml

from doors94.cli_commands._output import console, print_agents_table, print_errors, print_manifest
from doors94.core.manifest.models import AgentManifest
from doors94.core.manifest.validator import validate_manifest
from doors94.core.profile import Profile
from doors94.errors import Doors94Error, ManifestValidationError


def _profile(ctx: click.Context) -> Profile:
    return Profile.open(ctx.obj.get("profile_dir") if ctx.obj else None)


@click.group()
def agents() -> None:
    """Manage built-in and user agents."""


@agents.command("list")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format.",
)
@click.pass_context
def list_agents(ctx: click.Context, fmt: str) -> None:
    """List all agents: built-ins first, then user agents by name."""
    profile = _profile(ctx)
    all_agents = profile.agents.get_all_agents()

    if fmt == "json":
        data = [agent.model_dump(mode="json", by_alias=True) for agent in all_agents]
        console.print_json(json.dumps(data))
        return

    print_agents_table(all_agents)
    console.print(f"{profile.agents.remaining_slots()} user agent slot(s) remaining.")


@agents.command("show")
@click.argument("agent_id")
@click.pass_context
def show_agent(ctx: click.Context, agent_id: str) -> None:
    """Show one agent's manifest."""
    agent = _profile(ctx).agents.get_agent(agent_id)
    if agent is None:
        console.print(f"[red]Agent not found: {agent_id}[/red]")
        sys.exit(1)
    print_manifest(agent)


@agents.command("add")
@click.argument("path", type=click.Path(exists=True))
@click.pass_context
def add_agents(ctx: click.Context, path: str) -> None:
    """Save the manifest(s) in PATH (a YAML/JSON file or a directory) as user agents."""
    from doors94.core.manifest.loader import manifest_paths, read_manifest_file

    source = Path(path)
    paths = manifest_paths(source) if source.is_dir() else [source]
    if not paths:
        console.print("[yellow]No agent manifests found.[/yellow]")
        return

    repository = _profile(ctx).agents
    failed = False
    for manifest_path in paths:
        try:
            data = read_manifest_file(manifest_path)
        except (ValueError, OSError, yaml.YAMLError) as exc:
            console.print(f"[red]Could not read manifest {manifest_path.name}:[/red] {exc}")
            failed = True
            continue

        validation = validate_manifest(data)
        if not validation.valid:
            console.print(f"{manifest_path.name}:")
            print_errors(validation.errors)
            failed = True
            continue

        manifest = AgentManifest.model_validate(data)
        try:
            repository.save_user_agent(manifest)
        except ManifestValidationError as exc:
            print_errors(exc.errors)
            failed = True
        except Doors94Error as exc:
            console.print(f"[red]{exc}[/red]")
            failed = True
        else:
            console.print(f"[green]Saved agent {manifest.id}.[/green]")

    if failed:
        sys.exit(1)


@agents.command("delete")
@click.argument("agent_id")
@click.pass_context
def delete_agent(ctx: click.Context, agent_id: str) -> None:
    """Delete a user agent."""
    try:
        _profile(ctx).agents.delete_user_agent(agent_id)
    except Doors94Error as exc:
        console.print(f"[red]{exc}[/red]")
        sys.exit(1)
    console.print(f"Deleted agent {agent_id}.")


@agents.command("duplicate")
@click.argument("agent_id")
@click.pass_context
def duplicate_agent(ctx: click.Context, agent_id: str) -> None:
    """Copy a user agent under a fresh id and name."""
    try:
        copy = _profile(ctx).agents.duplicate_user_agent(agent_id)
    except Doors94Error as exc:
        console.print(f"[red]{exc}[/red]")
        sys.exit(1)
    console.print(f"[green]Created {copy.id} ({copy.name}).[/green]")
