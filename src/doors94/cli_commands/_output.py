"""Shared CLI output formatters."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from doors94.core.manifest.models import AgentManifest, AgentManifestWithSource  # noqa: TC001

console = Console()


def print_agents_table(agents: list[AgentManifestWithSource]) -> None:
    """Pretty-print agents as a table."""
    table = Table(title="Agents")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Tone")
    table.add_column("Source")
    table.add_column("Description")

    for agent in agents:
        table.add_row(
            agent.id,
            agent.name,
            agent.tone or "-",
            agent.source,
            _truncate(agent.description),
        )

    console.print(table)


def print_manifest(manifest: AgentManifest) -> None:
    """Pretty-print a single manifest."""
    console.print(f"\n[bold]{manifest.icon} {manifest.name}[/bold] ({manifest.id})")
    if manifest.description:
        console.print(f"  {manifest.description}")
    console.print(f"  Purpose: {manifest.purpose}")
    console.print(f"  Tone: {manifest.tone or '-'}")
    if manifest.rules:
        console.print("  Rules:")
        for rule in manifest.rules:
            console.print(f"    - {rule}")
    if manifest.output_style:
        console.print(f"  Output style: {manifest.output_style}")


def print_errors(errors: list[str]) -> None:
    console.print("[red]Invalid agent manifest:[/red]")
    for error in errors:
        console.print(f"  - {error}")


def _truncate(text: str, max_len: int = 60) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
