"""CLI subcommand registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all subcommands on the CLI group."""
    from doors94.cli_commands.agents import agents
    from doors94.cli_commands.prompt import prompt
    from doors94.cli_commands.serve import serve

    cli.add_command(agents)
    cli.add_command(prompt)
    cli.add_command(serve)
