"""doors94 CLI entrypoint."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from doors94 import __version__


@click.group()
@click.version_option(version=__version__, prog_name="doors94")
@click.option(
    "--profile",
    "profile_dir",
    default=None,
    type=click.Path(file_okay=False),
    envvar="DOORS94_PROFILE_DIR",
    help="Profile directory (default: ~/.doors94).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, profile_dir: str | None, verbose: bool) -> None:
    """doors94: agent manifests, compiled prompts and chat."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["profile_dir"] = Path(profile_dir) if profile_dir else None


# Register subcommands
from doors94.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
