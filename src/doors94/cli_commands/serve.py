"""``doors94 serve``: run the chat gateway over HTTP."""

from __future__ import annotations

import click

from doors94.cli_commands._output import console


@click.command()
@click.option("--host", default="127.0.0.1", show_default=True, help="Interface to bind.")
@click.option("--port", default=8000, show_default=True, type=int, help="Port to listen on.")
@click.option("--telemetry", is_flag=True, help="Export OpenTelemetry spans to the console.")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, telemetry: bool) -> None:
    """Serve POST /api/chat backed by the configured completion API."""
    import uvicorn

    from doors94.core.profile import Profile
    from doors94.gateway.app import create_app
    from doors94.gateway.config import GatewaySettings

    settings = GatewaySettings.from_env()
    if not settings.api_key:
        console.print("[yellow]OPENAI_API_KEY is not set; chat requests will fail.[/yellow]")

    if telemetry:
        from doors94.utils.telemetry import configure_telemetry

        configure_telemetry()

    profile = Profile.open(ctx.obj.get("profile_dir") if ctx.obj else None)
    app = create_app(settings, profile.agents)
    uvicorn.run(app, host=host, port=port)
