"""HTTP surface of the chat gateway.

Routes:

* ``POST /api/chat``: raw or agent-mode chat with an inline manifest.
* ``POST /api/agents/{agent_id}/chat``: chat with a stored agent.
* ``GET /api/health``: liveness probe.

Errors are always ``{"error": "..."}`` bodies with a 400/404/500 status, or
the completion API's own status when it rejected the call.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from doors94 import __version__
from doors94.core.profile import Profile
from doors94.gateway.config import GatewaySettings
from doors94.gateway.models import ChatRequest, ChatResult
from doors94.gateway.service import ChatGateway

if TYPE_CHECKING:
    from doors94.core.agents.repository import AgentRepository

logger = logging.getLogger(__name__)


def _respond(result: ChatResult) -> JSONResponse:
    return JSONResponse(status_code=result.status, content=result.body())


async def _parse(request: Request) -> ChatRequest | ChatResult:
    """Decode the body into a :class:`ChatRequest`, or a 400 result."""
    try:
        payload: Any = await request.json()
    except ValueError:
        return ChatResult.failure("invalid-input", "Request body must be valid JSON")

    if not isinstance(payload, dict):
        return ChatResult.failure("invalid-input", "Request body must be a JSON object")
    if not isinstance(payload.get("messages"), list):
        return ChatResult.failure(
            "invalid-input", "messages array is required and must not be empty"
        )

    try:
        return ChatRequest.model_validate(payload)
    except ValidationError as exc:
        errors = ", ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        return ChatResult.failure("invalid-input", f"Invalid request: {errors}")


def create_app(
    settings: GatewaySettings | None = None,
    agents: AgentRepository | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Gateway configuration; read from the environment if omitted.
        agents: Repository used by the per-agent route; defaults to the
            agents of the profile in ``$DOORS94_PROFILE_DIR``.
    """
    resolved_settings = settings or GatewaySettings.from_env()
    repository = agents if agents is not None else Profile.open().agents
    gateway = ChatGateway(resolved_settings, repository)

    app = FastAPI(title="doors94", version=__version__)
    app.state.gateway = gateway

    @app.get("/api/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    @app.post("/api/chat")
    async def chat(request: Request) -> JSONResponse:
        logger.info("Chat request received")
        parsed = await _parse(request)
        if isinstance(parsed, ChatResult):
            return _respond(parsed)
        return _respond(await gateway.handle(parsed))

    @app.post("/api/agents/{agent_id}/chat")
    async def chat_with_agent(agent_id: str, request: Request) -> JSONResponse:
        logger.info("Chat request received for agent %s", agent_id)
        parsed = await _parse(request)
        if isinstance(parsed, ChatResult):
            return _respond(parsed)
        return _respond(await gateway.handle_registered(agent_id, parsed))

    return app
