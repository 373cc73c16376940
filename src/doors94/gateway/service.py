"""ChatGateway: the only network-facing piece of doors94.

Accepts a raw-mode or agent-mode :class:`ChatRequest`, validates it,
compiles the agent's system prompt and forwards the conversation to the
completion API via LiteLLM.  Every call resolves to a :class:`ChatResult`;
nothing is retried automatically.

Usage::

    gateway = ChatGateway(GatewaySettings.from_env())
    result = await gateway.handle(ChatRequest(messages=[...], mode="raw"))
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import litellm

from doors94.core.manifest.compiler import compile_prompt
from doors94.core.manifest.models import AgentManifest
from doors94.core.manifest.validator import validate_manifest
from doors94.errors import (
    ConfigError,
    Doors94Error,
    EmptyResponseError,
    InvalidRequestError,
    ManifestValidationError,
    NotFoundError,
    UpstreamError,
)
from doors94.gateway.models import ChatMessage, ChatRequest, ChatResult
from doors94.utils.telemetry import (
    ATTR_AGENT_ID,
    ATTR_ERROR_KIND,
    ATTR_MESSAGE_COUNT,
    ATTR_MODE,
    ATTR_MODEL,
    ATTR_PROMPT_CHARS,
    ATTR_PROVIDER,
    ATTR_UPSTREAM_STATUS,
    get_tracer,
)

if TYPE_CHECKING:
    from doors94.core.agents.repository import AgentRepository
    from doors94.gateway.config import GatewaySettings

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


def _to_result(exc: Doors94Error) -> ChatResult:
    if isinstance(exc, (InvalidRequestError, ManifestValidationError)):
        return ChatResult.failure("invalid-input", str(exc))
    if isinstance(exc, ConfigError):
        return ChatResult.failure("missing-config", str(exc))
    if isinstance(exc, NotFoundError):
        return ChatResult.failure("not-found", str(exc))
    if isinstance(exc, UpstreamError):
        return ChatResult.failure("upstream-error", str(exc), status=exc.status, code=exc.code)
    if isinstance(exc, EmptyResponseError):
        return ChatResult.failure("empty-response", str(exc))
    return ChatResult.failure("internal-error", str(exc))


class ChatGateway:
    """Validate chat requests and forward them to the completion API.

    Instances hold only immutable configuration, so one gateway can serve
    any number of concurrent requests.
    """

    def __init__(self, settings: GatewaySettings, agents: AgentRepository | None = None) -> None:
        self.settings = settings
        self.agents = agents

    # ------------------------------------------------------------------
    # Public entry points
    # ------------------------------------------------------------------

    async def handle(self, request: ChatRequest) -> ChatResult:
        """Run one chat turn and return the assistant text or an error."""
        with _tracer.start_as_current_span("gateway.chat") as span:
            span.set_attribute(ATTR_MODE, request.mode)
            span.set_attribute(ATTR_MESSAGE_COUNT, len(request.messages))
            try:
                system_prompt = self._prepare(request)
                if system_prompt is not None:
                    span.set_attribute(ATTR_PROMPT_CHARS, len(system_prompt))
                content = await self._complete(system_prompt, request.messages)
            except Doors94Error as exc:
                result = _to_result(exc)
                span.set_attribute(ATTR_ERROR_KIND, result.kind or "")
                logger.warning("Chat request failed (%s): %s", result.kind, exc)
                return result
            except Exception as exc:
                logger.exception("Unexpected chat gateway failure")
                span.set_attribute(ATTR_ERROR_KIND, "internal-error")
                return ChatResult.failure(
                    "internal-error", str(exc) or "An unexpected error occurred"
                )
            return ChatResult.success(content)

    async def handle_registered(self, agent_id: str, request: ChatRequest) -> ChatResult:
        """Chat with a stored agent, looked up by id in the repository."""
        with _tracer.start_as_current_span("gateway.chat_registered") as span:
            span.set_attribute(ATTR_AGENT_ID, agent_id)
            agent = self.agents.get_agent(agent_id) if self.agents is not None else None
            if agent is None:
                result = _to_result(NotFoundError("agent", agent_id))
                logger.warning("Chat request for unknown agent %s", agent_id)
                return result
            resolved = request.model_copy(
                update={"agent_manifest": agent.manifest().to_record(), "mode": "agent"}
            )
            return await self.handle(resolved)

    async def compare(
        self, raw_request: ChatRequest, agent_request: ChatRequest
    ) -> tuple[ChatResult, ChatResult]:
        """Run a raw-mode and an agent-mode request side by side.

        The two calls are independent: a failure in one never affects the
        other's result.
        """
        raw, agent = await asyncio.gather(self.handle(raw_request), self.handle(agent_request))
        return raw, agent

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _prepare(self, request: ChatRequest) -> str | None:
        """Validate *request* and return the system prompt (``None`` in raw mode)."""
        if not request.messages:
            msg = "messages array is required and must not be empty"
            raise InvalidRequestError(msg)

        if not self.settings.api_key:
            msg = "OPENAI_API_KEY is not configured"
            raise ConfigError(msg)

        if request.mode == "raw":
            return None

        if request.agent_manifest is None:
            msg = 'agentManifest is required when mode is not "raw"'
            raise InvalidRequestError(msg)

        validation = validate_manifest(request.agent_manifest)
        if not validation.valid:
            raise ManifestValidationError(validation.errors)

        manifest = AgentManifest.model_validate(request.agent_manifest)
        prompt = compile_prompt(manifest)
        limit = self.settings.max_prompt_length
        if len(prompt) > limit:
            msg = (
                f"System prompt too long ({len(prompt)} chars, max {limit}). "
                "Please reduce agent manifest fields."
            )
            raise InvalidRequestError(msg)

        extras = [
            text.strip()
            for text in (request.user_context, request.agent_override)
            if text and text.strip()
        ]
        return "\n\n".join([prompt, *extras])

    def _build_messages(
        self, system_prompt: str | None, messages: list[ChatMessage]
    ) -> list[dict[str, Any]]:
        """Prepend the system prompt; drop any system messages from the client."""
        payload: list[dict[str, Any]] = []
        if system_prompt:
            payload.append({"role": "system", "content": system_prompt})
        payload.extend(
            {"role": m.role, "content": m.content} for m in messages if m.role != "system"
        )
        return payload

    async def _complete(self, system_prompt: str | None, messages: list[ChatMessage]) -> str:
        """Call the completion API and return the assistant text."""
        with _tracer.start_as_current_span("gateway.completion") as span:
            span.set_attribute(ATTR_MODEL, self.settings.model)
            span.set_attribute(ATTR_PROVIDER, self.settings.provider)

            call_kwargs: dict[str, Any] = {
                "model": self.settings.model,
                "messages": self._build_messages(system_prompt, messages),
                "temperature": self.settings.temperature,
                "api_key": self.settings.api_key,
            }
            if self.settings.api_base:
                call_kwargs["api_base"] = self.settings.api_base

            logger.debug(
                "Calling %s with %d messages", self.settings.model, len(call_kwargs["messages"])
            )
            try:
                response = await litellm.acompletion(**call_kwargs)  # pyright: ignore[reportUnknownMemberType]
            except Exception as exc:
                status = getattr(exc, "status_code", None)
                code = getattr(exc, "code", None)
                span.set_attribute(ATTR_UPSTREAM_STATUS, status if isinstance(status, int) else 500)
                raise UpstreamError(
                    f"Upstream API error: {exc}",
                    status=status if isinstance(status, int) else 500,
                    code=str(code) if code is not None else None,
                ) from exc

            choices = getattr(response, "choices", None) or []
            content = choices[0].message.content if choices else None
            if not content:
                msg = "No response from the completion API"
                raise EmptyResponseError(msg)
            return str(content)
