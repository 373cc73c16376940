"""Tests for the HTTP surface of the chat gateway."""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from doors94 import __version__
from doors94.core.agents.repository import AgentRepository
from doors94.gateway.app import create_app
from doors94.gateway.config import GatewaySettings
from doors94.gateway.service import ChatGateway
from tests.conftest import make_manifest, make_mock_litellm_response

_MESSAGES = [{"role": "user", "content": "Hello"}]


@pytest.fixture
def completion() -> Iterator[AsyncMock]:
    with patch(
        "doors94.gateway.service.litellm.acompletion",
        new_callable=AsyncMock,
        return_value=make_mock_litellm_response("Ahoy!"),
    ) as mock:
        yield mock


@pytest.fixture
def client(repo: AgentRepository) -> TestClient:
    return TestClient(create_app(GatewaySettings(api_key="sk-test"), repo))


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": __version__}

    def test_gateway_on_state(self, client: TestClient) -> None:
        assert isinstance(client.app.state.gateway, ChatGateway)  # type: ignore[attr-defined]


class TestChatRoute:
    def test_agent_mode(self, client: TestClient, completion: AsyncMock) -> None:
        response = client.post(
            "/api/chat",
            json={"agentManifest": make_manifest().to_record(), "messages": _MESSAGES},
        )
        assert response.status_code == 200
        assert response.json() == {"content": "Ahoy!"}

    def test_raw_mode(self, client: TestClient, completion: AsyncMock) -> None:
        response = client.post("/api/chat", json={"mode": "raw", "messages": _MESSAGES})
        assert response.status_code == 200
        assert completion.call_args.kwargs["messages"] == _MESSAGES

    def test_invalid_json(self, client: TestClient) -> None:
        response = client.post(
            "/api/chat", content=b"{not json", headers={"content-type": "application/json"}
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Request body must be valid JSON"}

    def test_non_utf8_body(self, client: TestClient) -> None:
        response = client.post(
            "/api/chat",
            content=b'{"messages": "\xe9"}',
            headers={"content-type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Request body must be valid JSON"}

    def test_non_object_body(self, client: TestClient) -> None:
        response = client.post("/api/chat", json=["hello"])
        assert response.status_code == 400
        assert response.json() == {"error": "Request body must be a JSON object"}

    @pytest.mark.parametrize("body", [{}, {"messages": "hi"}, {"messages": []}])
    def test_missing_messages(self, client: TestClient, body: dict[str, object]) -> None:
        response = client.post("/api/chat", json=body)
        assert response.status_code == 400
        assert response.json() == {"error": "messages array is required and must not be empty"}

    def test_bad_message_shape(self, client: TestClient) -> None:
        response = client.post("/api/chat", json={"messages": [{"role": "robot"}]})
        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid request: ")

    def test_invalid_manifest(self, client: TestClient, completion: AsyncMock) -> None:
        response = client.post(
            "/api/chat", json={"agentManifest": {"id": "X"}, "messages": _MESSAGES}
        )
        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid agent manifest: ")
        completion.assert_not_called()

    def test_missing_api_key(self, repo: AgentRepository) -> None:
        client = TestClient(create_app(GatewaySettings(), repo))
        response = client.post("/api/chat", json={"mode": "raw", "messages": _MESSAGES})
        assert response.status_code == 500
        assert response.json() == {"error": "OPENAI_API_KEY is not configured"}

    def test_upstream_status(self, client: TestClient) -> None:
        error = RuntimeError("Invalid API key")
        error.status_code = 401  # type: ignore[attr-defined]
        with patch(
            "doors94.gateway.service.litellm.acompletion",
            new_callable=AsyncMock,
            side_effect=error,
        ):
            response = client.post("/api/chat", json={"mode": "raw", "messages": _MESSAGES})
        assert response.status_code == 401
        assert response.json() == {"error": "Upstream API error: Invalid API key"}


class TestAgentRoute:
    def test_builtin_agent(self, client: TestClient, completion: AsyncMock) -> None:
        response = client.post("/api/agents/fixit/chat", json={"messages": _MESSAGES})
        assert response.status_code == 200
        assert completion.call_args.kwargs["messages"][0]["role"] == "system"

    def test_user_agent(
        self, client: TestClient, repo: AgentRepository, completion: AsyncMock
    ) -> None:
        repo.save_user_agent(make_manifest())
        response = client.post("/api/agents/pirate/chat", json={"messages": _MESSAGES})
        assert response.status_code == 200
        assert response.json() == {"content": "Ahoy!"}

    def test_unknown_agent(self, client: TestClient, completion: AsyncMock) -> None:
        response = client.post("/api/agents/ghost/chat", json={"messages": _MESSAGES})
        assert response.status_code == 404
        assert response.json() == {"error": 'Agent with id "ghost" not found'}
        completion.assert_not_called()
