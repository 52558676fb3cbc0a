"""Tests for the /v1/messages/translate endpoint."""

import pytest
from fastapi.testclient import TestClient

from promptbridge.config_loader import ProxyConfig
from promptbridge.main import create_app
from promptbridge.messages.translator import CONTINUATION_MARKER


@pytest.fixture()
def client():
    """Client for an app with no model override and generated signals."""
    return TestClient(create_app(ProxyConfig()))


@pytest.fixture()
def override_client():
    """Client for an app with a model override and a fixed trigger signal."""
    config = ProxyConfig(upstream_model_override="m2", trigger_signal="<<CALL_fixed>>")
    return TestClient(create_app(config))


class TestTranslateEndpoint:
    """Tests for successful translations over HTTP."""

    def test_translates_simple_request(self, client):
        """Test the minimal request comes back translated with a trigger header."""
        response = client.post(
            "/v1/messages/translate",
            json={"model": "m", "max_tokens": 100, "messages": [{"role": "user", "content": "hello"}]},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["model"] == "m"
        assert body["stream"] is True
        assert body["temperature"] == 0.2
        assert body["top_p"] == 1
        assert body["messages"] == [{"role": "user", "content": "hello" + CONTINUATION_MARKER}]
        assert response.headers["x-trigger-signal"].startswith("<<CALL_")

    def test_override_and_fixed_signal(self, override_client):
        """Test configured model override and trigger signal are applied."""
        payload = {
            "model": "m",
            "max_tokens": 100,
            "messages": [
                {"role": "user", "content": "list files"},
                {
                    "role": "assistant",
                    "content": [{"type": "tool_use", "id": "t1", "name": "ls", "input": {"path": "."}}],
                },
            ],
        }

        response = override_client.post("/v1/messages/translate", json=payload)

        assert response.status_code == 200
        body = response.json()
        assert body["model"] == "m2"
        assert response.headers["x-trigger-signal"] == "<<CALL_fixed>>"
        assert body["messages"][1]["content"].startswith("<<CALL_fixed>>\n<invoke name=\"ls\">")

    def test_malformed_blocks_degrade(self, client):
        """Test non-string block fields are translated instead of failing."""
        payload = {
            "model": "m",
            "max_tokens": 100,
            "messages": [
                "not a message",
                {
                    "role": "user",
                    "content": [
                        {"type": "tool_result", "tool_use_id": "t", "content": [{"type": "text", "text": 7}]},
                    ],
                },
            ],
        }

        response = client.post("/v1/messages/translate", json=payload)

        assert response.status_code == 200
        assert response.json()["messages"] == [
            {"role": "user", "content": "[工具调用结果 - ID: t]\n7" + CONTINUATION_MARKER},
        ]


class TestTranslateEndpointErrors:
    """Tests for rejected requests."""

    def test_missing_max_tokens_rejected(self, client):
        """Test a missing max_tokens returns an Anthropic-style 400."""
        response = client.post(
            "/v1/messages/translate",
            json={"model": "m", "messages": [{"role": "user", "content": "hello"}]},
        )

        assert response.status_code == 400
        assert response.json() == {
            "type": "error",
            "error": {
                "type": "invalid_request_error",
                "message": "max_tokens is required for Claude requests",
                "code": "invalid_max_tokens",
                "param": "max_tokens",
            },
        }

    def test_invalid_json_rejected(self, client):
        """Test an unparseable body is rejected."""
        response = client.post(
            "/v1/messages/translate",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "invalid_json"

    def test_non_object_body_rejected(self, client):
        """Test a JSON array body is rejected."""
        response = client.post("/v1/messages/translate", json=[1, 2, 3])

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "invalid_json_shape"
