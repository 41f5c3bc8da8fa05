"""
Tests d'intégration de la route /api/proxy.

Le service Puter est remplacé par httpx.MockTransport (FakePuter):
chaque test vérifie à la fois la réponse relayée et les appels sortants.
"""
import json

import httpx
import pytest

from puter_proxy.config.settings import Settings


def _post(client, path, body=None, **kwargs):
    return client.post("/api/proxy", params={"path": path}, json=body, **kwargs)


class TestInboundChecks:
    """Erreurs levées avant tout appel sortant."""

    @pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE", "PROPFIND"])
    def test_non_post_rejected(self, client, fake_puter, method):
        response = client.request(method, "/api/proxy", params={"path": "fs/readdir"})
        assert response.status_code == 405
        assert response.json() == {"error": "Method not allowed"}
        assert fake_puter.call_count == 0

    def test_cors_preflight_rejected(self, client, fake_puter):
        """Un preflight CORS est un OPTIONS comme un autre: 405."""
        response = client.options(
            "/api/proxy",
            params={"path": "fs/readdir"},
            headers={
                "Origin": "https://app.example",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert response.status_code == 405
        assert response.json() == {"error": "Method not allowed"}
        assert fake_puter.call_count == 0

    def test_missing_token(self, make_client, fake_puter):
        with make_client(Settings(puter_token="")) as client:
            response = _post(client, "fs/readdir", {"dir": "/x"})
        assert response.status_code == 500
        assert response.json() == {"error": "Puter token not configured"}
        assert fake_puter.call_count == 0

    def test_unknown_category(self, client, fake_puter):
        response = _post(client, "foo/bar", {})
        assert response.status_code == 400
        assert response.json() == {"error": "Unknown category"}
        assert fake_puter.call_count == 0

    def test_missing_path_is_unknown_category(self, client, fake_puter):
        response = client.post("/api/proxy", json={})
        assert response.status_code == 400
        assert response.json() == {"error": "Unknown category"}
        assert fake_puter.call_count == 0

    def test_unsupported_fs_method(self, client, fake_puter):
        response = _post(client, "fs/delete", {})
        assert response.status_code == 400
        assert response.json() == {"error": "Unsupported method"}
        assert fake_puter.call_count == 0

    def test_unsupported_ai_method(self, client, fake_puter):
        response = _post(client, "ai/txt2video", {})
        assert response.status_code == 400
        assert response.json() == {"error": "Unsupported method"}
        assert fake_puter.call_count == 0

    def test_invalid_json_body(self, client, fake_puter):
        response = client.post(
            "/api/proxy",
            params={"path": "kv/get"},
            content=b"{pas du json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid JSON body"}
        assert fake_puter.call_count == 0

    def test_body_too_large(self, make_client, fake_puter):
        settings = Settings(puter_token="tok", max_body_size=16)
        with make_client(settings) as client:
            response = _post(client, "kv/set", {"key": "a", "value": "x" * 64})
        assert response.status_code == 413
        assert response.json() == {"error": "Payload too large"}
        assert fake_puter.call_count == 0

    def test_chunked_body_too_large(self, make_client, fake_puter):
        """Sans Content-Length, la limite s'applique pendant la lecture."""
        def chunked_body():
            for _ in range(64):
                yield b"x" * 1024

        settings = Settings(puter_token="tok", max_body_size=16)
        with make_client(settings) as client:
            response = client.post(
                "/api/proxy",
                params={"path": "kv/set"},
                content=chunked_body(),
                headers={"Content-Type": "application/json"},
            )
        assert response.status_code == 413
        assert response.json() == {"error": "Payload too large"}
        assert fake_puter.call_count == 0


class TestForwarding:
    """Construction et envoi de l'appel sortant."""

    def test_fs_readdir_body_unmodified(self, client, fake_puter):
        response = _post(client, "fs/readdir", {"dir": "/x"})

        assert response.status_code == 200
        assert fake_puter.call_count == 1
        request = fake_puter.calls[0]
        assert request.method == "POST"
        assert str(request.url) == "https://puter.test/readdir"
        assert request.headers["Authorization"] == "Bearer test-token"
        assert request.headers["Content-Type"] == "application/json"
        assert fake_puter.last_payload() == {"dir": "/x"}

    def test_fs_write_goes_to_batch(self, client, fake_puter):
        _post(client, "fs/write", {"operations": []})
        assert fake_puter.calls[0].url.path == "/batch"

    def test_kv_get(self, client, fake_puter):
        _post(client, "kv/get", {"key": "a"})
        assert fake_puter.calls[0].url.path == "/drivers/call"
        assert fake_puter.last_payload() == {
            "interface": "puter-kvstore",
            "method": "get",
            "args": {"key": "a"},
        }

    def test_ai_txt2img(self, client, fake_puter):
        _post(client, "ai/txt2img", {"prompt": "un chat"})
        assert fake_puter.last_payload() == {
            "interface": "puter-image-generation",
            "driver": "ai-image",
            "method": "generate",
            "args": {"prompt": "un chat"},
        }

    def test_chat_completions(self, client, fake_puter, sample_messages):
        _post(client, "chat/completions", {"messages": sample_messages, "model": "gpt-4"})
        assert fake_puter.last_payload() == {
            "interface": "puter-chat-completion",
            "driver": "ai-chat",
            "method": "complete",
            "args": {"messages": sample_messages, "model": "gpt-4", "stream": False},
        }

    def test_completions_alias_default_model(self, client, fake_puter, sample_messages):
        _post(client, "completions", {"messages": sample_messages})
        args = fake_puter.last_payload()["args"]
        assert args["model"] == "gpt-4o-mini"
        assert args["stream"] is False

    def test_empty_body_defaults_to_object(self, client, fake_puter):
        client.post("/api/proxy", params={"path": "kv/list"})
        assert fake_puter.last_payload()["args"] == {}


class TestRelay:
    """Relais de la réponse Puter."""

    def test_status_and_json_relayed(self, client, fake_puter):
        fake_puter.response_factory = lambda request: httpx.Response(
            404, json={"error": {"code": "subject_does_not_exist"}}
        )
        response = _post(client, "fs/read", {"file": "/absent"})
        assert response.status_code == 404
        assert response.json() == {"error": {"code": "subject_does_not_exist"}}

    def test_network_failure(self, client, fake_puter):
        def fail(request):
            raise httpx.ConnectError("Connection refused")

        fake_puter.response_factory = fail
        response = _post(client, "kv/get", {"key": "a"})

        assert response.status_code == 500
        assert response.json() == {"error": "Proxy error", "details": "Connection refused"}
        assert fake_puter.call_count == 1

    def test_non_json_upstream_body(self, client, fake_puter):
        fake_puter.response_factory = lambda request: httpx.Response(
            502, text="<html>Bad Gateway</html>"
        )
        response = _post(client, "kv/get", {"key": "a"})
        assert response.status_code == 500
        assert response.json()["error"] == "Proxy error"
        assert response.json()["details"]

    def test_ndjson_stream_reframed_as_sse(self, client, fake_puter, sample_messages):
        chunks = [b'{"text":"Bon"}\n', b'{"text":"jour"}\n', b'{"done":true}\n']

        async def ndjson_body():
            for chunk in chunks:
                yield chunk

        fake_puter.response_factory = lambda request: httpx.Response(
            200,
            headers={"content-type": "application/x-ndjson"},
            content=ndjson_body(),
        )

        response = _post(client, "chat/completions", {"messages": sample_messages, "stream": True})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")
        assert response.headers["cache-control"] == "no-cache"
        assert response.headers["connection"] == "keep-alive"
        assert response.text == (
            'data: {"text":"Bon"}\n\n\n'
            'data: {"text":"jour"}\n\n\n'
            'data: {"done":true}\n\n\n'
        )
        assert fake_puter.last_payload()["args"]["stream"] is True

    def test_stream_requested_but_json_response(self, client, fake_puter):
        """Sans NDJSON côté Puter, la réponse est relayée en JSON."""
        fake_puter.response_factory = lambda request: httpx.Response(
            200, json={"message": {"content": "Salut"}}
        )
        response = _post(client, "chat/completions", {"messages": [], "stream": True})
        assert response.headers["content-type"] == "application/json"
        assert response.json() == {"message": {"content": "Salut"}}

    def test_ndjson_without_stream_flag_is_not_reframed(self, client, fake_puter):
        fake_puter.response_factory = lambda request: httpx.Response(
            200,
            headers={"content-type": "application/x-ndjson"},
            content=json.dumps({"text": "a"}).encode(),
        )
        response = _post(client, "ai/chat", {"messages": []})
        assert response.json() == {"text": "a"}


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "token_configured": True,
        "base_url": "https://puter.test",
    }
