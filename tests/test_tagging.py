"""Tests for Ollama tag generation, against a mocked HTTP transport."""

import json

import httpx
import pytest
from ollama import Client

from src.indexer.errors import EnrichmentError
from src.indexer.models import TAG_STRIP_CHARS
from src.tagging.tag_generator import (
    OllamaTagSource,
    StaticTagSource,
    check_availability,
    ensure_model_available,
    extract_tags,
)


def _client(handler) -> Client:
    return Client(host="http://ollama.test", transport=httpx.MockTransport(handler))


def _generate_ok(text: str):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"model": "gemma3:1b", "response": text, "done": True})
    return handler


class TestExtractTags:

    def test_comma_separated_with_markup(self):
        assert extract_tags("Rust, CLI, *Tool*.") == ["rust", "cli", "tool"]

    def test_newlines_and_commas(self):
        assert extract_tags("Python, Web\nAPI, (Flask)\n") == ["python", "web", "api", "flask"]

    def test_tokens_that_are_only_punctuation_dropped(self):
        assert extract_tags("..., **, [ ], rust") == ["rust"]

    def test_empty_response(self):
        assert extract_tags("") == []
        assert extract_tags("   \n ") == []

    def test_no_stripped_characters_survive(self):
        tags = extract_tags("**Machine Learning**, {data}, [ml], (ai).")
        assert tags == ["machine learning", "data", "ml", "ai"]
        for tag in tags:
            assert tag
            assert not set(tag) & set(TAG_STRIP_CHARS)


class TestOllamaTagSource:

    def test_request_shape_and_tags(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"response": "Rust, CLI, *Tool*."})

        source = OllamaTagSource(model="gemma3:1b", client=_client(handler))
        tags = source.enrich("alpha", "/projects/tools/alpha")

        assert tags == ["rust", "cli", "tool"]
        assert seen["path"] == "/api/generate"
        body = seen["body"]
        assert body["model"] == "gemma3:1b"
        assert body["stream"] is False
        assert "'alpha'" in body["prompt"]
        assert "/projects/tools/alpha" in body["prompt"]
        assert "comma-separated" in body["system"]
        assert body["options"]["temperature"] == 0.7

    def test_model_from_environment(self, monkeypatch):
        monkeypatch.setenv("PROJECTS_INDEXER_MODEL", "mistral")
        source = OllamaTagSource(client=_client(_generate_ok("x")))
        assert source.model == "mistral"

    def test_http_500_raises_enrichment_error(self):
        def handler(request):
            return httpx.Response(500, json={"error": "model crashed"})

        source = OllamaTagSource(client=_client(handler))
        with pytest.raises(EnrichmentError):
            source.enrich("alpha", "/p/alpha")

    def test_malformed_body_raises_enrichment_error(self):
        def handler(request):
            return httpx.Response(200, text="<html>not json</html>")

        source = OllamaTagSource(client=_client(handler))
        with pytest.raises(EnrichmentError):
            source.enrich("alpha", "/p/alpha")

    def test_connection_refused_raises_enrichment_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        source = OllamaTagSource(client=_client(handler))
        with pytest.raises(EnrichmentError):
            source.enrich("alpha", "/p/alpha")

    def test_single_request_no_retry(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(503, json={"error": "busy"})

        source = OllamaTagSource(client=_client(handler))
        with pytest.raises(EnrichmentError):
            source.enrich("alpha", "/p/alpha")
        assert len(calls) == 1

    def test_empty_name_rejected(self):
        source = OllamaTagSource(client=_client(_generate_ok("rust")))
        with pytest.raises(EnrichmentError):
            source.enrich("", "/p")


class TestStaticTagSource:

    def test_returns_normalized_copy(self):
        source = StaticTagSource(["Rust", " CLI. "])
        tags = source.enrich("anything", "/p")
        assert tags == ["rust", "cli"]
        tags.append("mutated")
        assert source.enrich("other", "/q") == ["rust", "cli"]


class TestSetupHelpers:

    def test_available_when_listing_succeeds(self):
        client = _client(lambda request: httpx.Response(200, json={"models": []}))
        assert check_availability(client) is True

    def test_unavailable_on_server_error(self):
        client = _client(lambda request: httpx.Response(500, json={"error": "down"}))
        assert check_availability(client) is False

    def test_unavailable_when_unreachable(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        assert check_availability(_client(handler)) is False

    def test_model_present_is_not_pulled(self):
        paths = []

        def handler(request):
            paths.append(request.url.path)
            return httpx.Response(200, json={"models": [{"model": "gemma3:1b", "name": "gemma3:1b"}]})

        assert ensure_model_available(_client(handler), "gemma3:1b") == "gemma3:1b"
        assert paths == ["/api/tags"]

    def test_latest_tag_counts_as_present(self):
        def handler(request):
            return httpx.Response(200, json={"models": [{"model": "mistral:latest", "name": "mistral:latest"}]})

        assert ensure_model_available(_client(handler), "mistral") == "mistral"

    def test_missing_model_is_pulled(self):
        paths = []

        def handler(request):
            paths.append(request.url.path)
            if request.url.path == "/api/tags":
                return httpx.Response(200, json={"models": []})
            return httpx.Response(200, json={"status": "success"})

        ensure_model_available(_client(handler), "gemma3:1b")
        assert paths == ["/api/tags", "/api/pull"]

    def test_failed_pull_raises(self):
        def handler(request):
            if request.url.path == "/api/tags":
                return httpx.Response(200, json={"models": []})
            return httpx.Response(500, json={"error": "pull failed"})

        with pytest.raises(EnrichmentError):
            ensure_model_available(_client(handler), "gemma3:1b")


def test_missing_model_not_pulled_without_permission():
    paths = []

    def handler(request):
        paths.append(request.url.path)
        return httpx.Response(200, json={"models": []})

    with pytest.raises(EnrichmentError, match="ollama pull gemma3:1b"):
        ensure_model_available(_client(handler), "gemma3:1b", pull=False)
    assert paths == ["/api/tags"]
