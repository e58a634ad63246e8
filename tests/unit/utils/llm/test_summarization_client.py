"""Tests for the summarization client (HTTP mocked with httpx.MockTransport)."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

import httpx
import pytest

from mindvault.models import AIAnalysis, AnalysisFallback
from mindvault.utils.llm.client import SummarizationClient, build_prompt, interpret_reply
from mindvault.utils.llm.config import DeepSeekConfig


def _completion(content: Any) -> dict[str, Any]:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def _client(
    handler: Callable[[httpx.Request], httpx.Response],
    api_key: str = "sk-test",
) -> SummarizationClient:
    config = DeepSeekConfig(api_key=api_key, base_url="https://llm.example/")
    return SummarizationClient(
        config, http_client=httpx.Client(transport=httpx.MockTransport(handler))
    )


class TestNoCredential:
    """Without an API key, no request is made."""

    def test_local_placeholder(self):
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json=_completion("{}"))

        result = _client(handler, api_key="").analyze("My Title", "body", "VIDEO")

        assert isinstance(result, AnalysisFallback)
        assert result.reason == "missing_credential"
        assert "My Title" in result.summary
        assert "VIDEO" in result.summary
        assert result.suggested_tags == ["no-ai", "local-summary", "My Title"]
        assert calls == []

    def test_placeholder_is_deterministic(self):
        client = SummarizationClient(DeepSeekConfig(api_key="  "))

        first = client.analyze("T", "", "AUDIO")
        second = client.analyze("T", "", "AUDIO")

        assert first == second
        assert not client.configured

    def test_empty_title_uses_uncategorized_tag(self):
        client = SummarizationClient(DeepSeekConfig())

        assert client.analyze("", "", "ARTICLE").suggested_tags[-1] == "uncategorized"

    def test_keyless_run_logs_below_warning(self, caplog):
        caplog.set_level(logging.WARNING)

        SummarizationClient(DeepSeekConfig()).analyze("T", "", "ARTICLE")

        assert caplog.records == []


class TestRequest:
    """Shape of the outgoing request."""

    def test_request_shape(self):
        seen: dict[str, Any] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=_completion('{"summary": "s", "tags": ["t"]}'))

        _client(handler).analyze("Title", "Some content", "ARTICLE")

        assert seen["url"] == "https://llm.example/chat/completions"
        assert seen["auth"] == "Bearer sk-test"
        body = seen["body"]
        assert body["model"] == "deepseek-chat"
        assert body["stream"] is False
        assert [m["role"] for m in body["messages"]] == ["system", "user"]
        assert "Some content" in body["messages"][1]["content"]

    def test_prompt_placeholders(self):
        prompt = build_prompt("", "", "TWEET")

        assert "Title: Untitled" in prompt
        assert "Type: TWEET" in prompt
        assert "no body text" in prompt
        assert '"summary"' in prompt

    def test_prompt_is_truncated(self):
        assert len(build_prompt("t", "x" * 20000, "ARTICLE")) == 8000


class TestSuccess:
    """Parsing of successful replies."""

    def test_json_reply(self):
        reply = '{"summary": "A short summary.", "tags": ["react", "rsc"]}'
        result = _client(lambda r: httpx.Response(200, json=_completion(reply))).analyze(
            "T", "c", "ARTICLE"
        )

        assert isinstance(result, AIAnalysis)
        assert result.summary == "A short summary."
        assert result.suggested_tags == ["react", "rsc"]
        assert result.is_fallback is False

    def test_fenced_json_reply(self):
        reply = '```json\n{"summary": "Fenced.", "tags": ["a"]}\n```'
        result = _client(lambda r: httpx.Response(200, json=_completion(reply))).analyze(
            "T", "c", "ARTICLE"
        )

        assert result.summary == "Fenced."
        assert result.suggested_tags == ["a"]

    def test_unparseable_reply_becomes_summary(self):
        result = interpret_reply("  Just prose, no JSON.  ", "T", "VIDEO")

        assert result.summary == "Just prose, no JSON."
        assert result.suggested_tags == ["DeepSeek", "VIDEO", "T"]

    def test_non_list_tags_use_markers(self):
        result = interpret_reply('{"summary": "S", "tags": "a,b"}', "", "AUDIO")

        assert result.summary == "S"
        assert result.suggested_tags == ["DeepSeek", "AUDIO", "uncategorized"]

    def test_missing_summary_uses_raw_text(self):
        raw = '{"tags": ["x"]}'

        assert interpret_reply(raw, "T", "ARTICLE").summary == raw


class TestFailures:
    """Every failure becomes a fallback result; nothing raises."""

    def test_non_success_status(self, caplog):
        result = _client(lambda r: httpx.Response(401, text="bad key")).analyze(
            "Title", "c", "ARTICLE"
        )

        assert isinstance(result, AnalysisFallback)
        assert result.reason == "http_status"
        assert result.suggested_tags == ["ai-error", "DeepSeek", "Title"]
        assert "Title" in result.summary
        assert "401" in caplog.text
        assert "bad key" in caplog.text

    @pytest.mark.parametrize(
        "payload",
        [{}, {"choices": []}, _completion(None), _completion(""), _completion(3)],
    )
    def test_empty_content(self, payload):
        result = _client(lambda r: httpx.Response(200, json=payload)).analyze(
            "T", "c", "ARTICLE"
        )

        assert isinstance(result, AnalysisFallback)
        assert result.reason == "empty_response"

    def test_non_json_body(self):
        result = _client(lambda r: httpx.Response(200, text="<html>")).analyze(
            "T", "c", "ARTICLE"
        )

        assert result.reason == "empty_response"

    def test_network_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        result = _client(handler).analyze("T", "c", "ARTICLE")

        assert isinstance(result, AnalysisFallback)
        assert result.reason == "network_error"

    def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        assert _client(handler).analyze("T", "c", "ARTICLE").reason == "network_error"

    def test_non_ascii_key_is_contained(self):
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json=_completion("{}"))

        result = _client(handler, api_key="sk-\u00e912").analyze("T", "c", "ARTICLE")

        assert isinstance(result, AnalysisFallback)
        assert result.reason == "network_error"
        assert calls == []


class TestAsync:
    """Async variant behaves like the sync one."""

    @pytest.mark.asyncio
    async def test_async_success(self):
        reply = '{"summary": "Async.", "tags": ["a"]}'
        transport = httpx.MockTransport(
            lambda r: httpx.Response(200, json=_completion(reply))
        )
        client = SummarizationClient(
            DeepSeekConfig(api_key="k"),
            async_http_client=httpx.AsyncClient(transport=transport),
        )

        result = await client.analyze_async("T", "c", "ARTICLE")
        await client.aclose()

        assert isinstance(result, AIAnalysis)
        assert result.summary == "Async."

    @pytest.mark.asyncio
    async def test_async_status_error(self):
        transport = httpx.MockTransport(lambda r: httpx.Response(500, text="boom"))
        client = SummarizationClient(
            DeepSeekConfig(api_key="k"),
            async_http_client=httpx.AsyncClient(transport=transport),
        )

        result = await client.analyze_async("T", "c", "ARTICLE")
        await client.aclose()

        assert result.reason == "http_status"

    @pytest.mark.asyncio
    async def test_async_without_key(self):
        result = await SummarizationClient(DeepSeekConfig()).analyze_async(
            "T", "", "ARTICLE"
        )

        assert result.reason == "missing_credential"

    @pytest.mark.asyncio
    async def test_async_non_ascii_key_is_contained(self):
        transport = httpx.MockTransport(lambda r: httpx.Response(200, json={}))
        client = SummarizationClient(
            DeepSeekConfig(api_key="sk-\u201ckey\u201d"),
            async_http_client=httpx.AsyncClient(transport=transport),
        )

        result = await client.analyze_async("T", "c", "ARTICLE")
        await client.aclose()

        assert result.reason == "network_error"
