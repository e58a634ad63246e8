"""Summarization client for an OpenAI-style chat-completion endpoint.

``analyze`` never raises: every failure (missing key, error status, empty
reply, transport error) is turned into an ``AnalysisFallback`` so that
saving a resource never depends on the remote service.
"""

import logging
from typing import Any, Optional

import httpx

from mindvault.models import AIAnalysis, AnalysisFallback, AnalysisOutcome
from mindvault.models.resource import FallbackReason

from .config import DeepSeekConfig, load_config
from .constants import (
    CHAT_COMPLETIONS_PATH,
    ERROR_TAGS,
    HTTP_KEEPALIVE_TIMEOUT,
    HTTP_MAX_CONNECTIONS,
    LOCAL_SUMMARY_TAGS,
    MAX_PROMPT_LENGTH,
    SERVICE_NAME,
    SYSTEM_PROMPT,
    UNCATEGORIZED_TAG,
    UNTITLED_MARKER,
)
from .json_parser import extract_message_content, parse_json_response

logger = logging.getLogger(__name__)

# A key with non-ASCII characters cannot be sent as a header value
_REQUEST_ERRORS = (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError)

_ANALYSIS_PROMPT = """You are an assistant that helps me organize a personal knowledge base.
Read the content I provide and produce:
1) a concise summary of 2-4 sentences;
2) 3-6 tags that are useful for search (no explanations).

Return strictly the JSON format below (no extra text):
{{
  "summary": "The summary goes here...",
  "tags": ["tag1", "tag2", "tag3"]
}}

Title: {title}
Type: {type}
Content: {content}"""

_NO_CONTENT = "(The user gave no body text, only a title and a short description.)"


def build_prompt(title: str, content: str, resource_type: str) -> str:
    """Fill the analysis prompt, truncated to MAX_PROMPT_LENGTH."""
    prompt = _ANALYSIS_PROMPT.format(
        title=title or UNTITLED_MARKER,
        type=resource_type,
        content=content or _NO_CONTENT,
    )
    return prompt[:MAX_PROMPT_LENGTH]


def local_fallback(title: str, resource_type: str) -> AnalysisFallback:
    """Deterministic placeholder used when no API key is configured."""
    return AnalysisFallback(
        summary=(
            f'(Local placeholder summary) "{title}", type: {resource_type}. '
            "Set MINDVAULT_DEEPSEEK_API_KEY or add an api_key to "
            "~/.mindvault/config.toml to enable AI summaries."
        ),
        suggested_tags=[*LOCAL_SUMMARY_TAGS, title or UNCATEGORIZED_TAG],
        reason="missing_credential",
    )


def error_fallback(title: str, reason: FallbackReason) -> AnalysisFallback:
    """Placeholder used when the remote call produced no usable answer."""
    return AnalysisFallback(
        summary=(
            f'({SERVICE_NAME} call failed) Could not generate a summary for "{title}". '
            "Please try again later."
        ),
        suggested_tags=[*ERROR_TAGS, title or UNCATEGORIZED_TAG],
        reason=reason,
    )


def interpret_reply(raw_content: str, title: str, resource_type: str) -> AIAnalysis:
    """Turn the model's message text into an analysis.

    Unparseable replies become the summary verbatim. When the model offers
    no usable tags, marker tags naming the service, type, and title are used.
    """
    parsed = parse_json_response(raw_content)
    if parsed is None:
        logger.warning("Could not parse %s reply as JSON; using raw text", SERVICE_NAME)
        parsed = {}

    summary = parsed.get("summary")
    if not isinstance(summary, str) or not summary.strip():
        summary = raw_content.strip()

    raw_tags = parsed.get("tags")
    tags: list[str] = []
    if isinstance(raw_tags, list):
        tags = [t.strip() for t in raw_tags if isinstance(t, str) and t.strip()]

    if not tags:
        tags = [SERVICE_NAME, resource_type, title or UNCATEGORIZED_TAG]
    return AIAnalysis(summary=summary, suggested_tags=tags)


class SummarizationClient:
    """Client for AI summaries and tag suggestions.

    Each call is a single independent request: no retries, no caching.
    Results from the remote model are not repeatable.
    """

    def __init__(
        self,
        config: Optional[DeepSeekConfig] = None,
        http_client: Optional[httpx.Client] = None,
        async_http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Endpoint configuration. Loaded from file/env if None.
            http_client: Optional pre-built sync client (e.g. for tests).
            async_http_client: Optional pre-built async client.
        """
        self._config = config or load_config().deepseek
        self._client = http_client
        self._async_client = async_http_client

    @property
    def configured(self) -> bool:
        """True when requests will actually be sent."""
        return self._config.configured

    @property
    def endpoint(self) -> str:
        return self._config.base_url.rstrip("/") + CHAT_COMPLETIONS_PATH

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._config.api_key}",
        }

    def _request_body(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self._config.default_model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "stream": False,
        }

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self._config.timeout)
        return self._client

    def _get_async_client(self) -> httpx.AsyncClient:
        if self._async_client is None:
            limits = httpx.Limits(
                max_connections=HTTP_MAX_CONNECTIONS,
                max_keepalive_connections=HTTP_MAX_CONNECTIONS,
                keepalive_expiry=HTTP_KEEPALIVE_TIMEOUT,
            )
            self._async_client = httpx.AsyncClient(
                timeout=self._config.timeout, limits=limits
            )
        return self._async_client

    def close(self) -> None:
        """Close the sync HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    async def aclose(self) -> None:
        """Close the async HTTP client and release connections."""
        if self._async_client is not None:
            await self._async_client.aclose()
            self._async_client = None

    def _handle_response(
        self, response: httpx.Response, title: str, resource_type: str
    ) -> AnalysisOutcome:
        if not response.is_success:
            logger.error(
                "%s API error status: %s %s",
                SERVICE_NAME,
                response.status_code,
                response.text[:2000],
            )
            return error_fallback(title, "http_status")

        try:
            payload = response.json()
        except ValueError as e:
            logger.error("%s returned a non-JSON body: %s", SERVICE_NAME, e)
            return error_fallback(title, "empty_response")

        raw_content = extract_message_content(payload)
        if not raw_content or not raw_content.strip():
            logger.error("%s returned empty content", SERVICE_NAME)
            return error_fallback(title, "empty_response")

        return interpret_reply(raw_content, title, resource_type)

    def analyze(self, title: str, content: str, resource_type: str) -> AnalysisOutcome:
        """Summarize content and suggest tags.

        Args:
            title: Resource title.
            content: Raw text pasted by the user (may be empty).
            resource_type: Resource type label, e.g. ``"ARTICLE"``.

        Returns:
            AIAnalysis on success, AnalysisFallback otherwise. Never raises.
        """
        if not self.configured:
            logger.info("No %s API key configured; using local summary", SERVICE_NAME)
            return local_fallback(title, resource_type)

        body = self._request_body(build_prompt(title, content, resource_type))
        try:
            response = self._get_client().post(
                self.endpoint, json=body, headers=self._headers()
            )
        except _REQUEST_ERRORS as e:
            logger.error("%s request failed: %s: %s", SERVICE_NAME, type(e).__name__, e)
            return error_fallback(title, "network_error")

        return self._handle_response(response, title, resource_type)

    async def analyze_async(
        self, title: str, content: str, resource_type: str
    ) -> AnalysisOutcome:
        """Async version of analyze for callers running an event loop."""
        if not self.configured:
            logger.info("No %s API key configured; using local summary", SERVICE_NAME)
            return local_fallback(title, resource_type)

        body = self._request_body(build_prompt(title, content, resource_type))
        try:
            client = self._get_async_client()
            response = await client.post(
                self.endpoint, json=body, headers=self._headers()
            )
        except _REQUEST_ERRORS as e:
            logger.error(
                "%s async request failed: %s: %s", SERVICE_NAME, type(e).__name__, e
            )
            return error_fallback(title, "network_error")

        return self._handle_response(response, title, resource_type)


def analyze_content(title: str, content: str, resource_type: str) -> AnalysisOutcome:
    """One-shot analysis using configuration from file and environment."""
    client = SummarizationClient()
    try:
        return client.analyze(title, content, resource_type)
    finally:
        client.close()
