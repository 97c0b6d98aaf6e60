"""
Grounded search: validate the caller's query, ask Gemini (with Google Search
grounding) for a summary, and normalize the answer into summary + sources.

Responsibility: The whole request/response transform. Called by the API; no
FastAPI types here. Raises app.core.errors types only.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

import httpx

from app.core.auth import CallerIdentity
from app.core.config import (
    ERROR_BODY_LOG_LIMIT,
    GEMINI_API_KEY_NAME,
    GEMINI_API_URL,
    NO_SUMMARY_MESSAGE,
    SYSTEM_PROMPT,
)
from app.core.errors import (
    CallableError,
    InternalError,
    InvalidArgumentError,
    UnauthenticatedError,
    UpstreamError,
)
from app.core.secrets import SecretProvider
from app.schemas.upstream import GenerateContentResponse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Source:
    """A citation. Two sources with the same uri are the same source."""

    uri: str
    title: str


@dataclass(frozen=True)
class SearchResult:
    """
    Successful outcome of a query. Either a grounded summary, or the fixed
    notice when Gemini answered without any text (grounded=False). Never an error.
    """

    summary: str
    sources: tuple[Source, ...] = field(default_factory=tuple)
    grounded: bool = True

    @classmethod
    def no_summary(cls) -> "SearchResult":
        return cls(summary=NO_SUMMARY_MESSAGE, sources=(), grounded=False)


def build_upstream_payload(query: str) -> dict[str, Any]:
    """
    Build a fresh generateContent body. The query is its own content part; the
    persona is a separate system instruction that callers cannot change.
    """
    return {
        "contents": [{"parts": [{"text": query}]}],
        "tools": [{"google_search": {}}],
        "systemInstruction": {"parts": [{"text": SYSTEM_PROMPT}]},
    }


def dedupe_sources(sources: Iterable[Source]) -> tuple[Source, ...]:
    """One entry per uri. Order is that of first appearance; a later duplicate replaces the title."""
    unique: dict[str, Source] = {}
    for source in sources:
        unique[source.uri] = source
    return tuple(unique.values())


def normalize_response(data: dict[str, Any]) -> SearchResult:
    """
    Turn a Gemini response body into a SearchResult.

    No text in the first candidate (empty candidates, tool call only, ...) is a
    valid answer and yields SearchResult.no_summary(). Raises pydantic's ValidationError if
    the body contradicts the expected types.
    """
    response = GenerateContentResponse.model_validate(data)
    text = response.first_text()
    if not text:
        logger.warning("[search:normalize_response] no text in Gemini response: %s", json.dumps(data)[:ERROR_BODY_LOG_LIMIT])
        return SearchResult.no_summary()

    found = [Source(uri=web.uri, title=web.title) for web in response.web_sources()]
    sources = dedupe_sources(found)
    logger.info("[search:normalize_response] OUT summary_len=%d sources=%d (before dedupe %d)",
                len(text), len(sources), len(found))
    return SearchResult(summary=text, sources=sources)


class QueryHandler:
    """
    Single-pass handler: validate -> build request -> call Gemini -> normalize.

    Holds no per-call state, so one instance may serve concurrent requests.
    `transport` is passed through to httpx (tests use httpx.MockTransport).
    """

    def __init__(
        self,
        secrets: SecretProvider,
        api_url: str = GEMINI_API_URL,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._secrets = secrets
        self._api_url = api_url
        self._transport = transport

    def handle(self, identity: CallerIdentity | None, query: str | None) -> SearchResult:
        if identity is None:
            logger.info("[search:handle] rejected: no caller identity")
            raise UnauthenticatedError()
        if not isinstance(query, str) or not query:
            logger.info("[search:handle] rejected: missing query uid=%s", identity.uid)
            raise InvalidArgumentError()

        logger.info("[search:handle] IN  uid=%s query_len=%d", identity.uid, len(query))
        payload = build_upstream_payload(query)
        try:
            data = self._call_gemini(payload)
            return normalize_response(data)
        except CallableError:
            raise
        except (httpx.HTTPError, ValueError, KeyError) as e:
            logger.error("[search:handle] Gemini call failed: %s: %s", type(e).__name__, e)
            raise InternalError() from e
        except Exception as e:
            logger.exception("[search:handle] unexpected failure")
            raise InternalError() from e

    def _call_gemini(self, payload: dict[str, Any]) -> dict[str, Any]:
        """POST once, no retry. Non-2xx raises UpstreamError; a non-object JSON body raises ValueError."""
        api_key = self._secrets.get_secret(GEMINI_API_KEY_NAME)
        headers = {"Content-Type": "application/json", "x-goog-api-key": api_key}
        with httpx.Client(transport=self._transport) as client:
            response = client.post(self._api_url, json=payload, headers=headers)
        if not response.is_success:
            logger.error("[search:_call_gemini] Gemini error %s: %s",
                         response.status_code, response.text[:ERROR_BODY_LOG_LIMIT])
            raise UpstreamError(response.status_code)
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        logger.info("[search:_call_gemini] OUT status=%d", response.status_code)
        return data
