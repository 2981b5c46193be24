import logging
from typing import Optional

import httpx

from trip_planner.config import API_KEY_ENV, Settings
from trip_planner.errors import (
    EmptyCompletion,
    Misconfigured,
    QuotaExceeded,
    RateLimited,
    UpstreamError,
    UpstreamTimeout,
)

logger = logging.getLogger(__name__)

USER_AGENT = "TripPlanner/1.0"
LOGGED_BODY_CHARS = 500


def _extract_text(content) -> str:
    """Extract plain text from a content field that may be a string or a list of blocks."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "\n".join(parts)
    return ""


def _truncate(body: str) -> str:
    if len(body) <= LOGGED_BODY_CHARS:
        return body
    return body[:LOGGED_BODY_CHARS] + "..."


class CompletionClient:
    """
    Single-shot client for an OpenAI-style chat-completion gateway.

    One POST per call, no retries. Failures are raised as the classified
    errors in ``trip_planner.errors``:
    - 429 -> RateLimited, 402 -> QuotaExceeded
    - any other non-2xx or transport failure -> UpstreamError
    - timeout -> UpstreamTimeout
    - 2xx without usable content -> EmptyCompletion
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        if not settings.api_key:
            raise Misconfigured(f"{API_KEY_ENV} is not configured")
        self._settings = settings
        self._http_client = httpx.AsyncClient(
            timeout=settings.timeout_s,
            transport=transport,
            headers={
                "Authorization": f"Bearer {settings.api_key}",
                "User-Agent": USER_AGENT,
                "Accept": "application/json",
            },
        )

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        payload = {
            "model": self._settings.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": self._settings.temperature,
        }

        logger.info("Requesting completion from %s (model=%s)", self._settings.gateway_url, self._settings.model)
        try:
            r = await self._http_client.post(self._settings.gateway_url, json=payload)
        except httpx.TimeoutException as e:
            raise UpstreamTimeout(f"AI gateway timed out after {self._settings.timeout_s:.0f}s") from e
        except httpx.RequestError as e:
            raise UpstreamError(f"AI gateway request failed: {type(e).__name__}: {e}") from e

        if not r.is_success:
            body = r.text
            logger.error("AI gateway error: %d %s", r.status_code, _truncate(body))
            if r.status_code == 429:
                raise RateLimited("AI gateway rate limit", status=429, body=body)
            if r.status_code == 402:
                raise QuotaExceeded("AI gateway quota exhausted", status=402, body=body)
            raise UpstreamError(f"AI gateway error: {r.status_code}", status=r.status_code, body=body)

        try:
            data = r.json()
        except ValueError as e:
            raise EmptyCompletion(
                "AI gateway returned a non-JSON body", status=r.status_code, body=_truncate(r.text)
            ) from e

        content = None
        if isinstance(data, dict):
            choices = data.get("choices") or []
            if choices and isinstance(choices[0], dict):
                message = choices[0].get("message") or {}
                if isinstance(message, dict):
                    content = _extract_text(message.get("content"))

        if not content:
            raise EmptyCompletion("No content in AI response", status=r.status_code, body=_truncate(r.text))
        return content

    async def aclose(self) -> None:
        await self._http_client.aclose()
