"""
REST HTTP client for the metagraph data endpoint.

One request per call, no retries. Outcomes are classified into
``SubmissionError`` kinds: a non-2xx answer is REJECTED (server body kept
verbatim), no answer at all (connect failure, timeout) is UNREACHABLE.
"""

import json
from typing import Any, Optional

import httpx

from metagraph_sessions.constants import DEFAULT_TIMEOUT_SECONDS
from metagraph_sessions.errors import SubmissionError, SubmissionKind


class HttpClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"User-Agent": "metagraph-sessions/0.1.0", "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @staticmethod
    def _parse_body(resp: httpx.Response) -> Any:
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            return resp.text

    @staticmethod
    def _error_detail(body: Any, status_code: int) -> str:
        """Pull the human-readable reason out of a structured error body."""
        if isinstance(body, dict):
            for key in ("error", "message", "detail", "reason"):
                value = body.get(key)
                if isinstance(value, str) and value:
                    return value
            errors = body.get("errors")
            if isinstance(errors, list) and errors:
                messages = [e.get("message", str(e)) if isinstance(e, dict) else str(e) for e in errors]
                return "; ".join(messages)
            return json.dumps(body)
        if isinstance(body, str) and body.strip():
            return body.strip()[:500]
        return f"HTTP {status_code}"

    async def post(self, path: str, body: Optional[dict[str, Any]] = None) -> Any:
        content = json.dumps(body, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
        try:
            resp = await self._client.post(path, content=content, headers={"Content-Type": "application/json"})
        except httpx.TransportError as e:
            raise SubmissionError(
                SubmissionKind.UNREACHABLE, f"{self._base_url}{path}: {str(e) or type(e).__name__}",
            ) from e
        payload = self._parse_body(resp)
        if not resp.is_success:
            raise SubmissionError(
                SubmissionKind.REJECTED,
                self._error_detail(payload, resp.status_code),
                status_code=resp.status_code,
                body=payload,
            )
        return payload

    async def close(self) -> None:
        await self._client.aclose()
