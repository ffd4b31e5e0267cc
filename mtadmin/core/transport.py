"""
GraphQL transport for the driving school admin core

Sends one {query, variables} envelope to the configured endpoint and normalizes the
answer to ApiResult{status, message, data}. Backend-reported failures come back as
status=False; only transport-level failures raise.
"""

from typing import Any, Dict, Optional
import logging
import re

import httpx

from mtadmin.core.config import get_settings
from mtadmin.core.exceptions import ErrorKind, TransportError
from mtadmin.schemas.common import ApiResult

logger = logging.getLogger(__name__)

_OPERATION_RE = re.compile(r"\b(query|mutation)\s+(\w+)")


def operation_name(query: str) -> str:
    match = _OPERATION_RE.search(query)
    return match.group(2) if match else "anonymous"


class GraphQLTransport:
    """Thin GraphQL-over-HTTP client. No retries; no timeout unless one is configured."""

    def __init__(
        self,
        endpoint: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        settings = get_settings()
        self.endpoint = endpoint or settings.GRAPHQL_ENDPOINT
        request_headers = {"Content-Type": "application/json"}
        if settings.GRAPHQL_AUTH_TOKEN:
            request_headers["Authorization"] = f"Bearer {settings.GRAPHQL_AUTH_TOKEN}"
        request_headers.update(headers or {})
        self._client = httpx.Client(
            timeout=timeout if timeout is not None else settings.GRAPHQL_TIMEOUT_SECONDS,
            headers=request_headers,
            transport=transport,
        )

    def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> ApiResult[Dict[str, Any]]:
        """Send one envelope and normalize the response"""
        envelope = {"query": query, "variables": variables or {}}
        name = operation_name(query)
        logger.debug(f"GraphQL {name} -> {self.endpoint}")

        try:
            response = self._client.post(self.endpoint, json=envelope)
        except httpx.RequestError as e:
            logger.error(f"GraphQL {name} failed to reach backend: {e}")
            raise TransportError(f"Could not reach backend: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise TransportError(
                f"Malformed response body (HTTP {response.status_code})",
                status_code=response.status_code,
            ) from e

        if not isinstance(body, dict) or ("data" not in body and "errors" not in body):
            raise TransportError(
                f"Unexpected response shape (HTTP {response.status_code})",
                status_code=response.status_code,
            )

        errors = body.get("errors") or []
        if errors:
            message = "; ".join(
                err.get("message", "Unknown error") if isinstance(err, dict) else str(err)
                for err in errors
            )
            logger.warning(f"GraphQL {name} returned errors: {message}")
            return ApiResult(
                status=False,
                message=message,
                data=body.get("data"),
                error_kind=ErrorKind.APPLICATION,
            )

        if response.status_code >= 400:
            raise TransportError(
                f"Backend returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        return ApiResult.ok(body.get("data") or {})

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "GraphQLTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
