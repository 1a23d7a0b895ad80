"""Where: src/simtrack/platform/graphql/http_client.py
What: HTTP transport posting GraphQL documents with bearer authentication.
Why: Decouple network concerns from query templates and envelope decoding.
"""

from __future__ import annotations

import json
import math
import re
import time
from dataclasses import dataclass
from typing import Any, Final, Protocol

import requests

from simtrack.config.settings import DEFAULT_TIMEOUT_SECONDS, format_user_agent
from simtrack.platform.logging import logger

from .errors import TransportError

_WHITESPACE_RUN: Final[re.Pattern[str]] = re.compile(r"\s+")
_OPERATION_NAME: Final[re.Pattern[str]] = re.compile(r"^\s*(?:query|mutation)\s+(\w+)")


def normalize_whitespace(text: str) -> str:
    """Collapse every run of whitespace into a single space.

    Leading and trailing runs collapse as well; nothing is trimmed.
    """

    return _WHITESPACE_RUN.sub(" ", text)


def operation_name(query: str) -> str:
    """Return the named operation of ``query`` or ``"anonymous"``."""

    match = _OPERATION_NAME.match(query)
    return match.group(1) if match else "anonymous"


def build_request_body(query: str, variables: str) -> str:
    """Serialize ``{"query": ..., "variables": ...}`` after normalizing both inputs.

    Args:
        query: GraphQL document, usually a multi-line template.
        variables: JSON object text holding the operation variables.

    Returns:
        str: JSON request body.

    Raises:
        TransportError: If ``variables`` is not a JSON object.
    """

    normalized_query = normalize_whitespace(query)
    normalized_variables = normalize_whitespace(variables)
    try:
        parsed: Any = json.loads(normalized_variables)
    except json.JSONDecodeError as exc:
        raise TransportError(f"GraphQL variables are not valid JSON: {exc}") from exc
    if not isinstance(parsed, dict):
        raise TransportError("GraphQL variables must be a JSON object")

    return json.dumps({"query": normalized_query, "variables": parsed})


@dataclass(frozen=True, slots=True)
class ClientSettings:
    """Endpoint and credentials shared by every request of a client."""

    url: str
    token: str
    timeout: float | None = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        if not self.url.strip():
            raise ValueError("Service URL must not be empty")
        if not self.token.strip():
            raise ValueError("Bearer token must not be empty")
        if self.timeout is not None and (not math.isfinite(self.timeout) or self.timeout <= 0):
            raise ValueError("Timeout must be positive and finite when provided")

    def __repr__(self) -> str:
        return f"ClientSettings(url={self.url!r}, token='***', timeout={self.timeout!r})"


class GraphQLTransport(Protocol):
    """Protocol for transports able to post a GraphQL document."""

    def send(self, query: str, variables: str) -> str:
        ...


class RequestsGraphQLTransport:
    """Post GraphQL documents with ``requests`` and return raw response bodies."""

    def __init__(self, settings: ClientSettings, session: requests.Session | None = None) -> None:
        self.settings: ClientSettings = settings
        self.session: requests.Session = session if session is not None else requests.Session()

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.settings.token}",
            "User-Agent": format_user_agent(),
        }

    def send(self, query: str, variables: str) -> str:
        """Post ``query`` with ``variables`` and return the response body text.

        The HTTP status code is not inspected; error bodies are returned as-is
        so the envelope decoder can report them.

        Raises:
            TransportError: On request construction, network, timeout or
                body read failures.
        """

        body = build_request_body(query, variables)
        operation = operation_name(query)
        logger.debug(
            "GraphQL request %s -> %s",
            operation,
            self.settings.url,
            extra={"graphql_event": "graphql.request.start", "operation": operation},
        )

        started = time.perf_counter()
        try:
            with self.session.post(
                self.settings.url,
                data=body.encode("utf-8"),
                headers=self._headers(),
                timeout=self.settings.timeout,
            ) as response:
                status = int(response.status_code)
                text = response.text
        except requests.RequestException as exc:
            logger.debug(
                "GraphQL request %s failed: %s",
                operation,
                exc,
                extra={
                    "graphql_event": "graphql.request.error",
                    "operation": operation,
                    "error_message": str(exc),
                },
            )
            raise TransportError(f"GraphQL request failed: {exc}") from exc

        duration_ms = (time.perf_counter() - started) * 1000.0
        logger.debug(
            "GraphQL response %s status=%s",
            operation,
            status,
            extra={
                "graphql_event": "graphql.request.complete",
                "operation": operation,
                "status": status,
                "duration_ms": duration_ms,
            },
        )
        return text


__all__ = [
    "ClientSettings",
    "GraphQLTransport",
    "RequestsGraphQLTransport",
    "build_request_body",
    "normalize_whitespace",
    "operation_name",
]
