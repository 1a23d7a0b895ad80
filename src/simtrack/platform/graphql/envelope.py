"""Where: src/simtrack/platform/graphql/envelope.py
What: Decode GraphQL ``{data, errors}`` envelopes and connection edges.
Why: Share one validation path between the query operations.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, cast

from .errors import DecodeError, GraphQLError


@dataclass(frozen=True, slots=True)
class GraphQLErrorDetail:
    """Single entry of the envelope's ``errors`` list."""

    message: str


@dataclass(frozen=True, slots=True)
class EdgeNode:
    """Node carried by one edge of a GraphQL connection."""

    id: str
    title: str | None = None


@dataclass(frozen=True, slots=True)
class GraphQLEnvelope:
    """Top-level GraphQL response."""

    data: Any
    errors: tuple[GraphQLErrorDetail, ...] = ()

    def raise_for_errors(self) -> None:
        """Raise ``GraphQLError`` with the first message when errors are present."""

        if self.errors:
            raise GraphQLError(self.errors[0].message)

    def select(self, *path: str) -> Any:
        """Walk ``data`` along ``path``; missing or null fields yield ``None``."""

        current: Any = self.data
        walked: list[str] = ["data"]
        for key in path:
            if current is None:
                return None
            if not isinstance(current, dict):
                raise DecodeError(f"Expected an object at '{'.'.join(walked)}'")
            current = cast(dict[str, Any], current).get(key)
            walked.append(key)
        return current


def _parse_error_detail(raw: object) -> GraphQLErrorDetail:
    if not isinstance(raw, dict):
        return GraphQLErrorDetail(message=str(raw))
    message = cast(dict[str, Any], raw).get("message")
    return GraphQLErrorDetail(message=message if isinstance(message, str) else "")


def decode_envelope(body: str) -> GraphQLEnvelope:
    """Parse a response body into a ``GraphQLEnvelope``.

    Args:
        body: Raw response text returned by the transport.

    Returns:
        GraphQLEnvelope: Decoded data and errors.

    Raises:
        DecodeError: If ``body`` is not JSON, not an envelope object, or
            carries a non-list ``errors`` field. The shape of ``data`` is
            checked later by ``GraphQLEnvelope.select``.
    """

    try:
        payload: Any = json.loads(body)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"Malformed GraphQL response: {exc}") from exc

    if not isinstance(payload, dict):
        raise DecodeError("GraphQL response must be a JSON object")
    envelope = cast(dict[str, Any], payload)

    errors_raw = envelope.get("errors")
    if errors_raw is None:
        errors_raw = []
    if not isinstance(errors_raw, list):
        raise DecodeError("GraphQL 'errors' must be a list or null")

    errors = tuple(_parse_error_detail(item) for item in cast(list[object], errors_raw))
    return GraphQLEnvelope(data=envelope.get("data"), errors=errors)


def parse_edges(connection: Any) -> list[EdgeNode]:
    """Convert a connection's ``edges[].node`` entries into ``EdgeNode`` values.

    Server order is preserved. A null connection or null ``edges`` yields an
    empty list.

    Raises:
        DecodeError: If the connection, an edge or a node has the wrong shape.
    """

    if connection is None:
        return []
    if not isinstance(connection, dict):
        raise DecodeError("GraphQL connection must be an object")

    edges_raw = cast(dict[str, Any], connection).get("edges")
    if edges_raw is None:
        return []
    if not isinstance(edges_raw, list):
        raise DecodeError("GraphQL connection 'edges' must be a list")

    nodes: list[EdgeNode] = []
    for index, edge in enumerate(cast(list[object], edges_raw)):
        if not isinstance(edge, dict):
            raise DecodeError(f"Edge {index} must be an object")
        node = cast(dict[str, Any], edge).get("node")
        if not isinstance(node, dict):
            raise DecodeError(f"Edge {index} has no node object")
        node_fields = cast(dict[str, Any], node)
        node_id = node_fields.get("id")
        if not isinstance(node_id, str):
            raise DecodeError(f"Edge {index} node has no string 'id'")
        title = node_fields.get("title")
        nodes.append(EdgeNode(id=node_id, title=title if isinstance(title, str) else None))
    return nodes


__all__ = [
    "EdgeNode",
    "GraphQLEnvelope",
    "GraphQLErrorDetail",
    "decode_envelope",
    "parse_edges",
]
