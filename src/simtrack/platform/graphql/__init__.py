"""GraphQL infrastructure package.

This package provides the HTTP transport, the envelope decoder and the
exception hierarchy used to talk to the similarity service.
"""

from .envelope import EdgeNode, GraphQLEnvelope, GraphQLErrorDetail, decode_envelope, parse_edges
from .errors import (
    DecodeError,
    GraphQLError,
    NotFoundError,
    SimilarityServiceError,
    TransportError,
)
from .http_client import (
    ClientSettings,
    GraphQLTransport,
    RequestsGraphQLTransport,
    build_request_body,
    normalize_whitespace,
)

__all__ = [
    "ClientSettings",
    "DecodeError",
    "EdgeNode",
    "GraphQLEnvelope",
    "GraphQLError",
    "GraphQLErrorDetail",
    "GraphQLTransport",
    "NotFoundError",
    "RequestsGraphQLTransport",
    "SimilarityServiceError",
    "TransportError",
    "build_request_body",
    "decode_envelope",
    "normalize_whitespace",
    "parse_edges",
]
