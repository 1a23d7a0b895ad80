"""Where: src/simtrack/platform/graphql/errors.py
What: Exception hierarchy raised by the transport, envelope and query layers.
Why: Let callers distinguish network, decoding, server and empty-result failures.
"""

from __future__ import annotations


class SimilarityServiceError(Exception):
    """Base exception for similarity service client failures."""


class TransportError(SimilarityServiceError):
    """Raised when a request cannot be built, sent, or its body read."""


class DecodeError(SimilarityServiceError):
    """Raised when a response body is not JSON or has an unexpected shape."""


class GraphQLError(SimilarityServiceError):
    """Raised when the server reports an error in the response envelope.

    Only the first reported message is kept.
    """

    def __init__(self, message: str) -> None:
        self.message: str = message
        super().__init__(f"GraphQL error: {message}")


class NotFoundError(SimilarityServiceError):
    """Raised when a hash lookup yields no library track."""


__all__ = [
    "DecodeError",
    "GraphQLError",
    "NotFoundError",
    "SimilarityServiceError",
    "TransportError",
]
