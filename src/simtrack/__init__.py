"""simtrack: client for a GraphQL audio-similarity service."""

from simtrack.features.similarity import SimilarityClient, calculate_file_hash
from simtrack.platform.graphql import (
    ClientSettings,
    DecodeError,
    GraphQLError,
    NotFoundError,
    SimilarityServiceError,
    TransportError,
)

__version__ = "0.1.0"

__all__ = [
    "ClientSettings",
    "DecodeError",
    "GraphQLError",
    "NotFoundError",
    "SimilarityClient",
    "SimilarityServiceError",
    "TransportError",
    "calculate_file_hash",
]
