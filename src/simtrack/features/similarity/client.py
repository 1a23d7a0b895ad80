"""
Summary: Facade exposing the hash lookup and similar-track operations.
Why: Pair each query template with its decoding rules behind a small client API.
"""

from __future__ import annotations

from simtrack.platform.graphql.envelope import GraphQLEnvelope, decode_envelope, parse_edges
from simtrack.platform.graphql.errors import NotFoundError
from simtrack.platform.graphql.http_client import (
    ClientSettings,
    GraphQLTransport,
    RequestsGraphQLTransport,
)
from simtrack.platform.logging import logger

from .queries import (
    LIBRARY_TRACKS_BY_SHA256_QUERY,
    SIMILAR_TRACKS_QUERY,
    sha256_variables,
    track_id_variables,
)


class SimilarityClient:
    """Client for the audio-similarity GraphQL service.

    Each call is a single request/response round trip. The client holds no
    mutable state beyond its transport.
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        *,
        transport: GraphQLTransport | None = None,
    ) -> None:
        if transport is None:
            if settings is None:
                raise ValueError("SimilarityClient requires settings or a transport")
            transport = RequestsGraphQLTransport(settings)
        self.transport: GraphQLTransport = transport

    def _execute(self, query: str, variables: str) -> GraphQLEnvelope:
        body = self.transport.send(query, variables)
        return decode_envelope(body)

    def find_by_hash256(self, sha256: str) -> str:
        """Return the library track id whose audio content hashes to ``sha256``.

        Only the first match is returned when the service reports several.

        Raises:
            TransportError: If the request could not be completed.
            DecodeError: If the response is malformed.
            GraphQLError: If the service reported an error.
            NotFoundError: If no track matches the hash.
        """

        envelope = self._execute(LIBRARY_TRACKS_BY_SHA256_QUERY, sha256_variables(sha256))
        envelope.raise_for_errors()

        nodes = parse_edges(envelope.select("libraryTracks"))
        if not nodes:
            logger.debug(
                "No library track for sha256 %s",
                sha256,
                extra={"graphql_event": "similarity.lookup.missing", "sha256": sha256},
            )
            raise NotFoundError("no track found by hash")

        track_id = nodes[0].id
        logger.debug(
            "Library track %s matches sha256 %s",
            track_id,
            sha256,
            extra={
                "graphql_event": "similarity.lookup.found",
                "sha256": sha256,
                "track_id": track_id,
            },
        )
        return track_id

    def find_similar(self, track_id: str) -> list[str]:
        """Return ids of tracks similar to ``track_id`` in server order.

        An empty list means the service knows no similar tracks.

        Raises:
            TransportError: If the request could not be completed.
            DecodeError: If the response is malformed.
            GraphQLError: If the service reported an error.
        """

        envelope = self._execute(SIMILAR_TRACKS_QUERY, track_id_variables(track_id))
        envelope.raise_for_errors()

        nodes = parse_edges(envelope.select("libraryTrack", "similarTracks"))
        similar_ids = [node.id for node in nodes]
        logger.debug(
            "Found %d similar tracks for %s",
            len(similar_ids),
            track_id,
            extra={
                "graphql_event": "similarity.similar.complete",
                "track_id": track_id,
                "count": len(similar_ids),
            },
        )
        return similar_ids


__all__ = ["SimilarityClient"]
