"""
Summary: GraphQL documents and variable builders for the similarity operations.
Why: Keep the wire-level query text in one place, separate from decoding.
"""

from __future__ import annotations

import json
from typing import Final

LIBRARY_TRACKS_BY_SHA256_QUERY: Final[str] = """
query LibraryTracksFilteredBySHA256Query($sha256: String!) {
    libraryTracks(filter: { sha256: $sha256 }) {
        edges {
            node {
                id
                title
            }
        }
    }
}
"""

SIMILAR_TRACKS_QUERY: Final[str] = """
query SimilarTracksQuery($trackId: ID!) {
    libraryTrack(id: $trackId) {
        ... on LibraryTrack {
            id
            similarTracks(target: { spotify: {} }) {
                ... on SimilarTracksConnection {
                    edges {
                        node {
                            ... on SpotifyTrack {
                                id
                            }
                        }
                    }
                }
            }
        }
    }
}
"""


def sha256_variables(sha256: str) -> str:
    """Return the variables object for the hash lookup."""

    return json.dumps({"sha256": sha256})


def track_id_variables(track_id: str) -> str:
    """Return the variables object for the similar-tracks lookup."""

    return json.dumps({"trackId": track_id})


__all__ = [
    "LIBRARY_TRACKS_BY_SHA256_QUERY",
    "SIMILAR_TRACKS_QUERY",
    "sha256_variables",
    "track_id_variables",
]
