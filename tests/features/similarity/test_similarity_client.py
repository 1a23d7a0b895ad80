"""Tests for the similarity client facade."""

from __future__ import annotations

import json

import pytest

from simtrack.features.similarity import SimilarityClient
from simtrack.features.similarity.queries import (
    LIBRARY_TRACKS_BY_SHA256_QUERY,
    SIMILAR_TRACKS_QUERY,
)
from simtrack.platform.graphql.errors import (
    DecodeError,
    GraphQLError,
    NotFoundError,
    TransportError,
)
from simtrack.platform.graphql.http_client import ClientSettings, RequestsGraphQLTransport


class _FakeTransport:
    """Record sent documents and replay a canned body or failure."""

    def __init__(self, body: str = "", error: Exception | None = None) -> None:
        self.body = body
        self.error = error
        self.sent: list[tuple[str, str]] = []

    def send(self, query: str, variables: str) -> str:
        self.sent.append((query, variables))
        if self.error is not None:
            raise self.error
        return self.body


def _client(body: str = "", error: Exception | None = None) -> tuple[SimilarityClient, _FakeTransport]:
    transport = _FakeTransport(body, error)
    return SimilarityClient(transport=transport), transport


def test_client_requires_settings_or_transport() -> None:
    with pytest.raises(ValueError):
        _ = SimilarityClient()


def test_client_builds_requests_transport_from_settings() -> None:
    settings = ClientSettings(url="https://api.example.test/graphql", token="t")

    client = SimilarityClient(settings)

    assert isinstance(client.transport, RequestsGraphQLTransport)
    assert client.transport.settings is settings


# find_by_hash256 -------------------------------------------------------------


def test_find_by_hash256_returns_first_node_id() -> None:
    client, transport = _client(
        '{"data":{"libraryTracks":{"edges":[{"node":{"id":"T1","title":"Song"}}]}},"errors":[]}'
    )

    assert client.find_by_hash256("abc123") == "T1"
    assert transport.sent == [(LIBRARY_TRACKS_BY_SHA256_QUERY, '{"sha256": "abc123"}')]


def test_find_by_hash256_ignores_additional_matches() -> None:
    client, _ = _client(
        json.dumps(
            {
                "data": {
                    "libraryTracks": {
                        "edges": [
                            {"node": {"id": "first", "title": "A"}},
                            {"node": {"id": "second", "title": "B"}},
                        ]
                    }
                },
                "errors": [],
            }
        )
    )

    assert client.find_by_hash256("abc") == "first"


def test_find_by_hash256_raises_not_found_for_empty_edges() -> None:
    client, _ = _client('{"data":{"libraryTracks":{"edges":[]}},"errors":[]}')

    with pytest.raises(NotFoundError, match="no track found by hash"):
        _ = client.find_by_hash256("abc")


def test_find_by_hash256_raises_graphql_error_regardless_of_data() -> None:
    client, _ = _client(
        '{"data":{"libraryTracks":{"edges":[{"node":{"id":"T1"}}]}},"errors":[{"message":"bad token"}]}'
    )

    with pytest.raises(GraphQLError) as excinfo:
        _ = client.find_by_hash256("abc")

    assert excinfo.value.message == "bad token"


def test_find_by_hash256_prefers_graphql_error_over_bad_data_shape() -> None:
    client, _ = _client('{"data":{"libraryTracks":"nope"},"errors":[{"message":"denied"}]}')

    with pytest.raises(GraphQLError, match="denied"):
        _ = client.find_by_hash256("abc")


def test_errors_win_over_non_object_data_for_both_operations() -> None:
    client, _ = _client('{"data":[],"errors":[{"message":"denied"}]}')

    with pytest.raises(GraphQLError, match="denied"):
        _ = client.find_by_hash256("abc")
    with pytest.raises(GraphQLError, match="denied"):
        _ = client.find_similar("T1")


def test_non_object_error_entry_does_not_mask_first_message() -> None:
    client, _ = _client('{"data":{"libraryTracks":null},"errors":[{"message":"x"},5]}')

    with pytest.raises(GraphQLError) as excinfo:
        _ = client.find_by_hash256("abc")

    assert excinfo.value.message == "x"


def test_non_object_data_without_errors_is_decode_error() -> None:
    client, _ = _client('{"data":[]}')

    with pytest.raises(DecodeError):
        _ = client.find_by_hash256("abc")
    with pytest.raises(DecodeError):
        _ = client.find_similar("T1")


def test_find_by_hash256_raises_decode_error_on_malformed_body() -> None:
    client, _ = _client("not json at all")

    with pytest.raises(DecodeError):
        _ = client.find_by_hash256("abc")


def test_find_by_hash256_escapes_hash_in_variables() -> None:
    client, transport = _client('{"data":{"libraryTracks":{"edges":[{"node":{"id":"T1"}}]}}}')

    _ = client.find_by_hash256('ab"c\\')

    assert json.loads(transport.sent[0][1]) == {"sha256": 'ab"c\\'}


# find_similar ----------------------------------------------------------------


def test_find_similar_preserves_order() -> None:
    client, transport = _client(
        '{"data":{"libraryTrack":{"id":"T1","similarTracks":{"edges":[{"node":{"id":"A"}},{"node":{"id":"B"}}]}}},"errors":[]}'
    )

    assert client.find_similar("T1") == ["A", "B"]
    assert transport.sent == [(SIMILAR_TRACKS_QUERY, '{"trackId": "T1"}')]


def test_find_similar_returns_empty_list_for_no_edges() -> None:
    client, _ = _client('{"data":{"libraryTrack":{"id":"T1","similarTracks":{"edges":[]}}},"errors":[]}')

    assert client.find_similar("T1") == []


def test_find_similar_returns_empty_list_for_unknown_track() -> None:
    client, _ = _client('{"data":{"libraryTrack":null}}')

    assert client.find_similar("missing") == []


def test_find_similar_raises_graphql_error() -> None:
    client, _ = _client('{"data":null,"errors":[{"message":"Track not found"},{"message":"ignored"}]}')

    with pytest.raises(GraphQLError) as excinfo:
        _ = client.find_similar("T1")

    assert excinfo.value.message == "Track not found"


def test_find_similar_raises_decode_error_on_malformed_body() -> None:
    client, _ = _client("<html>Bad Gateway</html>")

    with pytest.raises(DecodeError):
        _ = client.find_similar("T1")


# transport failures ----------------------------------------------------------


@pytest.mark.parametrize("operation", ["find_by_hash256", "find_similar"])
def test_transport_failures_propagate(operation: str) -> None:
    failure = TransportError("connection refused")
    client, transport = _client(error=failure)

    with pytest.raises(TransportError) as excinfo:
        _ = getattr(client, operation)("value")

    assert excinfo.value is failure
    assert len(transport.sent) == 1
