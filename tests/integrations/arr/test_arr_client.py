from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from mediadash.config import GatewaySettings
from mediadash.errors import ConfigurationError, UpstreamError, ValidationError
from mediadash.integrations.arr.client import RADARR, SONARR, ArrClient


@pytest.fixture
def radarr(settings: GatewaySettings, fake_session: MagicMock) -> ArrClient:
    return ArrClient(RADARR, settings.radarr, session=fake_session, timeout_seconds=settings.timeout_seconds)


@pytest.fixture
def sonarr(settings: GatewaySettings, fake_session: MagicMock) -> ArrClient:
    return ArrClient(SONARR, settings.sonarr, session=fake_session, timeout_seconds=settings.timeout_seconds)


def _called_url(session: MagicMock) -> str:
    return session.request.call_args[0][1]


def test_list_movies_rewrites_poster_urls(radarr: ArrClient, fake_session: MagicMock, make_response) -> None:  # noqa: ANN001
    fake_session.request.return_value = make_response(
        200, [{"id": 1, "images": [{"coverType": "poster", "url": "/MediaCover/1/poster.jpg"}]}]
    )

    result = radarr.list_resource("movies")

    assert result == [
        {
            "id": 1,
            "images": [
                {
                    "coverType": "poster",
                    "url": "http://host:42651/MediaCover/1/poster.jpg",
                    "remoteUrl": "http://host:42651/MediaCover/1/poster.jpg",
                }
            ],
        }
    ]
    assert _called_url(fake_session) == "http://host:42651/api/v3/movie"


def test_list_preserves_object_payloads(radarr: ArrClient, fake_session: MagicMock, make_response) -> None:  # noqa: ANN001
    status = {"appName": "Radarr", "version": "5.2.6"}
    fake_session.request.return_value = make_response(200, status)

    assert radarr.list_resource("status") == status
    assert _called_url(fake_session) == "http://host:42651/api/v3/system/status"


def test_missing_defaults_pagination(radarr: ArrClient, fake_session: MagicMock, make_response) -> None:  # noqa: ANN001
    fake_session.request.return_value = make_response(
        200, {"page": 1, "pageSize": 50, "records": [{"id": 4, "images": [{"url": "/m/4.jpg"}]}]}
    )

    result = radarr.list_resource("missing")

    _, kwargs = fake_session.request.call_args
    assert kwargs["params"] == {"page": 1, "pageSize": 50}
    assert result["records"][0]["images"][0]["url"] == "http://host:42651/m/4.jpg"


def test_missing_forwards_explicit_pagination(sonarr: ArrClient, fake_session: MagicMock, make_response) -> None:  # noqa: ANN001
    fake_session.request.return_value = make_response(200, {"records": []})

    sonarr.list_resource("missing", {"page": 3, "pageSize": 10})

    _, kwargs = fake_session.request.call_args
    assert kwargs["params"] == {"page": 3, "pageSize": 10}
    assert _called_url(fake_session) == "http://host:8989/api/v3/wanted/missing"


def test_unknown_resource_is_rejected_before_any_call(radarr: ArrClient, fake_session: MagicMock) -> None:
    with pytest.raises(ValidationError):
        radarr.list_resource("language-profiles")
    fake_session.request.assert_not_called()


def test_get_series_by_id(sonarr: ArrClient, fake_session: MagicMock, make_response) -> None:  # noqa: ANN001
    fake_session.request.return_value = make_response(200, {"id": 7, "images": [{"url": "/MediaCover/7/banner.jpg"}]})

    result = sonarr.get_resource("series", 7)

    assert _called_url(fake_session) == "http://host:8989/api/v3/series/7"
    assert result["images"][0]["url"] == "http://host:8989/MediaCover/7/banner.jpg"


@pytest.mark.parametrize("term", [None, "", "   "])
def test_search_requires_term(radarr: ArrClient, fake_session: MagicMock, term) -> None:  # noqa: ANN001
    with pytest.raises(ValidationError) as excinfo:
        radarr.search(term)
    assert excinfo.value.status_code == 400
    fake_session.request.assert_not_called()


def test_search_uses_lookup_and_rewrites(sonarr: ArrClient, fake_session: MagicMock, make_response) -> None:  # noqa: ANN001
    fake_session.request.return_value = make_response(
        200,
        [{"title": "Severance", "images": [{"url": "https://artworks.thetvdb.com/banner.jpg"}, {"url": "/poster.jpg"}]}],
    )

    result = sonarr.search("severance")

    _, kwargs = fake_session.request.call_args
    assert _called_url(fake_session) == "http://host:8989/api/v3/series/lookup"
    assert kwargs["params"] == {"term": "severance"}
    images = result[0]["images"]
    assert images[0]["url"] == "https://artworks.thetvdb.com/banner.jpg"
    assert images[1]["url"] == "http://host:8989/poster.jpg"


def test_add_posts_payload_verbatim(radarr: ArrClient, fake_session: MagicMock, make_response) -> None:  # noqa: ANN001
    movie = {"title": "Dune", "tmdbId": 438631, "qualityProfileId": 1, "rootFolderPath": "/movies"}
    created = {**movie, "id": 12}
    fake_session.request.return_value = make_response(201, created)

    assert radarr.add(movie) == created
    args, kwargs = fake_session.request.call_args
    assert args == ("POST", "http://host:42651/api/v3/movie")
    assert kwargs["json"] == movie


def test_add_rejects_non_object_payload(radarr: ArrClient, fake_session: MagicMock) -> None:
    with pytest.raises(ValidationError):
        radarr.add([{"title": "Dune"}])
    fake_session.request.assert_not_called()


def test_add_surfaces_upstream_validation_body(radarr: ArrClient, fake_session: MagicMock, make_response) -> None:  # noqa: ANN001
    fake_session.request.return_value = make_response(400, text='[{"errorMessage":"Path is invalid"}]')

    with pytest.raises(UpstreamError) as excinfo:
        radarr.add({"title": "Dune"})
    assert excinfo.value.status_code == 400
    assert "Path is invalid" in excinfo.value.body_snippet


@pytest.mark.parametrize(
    "payload",
    [[{"id": 9}], {"records": [{"id": 9}]}, {"queue": [{"id": 9}]}],
)
def test_list_queue_normalizes_shapes(sonarr: ArrClient, fake_session: MagicMock, make_response, payload) -> None:  # noqa: ANN001
    fake_session.request.return_value = make_response(200, payload)

    assert sonarr.list_queue() == [{"id": 9}]
    assert _called_url(fake_session) == "http://host:8989/api/v3/queue/details"


def test_list_queue_unknown_shape_is_empty(radarr: ArrClient, fake_session: MagicMock, make_response) -> None:  # noqa: ANN001
    fake_session.request.return_value = make_response(200, {"foo": 1})
    assert radarr.list_queue() == []


def test_list_queue_still_raises_on_http_failure(radarr: ArrClient, fake_session: MagicMock, make_response) -> None:  # noqa: ANN001
    fake_session.request.return_value = make_response(503, text="down")
    with pytest.raises(UpstreamError):
        radarr.list_queue()


def test_delete_queue_item(radarr: ArrClient, fake_session: MagicMock, make_response) -> None:  # noqa: ANN001
    fake_session.request.return_value = make_response(200)

    assert radarr.delete_queue_item(42, remove_from_client=True) == {"success": True}
    args, kwargs = fake_session.request.call_args
    assert args == ("DELETE", "http://host:42651/api/v3/queue/42")
    assert kwargs["params"] == {"removeFromClient": "true"}


@pytest.mark.parametrize("item_id", [None, ""])
def test_delete_queue_item_requires_id(radarr: ArrClient, fake_session: MagicMock, item_id) -> None:  # noqa: ANN001
    with pytest.raises(ValidationError, match="Queue item ID is required"):
        radarr.delete_queue_item(item_id)
    fake_session.request.assert_not_called()


def test_delete_queue_item_escapes_id(radarr: ArrClient, fake_session: MagicMock, make_response) -> None:  # noqa: ANN001
    fake_session.request.return_value = make_response(200)

    radarr.delete_queue_item("../movie/5")

    assert _called_url(fake_session) == "http://host:42651/api/v3/queue/..%2Fmovie%2F5"


@pytest.mark.parametrize(
    ("item_id", "expected"),
    [("a/b", "a%2Fb"), ("../x", "..%2Fx"), ("7?x=1", "7%3Fx%3D1")],
)
def test_get_resource_escapes_id(sonarr: ArrClient, fake_session: MagicMock, make_response, item_id, expected) -> None:  # noqa: ANN001
    fake_session.request.return_value = make_response(200, {"id": 1})

    sonarr.get_resource("series", item_id)

    assert _called_url(fake_session) == f"http://host:8989/api/v3/series/{expected}"


@pytest.mark.parametrize("item_id", [".", ".."])
def test_dot_segments_are_rejected(radarr: ArrClient, fake_session: MagicMock, item_id) -> None:  # noqa: ANN001
    with pytest.raises(ValidationError, match="Invalid path segment"):
        radarr.get_resource("movies", item_id)
    with pytest.raises(ValidationError, match="Invalid path segment"):
        radarr.delete_queue_item(item_id)
    fake_session.request.assert_not_called()


def test_operations_fail_fast_without_api_key(unconfigured_settings: GatewaySettings, fake_session: MagicMock) -> None:
    client = ArrClient(SONARR, unconfigured_settings.sonarr, session=fake_session)

    for call in (
        lambda: client.list_resource("series"),
        lambda: client.search("x"),
        lambda: client.add({"title": "x"}),
        client.list_queue,
        lambda: client.delete_queue_item(1),
    ):
        with pytest.raises(ConfigurationError, match="SONARR_API_KEY"):
            call()
    fake_session.request.assert_not_called()
