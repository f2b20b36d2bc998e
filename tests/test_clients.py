"""HTTP clients: request shape and error mapping, with `requests` mocked out."""

from unittest.mock import Mock

import pytest
import requests

from cineVault.errors import NotFound, ProviderError
from cineVault.metadata.api_clients import OMDBClient, TMDBClient
from cineVault.metadata.core.models import MediaKind
from cineVault.metadata.discover import DiscoverFilters


def _response(status=200, body=None, bad_json=False):
    resp = Mock()
    resp.status_code = status
    resp.ok = 200 <= status < 300
    if bad_json:
        resp.json.side_effect = ValueError("Expecting value")
    else:
        resp.json.return_value = body if body is not None else {}
    return resp


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def tmdb_client(session):
    return TMDBClient(api_key="test-key", session=session, timeout=5)


@pytest.fixture
def omdb_client(session):
    return OMDBClient(api_key="omdb-key", session=session, timeout=5)


# ─── TMDb ────────────────────────────────────────────────────────────────
def test_search_request(tmdb_client, session):
    session.get.return_value = _response(body={"page": 1, "results": []})

    assert tmdb_client.search(MediaKind.SHOW, "breaking bad", 2) == {"page": 1, "results": []}

    url = session.get.call_args.args[0]
    kwargs = session.get.call_args.kwargs
    assert url == "https://api.themoviedb.org/3/search/tv"
    assert kwargs["params"] == {
        "query": "breaking bad", "page": 2, "include_adult": "false", "api_key": "test-key",
    }
    assert kwargs["timeout"] == 5


def test_discover_request_for_shows(tmdb_client, session):
    session.get.return_value = _response(body={"results": []})

    tmdb_client.discover(MediaKind.SHOW, DiscoverFilters(year=2008, sort_key="release_date.asc"))

    url = session.get.call_args.args[0]
    params = session.get.call_args.kwargs["params"]
    assert url.endswith("/discover/tv")
    assert params["first_air_date_year"] == 2008
    assert params["sort_by"] == "first_air_date.asc"
    assert params["page"] == 1
    assert "with_genres" not in params
    assert "year" not in params


def test_discover_request_for_movies(tmdb_client, session):
    session.get.return_value = _response(body={"results": []})

    tmdb_client.discover(MediaKind.MOVIE, DiscoverFilters(genre=28, year=1999))

    params = session.get.call_args.kwargs["params"]
    assert params["with_genres"] == 28
    assert params["year"] == 1999
    assert params["sort_by"] == "popularity.desc"


def test_genres_unwraps_list(tmdb_client, session):
    session.get.return_value = _response(body={"genres": [{"id": 28, "name": "Action"}]})
    assert tmdb_client.genres(MediaKind.MOVIE) == [{"id": 28, "name": "Action"}]
    assert session.get.call_args.args[0].endswith("/genre/movie/list")


def test_credits_path(tmdb_client, session):
    session.get.return_value = _response(body={"id": 603, "cast": []})
    tmdb_client.credits(MediaKind.MOVIE, 603)
    assert session.get.call_args.args[0].endswith("/movie/603/credits")


def test_404_is_not_found(tmdb_client, session):
    session.get.return_value = _response(status=404)
    with pytest.raises(NotFound) as excinfo:
        tmdb_client.details(MediaKind.MOVIE, 0)
    assert excinfo.value.status_code == 404


@pytest.mark.parametrize("status", [401, 429, 500, 503])
def test_error_status_is_provider_error(tmdb_client, session, status):
    session.get.return_value = _response(status=status)
    with pytest.raises(ProviderError) as excinfo:
        tmdb_client.trending(MediaKind.MOVIE, "day")
    assert excinfo.value.status_code == status
    assert not isinstance(excinfo.value, NotFound)


def test_transport_error_is_provider_error(tmdb_client, session):
    session.get.side_effect = requests.ConnectionError("connection refused")
    with pytest.raises(ProviderError) as excinfo:
        tmdb_client.details(MediaKind.SHOW, 1)
    assert excinfo.value.status_code is None


def test_bad_json_is_provider_error(tmdb_client, session):
    session.get.return_value = _response(bad_json=True)
    with pytest.raises(ProviderError):
        tmdb_client.details(MediaKind.MOVIE, 1)


def test_tmdb_requires_key(monkeypatch):
    monkeypatch.setattr("cineVault.metadata.api_clients.tmdb_client.TMDB_API_KEY", "")
    with pytest.raises(RuntimeError):
        TMDBClient(api_key="")


# ─── OMDb ────────────────────────────────────────────────────────────────
def test_omdb_find(omdb_client, session):
    body = {"Title": "The Matrix", "imdbID": "tt0133093", "Response": "True"}
    session.get.return_value = _response(body=body)

    assert omdb_client.find("tt0133093") == body
    assert session.get.call_args.kwargs["params"] == {"apikey": "omdb-key", "i": "tt0133093"}


def test_omdb_false_response_is_not_found(omdb_client, session):
    session.get.return_value = _response(body={"Response": "False", "Error": "Incorrect IMDb ID."})
    with pytest.raises(NotFound):
        omdb_client.find("tt0")


def test_omdb_transport_error(omdb_client, session):
    session.get.side_effect = requests.Timeout("read timed out")
    with pytest.raises(ProviderError) as excinfo:
        omdb_client.find("tt0133093")
    assert not isinstance(excinfo.value, NotFound)


def test_omdb_ratings():
    payload = {
        "imdbRating": "8.7",
        "Metascore": "73",
        "Ratings": [
            {"Source": "Internet Movie Database", "Value": "8.7/10"},
            {"Source": "Rotten Tomatoes", "Value": "83%"},
        ],
    }
    assert OMDBClient.ratings(payload) == {"imdb": 87.0, "rt_critic": 83.0, "metacritic": 73.0}


def test_omdb_ratings_with_missing_values():
    assert OMDBClient.ratings({"imdbRating": "N/A", "Metascore": "N/A"}) == {
        "imdb": None, "rt_critic": None, "metacritic": None,
    }
