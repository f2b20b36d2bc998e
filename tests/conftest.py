"""
Pytest configuration and fixtures shared by the gateway and watchlist tests.

Nothing here touches the network: providers are mocks or the offline
sample clients, storage is an in-memory SQLite database, and time is a
fake clock that only moves when a test (or the pacer) moves it.
"""

from itertools import count
from unittest.mock import Mock

import pytest

from cineVault.metadata.api_clients import (
    DemoOMDBClient, DemoTMDBClient, OMDBClient, TMDBClient,
)
from cineVault.metadata.core.kv_store import SQLiteKVStore
from cineVault.metadata.core.watchlist import WatchlistStore
from cineVault.metadata.gateway import Gateway

TTL = 300.0
MIN_DELAY = 1.0


class FakeClock:
    """Monotonic clock + sleep pair; sleeping advances the clock."""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def tmdb():
    """Mocked TMDb client with one canned page per listing call."""
    client = Mock(spec=TMDBClient)
    page = {
        "page": 1,
        "results": [{"id": 1, "title": "The Matrix", "release_date": "1999-03-30",
                     "vote_average": 8.7, "genre_ids": [28, 878], "popularity": 95.5}],
        "total_pages": 1,
        "total_results": 1,
    }
    client.search.return_value = page
    client.trending.return_value = page
    client.discover.return_value = page
    client.details.return_value = {"id": 1, "title": "The Matrix", "imdb_id": "tt0133093"}
    client.credits.return_value = {"id": 1, "cast": [], "crew": []}
    client.genres.return_value = [{"id": 28, "name": "Action"}]
    return client


@pytest.fixture
def omdb():
    client = Mock(spec=OMDBClient)
    client.find.return_value = {"Title": "The Matrix", "imdbID": "tt0133093", "Response": "True"}
    return client


@pytest.fixture
def gateway(tmdb, omdb, clock):
    return Gateway(tmdb, omdb, ttl=TTL, min_delay=MIN_DELAY, clock=clock, sleep=clock.sleep)


@pytest.fixture
def demo_gateway(clock):
    return Gateway(
        DemoTMDBClient(), DemoOMDBClient(),
        ttl=TTL, min_delay=MIN_DELAY, clock=clock, sleep=clock.sleep,
    )


@pytest.fixture
def kv():
    store = SQLiteKVStore(":memory:")
    yield store
    store.close()


@pytest.fixture
def stamps():
    """Strictly increasing ISO timestamps, one per call."""
    seq = count()
    return lambda: f"2026-01-01T00:00:{next(seq):02d}.000+00:00"


@pytest.fixture
def store(kv, stamps):
    return WatchlistStore(kv, clock=stamps)


@pytest.fixture
def matrix():
    return {
        "id": 1,
        "kind": "movie",
        "title": "The Matrix",
        "poster_path": None,
        "release_date": "1999-03-30",
        "rating": 8.7,
        "overview": "A computer programmer discovers that reality is a simulation.",
    }
