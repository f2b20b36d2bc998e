"""
metadata.api_clients.demo_client
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Offline stand-ins used when no API key is configured.

They answer with a small fixed sample set shaped exactly like TMDb / OMDb
payloads, so everything above the client layer behaves the same with or
without network access.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, List

from cineVault.errors import NotFound
from cineVault.utils import normalize
from cineVault.metadata.core.models import MediaKind, title_field
from cineVault.metadata.discover import DiscoverFilters, apply_discover

DEMO_MOVIES: List[Dict[str, Any]] = [
    {
        "id": 1,
        "title": "The Matrix",
        "poster_path": None,
        "backdrop_path": None,
        "overview": "A computer programmer discovers that reality as he knows it is "
                    "actually a simulation, and he must join a rebellion to free humanity.",
        "release_date": "1999-03-30",
        "vote_average": 8.7,
        "vote_count": 25000,
        "genre_ids": [28, 878],
        "adult": False,
        "original_language": "en",
        "original_title": "The Matrix",
        "popularity": 95.5,
        "video": False,
    },
    {
        "id": 2,
        "title": "Inception",
        "poster_path": None,
        "backdrop_path": None,
        "overview": "A thief who steals corporate secrets through dream-sharing technology "
                    "is given the inverse task of planting an idea into a CEO's mind.",
        "release_date": "2010-07-16",
        "vote_average": 8.8,
        "vote_count": 32000,
        "genre_ids": [28, 878, 53],
        "adult": False,
        "original_language": "en",
        "original_title": "Inception",
        "popularity": 88.2,
        "video": False,
    },
]

DEMO_SHOWS: List[Dict[str, Any]] = [
    {
        "id": 101,
        "name": "Breaking Bad",
        "poster_path": None,
        "backdrop_path": None,
        "overview": "A high school chemistry teacher diagnosed with cancer teams up with "
                    "a former student to cook and sell methamphetamine.",
        "first_air_date": "2008-01-20",
        "vote_average": 9.5,
        "vote_count": 15000,
        "genre_ids": [18, 80],
        "adult": False,
        "original_language": "en",
        "original_name": "Breaking Bad",
        "popularity": 92.3,
        "origin_country": ["US"],
    },
]

DEMO_GENRES: List[Dict[str, Any]] = [
    {"id": 28, "name": "Action"},
    {"id": 18, "name": "Drama"},
    {"id": 878, "name": "Science Fiction"},
    {"id": 53, "name": "Thriller"},
    {"id": 80, "name": "Crime"},
]


def _page(results: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "page": 1,
        "results": results,
        "total_pages": 1,
        "total_results": len(results),
    }


class DemoTMDBClient:
    """Same surface as `TMDBClient`, backed by the sample lists above."""

    def __init__(
        self,
        movies: List[Dict[str, Any]] | None = None,
        shows: List[Dict[str, Any]] | None = None,
        genres: List[Dict[str, Any]] | None = None,
    ):
        self._items = {
            MediaKind.MOVIE: copy.deepcopy(DEMO_MOVIES if movies is None else movies),
            MediaKind.SHOW: copy.deepcopy(DEMO_SHOWS if shows is None else shows),
        }
        self._genres = copy.deepcopy(DEMO_GENRES if genres is None else genres)

    def _find(self, kind: MediaKind, tmdb_id: int) -> Dict[str, Any]:
        for item in self._items[kind]:
            if item["id"] == int(tmdb_id):
                return item
        raise NotFound(f"demo {kind.value} {tmdb_id}: not found", status_code=404)

    def search(self, kind: MediaKind, query: str, page: int = 1) -> Dict[str, Any]:
        needle = normalize(query)
        field = title_field(kind)
        hits = [copy.deepcopy(m) for m in self._items[kind] if needle in normalize(m[field])]
        return _page(hits)

    def trending(self, kind: MediaKind, window: str = "week") -> Dict[str, Any]:
        return _page(copy.deepcopy(self._items[kind]))

    def discover(self, kind: MediaKind, filters: DiscoverFilters | None = None) -> Dict[str, Any]:
        return _page(apply_discover(copy.deepcopy(self._items[kind]), kind, filters))

    def details(self, kind: MediaKind, tmdb_id: int) -> Dict[str, Any]:
        item = copy.deepcopy(self._find(kind, tmdb_id))
        ids = item.pop("genre_ids", [])
        item["genres"] = [g for g in self._genres if g["id"] in ids]
        return item

    def credits(self, kind: MediaKind, tmdb_id: int) -> Dict[str, Any]:
        self._find(kind, tmdb_id)
        return {"id": int(tmdb_id), "cast": [], "crew": []}

    def genres(self, kind: MediaKind) -> List[Dict[str, Any]]:
        return copy.deepcopy(self._genres)


class DemoOMDBClient:
    """Cross-reference stand-in: every lookup is a miss."""

    def find(self, imdb_id: str) -> Dict[str, Any]:
        raise NotFound(f"demo OMDb {imdb_id}: no cross-reference data offline")
