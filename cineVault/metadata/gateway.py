"""metadata.gateway
Single entry point for remote metadata.

Every public method goes through `Gateway._memoized`, which serves fresh
cache entries directly and otherwise waits on the shared pacer, calls the
provider, and caches the result. Callers never touch `requests` themselves.
"""

from __future__ import annotations

import functools
import time
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, Tuple, Type

from cineVault import settings
from cineVault.errors import GatewayFailure, NotFound, ProviderError
from cineVault.utils import log_debug
from cineVault.metadata.cache import TTLCache, make_cache_key
from cineVault.metadata.pacing import Pacer
from cineVault.metadata.discover import DiscoverFilters
from cineVault.metadata.core.models import MediaKind, PagedResult
from cineVault.metadata.api_clients import (
    DemoOMDBClient, DemoTMDBClient, OMDBClient, TMDBClient,
)

TIME_WINDOWS = ("day", "week")


class MetadataProvider(Protocol):
    def search(self, kind: MediaKind, query: str, page: int = 1) -> Dict[str, Any]: ...
    def trending(self, kind: MediaKind, window: str = "week") -> Dict[str, Any]: ...
    def discover(self, kind: MediaKind, filters: DiscoverFilters | None = None) -> Dict[str, Any]: ...
    def details(self, kind: MediaKind, tmdb_id: int) -> Dict[str, Any]: ...
    def credits(self, kind: MediaKind, tmdb_id: int) -> Dict[str, Any]: ...
    def genres(self, kind: MediaKind) -> List[Dict[str, Any]]: ...


class CrossReferenceProvider(Protocol):
    def find(self, imdb_id: str) -> Dict[str, Any]: ...


class Gateway:
    """Cached, paced access to the metadata and cross-reference providers.

    One instance owns one cache table and one pacer; build it once at start-up
    and hand it to whoever needs metadata. Tests build fresh instances.
    """

    def __init__(
        self,
        tmdb: MetadataProvider,
        omdb: CrossReferenceProvider,
        ttl: float = settings.CACHE_TTL_SECONDS,
        min_delay: float = settings.RATE_LIMIT_DELAY,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.tmdb = tmdb
        self.omdb = omdb
        self.cache = TTLCache(ttl, clock=clock)
        self.pacer = Pacer(min_delay, clock=clock, sleep=sleep)

    @classmethod
    def from_settings(cls) -> "Gateway":
        """Live clients where a key is configured, sample data otherwise."""
        log_debug(
            f"API configuration: tmdb={'offline' if settings.TMDB_DEMO_MODE else 'set'} "
            f"omdb={'offline' if settings.OMDB_DEMO_MODE else 'set'}"
        )
        tmdb = DemoTMDBClient() if settings.TMDB_DEMO_MODE else TMDBClient()
        omdb = DemoOMDBClient() if settings.OMDB_DEMO_MODE else OMDBClient()
        return cls(tmdb, omdb)

    # ------------------------------------------------------------------
    # Memoization
    # ------------------------------------------------------------------
    def _memoized(
        self,
        operation: str,
        params: Mapping[str, Any],
        fetch: Callable[[], Any],
        passthrough: Tuple[Type[ProviderError], ...] = (),
    ) -> Any:
        """Return the cached value for (operation, params) or fetch it.

        Provider errors become `GatewayFailure`, except the types listed in
        *passthrough*, which propagate unchanged. Failures are never cached.
        """
        key = make_cache_key(operation, params)
        entry = self.cache.lookup(key)
        if entry is not None:
            log_debug(f"Cache hit for: {key}")
            return entry.value

        self.pacer.wait()
        log_debug(f"Fetching {key}")
        try:
            value = fetch()
        except passthrough:
            raise
        except ProviderError as exc:
            log_debug(f"Error fetching {key}: {exc}")
            raise GatewayFailure(operation) from exc

        self.cache.set(key, value)
        log_debug(f"Caching data for: {key}")
        return value

    def clear_cache(self) -> None:
        self.cache.clear()

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------
    def _search(self, kind: MediaKind, operation: str, query: str, page: int) -> PagedResult:
        payload = self._memoized(
            operation, {"query": query, "page": int(page)},
            lambda: self.tmdb.search(kind, query, int(page)),
        )
        return PagedResult.from_payload(kind, payload)

    def search_movies(self, query: str, page: int = 1) -> PagedResult:
        return self._search(MediaKind.MOVIE, "search_movies", query, page)

    def search_shows(self, query: str, page: int = 1) -> PagedResult:
        return self._search(MediaKind.SHOW, "search_shows", query, page)

    def _trending(self, kind: MediaKind, operation: str, window: str) -> PagedResult:
        if window not in TIME_WINDOWS:
            raise ValueError(f"window must be one of {TIME_WINDOWS}, got {window!r}")
        payload = self._memoized(
            operation, {"window": window},
            lambda: self.tmdb.trending(kind, window),
        )
        return PagedResult.from_payload(kind, payload)

    def trending_movies(self, window: str = "week") -> PagedResult:
        return self._trending(MediaKind.MOVIE, "trending_movies", window)

    def trending_shows(self, window: str = "week") -> PagedResult:
        return self._trending(MediaKind.SHOW, "trending_shows", window)

    def _discover(
        self,
        kind: MediaKind,
        operation: str,
        filters: DiscoverFilters | Mapping[str, Any] | None,
    ) -> PagedResult:
        filters = DiscoverFilters.coerce(filters)
        payload = self._memoized(
            operation, filters.canonical(kind),
            lambda: self.tmdb.discover(kind, filters),
        )
        return PagedResult.from_payload(kind, payload)

    def discover_movies(self, filters: DiscoverFilters | Mapping[str, Any] | None = None) -> PagedResult:
        return self._discover(MediaKind.MOVIE, "discover_movies", filters)

    def discover_shows(self, filters: DiscoverFilters | Mapping[str, Any] | None = None) -> PagedResult:
        return self._discover(MediaKind.SHOW, "discover_shows", filters)

    # ------------------------------------------------------------------
    # Single titles
    # ------------------------------------------------------------------
    def movie_details(self, movie_id: int) -> Dict[str, Any]:
        return self._memoized(
            "movie_details", {"id": int(movie_id)},
            lambda: self.tmdb.details(MediaKind.MOVIE, movie_id),
        )

    def show_details(self, show_id: int) -> Dict[str, Any]:
        return self._memoized(
            "show_details", {"id": int(show_id)},
            lambda: self.tmdb.details(MediaKind.SHOW, show_id),
        )

    def details(self, kind: MediaKind | str, tmdb_id: int) -> Dict[str, Any]:
        kind = MediaKind.parse(kind)
        return self.movie_details(tmdb_id) if kind is MediaKind.MOVIE else self.show_details(tmdb_id)

    def movie_credits(self, movie_id: int) -> Dict[str, Any]:
        return self._memoized(
            "movie_credits", {"id": int(movie_id)},
            lambda: self.tmdb.credits(MediaKind.MOVIE, movie_id),
        )

    def show_credits(self, show_id: int) -> Dict[str, Any]:
        return self._memoized(
            "show_credits", {"id": int(show_id)},
            lambda: self.tmdb.credits(MediaKind.SHOW, show_id),
        )

    def credits(self, kind: MediaKind | str, tmdb_id: int) -> Dict[str, Any]:
        kind = MediaKind.parse(kind)
        return self.movie_credits(tmdb_id) if kind is MediaKind.MOVIE else self.show_credits(tmdb_id)

    def genres(self, kind: MediaKind | str) -> List[Dict[str, Any]]:
        kind = MediaKind.parse(kind)
        return self._memoized(
            "genres", {"kind": kind.value},
            lambda: self.tmdb.genres(kind),
        )

    # ------------------------------------------------------------------
    # Cross-reference
    # ------------------------------------------------------------------
    def cross_reference(self, imdb_id: str) -> Optional[Dict[str, Any]]:
        """OMDb record for *imdb_id*, or **None** when OMDb has no match.

        A miss is a normal answer, not an error, and is not cached.
        """
        try:
            return self._memoized(
                "cross_reference", {"imdb_id": imdb_id},
                lambda: self.omdb.find(imdb_id),
                passthrough=(NotFound,),
            )
        except NotFound:
            log_debug(f"OMDb data not found for: {imdb_id}")
            return None


@functools.lru_cache(maxsize=1)
def get_gateway() -> Gateway:
    """Process-wide gateway, built from `settings` on first call."""
    return Gateway.from_settings()
