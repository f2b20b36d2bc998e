from __future__ import annotations

from typing import Any, Dict, List

import requests

from cineVault.errors import NotFound, ProviderError
from cineVault.utils import log_debug
from cineVault.settings import TMDB_API_KEY, TMDB_BASE_URL, REQUEST_TIMEOUT
from cineVault.metadata.core.models import MediaKind
from cineVault.metadata.discover import DiscoverFilters


class TMDBClient:
    """Thin wrapper around The Movie Database (TMDb) v3 REST API.

    Every method returns the decoded JSON body unchanged. Caching and pacing
    are the gateway's job; this class only talks HTTP.
    """
    BASE_URL = TMDB_BASE_URL

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    def __init__(
        self,
        api_key: str | None = None,
        session: requests.Session | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ):
        self.api_key = api_key or TMDB_API_KEY
        if not self.api_key:
            raise RuntimeError("No TMDB api key passed")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _get(self, path: str, **params) -> Any:
        params = {k: v for k, v in params.items() if v is not None}
        params["api_key"] = self.api_key
        try:
            r = self.session.get(f"{self.BASE_URL}{path}", params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise ProviderError(f"TMDb {path}: {type(exc).__name__}") from exc

        if r.status_code == 404:
            raise NotFound(f"TMDb {path}: not found", status_code=404)
        if r.status_code == 429:
            log_debug("TMDb rate limit reached")
        if not r.ok:
            raise ProviderError(f"TMDb {path}: HTTP {r.status_code}", status_code=r.status_code)
        try:
            return r.json()
        except ValueError as exc:
            raise ProviderError(f"TMDb {path}: invalid JSON body") from exc

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------
    def search(self, kind: MediaKind, query: str, page: int = 1) -> Dict[str, Any]:
        return self._get(f"/search/{kind.value}", query=query, page=page, include_adult="false")

    def trending(self, kind: MediaKind, window: str = "week") -> Dict[str, Any]:
        return self._get(f"/trending/{kind.value}/{window}")

    def discover(self, kind: MediaKind, filters: DiscoverFilters | None = None) -> Dict[str, Any]:
        """`/discover/<kind>` with the canonical page / genre / year / sort."""
        params = (filters or DiscoverFilters()).canonical(kind)
        year_param = "year" if kind is MediaKind.MOVIE else "first_air_date_year"
        return self._get(
            f"/discover/{kind.value}",
            page=params["page"],
            with_genres=params["genre"],
            sort_by=params["sort_key"],
            include_adult="false",
            **{year_param: params["year"]},
        )

    # ------------------------------------------------------------------
    # Single titles
    # ------------------------------------------------------------------
    def details(self, kind: MediaKind, tmdb_id: int) -> Dict[str, Any]:
        return self._get(f"/{kind.value}/{int(tmdb_id)}")

    def credits(self, kind: MediaKind, tmdb_id: int) -> Dict[str, Any]:
        return self._get(f"/{kind.value}/{int(tmdb_id)}/credits")

    def genres(self, kind: MediaKind) -> List[Dict[str, Any]]:
        return self._get(f"/genre/{kind.value}/list").get("genres", [])
