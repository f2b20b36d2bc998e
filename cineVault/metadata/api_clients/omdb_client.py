# cineVault/metadata/api_clients/omdb_client.py
from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from cineVault.errors import NotFound, ProviderError
from cineVault.settings import OMDB_API_KEY, OMDB_BASE_URL, REQUEST_TIMEOUT


class OMDBClient:
    """
    Wrapper around OMDb, used as the cross-reference provider: TMDb detail
    payloads carry an ``imdb_id``, OMDb answers with critic ratings for it.

    OMDb reports a miss with HTTP 200 and ``"Response": "False"``; that is
    raised as `NotFound`, distinct from transport / status failures.
    """

    # ────────────────────────────────────────────────────────────────
    # Construction
    # ────────────────────────────────────────────────────────────────
    def __init__(
        self,
        api_key: str | None = None,
        session: requests.Session | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ):
        self.api_key = api_key or OMDB_API_KEY
        if not self.api_key:
            raise RuntimeError("OMDB_API_KEY not set and no api_key passed")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ────────────────────────────────────────────────────────────────
    # Lookup
    # ────────────────────────────────────────────────────────────────
    def find(self, imdb_id: str) -> Dict[str, Any]:
        params = {"apikey": self.api_key, "i": imdb_id}
        try:
            resp = self.session.get(OMDB_BASE_URL, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise ProviderError(f"OMDb {imdb_id}: {type(exc).__name__}") from exc

        if resp.status_code == 404:
            raise NotFound(f"OMDb {imdb_id}: not found", status_code=404)
        if not resp.ok:
            raise ProviderError(f"OMDb {imdb_id}: HTTP {resp.status_code}", status_code=resp.status_code)
        try:
            data = resp.json()
        except ValueError as exc:
            raise ProviderError(f"OMDb {imdb_id}: invalid JSON body") from exc

        if data.get("Response") != "True":
            raise NotFound(f"OMDb {imdb_id}: {data.get('Error', 'no match')}")
        return data

    # ────────────────────────────────────────────────────────────────
    # Ratings block
    # ────────────────────────────────────────────────────────────────
    @classmethod
    def ratings(cls, d: Dict[str, Any]) -> Dict[str, Optional[float]]:
        """IMDb / Rotten Tomatoes / Metacritic scores, all on a 0-100 scale."""
        r = {
            "imdb":       cls._score10_to_100(d.get("imdbRating")),
            "rt_critic":  None,
            "metacritic": cls._metascore(d.get("Metascore")),
        }
        for src in d.get("Ratings", []):
            if src.get("Source") == "Rotten Tomatoes":
                r["rt_critic"] = cls._percent(src.get("Value"))
        return r

    # ────────────────────────────────────────────────────────────────
    # Tiny parsing helpers
    # ────────────────────────────────────────────────────────────────
    @staticmethod
    def _score10_to_100(txt: str | None) -> Optional[float]:
        try: return round(float(txt) * 10, 1)
        except (TypeError, ValueError): return None

    @staticmethod
    def _percent(txt: str | None) -> Optional[float]:
        if txt and txt.endswith("%"):
            try: return float(txt.rstrip("%"))
            except ValueError: pass
        return None

    @staticmethod
    def _metascore(txt: str | None) -> Optional[float]:
        try: return float(txt.split("/")[0])
        except (AttributeError, ValueError): return None
