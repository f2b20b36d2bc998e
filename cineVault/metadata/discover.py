"""metadata.discover
Filter / sort rules for the *discover* listings.

The live TMDb call and the offline sample data both go through
`normalize_sort_key`, so a given filter set orders results the same way
whichever path serves it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping

from cineVault.metadata.core.models import MediaKind, date_field

DEFAULT_SORT = "popularity.desc"

# accepted spelling → payload field; date fields are resolved per kind
_SORT_FIELDS = {
    "popularity": "popularity",
    "vote_average": "vote_average",
    "rating": "vote_average",
    "release_date": "release_date",
    "first_air_date": "release_date",
}


@dataclass(slots=True, frozen=True)
class DiscoverFilters:
    page: int | None = None
    genre: int | None = None
    year: int | None = None
    sort_key: str | None = None

    @classmethod
    def coerce(cls, value: "DiscoverFilters | Mapping[str, Any] | None") -> "DiscoverFilters":
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        unknown = set(value) - {"page", "genre", "year", "sort_key", "sort_by"}
        if unknown:
            raise ValueError(f"Unknown discover filters: {', '.join(sorted(unknown))}")
        return cls(
            page=value.get("page"),
            genre=value.get("genre"),
            year=value.get("year"),
            sort_key=value.get("sort_key", value.get("sort_by")),
        )

    def canonical(self, kind: MediaKind) -> Dict[str, Any]:
        """Parameters as used for the cache key and the live request."""
        return {
            "page": int(self.page or 1),
            "genre": int(self.genre) if self.genre is not None else None,
            "year": int(self.year) if self.year is not None else None,
            "sort_key": normalize_sort_key(kind, self.sort_key),
        }


def normalize_sort_key(kind: MediaKind, sort_key: str | None) -> str:
    """Map *sort_key* onto the kind's native spelling; unknown → default.

    ``release_date`` and ``first_air_date`` are aliases of each other so one
    UI control can drive both listings; ``rating`` stands for ``vote_average``.
    """
    if not sort_key or "." not in sort_key:
        return DEFAULT_SORT
    field, _, direction = sort_key.strip().partition(".")
    if field not in _SORT_FIELDS or direction not in ("asc", "desc"):
        return DEFAULT_SORT
    field = _SORT_FIELDS[field]
    if field == "release_date":
        field = date_field(kind)
    return f"{field}.{direction}"


def release_year(item: Mapping[str, Any], kind: MediaKind) -> int | None:
    raw = item.get(date_field(kind)) or ""
    try:
        return int(str(raw)[:4])
    except ValueError:
        return None


def apply_discover(
    items: Iterable[Mapping[str, Any]],
    kind: MediaKind,
    filters: "DiscoverFilters | Mapping[str, Any] | None" = None,
) -> List[Dict[str, Any]]:
    """Filter by genre / year, then sort, without touching *items*."""
    params = DiscoverFilters.coerce(filters).canonical(kind)
    chosen = [dict(item) for item in items]

    if params["genre"] is not None:
        chosen = [m for m in chosen if params["genre"] in (m.get("genre_ids") or [])]
    if params["year"] is not None:
        chosen = [m for m in chosen if release_year(m, kind) == params["year"]]

    field, _, direction = params["sort_key"].partition(".")
    if field == date_field(kind):
        key = lambda m: str(m.get(field) or "")
    else:
        key = lambda m: float(m.get(field) or 0.0)
    chosen.sort(key=key, reverse=direction == "desc")
    return chosen
