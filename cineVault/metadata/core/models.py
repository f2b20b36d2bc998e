# Media / watchlist dataclasses (+ any simple DTOs)
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping


class MediaKind(str, Enum):
    """Movie or TV show; the value doubles as the TMDb path segment."""
    MOVIE = "movie"
    SHOW = "tv"

    @classmethod
    def parse(cls, value: "MediaKind | str") -> "MediaKind":
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        if text in ("show", "tv_show", "series"):
            return cls.SHOW
        try:
            return cls(text)
        except ValueError:
            raise ValueError(f"Unknown media kind: {value!r}") from None


# kind → (title field, date field) in TMDb list payloads
_FIELDS = {
    MediaKind.MOVIE: ("title", "release_date"),
    MediaKind.SHOW: ("name", "first_air_date"),
}


def title_field(kind: MediaKind) -> str:
    return _FIELDS[kind][0]


def date_field(kind: MediaKind) -> str:
    return _FIELDS[kind][1]


@dataclass(slots=True)
class Media:
    """One search/trending/discover entry, tagged with its kind."""
    kind: MediaKind
    payload: Dict[str, Any]

    @property
    def id(self) -> int:
        return int(self.payload["id"])

    @property
    def title(self) -> str:
        return self.payload.get(title_field(self.kind)) or ""

    @property
    def release_date(self) -> str:
        return self.payload.get(date_field(self.kind)) or ""

    @property
    def rating(self) -> float:
        return float(self.payload.get("vote_average") or 0.0)

    @property
    def poster_path(self) -> str | None:
        return self.payload.get("poster_path")

    @property
    def overview(self) -> str:
        return self.payload.get("overview") or ""

    def snapshot(self) -> Dict[str, Any]:
        """Fields a watchlist entry copies at add-time."""
        return {
            "id": self.id,
            "kind": self.kind,
            "title": self.title,
            "poster_path": self.poster_path,
            "release_date": self.release_date,
            "rating": self.rating,
            "overview": self.overview,
        }


@dataclass(slots=True)
class PagedResult:
    page: int
    results: List[Media]
    total_pages: int
    total_results: int

    @classmethod
    def from_payload(cls, kind: MediaKind, payload: Mapping[str, Any]) -> "PagedResult":
        results = [Media(kind, dict(item)) for item in payload.get("results", [])]
        return cls(
            page=int(payload.get("page", 1)),
            results=results,
            total_pages=int(payload.get("total_pages", 1)),
            total_results=int(payload.get("total_results", len(results))),
        )


@dataclass(slots=True)
class TrackedItem:
    id: int
    kind: MediaKind
    title: str
    poster_path: str | None = None
    release_date: str = ""
    rating: float = 0.0
    overview: str = ""
    watched: bool = False
    added_at: str = ""

    @property
    def identity(self) -> tuple[int, MediaKind]:
        return self.id, self.kind

    # Serialized names match the saved-list format of the web client
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "type": self.kind.value,
            "poster_path": self.poster_path,
            "release_date": self.release_date,
            "vote_average": self.rating,
            "overview": self.overview,
            "watched": self.watched,
            "added_date": self.added_at,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TrackedItem":
        """Rebuild a saved entry; wrongly typed fields raise `TypeError`."""
        watched = data.get("watched", False)
        if not isinstance(watched, bool):
            raise TypeError(f"'watched' must be a bool, got {watched!r}")
        return cls(
            id=int(data["id"]),
            kind=MediaKind.parse(data["type"]),
            title=_text(data, "title", required=True),
            poster_path=_text(data, "poster_path") or None,
            release_date=_text(data, "release_date"),
            rating=float(data.get("vote_average") or 0.0),
            overview=_text(data, "overview"),
            watched=watched,
            added_at=_text(data, "added_date"),
        )


def _text(data: Mapping[str, Any], name: str, required: bool = False) -> str:
    value = data[name] if required else data.get(name)
    if value is None and not required:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"{name!r} must be a string, got {value!r}")
    return value


@dataclass(slots=True)
class WatchlistStats:
    total: int = 0
    watched: int = 0
    unwatched: int = 0
    movies: int = 0
    shows: int = 0

    def as_dict(self) -> Dict[str, int]:
        return {
            "total": self.total,
            "watched": self.watched,
            "unwatched": self.unwatched,
            "movies": self.movies,
            "shows": self.shows,
        }
