"""metadata.core.watchlist
The user's tracked movies / shows.

The whole list lives in memory and is written back, as one JSON document,
right after every change. Read views (`view`, `stats`, look-ups) never touch
storage and never reorder the stored list.
"""

from __future__ import annotations

import json
import sqlite3
from dataclasses import replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional

from cineVault.errors import PersistenceCorruption
from cineVault.settings import WATCHLIST_KEY
from cineVault.utils import LOGGER, log_debug
from cineVault.metadata.core.kv_store import KeyValueStore
from cineVault.metadata.core.models import (
    Media, MediaKind, TrackedItem, WatchlistStats,
)


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds")


class ViewFilter(str, Enum):
    ALL = "all"
    MOVIES = "movie"
    SHOWS = "tv"
    WATCHED = "watched"
    UNWATCHED = "unwatched"


class ViewSort(str, Enum):
    ADDED = "added_date"
    TITLE = "title"
    RELEASE_DATE = "release_date"
    RATING = "rating"


_FILTERS: Dict[ViewFilter, Callable[[TrackedItem], bool]] = {
    ViewFilter.ALL:       lambda item: True,
    ViewFilter.MOVIES:    lambda item: item.kind is MediaKind.MOVIE,
    ViewFilter.SHOWS:     lambda item: item.kind is MediaKind.SHOW,
    ViewFilter.WATCHED:   lambda item: item.watched,
    ViewFilter.UNWATCHED: lambda item: not item.watched,
}

# sort → (key, descending)
_SORTS: Dict[ViewSort, tuple[Callable[[TrackedItem], Any], bool]] = {
    ViewSort.ADDED:        (lambda item: item.added_at, True),
    ViewSort.TITLE:        (lambda item: item.title.casefold(), False),
    ViewSort.RELEASE_DATE: (lambda item: item.release_date, True),
    ViewSort.RATING:       (lambda item: item.rating, True),
}


class WatchlistStore:
    """In-memory tracked-items list mirrored to a key-value store."""

    def __init__(
        self,
        kv: KeyValueStore,
        key: str = WATCHLIST_KEY,
        clock: Callable[[], str] = utc_now,
    ):
        self.kv = kv
        self.key = key
        self._clock = clock
        self._items: List[TrackedItem] = []
        self._loaded = False

    # ───────────────────────────── loading ──────────────────────────
    def load(self) -> None:
        """Read the saved list once; absent or corrupt data → empty list."""
        if self._loaded:
            return
        self._loaded = True
        try:
            self._items = self._decode(self._read())
            log_debug(f"Watchlist loaded: {len(self._items)} items")
        except PersistenceCorruption as exc:
            LOGGER.warning("Discarding unreadable watchlist: %s", exc)
            self._items = []

    def _read(self) -> Optional[str]:
        try:
            return self.kv.get(self.key)
        except sqlite3.Error as exc:
            raise PersistenceCorruption(f"storage read failed: {exc}") from exc

    @staticmethod
    def _decode(raw: Optional[str]) -> List[TrackedItem]:
        if raw is None:
            return []
        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise PersistenceCorruption("expected a JSON array")
            items: List[TrackedItem] = []
            seen = set()
            for entry in data:
                item = TrackedItem.from_dict(entry)
                if item.identity not in seen:
                    seen.add(item.identity)
                    items.append(item)
            return items
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise PersistenceCorruption(str(exc)) from exc

    def _commit(self, items: List[TrackedItem]) -> None:
        """Write *items* as the whole list, then adopt them in memory.

        A failing write propagates and leaves the in-memory list as it was.
        """
        payload = json.dumps([item.to_dict() for item in items])
        self.kv.set(self.key, payload)
        self._items = items
        log_debug(f"Watchlist saved: {len(items)} items")

    def _find(self, item_id: int, kind: MediaKind | str) -> Optional[TrackedItem]:
        self.load()
        identity = (int(item_id), MediaKind.parse(kind))
        for item in self._items:
            if item.identity == identity:
                return item
        return None

    # ───────────────────────────── writers ──────────────────────────
    def add(self, snapshot: Media | TrackedItem | Mapping[str, Any]) -> bool:
        """Append *snapshot* unless its (id, kind) is already tracked.

        Returns **True** when an entry was added, **False** on a duplicate.
        The stored copy starts unwatched and is stamped with the add time.
        """
        item = self._coerce(snapshot)
        if self._find(item.id, item.kind) is not None:
            log_debug(f"Watchlist already has {item.kind.value} {item.id}")
            return False
        item.watched = False
        item.added_at = self._clock()
        log_debug(f"Adding to watchlist: {item.title}")
        self._commit(self._items + [item])
        return True

    def remove(self, item_id: int, kind: MediaKind | str) -> bool:
        item = self._find(item_id, kind)
        if item is None:
            return False
        log_debug(f"Removing from watchlist: {item_id} {item.kind.value}")
        self._commit([i for i in self._items if i is not item])
        return True

    def toggle_watched(self, item_id: int, kind: MediaKind | str) -> Optional[bool]:
        """Flip the watched flag; return the new value or **None** if absent."""
        item = self._find(item_id, kind)
        if item is None:
            return None
        flipped = replace(item, watched=not item.watched)
        self._commit([flipped if i is item else i for i in self._items])
        return flipped.watched

    def clear(self) -> None:
        self.load()
        log_debug("Clearing watchlist")
        self._commit([])

    # ───────────────────────────── look-ups ──────────────────────────
    def contains(self, item_id: int, kind: MediaKind | str) -> bool:
        return self._find(item_id, kind) is not None

    def get(self, item_id: int, kind: MediaKind | str) -> Optional[TrackedItem]:
        item = self._find(item_id, kind)
        return replace(item) if item is not None else None

    def items(self) -> List[TrackedItem]:
        """Copies of every entry, in the order they were added."""
        self.load()
        return [replace(item) for item in self._items]

    def __len__(self) -> int:
        self.load()
        return len(self._items)

    # ───────────────────────── aggregates / views ─────────────────────
    def stats(self) -> WatchlistStats:
        self.load()
        total = len(self._items)
        watched = sum(1 for item in self._items if item.watched)
        movies = sum(1 for item in self._items if item.kind is MediaKind.MOVIE)
        return WatchlistStats(
            total=total,
            watched=watched,
            unwatched=total - watched,
            movies=movies,
            shows=total - movies,
        )

    def view(
        self,
        filter: ViewFilter | str = ViewFilter.ALL,
        sort: ViewSort | str = ViewSort.ADDED,
    ) -> List[TrackedItem]:
        """Filtered, sorted copies of the list; stored order is untouched."""
        keep = _FILTERS[ViewFilter(filter)]
        key, descending = _SORTS[ViewSort(sort)]
        self.load()
        chosen = [replace(item) for item in self._items if keep(item)]
        return sorted(chosen, key=key, reverse=descending)

    # ───────────────────────────── helpers ───────────────────────────
    @staticmethod
    def _coerce(snapshot: Media | TrackedItem | Mapping[str, Any]) -> TrackedItem:
        if isinstance(snapshot, TrackedItem):
            return replace(snapshot)
        if isinstance(snapshot, Media):
            snapshot = snapshot.snapshot()
        kind = snapshot.get("kind", snapshot.get("type"))
        if kind is None:
            raise ValueError("snapshot needs a 'kind'")
        rating = snapshot.get("rating", snapshot.get("vote_average"))
        return TrackedItem(
            id=int(snapshot["id"]),
            kind=MediaKind.parse(kind),
            title=str(snapshot.get("title") or snapshot.get("name") or ""),
            poster_path=snapshot.get("poster_path"),
            release_date=snapshot.get("release_date") or snapshot.get("first_air_date") or "",
            rating=float(rating or 0.0),
            overview=snapshot.get("overview") or "",
        )
