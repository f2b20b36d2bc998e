"""
metadata
~~~~~~~~
Top-level package that bundles:

* core        – dataclasses, key-value store, watchlist
* api_clients – TMDb / OMDb clients and their offline stand-ins
* gateway     – cache + pacing in front of the clients
"""

# ── core objects ──────────────────────────────────────────────────────────
from .core.models import Media, MediaKind, PagedResult, TrackedItem, WatchlistStats
from .core.kv_store import SQLiteKVStore
from .core.watchlist import ViewFilter, ViewSort, WatchlistStore

# ── remote access ─────────────────────────────────────────────────────────
from .discover import DiscoverFilters
from .gateway import Gateway, get_gateway

__all__ = [
    "Media",
    "MediaKind",
    "PagedResult",
    "TrackedItem",
    "WatchlistStats",
    "SQLiteKVStore",
    "ViewFilter",
    "ViewSort",
    "WatchlistStore",
    "DiscoverFilters",
    "Gateway",
    "get_gateway",
]
