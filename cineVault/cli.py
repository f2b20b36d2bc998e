"""Command-line front end: plain-text listings over the gateway and watchlist."""

from __future__ import annotations

import argparse
import sys
from typing import Iterable, Optional, Sequence

from cineVault.errors import GatewayFailure
from cineVault.settings import DATABASE_PATH
from cineVault.utils import configure_logging, format_date, format_runtime, image_url, log_debug
from cineVault.metadata.core.kv_store import SQLiteKVStore
from cineVault.metadata.core.models import Media, MediaKind, TrackedItem
from cineVault.metadata.core.watchlist import ViewFilter, ViewSort, WatchlistStore
from cineVault.metadata.api_clients.omdb_client import OMDBClient
from cineVault.metadata.gateway import Gateway, get_gateway

KINDS = [k.value for k in MediaKind]


# ────────────────────────────────────────────────────────────────────────────
# Output helpers
# ────────────────────────────────────────────────────────────────────────────
def _print_media(entries: Iterable[Media]) -> None:
    rows = list(entries)
    if not rows:
        print("No results.")
        return
    for m in rows:
        year = m.release_date[:4] or "----"
        print(f"{m.id:>8}  {year}  {m.rating:4.1f}  {m.title}")


def _print_tracked(entries: Iterable[TrackedItem]) -> None:
    rows = list(entries)
    if not rows:
        print("Watchlist is empty.")
        return
    for item in rows:
        mark = "x" if item.watched else " "
        print(f"[{mark}] {item.kind.value:<5} {item.id:>8}  {item.rating:4.1f}  {item.title}")


def _print_details(gateway: Gateway, kind: MediaKind, tmdb_id: int) -> None:
    det = gateway.details(kind, tmdb_id)
    media = Media(kind, det)
    print(media.title)
    print(f"  Released : {format_date(media.release_date)}")
    print(f"  Rating   : {media.rating:.1f}")
    if det.get("runtime"):
        print(f"  Runtime  : {format_runtime(det['runtime'])}")
    if det.get("genres"):
        print(f"  Genres   : {', '.join(g['name'] for g in det['genres'])}")
    print(f"  Poster   : {image_url(media.poster_path)}")
    if media.overview:
        print(f"  {media.overview}")

    cast = gateway.credits(kind, tmdb_id).get("cast", [])[:5]
    if cast:
        print("  Cast     : " + ", ".join(c["name"] for c in cast))

    imdb_id = det.get("imdb_id")
    if imdb_id:
        try:
            omdb = gateway.cross_reference(imdb_id)
        except GatewayFailure as exc:
            log_debug(f"Critic scores unavailable for {imdb_id}: {exc}")
            print("  Critics  : n/a")
            return
        if omdb:
            scores = OMDBClient.ratings(omdb)
            shown = ", ".join(f"{k}={v:g}" for k, v in scores.items() if v is not None)
            print(f"  Critics  : {shown or 'n/a'}")


# ────────────────────────────────────────────────────────────────────────────
# Commands
# ────────────────────────────────────────────────────────────────────────────
def _watchlist(args: argparse.Namespace, gateway: Gateway, store: WatchlistStore) -> int:
    action = args.action
    if action == "list":
        _print_tracked(store.view(args.filter, args.sort))
    elif action == "stats":
        for name, value in store.stats().as_dict().items():
            print(f"{name:<10}{value}")
    elif action == "clear":
        store.clear()
        print("Watchlist cleared.")
    else:
        if args.kind is None or args.id is None:
            print(f"watchlist {action} needs KIND and ID", file=sys.stderr)
            return 2
        kind = MediaKind.parse(args.kind)
        if action == "add":
            media = Media(kind, gateway.details(kind, args.id))
            added = store.add(media)
            print(f"Added {media.title}." if added else f"{media.title} is already tracked.")
        elif action == "remove":
            print("Removed." if store.remove(args.id, kind) else "Not in watchlist.")
        elif action == "toggle":
            state = store.toggle_watched(args.id, kind)
            if state is None:
                print("Not in watchlist.")
            else:
                print("Marked watched." if state else "Marked unwatched.")
    return 0


def run(args: argparse.Namespace, gateway: Gateway, store: WatchlistStore) -> int:
    cmd = args.command
    if cmd == "watchlist":
        return _watchlist(args, gateway, store)

    kind = MediaKind.parse(args.kind)
    movie = kind is MediaKind.MOVIE
    if cmd == "search":
        page = gateway.search_movies(args.query, args.page) if movie else gateway.search_shows(args.query, args.page)
        _print_media(page.results)
        print(f"Page {page.page}/{page.total_pages} ({page.total_results} results)")
    elif cmd == "trending":
        page = gateway.trending_movies(args.window) if movie else gateway.trending_shows(args.window)
        _print_media(page.results)
    elif cmd == "discover":
        filters = {"page": args.page, "genre": args.genre, "year": args.year, "sort_key": args.sort}
        page = gateway.discover_movies(filters) if movie else gateway.discover_shows(filters)
        _print_media(page.results)
    elif cmd == "genres":
        for g in gateway.genres(kind):
            print(f"{g['id']:>6}  {g['name']}")
    elif cmd == "details":
        _print_details(gateway, kind, args.id)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="cinevault", description="Browse TMDb and manage your watchlist.")
    p.add_argument("-v", "--verbose", action="store_true", help="write debug lines to the log file")
    sub = p.add_subparsers(dest="command", required=True)

    s = sub.add_parser("search", help="search titles")
    s.add_argument("kind", choices=KINDS)
    s.add_argument("query")
    s.add_argument("--page", type=int, default=1)

    t = sub.add_parser("trending", help="trending titles")
    t.add_argument("kind", choices=KINDS)
    t.add_argument("--window", choices=["day", "week"], default="week")

    d = sub.add_parser("discover", help="browse by genre / year")
    d.add_argument("kind", choices=KINDS)
    d.add_argument("--genre", type=int)
    d.add_argument("--year", type=int)
    d.add_argument("--sort", default=None, help="e.g. popularity.desc, vote_average.asc")
    d.add_argument("--page", type=int, default=1)

    g = sub.add_parser("genres", help="list genres")
    g.add_argument("kind", choices=KINDS)

    det = sub.add_parser("details", help="details, cast and critic scores")
    det.add_argument("kind", choices=KINDS)
    det.add_argument("id", type=int)

    w = sub.add_parser("watchlist", help="manage the local watchlist")
    w.add_argument("action", choices=["list", "add", "remove", "toggle", "clear", "stats"])
    w.add_argument("kind", nargs="?", choices=KINDS)
    w.add_argument("id", nargs="?", type=int)
    w.add_argument("--filter", choices=[f.value for f in ViewFilter], default=ViewFilter.ALL.value)
    w.add_argument("--sort", choices=[s.value for s in ViewSort], default=ViewSort.ADDED.value)
    return p


def main(
    argv: Optional[Sequence[str]] = None,
    gateway: Optional[Gateway] = None,
    store: Optional[WatchlistStore] = None,
) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        configure_logging()
    if gateway is None:
        gateway = get_gateway()
    kv = None
    if store is None:
        kv = SQLiteKVStore(DATABASE_PATH)
        store = WatchlistStore(kv)
    try:
        return run(args, gateway, store)
    except GatewayFailure as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        if kv is not None:
            kv.close()


# Python entry-point guard
if __name__ == "__main__":
    sys.exit(main())
