import pytest

from cineVault.metadata.core.models import (
    Media, MediaKind, PagedResult, TrackedItem, WatchlistStats,
)


@pytest.mark.parametrize("raw, expected", [
    ("movie", MediaKind.MOVIE),
    ("MOVIE", MediaKind.MOVIE),
    ("tv", MediaKind.SHOW),
    ("show", MediaKind.SHOW),
    (" series ", MediaKind.SHOW),
    (MediaKind.SHOW, MediaKind.SHOW),
])
def test_media_kind_parse(raw, expected):
    assert MediaKind.parse(raw) is expected


def test_media_kind_parse_rejects_unknown():
    with pytest.raises(ValueError):
        MediaKind.parse("podcast")


def test_show_fields_are_read_through_kind():
    show = Media(MediaKind.SHOW, {
        "id": 101, "name": "Breaking Bad", "title": "ignored",
        "first_air_date": "2008-01-20", "vote_average": 9.5,
    })
    assert show.title == "Breaking Bad"
    assert show.release_date == "2008-01-20"
    assert show.rating == 9.5
    assert show.overview == ""
    assert show.poster_path is None


def test_movie_with_sparse_payload():
    movie = Media(MediaKind.MOVIE, {"id": "7"})
    assert movie.id == 7
    assert movie.title == ""
    assert movie.release_date == ""
    assert movie.rating == 0.0


def test_snapshot():
    movie = Media(MediaKind.MOVIE, {
        "id": 1, "title": "The Matrix", "release_date": "1999-03-30",
        "vote_average": 8.7, "poster_path": "/m.jpg", "overview": "Red pill.",
        "popularity": 95.5,
    })
    assert movie.snapshot() == {
        "id": 1, "kind": MediaKind.MOVIE, "title": "The Matrix",
        "poster_path": "/m.jpg", "release_date": "1999-03-30",
        "rating": 8.7, "overview": "Red pill.",
    }


def test_paged_result_from_payload():
    page = PagedResult.from_payload(MediaKind.SHOW, {
        "page": 2,
        "results": [{"id": 101, "name": "Breaking Bad"}],
        "total_pages": 4,
        "total_results": 61,
    })
    assert (page.page, page.total_pages, page.total_results) == (2, 4, 61)
    assert page.results[0].kind is MediaKind.SHOW
    assert page.results[0].title == "Breaking Bad"


def test_paged_result_defaults():
    page = PagedResult.from_payload(MediaKind.MOVIE, {"results": [{"id": 1}, {"id": 2}]})
    assert (page.page, page.total_pages, page.total_results) == (1, 1, 2)


def test_tracked_item_reads_saved_format():
    item = TrackedItem.from_dict({
        "id": 101,
        "title": "Breaking Bad",
        "type": "tv",
        "poster_path": None,
        "release_date": "2008-01-20",
        "vote_average": 9.5,
        "overview": "",
        "watched": True,
        "added_date": "2025-06-01T10:00:00.000Z",
    })
    assert item.identity == (101, MediaKind.SHOW)
    assert item.watched is True
    assert item.rating == 9.5
    assert item.added_at == "2025-06-01T10:00:00.000Z"
    assert TrackedItem.from_dict(item.to_dict()) == item


def test_tracked_item_from_dict_needs_type():
    with pytest.raises(KeyError):
        TrackedItem.from_dict({"id": 1, "title": "x"})


def test_stats_as_dict():
    assert WatchlistStats(3, 1, 2, 2, 1).as_dict() == {
        "total": 3, "watched": 1, "unwatched": 2, "movies": 2, "shows": 1,
    }


@pytest.mark.parametrize("field, value", [
    ("title", 42),
    ("release_date", 2008),
    ("added_date", 5),
    ("overview", ["x"]),
    ("watched", "false"),
    ("watched", 1),
])
def test_tracked_item_rejects_wrongly_typed_fields(field, value):
    data = {"id": 1, "title": "A", "type": "movie", field: value}
    with pytest.raises(TypeError):
        TrackedItem.from_dict(data)


def test_tracked_item_treats_null_text_as_empty():
    item = TrackedItem.from_dict({
        "id": 1, "title": "A", "type": "movie",
        "release_date": None, "overview": None, "added_date": None, "poster_path": None,
    })
    assert (item.release_date, item.overview, item.added_at, item.poster_path) == ("", "", "", None)
    assert item.watched is False
