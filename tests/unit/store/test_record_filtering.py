"""Unit tests for catalog search filtering."""

from __future__ import annotations

from core.types import ImageRecord, ImageSearchResult, SearchOptions
from store.record_filtering import filter_images, matches_filters


def _images() -> list[ImageSearchResult]:
    return [
        ImageSearchResult(
            id="a",
            record=ImageRecord(
                caption="Blue Horizon",
                metadata={"artist": "Monir Farmanfarmaian", "year": 1975, "collection": "TMoCA"},
                tags=("abstract", "mirror"),
            ),
        ),
        ImageSearchResult(
            id="b",
            record=ImageRecord(
                caption="Red Square",
                metadata={"artist": "Parviz Tanavoli", "year": "1973"},
                tags=("sculpture",),
            ),
        ),
    ]


def test_filter_images_matches_caption_case_insensitively() -> None:
    """Caption search should ignore case."""
    results = filter_images(_images(), "blue", SearchOptions())

    assert [image.id for image in results] == ["a"]


def test_filter_images_empty_query_matches_everything() -> None:
    """An empty query should keep every image in order."""
    results = filter_images(_images(), "", SearchOptions())

    assert [image.id for image in results] == ["a", "b"]


def test_filter_images_applies_limit() -> None:
    """Limit should truncate in catalog order."""
    results = filter_images(_images(), "", SearchOptions(limit=1))

    assert [image.id for image in results] == ["a"]


def test_matches_filters_uses_any_of_tags() -> None:
    """Tag filter should match when any requested tag is present."""
    record = _images()[0].record

    assert matches_filters(record, SearchOptions(tags=("missing", "mirror")))
    assert not matches_filters(record, SearchOptions(tags=("missing",)))


def test_matches_filters_compares_year_as_string() -> None:
    """Numeric and string years should compare by their text."""
    images = _images()

    assert matches_filters(images[0].record, SearchOptions(year="1975"))
    assert matches_filters(images[1].record, SearchOptions(year=1973))
    assert not matches_filters(images[1].record, SearchOptions(year="197"))


def test_matches_filters_ands_artist_and_collection() -> None:
    """Every supplied filter must match."""
    record = _images()[0].record

    assert matches_filters(record, SearchOptions(artist="monir", collection="tmoca"))
    assert not matches_filters(record, SearchOptions(artist="monir", collection="louvre"))


def test_matches_filters_rejects_missing_metadata() -> None:
    """Records without the filtered field should not match."""
    record = _images()[1].record

    assert not matches_filters(record, SearchOptions(collection="TMoCA"))
