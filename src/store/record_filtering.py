"""Catalog search filtering helpers.

This module applies caption text and metadata constraints used by
catalog search. It keeps the predicate reusable outside the manager.
"""

from __future__ import annotations

from typing import Iterable

from core.types import ImageRecord, ImageSearchResult, SearchOptions


def filter_images(
    images: Iterable[ImageSearchResult],
    query: str,
    options: SearchOptions,
) -> list[ImageSearchResult]:
    """Filter catalog images by caption text and metadata.

    Args:
        images: Candidate images in catalog order.
        query: Case-insensitive caption substring; empty matches everything.
        options: Additional filters, all ANDed, plus an optional limit.

    Returns:
        Matching images in input order, truncated to ``options.limit``.
    """
    normalized_query = query.lower()
    filtered: list[ImageSearchResult] = []
    for image in images:
        if normalized_query not in image.caption.lower():
            continue
        if not matches_filters(image.record, options):
            continue
        filtered.append(image)
    if options.limit is not None:
        return filtered[: options.limit]
    return filtered


def matches_filters(record: ImageRecord, options: SearchOptions) -> bool:
    """Check one record against tag, artist, year, and collection filters.

    Args:
        record: Catalog record.
        options: Search filters.

    Returns:
        True when every supplied filter matches.
    """
    metadata = record.metadata
    if options.tags:
        if not any(tag in record.tags for tag in options.tags):
            return False
    if options.artist:
        if not _contains_ignore_case(metadata.get("artist"), options.artist):
            return False
    if options.year:
        year = metadata.get("year")
        if year is None or _year_text(year) != _year_text(options.year):
            return False
    if options.collection:
        if not _contains_ignore_case(metadata.get("collection"), options.collection):
            return False
    return True


def _contains_ignore_case(value: object, needle: str) -> bool:
    return isinstance(value, str) and needle.lower() in value.lower()


def _year_text(value: object) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
