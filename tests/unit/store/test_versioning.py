"""Unit tests for dataset version identifiers."""

from __future__ import annotations

from datetime import datetime, timezone

from store.versioning import (
    compare_versions,
    create_metadata,
    generate_version,
    get_schema_version,
    is_compatible,
    parse_version,
)


def test_generate_version_replaces_separators() -> None:
    """Version ids should contain no colons or dots."""
    version = generate_version()

    assert version.startswith("v") and ":" not in version and "." not in version


def test_parse_version_round_trips_generated_version() -> None:
    """Parsing a fresh version should land within the current second."""
    before = datetime.now(timezone.utc)

    parsed = parse_version(generate_version())

    assert parsed is not None and abs((parsed - before).total_seconds()) < 1


def test_parse_version_reads_known_instant() -> None:
    """Parsing should reinsert colons and the millisecond dot."""
    parsed = parse_version("v2025-08-17T12-30-45-123Z")

    assert parsed == datetime(2025, 8, 17, 12, 30, 45, 123000, tzinfo=timezone.utc)


def test_parse_version_returns_none_for_wrong_segment_count() -> None:
    """Malformed ids should parse to None instead of raising."""
    assert parse_version("v2025-08-17T12-30-45Z") is None
    assert parse_version("not-a-version") is None


def test_parse_version_returns_none_for_invalid_instant() -> None:
    """Structurally valid ids with impossible dates should parse to None."""
    assert parse_version("v2025-13-45T12-30-45-123Z") is None


def test_compare_versions_orders_by_instant() -> None:
    """Earlier versions should compare lower by millisecond difference."""
    earlier = "v2025-08-17T12-30-45-123Z"
    later = "v2025-08-17T12-30-46-123Z"

    assert compare_versions(earlier, later) == -1000
    assert compare_versions(later, earlier) == 1000
    assert compare_versions(earlier, earlier) == 0


def test_compare_versions_falls_back_to_string_order() -> None:
    """Unparseable versions should compare lexicographically."""
    assert compare_versions("alpha", "beta") < 0
    assert compare_versions("beta", "alpha") > 0


def test_is_compatible_accepts_every_version() -> None:
    """Compatibility gate should accept any version."""
    assert is_compatible("v1") and is_compatible(generate_version())


def test_create_metadata_stamps_matching_timestamps() -> None:
    """New metadata should share created and updated instants."""
    metadata = create_metadata("Demo", ["a", "b"])

    assert metadata.created_at == metadata.updated_at
    assert metadata.schema_version == get_schema_version() == "1.0.0"
    assert metadata.tags == ("a", "b")
    assert parse_version(metadata.version) is not None
