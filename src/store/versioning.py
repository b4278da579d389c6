"""Dataset version identifiers and metadata stamping.

Versions encode the UTC creation instant, e.g. ``v2025-08-17T12-30-45-123Z``,
so they sort by wall-clock time and can be parsed back into datetimes.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence

from core.constants import SCHEMA_VERSION
from core.types import DatasetMetadata

_VERSION_PREFIX = "v"


def current_timestamp() -> str:
    """Return the current UTC instant as ISO-8601 with milliseconds and ``Z``."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def generate_version() -> str:
    """Build a new version identifier from the current instant.

    Returns:
        Version string such as ``v2025-08-17T12-30-45-123Z``.
    """
    return _version_from_timestamp(current_timestamp())


def get_schema_version() -> str:
    """Return the dataset schema version written into new metadata."""
    return SCHEMA_VERSION


def parse_version(version: str) -> datetime | None:
    """Recover the instant encoded in a version identifier.

    Args:
        version: Identifier produced by ``generate_version``.

    Returns:
        Timezone-aware datetime, or None when the identifier is malformed.
    """
    if not isinstance(version, str):
        return None
    timestamp = version.replace(_VERSION_PREFIX, "", 1)
    parts = timestamp.split("T")
    if len(parts) != 2:
        return None
    date_part, time_part = parts
    time_segments = time_part.replace("Z", "").split("-")
    if len(time_segments) != 4:
        return None
    hours, minutes, seconds, millis = time_segments
    iso_value = f"{date_part}T{hours}:{minutes}:{seconds}.{millis}+00:00"
    try:
        return datetime.fromisoformat(iso_value)
    except ValueError:
        return None


def compare_versions(first: str, second: str) -> int:
    """Order two version identifiers.

    Args:
        first: Left version.
        second: Right version.

    Returns:
        Negative, zero, or positive. Parsed versions compare by their
        millisecond difference; otherwise by plain string ordering.
    """
    first_instant = parse_version(first)
    second_instant = parse_version(second)
    if first_instant is None or second_instant is None:
        return (first > second) - (first < second)
    delta = first_instant - second_instant
    return round(delta.total_seconds() * 1000)


def _version_from_timestamp(timestamp: str) -> str:
    encoded = timestamp.replace(":", "-").replace(".", "-")
    return f"{_VERSION_PREFIX}{encoded}"


def is_compatible(version: str) -> bool:
    """Report whether a dataset version can be read by this schema.

    Every version is currently accepted; no breaking schema change exists yet.
    """
    del version
    return True


def create_metadata(
    description: str | None = None,
    tags: Sequence[str] | None = None,
) -> DatasetMetadata:
    """Create metadata for a brand-new dataset.

    Args:
        description: Optional dataset description.
        tags: Optional dataset tags.

    Returns:
        Metadata with matching created/updated instants and a fresh version.
    """
    now = current_timestamp()
    return DatasetMetadata(
        version=_version_from_timestamp(now),
        created_at=now,
        updated_at=now,
        description=description,
        tags=tuple(tags) if tags is not None else None,
        schema_version=SCHEMA_VERSION,
    )
