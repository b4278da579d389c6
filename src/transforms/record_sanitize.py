"""Shallow normalization of raw catalog payloads.

Raw JSON values are coerced field by field: anything of the wrong shape
becomes a neutral default so downstream code never sees missing fields.
"""

from __future__ import annotations

from typing import Any, Mapping

from core.logging_config import get_logger
from core.types import DatasetMetadata, ImageRecord, MetadataValue
from store.versioning import create_metadata

_LOGGER = get_logger(__name__)

_LEGACY_PRESETS_KEY = "cloudinaryTransforms"
_KNOWN_METADATA_KEYS = ("version", "createdAt", "updatedAt", "description", "tags", "schemaVersion")


def sanitize_image_record(raw: object) -> ImageRecord:
    """Normalize a raw image payload into an ``ImageRecord``.

    Args:
        raw: JSON-like mapping or an existing record.

    Returns:
        Record with every field present. Strings are stripped, non-string
        tags are dropped, and metadata values outside the supported scalar
        and string-list shapes are dropped.
    """
    if isinstance(raw, ImageRecord):
        payload: Mapping[str, Any] = raw.to_payload()
    elif isinstance(raw, Mapping):
        payload = raw
    else:
        payload = {}
    presets = payload.get("transformPresets")
    if presets is None:
        presets = payload.get(_LEGACY_PRESETS_KEY)
    return ImageRecord(
        src=_clean_string(payload.get("src")),
        caption=_clean_string(payload.get("caption")),
        metadata=_clean_metadata(payload.get("metadata")),
        tags=_clean_string_list(payload.get("tags")),
        transform_presets=_clean_presets(presets),
    )


def sanitize_dataset_metadata(raw: object) -> DatasetMetadata:
    """Normalize dataset metadata, synthesizing whatever is missing.

    Args:
        raw: JSON-like metadata mapping, a ``DatasetMetadata``, or None.

    Returns:
        Metadata with version, timestamps, and schema version populated.
    """
    if isinstance(raw, DatasetMetadata):
        return raw
    fresh = create_metadata()
    if not isinstance(raw, Mapping):
        return fresh
    description = raw.get("description")
    tags = raw.get("tags")
    return DatasetMetadata(
        version=_string_or(raw.get("version"), fresh.version),
        created_at=_string_or(raw.get("createdAt"), fresh.created_at),
        updated_at=_string_or(raw.get("updatedAt"), fresh.updated_at),
        description=description if isinstance(description, str) else None,
        tags=_clean_string_list(tags) if isinstance(tags, (list, tuple)) else None,
        schema_version=_string_or(raw.get("schemaVersion"), fresh.schema_version or ""),
        extra_fields={
            key: value for key, value in raw.items() if key not in _KNOWN_METADATA_KEYS
        },
    )


def _clean_string(value: object) -> str:
    return value.strip() if isinstance(value, str) else ""


def _string_or(value: object, default: str) -> str:
    return value if isinstance(value, str) and value else default


def _clean_string_list(value: object) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(item for item in value if isinstance(item, str))


def _clean_metadata(value: object) -> dict[str, MetadataValue]:
    if not isinstance(value, Mapping):
        return {}
    cleaned: dict[str, MetadataValue] = {}
    for key, item in value.items():
        if not isinstance(key, str):
            continue
        if isinstance(item, (str, int, float, bool)):
            cleaned[key] = item
        elif isinstance(item, (list, tuple)) and all(isinstance(part, str) for part in item):
            cleaned[key] = list(item)
        else:
            _LOGGER.debug("metadata_value_dropped", key=key, value_type=type(item).__name__)
    return cleaned


def _clean_presets(value: object) -> dict[str, str]:
    if not isinstance(value, Mapping):
        return {}
    return {
        key: item
        for key, item in value.items()
        if isinstance(key, str) and isinstance(item, str)
    }
