"""Shared typed models.

This module defines immutable data models used by the transform,
store, ingest, and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Literal, Mapping, Union

CropMode = Literal["scale", "fill", "fit", "crop"]
ImageFormat = Literal["auto", "webp", "jpg", "png"]
Gravity = Literal["auto", "face", "center", "north", "south", "east", "west"]
PresetName = Literal["thumbnail", "hero", "fullscreen", "medium"]
Quality = Union[Literal["auto"], int, float]
MetadataValue = Union[str, int, float, bool, list[str]]


@dataclass(frozen=True)
class TransformOptions:
    """Structured CDN transform request.

    Attributes:
        width: Target width in pixels.
        height: Target height in pixels.
        crop: Crop mode.
        quality: ``"auto"`` or a numeric quality.
        format: Output format.
        gravity: Focal point used when cropping.
    """

    width: int | None = None
    height: int | None = None
    crop: CropMode | None = None
    quality: Quality | None = None
    format: ImageFormat | None = None
    gravity: Gravity | None = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "TransformOptions":
        """Build options from a JSON-like mapping, ignoring unknown keys."""
        return cls(**_known_fields(cls, payload))


@dataclass(frozen=True)
class SlideImageOptions(TransformOptions):
    """Transform request for slide display.

    Attributes:
        preset: Optional preset whose defaults are merged under explicit options.
        lazy: Display hint for lazy loading; never part of the URL.
    """

    preset: PresetName | str | None = None
    lazy: bool = False

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "SlideImageOptions":
        """Build slide options from a JSON-like mapping."""
        return cls(**_known_fields(cls, payload))


@dataclass(frozen=True)
class SearchOptions:
    """Optional filters applied by catalog search.

    Attributes:
        tags: Any-of tag membership filter.
        artist: Case-insensitive artist substring.
        year: Year compared as a string.
        collection: Case-insensitive collection substring.
        limit: Maximum number of results.
    """

    tags: tuple[str, ...] | None = None
    artist: str | None = None
    year: str | int | None = None
    collection: str | None = None
    limit: int | None = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "SearchOptions":
        """Build search options from a JSON-like mapping."""
        values = _known_fields(cls, payload)
        tags = values.get("tags")
        if isinstance(tags, str):
            values["tags"] = (tags,)
        elif tags is not None:
            values["tags"] = tuple(tags)
        return cls(**values)


@dataclass(frozen=True)
class ImageRecord:
    """One sanitized catalog entry.

    Attributes:
        src: Canonical source URL.
        caption: Display caption, also the text search corpus.
        metadata: Open metadata map (artist, year, medium, dimensions, ...).
        tags: Ordered tags, duplicates permitted.
        transform_presets: Per-image literal transform strings by preset name.
    """

    src: str = ""
    caption: str = ""
    metadata: Mapping[str, MetadataValue] = field(default_factory=dict)
    tags: tuple[str, ...] = ()
    transform_presets: Mapping[str, str] = field(default_factory=dict)

    def to_payload(self) -> dict[str, object]:
        """Serialize into the JSON dataset shape."""
        return {
            "src": self.src,
            "caption": self.caption,
            "metadata": _copy_metadata(self.metadata),
            "tags": list(self.tags),
            "transformPresets": dict(self.transform_presets),
        }


@dataclass(frozen=True)
class DatasetMetadata:
    """Catalog-level metadata record.

    Attributes:
        version: Timestamp-derived version identifier.
        created_at: ISO-8601 creation instant.
        updated_at: ISO-8601 instant of the latest mutation.
        description: Optional free-text description.
        tags: Optional catalog tags.
        schema_version: Dataset schema version string.
        extra_fields: Unrecognized keys carried through untouched.
    """

    version: str
    created_at: str
    updated_at: str
    description: str | None = None
    tags: tuple[str, ...] | None = None
    schema_version: str | None = None
    extra_fields: Mapping[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, object]:
        """Serialize into the JSON dataset shape, omitting unset optionals."""
        payload: dict[str, object] = {
            "version": self.version,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
        if self.description is not None:
            payload["description"] = self.description
        if self.tags is not None:
            payload["tags"] = list(self.tags)
        if self.schema_version is not None:
            payload["schemaVersion"] = self.schema_version
        for key, value in self.extra_fields.items():
            payload.setdefault(key, value)
        return payload


@dataclass(frozen=True)
class ImageSearchResult:
    """Catalog record annotated with its identifier."""

    id: str
    record: ImageRecord

    @property
    def src(self) -> str:
        return self.record.src

    @property
    def caption(self) -> str:
        return self.record.caption

    @property
    def metadata(self) -> Mapping[str, MetadataValue]:
        return self.record.metadata

    @property
    def tags(self) -> tuple[str, ...]:
        return self.record.tags

    def to_payload(self) -> dict[str, object]:
        """Serialize as the record payload plus its id."""
        return {"id": self.id, **self.record.to_payload()}


@dataclass(frozen=True)
class ImageWithCaption:
    """Display-ready image for slides.

    Attributes:
        id: Catalog identifier.
        src: Raw or transformed source URL.
        caption: Display caption.
        metadata: Record metadata.
    """

    id: str
    src: str
    caption: str
    metadata: Mapping[str, MetadataValue]


def _known_fields(cls: type, payload: Mapping[str, Any]) -> dict[str, Any]:
    """Select mapping entries that name dataclass fields.

    Args:
        cls: Dataclass type.
        payload: Input mapping.

    Returns:
        Keyword arguments accepted by the dataclass.
    """
    names = {item.name for item in fields(cls)}
    return {key: value for key, value in payload.items() if key in names}


def _copy_metadata(metadata: Mapping[str, MetadataValue]) -> dict[str, MetadataValue]:
    copied: dict[str, MetadataValue] = {}
    for key, value in metadata.items():
        copied[key] = list(value) if isinstance(value, list) else value
    return copied
