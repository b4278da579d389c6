"""Legacy YAML catalog migration.

This module converts ``{images: {id: {src, caption}}}`` YAML catalogs into
the versioned JSON dataset shape, deriving metadata and tags from captions.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import re
from typing import Any, Mapping, Sequence, cast

import yaml

from core.errors import ImagesetIngestError
from core.logging_config import get_logger
from store.dataset_io import write_dataset_file
from store.versioning import create_metadata

_LOGGER = get_logger(__name__)

DEFAULT_MIGRATION_DESCRIPTION = "Converted from YAML dataset"
DEFAULT_MIGRATION_TAGS = ("converted", "images")

_ARTIST_PATTERN = re.compile(r"^([^,]+),")
_YEAR_PATTERN = re.compile(r"\b(?:19|20)\d{2}\b")
_DIMENSIONS_PATTERN = re.compile(r"(\d+(?:\.\d+)?\s*[×x]\s*\d+(?:\.\d+)?)\s*cm", re.IGNORECASE)
_COLLECTION_PATTERN = re.compile(r"\b(TMoCA|Museum|Gallery|Collection)\b", re.IGNORECASE)
MEDIUM_KEYWORDS = (
    "oil on canvas",
    "acrylic",
    "watercolor",
    "pastel",
    "gouache",
    "mixed media",
    "bronze",
    "sculpture",
    "photograph",
    "digital",
    "pen and ink",
    "charcoal",
    "tempera",
)
TAG_KEYWORDS: Mapping[str, tuple[str, ...]] = {
    "painting": ("oil", "acrylic", "canvas", "paint"),
    "sculpture": ("bronze", "sculpture", "statue"),
    "portrait": ("portrait",),
    "landscape": ("landscape",),
    "abstract": ("abstract",),
    "modern": ("modern", "contemporary"),
    "photograph": ("photograph", "photo"),
    "architecture": ("mosque", "building", "architecture"),
}


@dataclass(frozen=True)
class CaptionMetadata:
    """Metadata recovered from a free-text caption.

    Attributes:
        artist: Text before the first comma.
        year: First four-digit 19xx/20xx year.
        medium: First matching medium keyword.
        dimensions: Dimensions in centimeters, e.g. ``100 x 80 cm``.
        collection: Museum or collection marker.
        tags: Keyword category tags plus a decade tag.
    """

    artist: str | None = None
    year: int | None = None
    medium: str | None = None
    dimensions: str | None = None
    collection: str | None = None
    tags: tuple[str, ...] = ()

    def metadata_payload(self) -> dict[str, object]:
        """Return the non-empty metadata fields as a JSON mapping."""
        candidates = {
            "artist": self.artist,
            "year": self.year,
            "medium": self.medium,
            "dimensions": self.dimensions,
            "collection": self.collection,
        }
        return {key: value for key, value in candidates.items() if value is not None}


def extract_caption_metadata(caption: str) -> CaptionMetadata:
    """Derive structured metadata from a caption.

    Args:
        caption: Caption such as ``"Sohrab Sepehri, Untitled, 1970, oil on canvas"``.

    Returns:
        Extracted metadata; unmatched fields stay None.
    """
    artist_match = _ARTIST_PATTERN.search(caption)
    year_match = _YEAR_PATTERN.search(caption)
    dimensions_match = _DIMENSIONS_PATTERN.search(caption)
    collection_match = _COLLECTION_PATTERN.search(caption)
    lower_caption = caption.lower()
    medium = next((keyword for keyword in MEDIUM_KEYWORDS if keyword in lower_caption), None)
    year = int(year_match.group(0)) if year_match else None
    tags = [
        tag
        for tag, keywords in TAG_KEYWORDS.items()
        if any(keyword in lower_caption for keyword in keywords)
    ]
    if year is not None:
        tags.append(f"{year // 10 * 10}s")
    return CaptionMetadata(
        artist=artist_match.group(1).strip() if artist_match else None,
        year=year,
        medium=medium,
        dimensions=f"{dimensions_match.group(1)} cm" if dimensions_match else None,
        collection=collection_match.group(0) if collection_match else None,
        tags=tuple(tags),
    )


def convert_legacy_catalog(
    payload: Mapping[str, Any],
    description: str | None = None,
    tags: Sequence[str] | None = None,
) -> dict[str, Any]:
    """Convert a parsed legacy catalog into a dataset payload.

    Args:
        payload: Legacy mapping with an ``images`` object.
        description: Dataset description; a default is used when omitted.
        tags: Dataset tags; defaults are used when omitted.

    Returns:
        JSON-shaped dataset with fresh metadata.

    Raises:
        ImagesetIngestError: If ``images`` is missing or not a mapping.
    """
    images = payload.get("images")
    if not isinstance(images, Mapping):
        raise ImagesetIngestError(
            "Invalid legacy catalog: expected an 'images' mapping of id to {src, caption}."
        )
    metadata = create_metadata(
        description or DEFAULT_MIGRATION_DESCRIPTION,
        tags if tags is not None else DEFAULT_MIGRATION_TAGS,
    )
    converted: dict[str, Any] = {}
    for image_id, legacy_image in images.items():
        legacy = legacy_image if isinstance(legacy_image, Mapping) else {}
        caption = str(legacy.get("caption") or "")
        extracted = extract_caption_metadata(caption)
        converted[str(image_id)] = {
            "src": str(legacy.get("src") or ""),
            "caption": caption,
            "metadata": extracted.metadata_payload(),
            "tags": list(extracted.tags),
        }
    return {"metadata": metadata.to_payload(), "images": converted}


def load_legacy_yaml(path: Path) -> Mapping[str, Any]:
    """Read a legacy YAML catalog.

    Args:
        path: YAML file path.

    Returns:
        Parsed top-level mapping.

    Raises:
        ImagesetIngestError: If the file is missing, unreadable, unparsable, or not a mapping.
    """
    if not path.exists():
        raise ImagesetIngestError(
            f"Legacy catalog not found at {path}. Provide an existing YAML file."
        )
    try:
        payload = cast(object, yaml.safe_load(path.read_text(encoding="utf-8")))
    except (OSError, UnicodeDecodeError) as error:
        raise ImagesetIngestError(
            f"Failed to read YAML catalog at {path}: {error}."
        ) from error
    except yaml.YAMLError as error:
        raise ImagesetIngestError(
            f"Failed to parse YAML catalog at {path}: {error}. Fix YAML syntax and retry."
        ) from error
    if not isinstance(payload, Mapping):
        raise ImagesetIngestError(
            f"Invalid YAML catalog at {path}: expected mapping, got {type(payload).__name__}."
        )
    return payload


def migrate_yaml_file(
    input_path: Path,
    output_path: Path | None = None,
    description: str | None = None,
    tags: Sequence[str] | None = None,
) -> Path:
    """Convert a YAML catalog file into a JSON dataset file.

    Args:
        input_path: Legacy YAML file.
        output_path: Target JSON path; defaults to the input with a ``.json`` suffix.
        description: Dataset description.
        tags: Dataset tags.

    Returns:
        Written JSON path.
    """
    dataset = convert_legacy_catalog(load_legacy_yaml(input_path), description, tags)
    target = output_path or input_path.with_suffix(".json")
    write_dataset_file(target, dataset)
    _LOGGER.info(
        "legacy_catalog_migrated",
        input_path=str(input_path),
        output_path=str(target),
        image_count=len(dataset["images"]),
    )
    return target
