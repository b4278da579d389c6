"""Public SDK surface for Imageset.

This module provides a stable import path for library users.
It re-exports the dataset manager, transform helpers, and typed models.
"""

from __future__ import annotations

from typing import Any, Mapping

from core.config import ImagesetConfig
from core.errors import ImagesetDatasetError, ImagesetError
from core.types import (
    DatasetMetadata,
    ImageRecord,
    ImageSearchResult,
    ImageWithCaption,
    SearchOptions,
    SlideImageOptions,
    TransformOptions,
)
from store.dataset_manager import DatasetManager, SlideOptionsInput
from store.versioning import (
    compare_versions,
    create_metadata,
    generate_version,
    get_schema_version,
    is_compatible,
    parse_version,
)
from transforms.cdn_url import (
    apply_preset,
    apply_slide_transform,
    apply_transform,
    extract_asset_id,
    generate_src_set,
    is_recognized_asset_url,
)
from transforms.record_sanitize import sanitize_image_record
from transforms.transform_string import PRESETS, build_transform_string


def create_dataset_manager(dataset: Mapping[str, Any], cache_enabled: bool = True) -> DatasetManager:
    """Create a manager over a dataset payload."""
    return DatasetManager(dataset, cache_enabled=cache_enabled)


def create_from_json(payload: Mapping[str, Any], cache_enabled: bool = True) -> DatasetManager:
    """Create a manager from parsed JSON data."""
    return DatasetManager.from_json(payload, cache_enabled=cache_enabled)


def get_image_url(dataset: Mapping[str, Any], image_id: str, transform: SlideOptionsInput = None) -> str:
    """Build a one-off slide URL without keeping a manager around."""
    return DatasetManager(dataset).get_slide_image(image_id, transform)


def search_images(
    dataset: Mapping[str, Any],
    query: str,
    options: SearchOptions | Mapping[str, Any] | None = None,
) -> list[ImageSearchResult]:
    """Run a one-off catalog search."""
    return DatasetManager(dataset).search_images(query, options)


__all__ = [
    "DatasetManager",
    "DatasetMetadata",
    "ImageRecord",
    "ImageSearchResult",
    "ImageWithCaption",
    "ImagesetConfig",
    "ImagesetDatasetError",
    "ImagesetError",
    "PRESETS",
    "SearchOptions",
    "SlideImageOptions",
    "TransformOptions",
    "apply_preset",
    "apply_slide_transform",
    "apply_transform",
    "build_transform_string",
    "compare_versions",
    "create_dataset_manager",
    "create_from_json",
    "create_metadata",
    "extract_asset_id",
    "generate_src_set",
    "generate_version",
    "get_image_url",
    "get_schema_version",
    "is_compatible",
    "is_recognized_asset_url",
    "parse_version",
    "sanitize_image_record",
    "search_images",
]
