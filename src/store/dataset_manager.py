"""In-memory image catalog accessor.

This module owns one sanitized dataset and serves lookups, filtering,
search, and slide-ready URLs. Pure reads go through a per-instance cache
that every mutation clears before it returns.
"""

from __future__ import annotations

import copy
from dataclasses import replace
from pathlib import Path
from typing import Any, Iterable, Mapping, Union

from core.constants import (
    ALL_IMAGES_CACHE_KEY,
    IMAGE_CACHE_KEY_PREFIX,
    TAG_CACHE_KEY_PREFIX,
)
from core.errors import ImagesetDatasetError
from core.logging_config import get_logger
from core.types import (
    DatasetMetadata,
    ImageRecord,
    ImageSearchResult,
    ImageWithCaption,
    SearchOptions,
    SlideImageOptions,
)
from store.dataset_io import read_dataset_file
from store.record_filtering import filter_images
from store.versioning import current_timestamp
from transforms.cdn_url import apply_preset, apply_slide_transform, apply_transform
from transforms.record_sanitize import sanitize_dataset_metadata, sanitize_image_record

_LOGGER = get_logger(__name__)

SlideOptionsInput = Union[SlideImageOptions, Mapping[str, Any], str, None]


class DatasetManager:
    """Accessor over one image dataset held in memory."""

    def __init__(self, dataset: Mapping[str, Any] | None, cache_enabled: bool = True) -> None:
        """Adopt and sanitize a raw dataset.

        Args:
            dataset: JSON-like ``{"metadata": ..., "images": {...}}`` value.
            cache_enabled: Whether pure reads are cached.

        Raises:
            ImagesetDatasetError: If dataset is missing or not a mapping.
        """
        if dataset is None or not isinstance(dataset, Mapping):
            raise ImagesetDatasetError(
                "Invalid dataset: expected a mapping with 'metadata' and 'images', "
                f"got {type(dataset).__name__}."
            )
        self._cache_enabled = cache_enabled
        self._cache: dict[str, Any] = {}
        self._metadata: DatasetMetadata = sanitize_dataset_metadata(dataset.get("metadata"))
        raw_images = dataset.get("images")
        if not isinstance(raw_images, Mapping):
            raw_images = {}
        self._images: dict[str, ImageRecord] = {
            str(image_id): sanitize_image_record(raw) for image_id, raw in raw_images.items()
        }
        _LOGGER.debug(
            "dataset_loaded",
            version=self._metadata.version,
            image_count=len(self._images),
        )

    @classmethod
    def from_json(cls, payload: Mapping[str, Any] | None, cache_enabled: bool = True) -> "DatasetManager":
        """Create a manager from parsed JSON data."""
        return cls(payload, cache_enabled=cache_enabled)

    @classmethod
    def from_file(cls, path: str | Path, cache_enabled: bool = True) -> "DatasetManager":
        """Create a manager from a dataset JSON file.

        Raises:
            ImagesetStoreError: If the file cannot be read or parsed.
        """
        return cls(read_dataset_file(Path(path)), cache_enabled=cache_enabled)

    def __len__(self) -> int:
        return len(self._images)

    def __contains__(self, image_id: object) -> bool:
        return image_id in self._images

    def get_image(self, image_id: str) -> ImageRecord | None:
        """Return the record for ``image_id``, or None when absent."""
        cache_key = f"{IMAGE_CACHE_KEY_PREFIX}{image_id}"
        if self._cache_enabled and cache_key in self._cache:
            return self._cache[cache_key]
        image = self._images.get(image_id)
        if self._cache_enabled and image is not None:
            self._cache[cache_key] = image
        return image

    def get_all_images(self) -> list[ImageSearchResult]:
        """Return every record annotated with its id, in catalog order."""
        if self._cache_enabled and ALL_IMAGES_CACHE_KEY in self._cache:
            return list(self._cache[ALL_IMAGES_CACHE_KEY])
        images = [ImageSearchResult(id=image_id, record=record) for image_id, record in self._images.items()]
        if self._cache_enabled:
            self._cache[ALL_IMAGES_CACHE_KEY] = tuple(images)
        return images

    def get_images_by_tag(self, tag: str) -> list[ImageSearchResult]:
        """Return images carrying ``tag``, in catalog order."""
        cache_key = f"{TAG_CACHE_KEY_PREFIX}{tag}"
        if self._cache_enabled and cache_key in self._cache:
            return list(self._cache[cache_key])
        images = [image for image in self.get_all_images() if tag in image.tags]
        if self._cache_enabled:
            self._cache[cache_key] = tuple(images)
        return images

    def search_images(
        self,
        query: str = "",
        options: SearchOptions | Mapping[str, Any] | None = None,
    ) -> list[ImageSearchResult]:
        """Search captions and metadata.

        Args:
            query: Case-insensitive caption substring; empty matches all.
            options: Tag, artist, year, collection filters and a limit.

        Returns:
            Matching images in catalog order.
        """
        search_options = _resolve_search_options(options)
        return filter_images(self.get_all_images(), query or "", search_options)

    def get_slide_image(self, image_id: str, options: SlideOptionsInput = None) -> str:
        """Return the display URL for an image.

        Args:
            image_id: Catalog identifier.
            options: Preset name, or structured slide options. A preset name
                is looked up in the record's own presets before the global
                preset table.

        Returns:
            Transformed URL, or an empty string when the image is missing.
        """
        image = self.get_image(image_id)
        if image is None:
            _LOGGER.warning("image_not_found", image_id=image_id)
            return ""
        if isinstance(options, str):
            literal_transform = image.transform_presets.get(options)
            if literal_transform:
                return apply_transform(image.src, literal_transform)
            return apply_preset(image.src, options)
        return apply_slide_transform(image.src, options)

    def get_image_with_caption(
        self,
        image_id: str,
        transform_options: SlideOptionsInput = None,
    ) -> ImageWithCaption | None:
        """Return a display-ready image, or None when the id is unknown."""
        image = self.get_image(image_id)
        if image is None:
            return None
        src = self.get_slide_image(image_id, transform_options) if transform_options else image.src
        return ImageWithCaption(
            id=image_id,
            src=src,
            caption=image.caption,
            metadata=image.metadata,
        )

    def get_images_with_captions(
        self,
        image_ids: Iterable[str],
        transform_options: SlideOptionsInput = None,
    ) -> list[ImageWithCaption]:
        """Map ``get_image_with_caption`` over ids, dropping unknown ones."""
        results: list[ImageWithCaption] = []
        for image_id in image_ids:
            image = self.get_image_with_caption(image_id, transform_options)
            if image is not None:
                results.append(image)
        return results

    def get_metadata(self) -> DatasetMetadata:
        """Return a copy of the dataset metadata."""
        return replace(self._metadata, extra_fields=dict(self._metadata.extra_fields))

    def get_all_tags(self) -> list[str]:
        """Return every distinct image tag, sorted."""
        tags: set[str] = set()
        for record in self._images.values():
            tags.update(record.tags)
        return sorted(tags)

    def get_all_artists(self) -> list[str]:
        """Return every distinct artist name, sorted."""
        artists: set[str] = set()
        for record in self._images.values():
            artist = record.metadata.get("artist")
            if isinstance(artist, str) and artist:
                artists.add(artist)
        return sorted(artists)

    def export_dataset(self) -> dict[str, Any]:
        """Return a deep JSON-shaped copy of the dataset."""
        payload = {
            "metadata": self._metadata.to_payload(),
            "images": {image_id: record.to_payload() for image_id, record in self._images.items()},
        }
        return copy.deepcopy(payload)

    def add_images(self, images: Mapping[str, Any]) -> None:
        """Insert or overwrite images by id.

        Args:
            images: Mapping from id to raw image payload.
        """
        for image_id, raw in images.items():
            self._images[str(image_id)] = sanitize_image_record(raw)
        self._touch()
        _LOGGER.info("images_added", image_ids=sorted(str(image_id) for image_id in images))

    def remove_image(self, image_id: str) -> bool:
        """Remove an image.

        Returns:
            True when the id existed and was removed.
        """
        if image_id not in self._images:
            return False
        del self._images[image_id]
        self._touch()
        _LOGGER.info("image_removed", image_id=image_id)
        return True

    def update_dataset(self, partial: Mapping[str, Any]) -> None:
        """Merge a partial dataset into this one.

        Args:
            partial: Optional ``images`` entries (upserted after sanitizing)
                and optional ``metadata`` keys (shallow-merged). Any
                ``updatedAt`` supplied is replaced by the current instant.
        """
        new_images = partial.get("images")
        if isinstance(new_images, Mapping):
            for image_id, raw in new_images.items():
                self._images[str(image_id)] = sanitize_image_record(raw)
        new_metadata = partial.get("metadata")
        if isinstance(new_metadata, DatasetMetadata):
            new_metadata = new_metadata.to_payload()
        if isinstance(new_metadata, Mapping):
            merged = {**self._metadata.to_payload(), **new_metadata}
            self._metadata = sanitize_dataset_metadata(merged)
        self._touch()
        _LOGGER.info("dataset_updated", version=self._metadata.version)

    def clear_cache(self) -> None:
        """Drop every cached read result."""
        self._cache.clear()

    def _touch(self) -> None:
        """Stamp the update time and invalidate cached reads."""
        self._metadata = replace(self._metadata, updated_at=current_timestamp())
        self.clear_cache()


def _resolve_search_options(options: SearchOptions | Mapping[str, Any] | None) -> SearchOptions:
    if options is None:
        return SearchOptions()
    if isinstance(options, SearchOptions):
        return options
    return SearchOptions.from_mapping(options)
