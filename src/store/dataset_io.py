"""Dataset file persistence helpers.

This module isolates JSON dataset IO and scaffolding payloads.
It keeps the manager and CLI focused on catalog behavior.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import json
from pathlib import Path
from typing import Any, Mapping, Sequence

from core.constants import BUNDLED_DATASETS, SAMPLE_DATASET_NAME
from core.errors import ImagesetStoreError
from store.versioning import create_metadata


@dataclass(frozen=True)
class DatasetSummary:
    """Validation summary for a dataset payload.

    Attributes:
        image_count: Number of catalog entries.
        version: Dataset version identifier.
    """

    image_count: int
    version: str


def read_dataset_file(path: Path) -> dict[str, Any]:
    """Read a dataset JSON file.

    Args:
        path: Dataset JSON path.

    Returns:
        Parsed top-level object.

    Raises:
        ImagesetStoreError: If the file is missing, unreadable, or not a JSON object.
    """
    if not path.exists():
        raise ImagesetStoreError(
            f"Dataset file not found at {path}. "
            "Create one with 'imageset create <name>'."
        )
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as error:
        raise ImagesetStoreError(
            f"Failed to read dataset file at {path}: {error}."
        ) from error
    except json.JSONDecodeError as error:
        raise ImagesetStoreError(
            f"Failed to parse dataset file at {path}: {error.msg}."
        ) from error
    if not isinstance(payload, dict):
        raise ImagesetStoreError(
            f"Failed to parse dataset file at {path}: "
            "expected JSON object at top level."
        )
    return payload


def write_dataset_file(path: Path, payload: Mapping[str, Any]) -> Path:
    """Write a dataset payload as indented JSON.

    Args:
        path: Target file path; parent directories are created.
        payload: Dataset payload.

    Returns:
        Written path.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return path


def validate_dataset_payload(payload: Mapping[str, Any]) -> DatasetSummary:
    """Check the top-level dataset shape.

    Args:
        payload: Parsed dataset.

    Returns:
        Image count and version summary.

    Raises:
        ImagesetStoreError: If metadata or images are missing.
    """
    metadata = payload.get("metadata")
    if not isinstance(metadata, Mapping):
        raise ImagesetStoreError("Missing metadata")
    images = payload.get("images")
    if not isinstance(images, Mapping):
        raise ImagesetStoreError("Missing images object")
    return DatasetSummary(image_count=len(images), version=str(metadata.get("version", "")))


def build_empty_dataset(
    description: str | None = None,
    tags: Sequence[str] | None = None,
) -> dict[str, Any]:
    """Build a new dataset payload with no images."""
    return {"metadata": create_metadata(description, tags).to_payload(), "images": {}}


def build_sample_dataset(description: str | None = None) -> dict[str, Any]:
    """Build the starter dataset written by ``imageset init``."""
    payload = build_empty_dataset(description)
    payload["images"] = {
        "sample_image": {
            "src": "https://via.placeholder.com/800x600",
            "caption": "Sample image for testing",
            "tags": ["sample", "placeholder"],
            "metadata": {
                "artist": "Placeholder",
                "year": datetime.now(timezone.utc).year,
            },
        }
    }
    return payload


def build_bundled_dataset(name: str) -> dict[str, Any]:
    """Build a dataset that ships with imageset.

    Args:
        name: Bundled dataset name, as printed by ``imageset list``.

    Returns:
        Dataset payload ready to write.

    Raises:
        ImagesetStoreError: If no bundled dataset has this name.
    """
    if name == SAMPLE_DATASET_NAME:
        return build_sample_dataset(BUNDLED_DATASETS[name])
    available = ", ".join(sorted(BUNDLED_DATASETS))
    raise ImagesetStoreError(
        f"Bundled dataset '{name}' not found. Available datasets: {available}."
    )
