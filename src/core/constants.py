"""Core constants used across Imageset modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path("data")
DATASETS_DIR_NAME = "datasets"
DATASET_FILE_SUFFIX = ".json"
SAMPLE_DATASET_NAME = "sample"
SCHEMA_VERSION = "1.0.0"
DEFAULT_LOG_LEVEL = "WARNING"
CDN_DOMAIN_MARKER = "cloudinary.com"
CDN_UPLOAD_SEGMENT = "upload"
CDN_UPLOAD_SEPARATOR = f"/{CDN_UPLOAD_SEGMENT}/"
DEFAULT_SRCSET_BREAKPOINTS = (480, 768, 1024, 1440, 1920)
ALL_IMAGES_CACHE_KEY = "all_images"
IMAGE_CACHE_KEY_PREFIX = "image_"
TAG_CACHE_KEY_PREFIX = "tag_"
SUPPORTED_CROP_MODES = ("scale", "fill", "fit", "crop")
SUPPORTED_FORMATS = ("auto", "webp", "jpg", "png")
SUPPORTED_GRAVITIES = ("auto", "face", "center", "north", "south", "east", "west")
BUNDLED_DATASETS = {
    "sample": "Basic sample dataset",
}
