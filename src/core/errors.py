"""Imageset exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Only dataset construction and file IO raise; display paths degrade softly.
"""

from __future__ import annotations


class ImagesetError(Exception):
    """Base exception for all Imageset failures."""


class ImagesetConfigError(ImagesetError):
    """Raised for invalid runtime configuration."""


class ImagesetDatasetError(ImagesetError):
    """Raised when a dataset is structurally invalid at the top level."""


class ImagesetStoreError(ImagesetError):
    """Raised for dataset file read and write failures."""


class ImagesetIngestError(ImagesetError):
    """Raised for legacy catalog parsing and migration failures."""
