"""CDN URL rewriting.

This module splices transform-parameter strings into recognized asset
URLs of the form ``https://<host>/.../upload/[<transforms>/]<path>``.
Every entry point is a soft no-op on URLs it does not recognize.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence, Union

from core.constants import (
    CDN_DOMAIN_MARKER,
    CDN_UPLOAD_SEGMENT,
    CDN_UPLOAD_SEPARATOR,
    DEFAULT_SRCSET_BREAKPOINTS,
)
from core.logging_config import get_logger
from core.types import SlideImageOptions, TransformOptions
from transforms.transform_string import build_transform_string, get_preset, merge_with_preset

_LOGGER = get_logger(__name__)

TransformInput = Union[TransformOptions, Mapping[str, Any], str, None]
_TRANSFORM_FIELDS = ("width", "height", "crop", "quality", "format", "gravity")


def is_recognized_asset_url(url: str) -> bool:
    """Return True when the URL belongs to the CDN and has an upload path."""
    return isinstance(url, str) and CDN_DOMAIN_MARKER in url and CDN_UPLOAD_SEPARATOR in url


def apply_transform(url: str, options: TransformInput) -> str:
    """Insert transform parameters into a recognized asset URL.

    A first path segment after ``/upload/`` that contains no dot is taken to
    be an existing transform segment and the new parameters are appended to
    it. Extensionless filenames are therefore misread as transforms.

    Args:
        url: Source URL.
        options: Literal transform string or structured options.

    Returns:
        Rewritten URL, or ``url`` unchanged when it is unrecognized,
        malformed, or the transform string is empty.
    """
    if not is_recognized_asset_url(url):
        return url
    transform_string = options if isinstance(options, str) else build_transform_string(options)
    if not transform_string:
        return url
    parts = url.split(CDN_UPLOAD_SEPARATOR)
    if len(parts) != 2:
        return url
    base, path = parts
    path_segments = path.split("/")
    existing_transforms = path_segments[0]
    if existing_transforms and "." not in existing_transforms:
        rest = "/".join(path_segments[1:])
        return f"{base}{CDN_UPLOAD_SEPARATOR}{existing_transforms},{transform_string}/{rest}"
    return f"{base}{CDN_UPLOAD_SEPARATOR}{transform_string}/{path}"


def apply_preset(url: str, preset_name: str) -> str:
    """Apply a named preset from the global preset table.

    Args:
        url: Source URL.
        preset_name: One of thumbnail, hero, fullscreen, medium.

    Returns:
        Rewritten URL, or ``url`` unchanged for unknown presets.
    """
    preset = get_preset(preset_name)
    if preset is None:
        _LOGGER.warning("unknown_preset", preset=preset_name, url=url)
        return url
    return apply_transform(url, preset)


def apply_slide_transform(
    url: str,
    options: SlideImageOptions | Mapping[str, Any] | None,
) -> str:
    """Apply slide options, merging preset defaults under explicit values.

    Args:
        url: Source URL.
        options: Slide options; ``preset`` is resolved and never emitted.

    Returns:
        Rewritten URL.
    """
    slide_options = _resolve_slide_options(options)
    if slide_options.preset:
        if get_preset(slide_options.preset) is None:
            _LOGGER.warning("unknown_preset", preset=slide_options.preset, url=url)
        return apply_transform(url, merge_with_preset(slide_options))
    return apply_transform(url, slide_options)


def generate_src_set(
    url: str,
    breakpoints: Sequence[int] = DEFAULT_SRCSET_BREAKPOINTS,
) -> str:
    """Build a responsive ``srcset`` value.

    Args:
        url: Source URL.
        breakpoints: Widths to emit, in order.

    Returns:
        ``"<url> <width>w"`` entries joined by ``", "``; empty for
        unrecognized URLs.
    """
    if not is_recognized_asset_url(url):
        return ""
    entries = []
    for width in breakpoints:
        options = TransformOptions(width=width, quality="auto", format="auto")
        entries.append(f"{apply_transform(url, options)} {width}w")
    return ", ".join(entries)


def extract_asset_id(url: str) -> str | None:
    """Extract the public asset id from a CDN URL.

    Args:
        url: Source URL.

    Returns:
        Final path segment without its extension, or None when the URL has
        no ``upload`` segment.
    """
    if not isinstance(url, str):
        return None
    parts = url.split("/")
    if CDN_UPLOAD_SEGMENT not in parts:
        return None
    return parts[-1].split(".")[0]


def _resolve_slide_options(options: SlideImageOptions | Mapping[str, Any] | None) -> SlideImageOptions:
    if options is None:
        return SlideImageOptions()
    if isinstance(options, SlideImageOptions):
        return options
    if isinstance(options, TransformOptions):
        return SlideImageOptions.from_mapping(
            {name: getattr(options, name) for name in _TRANSFORM_FIELDS}
        )
    return SlideImageOptions.from_mapping(options)

