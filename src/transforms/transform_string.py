"""Transform-parameter string encoding and preset definitions.

This module turns structured transform options into the comma-joined
token string the CDN expects, e.g. ``w_300,h_200,c_fill,q_auto``.
"""

from __future__ import annotations

from dataclasses import asdict, replace
from typing import Any, Mapping

from core.types import SlideImageOptions, TransformOptions

PRESETS: Mapping[str, TransformOptions] = {
    "thumbnail": TransformOptions(width=300, height=200, crop="fill", quality="auto", format="auto"),
    "hero": TransformOptions(width=1200, height=600, crop="fill", quality="auto", format="auto"),
    "fullscreen": TransformOptions(width=1920, height=1080, crop="fit", quality="auto", format="auto"),
    "medium": TransformOptions(width=800, height=600, crop="fit", quality="auto", format="auto"),
}

# Token order is part of the URL contract.
_TOKEN_PREFIXES = (
    ("width", "w"),
    ("height", "h"),
    ("crop", "c"),
    ("quality", "q"),
    ("format", "f"),
    ("gravity", "g"),
)


def build_transform_string(options: TransformOptions | Mapping[str, Any] | None) -> str:
    """Encode transform options as a CDN parameter string.

    Args:
        options: Structured options; unset or falsy values emit no token.

    Returns:
        Comma-joined tokens, or an empty string when nothing is set.
    """
    resolved = resolve_transform_options(options)
    tokens: list[str] = []
    for attribute, prefix in _TOKEN_PREFIXES:
        value = getattr(resolved, attribute)
        if value:
            tokens.append(f"{prefix}_{value}")
    return ",".join(tokens)


def resolve_transform_options(
    options: TransformOptions | Mapping[str, Any] | None,
) -> TransformOptions:
    """Normalize supported option inputs into ``TransformOptions``.

    Args:
        options: Dataclass options, a JSON-like mapping, or None.

    Returns:
        Transform options instance.
    """
    if options is None:
        return TransformOptions()
    if isinstance(options, TransformOptions):
        return options
    return TransformOptions.from_mapping(options)


def get_preset(name: str) -> TransformOptions | None:
    """Return the named preset, or None when unknown."""
    return PRESETS.get(name)


def merge_with_preset(options: SlideImageOptions) -> TransformOptions:
    """Overlay explicit slide options on top of their preset defaults.

    Args:
        options: Slide options carrying a preset name.

    Returns:
        Plain transform options without the preset key. An unknown preset
        contributes no defaults.
    """
    explicit = _explicit_transform_fields(options)
    base = PRESETS.get(options.preset or "", TransformOptions())
    return replace(base, **explicit)


def _explicit_transform_fields(options: SlideImageOptions) -> dict[str, Any]:
    transform_names = set(asdict(TransformOptions()))
    return {
        key: value
        for key, value in asdict(options).items()
        if key in transform_names and value is not None
    }
