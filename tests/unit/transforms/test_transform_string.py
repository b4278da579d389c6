"""Unit tests for transform-string encoding and presets."""

from __future__ import annotations

from core.types import SlideImageOptions, TransformOptions
from transforms.transform_string import (
    PRESETS,
    build_transform_string,
    get_preset,
    merge_with_preset,
)


def test_build_transform_string_uses_fixed_order() -> None:
    """Tokens should follow width, height, crop, quality order."""
    options = {"quality": "auto", "crop": "fill", "height": 200, "width": 300}

    assert build_transform_string(options) == "w_300,h_200,c_fill,q_auto"


def test_build_transform_string_emits_every_token() -> None:
    """All six options should appear with their abbreviations."""
    options = TransformOptions(
        width=800, height=600, crop="fit", quality=80, format="webp", gravity="face"
    )

    assert build_transform_string(options) == "w_800,h_600,c_fit,q_80,f_webp,g_face"


def test_build_transform_string_empty_options() -> None:
    """No options should produce an empty string."""
    assert build_transform_string(TransformOptions()) == ""
    assert build_transform_string({}) == ""
    assert build_transform_string(None) == ""


def test_preset_dimensions_are_stable() -> None:
    """Preset sizes are a published contract."""
    sizes = {name: (preset.width, preset.height, preset.crop) for name, preset in PRESETS.items()}

    assert sizes == {
        "thumbnail": (300, 200, "fill"),
        "hero": (1200, 600, "fill"),
        "fullscreen": (1920, 1080, "fit"),
        "medium": (800, 600, "fit"),
    }


def test_get_preset_returns_none_for_unknown() -> None:
    """Unknown preset names should resolve to None."""
    assert get_preset("poster") is None


def test_merge_with_preset_prefers_explicit_values() -> None:
    """Explicit options should override preset defaults."""
    merged = merge_with_preset(SlideImageOptions(preset="thumbnail", height=250, gravity="face"))

    assert merged == TransformOptions(
        width=300, height=250, crop="fill", quality="auto", format="auto", gravity="face"
    )
