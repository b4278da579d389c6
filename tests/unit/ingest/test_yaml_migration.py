"""Unit tests for legacy YAML catalog migration."""

from __future__ import annotations

import json
import shutil

import pytest

from core.errors import ImagesetIngestError
from ingest.yaml_migration import (
    convert_legacy_catalog,
    extract_caption_metadata,
    load_legacy_yaml,
    migrate_yaml_file,
)
from store.dataset_manager import DatasetManager
from tests.fixture_paths import fixture_path


def test_extract_caption_metadata_reads_fields() -> None:
    """Caption parsing should recover artist, year, medium, size, collection."""
    extracted = extract_caption_metadata(
        "Sohrab Sepehri, Untitled, 1970, oil on canvas, 100 x 80 cm, TMoCA"
    )

    assert extracted.artist == "Sohrab Sepehri"
    assert extracted.year == 1970
    assert extracted.medium == "oil on canvas"
    assert extracted.dimensions == "100 x 80 cm"
    assert extracted.collection == "TMoCA"
    assert extracted.tags == ("painting", "1970s")


def test_extract_caption_metadata_without_matches() -> None:
    """Captions without cues should produce empty metadata."""
    extracted = extract_caption_metadata("untitled")

    assert extracted.metadata_payload() == {} and extracted.tags == ()


def test_convert_legacy_catalog_builds_dataset() -> None:
    """Converted payloads should load into a manager."""
    payload = load_legacy_yaml(fixture_path("legacy/catalog.yaml"))

    dataset = convert_legacy_catalog(payload, tags=["legacy"])

    manager = DatasetManager(dataset)
    assert manager.get_metadata().tags == ("legacy",)
    assert manager.get_all_artists() == ["Parviz Tanavoli", "Sohrab Sepehri"]
    assert "sculpture" in manager.get_image("bronze_head").tags


def test_convert_legacy_catalog_requires_images() -> None:
    """Catalogs without images should be rejected."""
    with pytest.raises(ImagesetIngestError):
        convert_legacy_catalog({"pictures": {}})


def test_load_legacy_yaml_rejects_invalid_yaml(tmp_path) -> None:
    """Broken YAML should raise an ingest error."""
    path = tmp_path / "broken.yaml"
    path.write_text("images: [unclosed", encoding="utf-8")

    with pytest.raises(ImagesetIngestError):
        load_legacy_yaml(path)


def test_load_legacy_yaml_rejects_invalid_utf8(tmp_path) -> None:
    """Undecodable bytes should raise an ingest error."""
    path = tmp_path / "binary.yaml"
    path.write_bytes(b"\xff\xfeimages: {}")

    with pytest.raises(ImagesetIngestError):
        load_legacy_yaml(path)


def test_load_legacy_yaml_rejects_missing_file(tmp_path) -> None:
    """Missing files should raise an ingest error."""
    with pytest.raises(ImagesetIngestError):
        load_legacy_yaml(tmp_path / "missing.yaml")


def test_migrate_yaml_file_writes_json_next_to_input(tmp_path) -> None:
    """Default output should swap the suffix to .json."""
    source = tmp_path / "catalog.yaml"
    shutil.copy(fixture_path("legacy/catalog.yaml"), source)

    target = migrate_yaml_file(source, description="Migrated")

    payload = json.loads(target.read_text(encoding="utf-8"))
    assert target == tmp_path / "catalog.json"
    assert payload["metadata"]["description"] == "Migrated"
    assert payload["images"]["sepehri_1970"]["metadata"]["year"] == 1970
