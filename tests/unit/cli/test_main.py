"""Unit tests for CLI command handling."""

from __future__ import annotations

import json
import logging
import shutil

import pytest

from cli.main import main
from tests.fixture_paths import fixture_path

ART_DATASET = str(fixture_path("datasets/art.json"))


def test_cli_init_writes_sample_dataset(tmp_path, capsys) -> None:
    """CLI init should write the sample dataset and print its path."""
    exit_code = main(["--data-root", str(tmp_path), "init", "--description", "Demo"])
    output = capsys.readouterr().out.strip()

    payload = json.loads((tmp_path / "datasets" / "sample.json").read_text(encoding="utf-8"))
    assert exit_code == 0 and output.endswith("sample.json")
    assert payload["metadata"]["description"] == "Demo"


def test_cli_create_then_validate_by_name(tmp_path, capsys) -> None:
    """Datasets created by name should validate by name."""
    main(["--data-root", str(tmp_path), "create", "paintings", "--tags", "art, modern"])
    capsys.readouterr()

    exit_code = main(["--data-root", str(tmp_path), "validate", "paintings"])
    output = capsys.readouterr().out.strip()

    assert exit_code == 0 and output.startswith("images=0 version=v")


def test_cli_validate_missing_file_fails(tmp_path, capsys) -> None:
    """Validation of a missing dataset should exit with 1."""
    exit_code = main(["--data-root", str(tmp_path), "validate", "nope"])

    assert exit_code == 1 and "error:" in capsys.readouterr().err


def test_cli_list_prints_bundled_datasets(capsys) -> None:
    """List should name the bundled datasets."""
    exit_code = main(["list"])
    output = capsys.readouterr().out

    assert exit_code == 0 and output.startswith("sample\t")


def test_cli_add_writes_bundled_dataset(tmp_path, capsys) -> None:
    """Add should write a listed dataset that then validates by name."""
    exit_code = main(["--data-root", str(tmp_path), "add", "sample"])
    capsys.readouterr()

    validate_code = main(["--data-root", str(tmp_path), "validate", "sample"])
    output = capsys.readouterr().out.strip()

    assert exit_code == 0 and (tmp_path / "datasets" / "sample.json").exists()
    assert validate_code == 0 and output.startswith("images=1 ")


def test_cli_add_unknown_dataset_fails(tmp_path, capsys) -> None:
    """Unknown bundled names should exit with 1 and name the choices."""
    exit_code = main(["--data-root", str(tmp_path), "add", "nope"])

    assert exit_code == 1 and "sample" in capsys.readouterr().err


def test_cli_url_applies_preset(capsys) -> None:
    """URL command should print the preset-transformed URL."""
    exit_code = main(["url", ART_DATASET, "test_image_1", "--preset", "thumbnail"])
    output = capsys.readouterr().out.strip()

    assert exit_code == 0 and "w_300,h_200" in output


def test_cli_url_merges_explicit_options(capsys) -> None:
    """Explicit options should override preset defaults."""
    exit_code = main(["url", ART_DATASET, "test_image_1", "--preset", "hero", "--width", "900"])
    output = capsys.readouterr().out.strip()

    assert exit_code == 0 and "w_900,h_600,c_fill" in output


def test_cli_url_unknown_preset_with_options_warns(capsys, caplog: pytest.LogCaptureFixture) -> None:
    """A preset that cannot be merged should warn and keep the explicit options."""
    with caplog.at_level(logging.WARNING):
        exit_code = main(["url", ART_DATASET, "test_image_1", "--preset", "square", "--width", "300"])
    output = capsys.readouterr().out.strip()

    assert exit_code == 0 and "/upload/v123,w_300/" in output
    assert "unknown_preset" in caplog.text


def test_cli_url_unknown_image_fails(capsys) -> None:
    """Unknown image ids should exit with 1."""
    exit_code = main(["url", ART_DATASET, "missing", "--preset", "hero"])

    assert exit_code == 1 and capsys.readouterr().out == ""


def test_cli_search_prints_matches(capsys) -> None:
    """Search should print id and caption per match."""
    exit_code = main(["search", ART_DATASET, "test", "--artist", "another"])
    output = capsys.readouterr().out.strip().splitlines()

    assert exit_code == 0 and output == ["test_image_2\tTest Image 2 with Artist Name"]


def test_cli_srcset_prints_entries(capsys) -> None:
    """Srcset should print one entry per breakpoint."""
    url = "https://res.cloudinary.com/test/image/upload/sample.jpg"

    exit_code = main(["srcset", url, "--breakpoints", "320,640"])
    output = capsys.readouterr().out.strip()

    assert exit_code == 0 and output.endswith("640w") and output.count("w_") == 2


def test_cli_srcset_rejects_bad_breakpoint(capsys) -> None:
    """Non-numeric widths should exit with 1 instead of raising."""
    url = "https://res.cloudinary.com/test/image/upload/sample.jpg"

    exit_code = main(["srcset", url, "--breakpoints", "480,wide"])
    captured = capsys.readouterr()

    assert exit_code == 1 and captured.out == ""
    assert "wide" in captured.err


def test_cli_migrate_writes_output(tmp_path, capsys) -> None:
    """Migrate should convert YAML into the requested JSON file."""
    source = tmp_path / "legacy.yml"
    shutil.copy(fixture_path("legacy/catalog.yaml"), source)
    target = tmp_path / "out" / "converted.json"

    exit_code = main(["migrate", str(source), "--output", str(target), "--tags", "a,b"])

    payload = json.loads(target.read_text(encoding="utf-8"))
    assert exit_code == 0 and capsys.readouterr().out.strip() == str(target)
    assert payload["metadata"]["tags"] == ["a", "b"]
