"""Imageset CLI entry points.
This module exposes commands for scaffolding, validating, querying,
and migrating image datasets. It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
import sys
from typing import Sequence

from core.config import ImagesetConfig
from core.constants import (
    BUNDLED_DATASETS,
    DATASET_FILE_SUFFIX,
    DEFAULT_SRCSET_BREAKPOINTS,
    SAMPLE_DATASET_NAME,
    SUPPORTED_CROP_MODES,
    SUPPORTED_FORMATS,
    SUPPORTED_GRAVITIES,
)
from core.errors import ImagesetConfigError, ImagesetError
from core.logging_config import configure_logging
from core.types import SearchOptions, SlideImageOptions
from ingest.yaml_migration import migrate_yaml_file
from store.dataset_io import (
    build_bundled_dataset,
    build_empty_dataset,
    build_sample_dataset,
    read_dataset_file,
    validate_dataset_payload,
    write_dataset_file,
)
from store.dataset_manager import DatasetManager
from transforms.cdn_url import generate_src_set


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="imageset", description="Image dataset manager CLI")
    parser.add_argument("--data-root", help="Override IMAGESET_DATA_ROOT for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_init_command(subparsers)
    _add_create_command(subparsers)
    subparsers.add_parser("list", help="List bundled datasets")
    _add_add_command(subparsers)
    _add_validate_command(subparsers)
    _add_url_command(subparsers)
    _add_search_command(subparsers)
    _add_srcset_command(subparsers)
    _add_migrate_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Imageset CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args.data_root)
        configure_logging(config.log_level)
        return _dispatch(parser, config, args)
    except ImagesetError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1


def _dispatch(parser: argparse.ArgumentParser, config: ImagesetConfig, args: argparse.Namespace) -> int:
    if args.command == "init":
        return _run_init_command(config, args)
    if args.command == "create":
        return _run_create_command(config, args)
    if args.command == "list":
        return _run_list_command()
    if args.command == "add":
        return _run_add_command(config, args)
    if args.command == "validate":
        return _run_validate_command(config, args)
    if args.command == "url":
        return _run_url_command(config, args)
    if args.command == "search":
        return _run_search_command(config, args)
    if args.command == "srcset":
        return _run_srcset_command(args)
    if args.command == "migrate":
        return _run_migrate_command(args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(data_root: str | None) -> ImagesetConfig:
    """Build config with optional data-root override.

    Args:
        data_root: Optional override path.

    Returns:
        Runtime configuration.
    """
    config = ImagesetConfig.from_env()
    if data_root:
        config = replace(config, data_root=Path(data_root).expanduser().resolve())
    return config


def _add_init_command(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("init", help="Initialize a data directory with a sample dataset")
    parser.add_argument("--description", default="My image dataset project")


def _add_create_command(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("create", help="Create a new empty dataset")
    parser.add_argument("name", help="Dataset name, used as the file name")
    parser.add_argument("--description", help="Dataset description")
    parser.add_argument("--tags", default="images, collection", help="Comma-separated tags")


def _add_add_command(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("add", help="Write a bundled dataset into the datasets directory")
    parser.add_argument("name", help="Bundled dataset name, see 'imageset list'")


def _add_validate_command(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("validate", help="Validate a dataset file")
    parser.add_argument("dataset", help="Dataset path or name under the datasets directory")


def _add_url_command(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("url", help="Print a transformed image URL")
    parser.add_argument("dataset", help="Dataset path or name under the datasets directory")
    parser.add_argument("image_id", help="Image identifier")
    parser.add_argument("--preset", help="Per-image or global preset name")
    _add_transform_arguments(parser)


def _add_search_command(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("search", help="Search image captions and metadata")
    parser.add_argument("dataset", help="Dataset path or name under the datasets directory")
    parser.add_argument("query", nargs="?", default="", help="Caption substring")
    parser.add_argument("--tag", action="append", dest="tags", help="Tag filter (repeatable, any-of)")
    parser.add_argument("--artist", help="Artist substring filter")
    parser.add_argument("--year", help="Exact year filter")
    parser.add_argument("--collection", help="Collection substring filter")
    parser.add_argument("--limit", type=int, help="Maximum number of results")


def _add_srcset_command(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("srcset", help="Print a responsive srcset for a CDN URL")
    parser.add_argument("url", help="CDN asset URL")
    parser.add_argument(
        "--breakpoints",
        default=",".join(str(width) for width in DEFAULT_SRCSET_BREAKPOINTS),
        help="Comma-separated widths",
    )


def _add_migrate_command(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("migrate", help="Convert a legacy YAML catalog to JSON")
    parser.add_argument("input", help="Legacy YAML catalog path")
    parser.add_argument("--output", help="Output JSON path")
    parser.add_argument("--description", help="Dataset description")
    parser.add_argument("--tags", help="Comma-separated dataset tags")


def _add_transform_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--width", type=int)
    parser.add_argument("--height", type=int)
    parser.add_argument("--crop", choices=SUPPORTED_CROP_MODES)
    parser.add_argument("--quality", help="'auto' or a number")
    parser.add_argument("--format", choices=SUPPORTED_FORMATS)
    parser.add_argument("--gravity", choices=SUPPORTED_GRAVITIES)


def _run_init_command(config: ImagesetConfig, args: argparse.Namespace) -> int:
    """Handle init command.

    Args:
        config: Runtime configuration.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    target = config.datasets_dir / f"{SAMPLE_DATASET_NAME}{DATASET_FILE_SUFFIX}"
    write_dataset_file(target, build_sample_dataset(args.description))
    print(target)
    return 0


def _run_create_command(config: ImagesetConfig, args: argparse.Namespace) -> int:
    """Handle create command.

    Args:
        config: Runtime configuration.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    description = args.description or f"{args.name} image collection"
    dataset = build_empty_dataset(description, _split_csv(args.tags))
    target = config.datasets_dir / f"{args.name}{DATASET_FILE_SUFFIX}"
    write_dataset_file(target, dataset)
    print(target)
    return 0


def _run_list_command() -> int:
    for name, description in BUNDLED_DATASETS.items():
        print(f"{name}\t{description}")
    return 0


def _run_add_command(config: ImagesetConfig, args: argparse.Namespace) -> int:
    dataset = build_bundled_dataset(args.name)
    target = config.datasets_dir / f"{args.name}{DATASET_FILE_SUFFIX}"
    write_dataset_file(target, dataset)
    print(target)
    return 0


def _run_validate_command(config: ImagesetConfig, args: argparse.Namespace) -> int:
    """Handle validate command.

    Args:
        config: Runtime configuration.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    payload = read_dataset_file(_resolve_dataset_path(config, args.dataset))
    summary = validate_dataset_payload(payload)
    print(f"images={summary.image_count} version={summary.version}")
    return 0


def _run_url_command(config: ImagesetConfig, args: argparse.Namespace) -> int:
    """Handle url command.

    Args:
        config: Runtime configuration.
        args: Parsed CLI args.

    Returns:
        Exit code; 1 when the image id is unknown.
    """
    manager = DatasetManager.from_file(
        _resolve_dataset_path(config, args.dataset),
        cache_enabled=config.cache_enabled,
    )
    if args.preset and not _has_transform_arguments(args):
        url = manager.get_slide_image(args.image_id, args.preset)
    else:
        url = manager.get_slide_image(args.image_id, _slide_options_from_args(args))
    if not url:
        print(f"error: image '{args.image_id}' not found", file=sys.stderr)
        return 1
    print(url)
    return 0


def _run_search_command(config: ImagesetConfig, args: argparse.Namespace) -> int:
    """Handle search command.

    Args:
        config: Runtime configuration.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    manager = DatasetManager.from_file(
        _resolve_dataset_path(config, args.dataset),
        cache_enabled=config.cache_enabled,
    )
    options = SearchOptions(
        tags=tuple(args.tags) if args.tags else None,
        artist=args.artist,
        year=args.year,
        collection=args.collection,
        limit=args.limit,
    )
    for image in manager.search_images(args.query, options):
        print(f"{image.id}\t{image.caption}")
    return 0


def _run_srcset_command(args: argparse.Namespace) -> int:
    breakpoints = _parse_breakpoints(args.breakpoints)
    print(generate_src_set(args.url, breakpoints))
    return 0


def _run_migrate_command(args: argparse.Namespace) -> int:
    """Handle migrate command.

    Args:
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    output_path = Path(args.output) if args.output else None
    tags = _split_csv(args.tags) if args.tags else None
    target = migrate_yaml_file(Path(args.input), output_path, args.description, tags)
    print(target)
    return 0


def _resolve_dataset_path(config: ImagesetConfig, dataset: str) -> Path:
    """Resolve a dataset argument to a file path.

    Args:
        config: Runtime configuration.
        dataset: Existing file path, or a dataset name.

    Returns:
        The path itself when it exists, else ``<datasets_dir>/<name>.json``.
    """
    candidate = Path(dataset).expanduser()
    if candidate.exists():
        return candidate
    return config.datasets_dir / f"{dataset}{DATASET_FILE_SUFFIX}"


def _has_transform_arguments(args: argparse.Namespace) -> bool:
    names = ("width", "height", "crop", "quality", "format", "gravity")
    return any(getattr(args, name) is not None for name in names)


def _slide_options_from_args(args: argparse.Namespace) -> SlideImageOptions:
    return SlideImageOptions(
        width=args.width,
        height=args.height,
        crop=args.crop,
        quality=_parse_quality(args.quality),
        format=args.format,
        gravity=args.gravity,
        preset=args.preset,
    )


def _parse_quality(raw_value: str | None) -> str | int | None:
    if raw_value is None or raw_value == "auto":
        return raw_value
    try:
        return int(raw_value)
    except ValueError:
        return raw_value


def _parse_breakpoints(raw_value: str) -> list[int]:
    """Parse comma-separated srcset widths.

    Raises:
        ImagesetConfigError: If a width is not a positive integer.
    """
    breakpoints: list[int] = []
    for part in _split_csv(raw_value):
        try:
            width = int(part)
        except ValueError as error:
            raise ImagesetConfigError(
                f"Invalid --breakpoints value '{part}': expected a positive integer width."
            ) from error
        if width <= 0:
            raise ImagesetConfigError(
                f"Invalid --breakpoints value '{part}': expected a positive integer width."
            )
        breakpoints.append(width)
    return breakpoints


def _split_csv(raw_value: str) -> list[str]:
    return [part.strip() for part in raw_value.split(",") if part.strip()]
