"""Command line interface for extracting G-code thumbnails."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from .config import DEFAULT_THUMBNAIL_SIZE, SIZE_ENV_VAR, get_config
from .gcode import iter_thumbnail_blocks
from .provider import thumbnail_from_path
from .thumbnails import MAX_THUMBNAIL_SIZE
from .utils.paths import coerce_required_path, default_output_path

__all__ = ["build_parser", "main"]

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gcode-thumbs",
        description="Extract the preview images slicers embed in G-code files.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract = subparsers.add_parser(
        "extract",
        help="Write the largest embedded thumbnail to a PNG file.",
    )
    extract.add_argument("source", type=Path, help="G-code file to read.")
    extract.add_argument(
        "--size",
        type=int,
        default=None,
        help=(
            "Bounding size of the thumbnail in pixels. Defaults to the "
            f"configured size ({SIZE_ENV_VAR} or {DEFAULT_THUMBNAIL_SIZE})."
        ),
    )
    extract.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Destination PNG path. Defaults to SOURCE with a .png suffix.",
    )

    listing = subparsers.add_parser("list", help="List the thumbnail blocks found in a file.")
    listing.add_argument("source", type=Path, help="G-code file to read.")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        get_config()
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    source = coerce_required_path(args.source, empty_error="A G-code file is required")
    if not source.is_file():
        logger.error("%s is not a file", source)
        return 2

    if args.command == "list":
        return _list_blocks(source)
    return _extract(source, args.size, args.output)


def _extract(source: Path, size: int | None, output: Path | None) -> int:
    cx = size if size is not None else get_config().default_size
    if not 0 < cx <= MAX_THUMBNAIL_SIZE:
        logger.error("Size must be between 1 and %d", MAX_THUMBNAIL_SIZE)
        return 2

    image = thumbnail_from_path(source, cx)
    if image is None:
        logger.error("No thumbnail found in %s", source)
        return 1

    width, height = image.size
    target = coerce_required_path(output) if output is not None else default_output_path(source)
    save_kwargs: dict[str, object] = {}
    if "dpi" in image.info:
        save_kwargs["dpi"] = image.info["dpi"]
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        image.save(target, format="PNG", **save_kwargs)
    except OSError as exc:
        logger.error("Unable to write %s: %s", target, exc)
        return 1
    finally:
        image.close()

    logger.info("Wrote %dx%d thumbnail to %s", width, height, target)
    return 0


def _list_blocks(source: Path) -> int:
    encoding = get_config().text_encoding
    try:
        with source.open("r", encoding=encoding, errors="ignore") as handle:
            blocks = list(iter_thumbnail_blocks(handle))
    except OSError as exc:
        logger.error("Unable to read %s: %s", source, exc)
        return 1

    if not blocks:
        print("No thumbnails found.")
        return 1

    for index, block in enumerate(blocks):
        if block.width is not None and block.height is not None:
            dimensions = f"{block.width}x{block.height}"
        else:
            dimensions = "?x?"
        length = f"{block.length} chars"
        if block.declared_length is not None:
            length = f"{length} (declared {block.declared_length})"
            if block.declared_length != block.length:
                logger.warning(
                    "Block %d declares %d chars but holds %d",
                    index,
                    block.declared_length,
                    block.length,
                )
        print(f"{index}\tline {block.line}\t{dimensions}\t{length}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
