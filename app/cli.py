"""Command line: recolor <input.png> <#RRGGBB> <output.png>."""

from __future__ import annotations

import argparse
import sys

from app.config import Settings, load_settings
from app.errors import DecodeFailure, InvalidColorFormat, ReadFailure, RecolorError, UnsupportedFileType
from app.imaging.color import parse_color
from app.pipeline import run_pipeline
from app.utils.image_io import check_media_type, media_type_for, read_bytes, save_png
from app.utils.logging_setup import configure_logging

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

EXIT_CODES = {
    UnsupportedFileType: 2,
    DecodeFailure: 3,
    InvalidColorFormat: 4,
    ReadFailure: 5,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="recolor",
        description="Recolor a PNG toward one color while keeping its shading.",
    )
    parser.add_argument("input", help="source PNG file")
    parser.add_argument("color", help="target color, #RRGGBB or RRGGBB")
    parser.add_argument("output", help="where to write the recolored PNG")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=LOG_LEVELS,
    )
    return parser


def run(args: argparse.Namespace, settings: Settings) -> int:
    parse_color(args.color)
    media_type = media_type_for(args.input)
    check_media_type(media_type)
    data = read_bytes(args.input)
    output = run_pipeline(data, media_type, args.color, max_pixels=settings.max_image_pixels)
    save_png(output.png, args.output)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    try:
        return run(args, load_settings())
    except RecolorError as exc:
        print(f"error: {exc.kind}: {exc.message}", file=sys.stderr)
        return EXIT_CODES.get(type(exc), 1)
    except OSError as exc:
        # output side: input reads are already ReadFailure
        print(f"error: could not write {args.output}: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
