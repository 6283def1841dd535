"""End-to-end pipeline: validate type -> decode -> recolor -> encode -> export."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path

from app.errors import RecolorError
from app.imaging.color import Color, parse_color
from app.imaging.recolor import PixelBuffer, recolor
from app.utils.image_io import check_media_type, decode_image, encode_png, save_png
from app.utils.logging_setup import get_logger

logger = get_logger("pipeline")


@dataclass
class RecolorOutput:
    buffer: PixelBuffer
    png: bytes
    color: Color
    timings: dict[str, float] = field(default_factory=dict)


def run_pipeline(
    data: bytes,
    media_type: str | None,
    color_text: str,
    max_pixels: int = 0,
) -> RecolorOutput:
    """Run one full recolor over source bytes.

    Stages run strictly in order and any RecolorError aborts the run with
    no partial output. The declared media type is checked before decoding.
    """
    timings: dict[str, float] = {}
    try:
        check_media_type(media_type)
        color = parse_color(color_text)

        t0 = time.perf_counter()
        source = decode_image(data, max_pixels=max_pixels)
        timings["decode_seconds"] = round(time.perf_counter() - t0, 4)

        t0 = time.perf_counter()
        painted = recolor(source, color)
        timings["recolor_seconds"] = round(time.perf_counter() - t0, 4)

        t0 = time.perf_counter()
        png = encode_png(painted)
        timings["encode_seconds"] = round(time.perf_counter() - t0, 4)
    except RecolorError as exc:
        logger.warning("recolor failed: %s: %s", exc.kind, exc.message)
        raise

    logger.info(
        "recolored %dx%d image to %s %s",
        painted.width, painted.height, color.to_hex(), timings,
    )
    return RecolorOutput(buffer=painted, png=png, color=color, timings=timings)


def export_output(output: RecolorOutput, out_dir: Path, base_name: str = "output") -> Path:
    """Save the recolored PNG as <out_dir>/<base_name>_<RRGGBB>.png."""
    path = Path(out_dir) / f"{base_name}_{output.color.to_hex().lstrip('#')}.png"
    save_png(output.png, path)
    logger.info("saved %s", path)
    return path
