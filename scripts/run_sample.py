#!/usr/bin/env python3
"""Sample run: build a small grayscale-gradient PNG and recolor it (no UI, no server)."""

from __future__ import annotations

import sys
from pathlib import Path

import numpy as np

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.imaging.recolor import PixelBuffer
from app.pipeline import export_output, run_pipeline
from app.utils.image_io import encode_png


def main():
    # 64x32 RGBA: horizontal black -> white ramp, right quarter fully transparent
    h, w = 32, 64
    img = np.zeros((h, w, 4), dtype=np.uint8)
    img[:, :, :3] = np.linspace(0, 255, w, dtype=np.uint8)[np.newaxis, :, np.newaxis]
    img[:, :, 3] = 255
    img[:, 48:, 3] = 0

    source_png = encode_png(PixelBuffer(img))
    out = run_pipeline(source_png, "image/png", "#E53935")

    out_dir = Path(__file__).resolve().parent.parent / "data"
    path = export_output(out, out_dir, base_name="sample_run")
    print(f"Sample run OK: {path.relative_to(out_dir.parent)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
