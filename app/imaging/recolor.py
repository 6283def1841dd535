"""Recolor an RGBA image toward one target color; keep shading (luminance) and alpha."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from app.imaging.color import Color

# ITU-R BT.601, same weights Pillow uses for its "L" conversion
LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float64)


@dataclass(eq=False)
class PixelBuffer:
    """Decoded RGBA image: uint8 array of shape (height, width, 4)."""

    data: np.ndarray

    def __post_init__(self):
        data = np.asarray(self.data)
        if data.dtype != np.uint8:
            raise ValueError(f"PixelBuffer needs uint8 data, got {data.dtype}")
        if data.ndim != 3 or data.shape[2] != 4:
            raise ValueError(f"PixelBuffer needs shape (H, W, 4), got {data.shape}")
        if data.shape[0] < 1 or data.shape[1] < 1:
            raise ValueError(f"PixelBuffer needs positive width and height, got {data.shape[1]}x{data.shape[0]}")
        self.data = data

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    @classmethod
    def from_bytes(cls, width: int, height: int, channels: bytes) -> "PixelBuffer":
        """Build from a flat RGBA byte sequence of length width * height * 4."""
        if width < 1 or height < 1:
            raise ValueError(f"PixelBuffer needs positive width and height, got {width}x{height}")
        if len(channels) != width * height * 4:
            raise ValueError(f"Expected {width * height * 4} channel bytes, got {len(channels)}")
        arr = np.frombuffer(bytes(channels), dtype=np.uint8).reshape(height, width, 4)
        return cls(arr.copy())

    def to_bytes(self) -> bytes:
        """Flat RGBA channel bytes, row-major."""
        return np.ascontiguousarray(self.data).tobytes()


def recolor(buffer: PixelBuffer, target: Color) -> PixelBuffer:
    """Return a new buffer where each visible pixel is a blend of target and white.

    Intensity k = 1 - luminance / 255, so dark pixels take the full target
    color and white stays white. Fully transparent pixels (alpha 0) are
    copied unchanged. The input buffer is not modified.
    """
    src = buffer.data
    rgb = src[:, :, :3].astype(np.float64)
    luminance = rgb @ LUMA_WEIGHTS
    k = (1.0 - luminance / 255.0)[:, :, np.newaxis]

    target_rgb = np.array(target, dtype=np.float64)
    blended = target_rgb * k + 255.0 * (1.0 - k)
    # k stays in [0, 1], clip only guards float round-off at the ends
    painted = np.clip(np.rint(blended), 0, 255).astype(np.uint8)

    out = src.copy()
    visible = src[:, :, 3] > 0
    out[:, :, :3][visible] = painted[visible]
    return PixelBuffer(out)
