"""PNG decode/encode between bytes and PixelBuffer, plus file read/write."""

from __future__ import annotations

import io
import mimetypes
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from app.errors import DecodeFailure, ReadFailure, UnsupportedFileType
from app.imaging.recolor import PixelBuffer

SUPPORTED_MEDIA_TYPE = "image/png"


def media_type_for(path: str | Path) -> str | None:
    """Declared media type from the file name (no content sniffing)."""
    media_type, _ = mimetypes.guess_type(str(path))
    return media_type


def check_media_type(media_type: str | None) -> None:
    """Raise UnsupportedFileType unless the declared type is image/png."""
    declared = (media_type or "").split(";")[0].strip().lower()
    if declared != SUPPORTED_MEDIA_TYPE:
        raise UnsupportedFileType(
            f"Please upload a valid PNG file (got {media_type or 'unknown type'})."
        )


def read_bytes(path: str | Path) -> bytes:
    path = Path(path)
    try:
        return path.read_bytes()
    except OSError as exc:
        raise ReadFailure(f"Failed to read the file: {path}") from exc


def _to_8bit(pil: Image.Image) -> Image.Image:
    """16-bit grayscale ("I;16", "I") is scaled down to "L"; convert() alone would clip it at 255."""
    if not pil.mode.startswith("I"):
        return pil
    wide = np.clip(np.asarray(pil, dtype=np.int64), 0, 65535)
    return Image.fromarray((wide >> 8).astype(np.uint8))


def decode_image(data: bytes, max_pixels: int = 0) -> PixelBuffer:
    """Decode image bytes into an RGBA PixelBuffer; preserve alpha.

    max_pixels > 0 rejects larger images before their pixel data is loaded.
    """
    try:
        with Image.open(io.BytesIO(data)) as pil:
            w, h = pil.size
            if max_pixels > 0 and w * h > max_pixels:
                raise DecodeFailure(f"Image too large ({w}x{h}, max {max_pixels} pixels).")
            pil.load()
            arr = np.array(_to_8bit(pil).convert("RGBA"))
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as exc:
        raise DecodeFailure() from exc
    return PixelBuffer(arr)


def encode_png(buffer: PixelBuffer) -> bytes:
    out = io.BytesIO()
    Image.fromarray(buffer.data).save(out, format="PNG")
    return out.getvalue()


def load_image(path: str | Path, max_pixels: int = 0) -> PixelBuffer:
    """Read and decode an image file. The declared type is not checked here."""
    return decode_image(read_bytes(path), max_pixels=max_pixels)


def save_png(data: bytes, path: str | Path) -> Path:
    """Write encoded PNG bytes; create parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path
