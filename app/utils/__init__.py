"""Utilities: image I/O and logging."""

from app.utils.image_io import (
    check_media_type,
    decode_image,
    encode_png,
    load_image,
    media_type_for,
    read_bytes,
    save_png,
)
from app.utils.logging_setup import configure_logging, get_logger

__all__ = [
    "check_media_type",
    "decode_image",
    "encode_png",
    "load_image",
    "media_type_for",
    "read_bytes",
    "save_png",
    "configure_logging",
    "get_logger",
]
