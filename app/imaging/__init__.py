"""Imaging core: color parsing and the luminance-preserving recolor."""

from app.imaging.color import Color, parse_color
from app.imaging.recolor import PixelBuffer, recolor

__all__ = [
    "Color",
    "parse_color",
    "PixelBuffer",
    "recolor",
]
