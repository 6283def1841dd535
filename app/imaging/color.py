"""Target color value type and strict #RRGGBB parsing."""

from __future__ import annotations

import re
from typing import NamedTuple

from app.errors import InvalidColorFormat

_HEX_COLOR = re.compile(r"#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})")


class Color(NamedTuple):
    r: int
    g: int
    b: int

    def to_hex(self) -> str:
        """Upper-case '#RRGGBB' form."""
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"


def parse_color(text: str) -> Color:
    """Parse '#RRGGBB' or 'RRGGBB' (any case) into a Color.

    Short hex ('#F00'), named colors and CSS rgb() strings are rejected.
    """
    if not isinstance(text, str):
        raise InvalidColorFormat(f"Invalid color format: {text!r}")
    m = _HEX_COLOR.fullmatch(text)
    if m is None:
        raise InvalidColorFormat(f"Invalid color format: {text!r}")
    return Color(*(int(pair, 16) for pair in m.groups()))
