"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from app.imaging.color import parse_color


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 7860
    data_dir: Path = Path("data")
    default_color: str = "#4ADE80"
    log_level: str = "INFO"
    # 0 keeps Pillow's own decompression-bomb limit
    max_image_pixels: int = 0


def load_settings() -> Settings:
    """Build Settings from HOST, PORT, DATA_DIR, DEFAULT_COLOR, LOG_LEVEL, MAX_IMAGE_PIXELS."""
    default_color = os.environ.get("DEFAULT_COLOR", Settings.default_color)
    # fail at startup rather than on the first UI render
    default_color = parse_color(default_color).to_hex()
    return Settings(
        host=os.environ.get("HOST", Settings.host),
        port=int(os.environ.get("PORT", str(Settings.port))),
        data_dir=Path(os.environ.get("DATA_DIR", os.path.join(os.getcwd(), "data"))),
        default_color=default_color,
        log_level=os.environ.get("LOG_LEVEL", Settings.log_level).upper(),
        max_image_pixels=int(os.environ.get("MAX_IMAGE_PIXELS", "0")),
    )


def get_data_dir(settings: Settings | None = None) -> Path:
    """Return data directory for saved results; create if needed."""
    path = Path((settings or load_settings()).data_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path
