"""Displayed state of one user session: source image, latest result, error, view."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from app.errors import RecolorError
from app.pipeline import RecolorOutput, run_pipeline
from app.utils.image_io import check_media_type


class ViewState(str, enum.Enum):
    IDLE = "idle"
    PROCESSING = "processing"
    READY = "ready"


@dataclass
class Session:
    """Runs are tagged with an increasing generation; only the latest one may update the display.

    An error is shown next to whatever view is active. A failed run never
    clears a previous result, a successful one clears the error.
    """

    source: bytes | None = None
    media_type: str | None = None
    result: RecolorOutput | None = None
    error: str | None = None
    generation: int = 0
    running: bool = False

    @property
    def view(self) -> ViewState:
        if self.running:
            return ViewState.PROCESSING
        if self.result is not None:
            return ViewState.READY
        return ViewState.IDLE

    def accept_upload(self, data: bytes, media_type: str | None) -> bool:
        """Store a new source if its declared type is PNG; otherwise record the error."""
        try:
            check_media_type(media_type)
        except RecolorError as exc:
            self.error = exc.message
            return False
        self.source = data
        self.media_type = media_type
        self.error = None
        return True

    def begin_run(self) -> int:
        self.generation += 1
        self.running = True
        return self.generation

    def is_current(self, run_id: int) -> bool:
        return run_id == self.generation

    def complete(self, run_id: int, output: RecolorOutput) -> bool:
        if not self.is_current(run_id):
            return False
        self.result = output
        self.error = None
        self.running = False
        return True

    def fail(self, run_id: int, error: RecolorError) -> bool:
        if not self.is_current(run_id):
            return False
        self.error = error.message
        self.running = False
        return True

    def run(self, run_id: int, color_text: str, max_pixels: int = 0) -> bool:
        """Finish a run started with begin_run(); True if its outcome was applied."""
        try:
            output = run_pipeline(self.source, self.media_type, color_text, max_pixels=max_pixels)
        except RecolorError as exc:
            self.fail(run_id, exc)
            return False
        finally:
            # also reached when a non-RecolorError propagates
            if self.is_current(run_id):
                self.running = False
        return self.complete(run_id, output)

    def rerun(self, color_text: str, max_pixels: int = 0) -> bool:
        """Run the full pipeline on the current source; True if this run's outcome was applied."""
        if self.source is None:
            return False
        return self.run(self.begin_run(), color_text, max_pixels=max_pixels)
