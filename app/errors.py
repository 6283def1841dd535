"""Error kinds surfaced to the user; each aborts the current recolor run."""

from __future__ import annotations


class RecolorError(Exception):
    """Base for all user-visible failures. `kind` names the error, `message` is shown to the user."""

    default_message = "Could not process the image."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def kind(self) -> str:
        return type(self).__name__


class UnsupportedFileType(RecolorError):
    default_message = "Please upload a valid PNG file."


class DecodeFailure(RecolorError):
    default_message = "Failed to load the image. It might be an invalid format."


class InvalidColorFormat(RecolorError):
    default_message = "Invalid color format."


class ReadFailure(RecolorError):
    default_message = "Failed to read the file."
