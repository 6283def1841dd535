"""Gradio UI: upload a PNG, pick a color, see it recolored with shading kept."""

from __future__ import annotations

import re
import time
from pathlib import Path

import gradio as gr
import numpy as np

from app.config import Settings, get_data_dir, load_settings
from app.errors import RecolorError
from app.pipeline import export_output
from app.session import Session, ViewState
from app.utils.image_io import media_type_for, read_bytes

_CSS_RGB = re.compile(r"rgba?\s*\(\s*([\d.]+)\s*,\s*([\d.]+)\s*,\s*([\d.]+)")


def picker_to_hex(value: str | None) -> str:
    """Normalize ColorPicker output to '#RRGGBB'. Gradio may send 'rgba(r, g, b, a)'.

    Anything that is not rgb()/rgba() is returned stripped and left for parse_color to judge.
    """
    s = (value or "").strip()
    # Gradio sometimes sends "#rgba(r,g,b,a)"
    if s.startswith("#") and "rgb" in s.lower():
        s = s.lstrip("#").strip()
    m = _CSS_RGB.match(s)
    if not m:
        return s
    r, g, b = (float(m.group(i)) for i in (1, 2, 3))
    r, g, b = (int(round(min(255.0, max(0.0, c)))) for c in (r, g, b))
    return f"#{r:02X}{g:02X}{b:02X}"


def _upload_path(file) -> Path | None:
    if isinstance(file, list):
        file = file[0] if file else None
    if file is None or (isinstance(file, str) and not file.strip()):
        return None
    if isinstance(file, dict) and "name" in file:
        return Path(file["name"])
    if isinstance(file, (str, Path)):
        return Path(file)
    return Path(getattr(file, "name", str(file)))


def status_text(session: Session) -> str:
    view = session.view
    if view is ViewState.PROCESSING:
        msg = "Processing..."
    elif view is ViewState.READY:
        res = session.result
        msg = f"Recolored to {res.color.to_hex()} ({res.buffer.width}x{res.buffer.height})."
    else:
        msg = "Upload a PNG to get started."
    if session.error:
        msg = f"{msg}\nError: {session.error}"
    return msg


def _result_image(session: Session) -> np.ndarray | None:
    return session.result.buffer.data if session.result is not None else None


def _view(session: Session):
    return session, _result_image(session), status_text(session)


def _run_with_progress(session: Session, color_value: str, settings: Settings):
    """Yield the processing view first, then the outcome."""
    if session.source is None:
        yield _view(session)
        return
    run_id = session.begin_run()
    yield _view(session)
    session.run(run_id, picker_to_hex(color_value), max_pixels=settings.max_image_pixels)
    yield _view(session)


def on_upload(file, color_value: str, session: Session, settings: Settings):
    path = _upload_path(file)
    if path is None:
        yield _view(session)
        return
    try:
        data = read_bytes(path)
    except RecolorError as exc:
        session.error = exc.message
        yield _view(session)
        return
    if not session.accept_upload(data, media_type_for(path)):
        yield _view(session)
        return
    yield from _run_with_progress(session, color_value, settings)


def on_color_change(color_value: str, session: Session, settings: Settings):
    yield from _run_with_progress(session, color_value, settings)


def on_save(session: Session, settings: Settings):
    if session.result is None:
        return None, "Upload a PNG first."
    out_dir = get_data_dir(settings)
    path = export_output(session.result, out_dir, base_name=f"recolored_{int(time.time())}")
    return str(path), f"Saved to {path}"


def build_ui(settings: Settings | None = None) -> gr.Blocks:
    settings = settings or load_settings()
    with gr.Blocks(title="PNG Color Changer") as app:
        gr.Markdown("# PNG Color Changer")
        gr.Markdown("Upload a PNG and instantly recolor it while preserving details.")
        session = gr.State(Session())

        with gr.Row():
            with gr.Column(scale=1):
                upload = gr.File(label="Upload PNG file", file_types=[".png"])
                color_picker = gr.ColorPicker(label="New color", value=settings.default_color)
                status = gr.Textbox(label="Status", value=status_text(Session()), interactive=False, lines=2)
                save_btn = gr.Button("Save PNG")
                save_status = gr.Textbox(label="Save", interactive=False)
                download = gr.File(label="Download recolored PNG", interactive=False)

            with gr.Column(scale=1):
                result_display = gr.Image(label="Result", type="numpy", image_mode="RGBA", interactive=False)

        def handle_upload(f, c, s):
            yield from on_upload(f, c, s, settings)

        def handle_color(c, s):
            yield from on_color_change(c, s, settings)

        upload.change(
            handle_upload,
            [upload, color_picker, session],
            [session, result_display, status],
        )
        color_picker.change(
            handle_color,
            [color_picker, session],
            [session, result_display, status],
            trigger_mode="always_last",
        )
        save_btn.click(lambda s: on_save(s, settings), [session], [download, save_status])

    return app
