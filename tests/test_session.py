"""Session view state: last run wins, errors shown alongside results."""

from __future__ import annotations

import io

import numpy as np
import pytest
from PIL import Image

from app.errors import DecodeFailure
from app.pipeline import run_pipeline
from app.session import Session, ViewState


def _png_bytes(rgb=(0, 0, 0)) -> bytes:
    img = np.zeros((2, 2, 4), dtype=np.uint8)
    img[:, :, :3] = rgb
    img[:, :, 3] = 255
    out = io.BytesIO()
    Image.fromarray(img).save(out, format="PNG")
    return out.getvalue()


def _ready_session(color="#FF0000") -> Session:
    session = Session()
    assert session.accept_upload(_png_bytes(), "image/png")
    assert session.rerun(color)
    return session


def test_new_session_is_idle():
    session = Session()
    assert session.view is ViewState.IDLE
    assert session.error is None
    assert session.rerun("#FF0000") is False


def test_upload_and_run_is_ready():
    session = _ready_session()
    assert session.view is ViewState.READY
    assert session.result.color.to_hex() == "#FF0000"
    assert tuple(session.result.buffer.data[0, 0]) == (255, 0, 0, 255)


def test_jpeg_upload_keeps_previous_result():
    session = _ready_session()
    previous = session.result
    source = session.source
    assert session.accept_upload(b"jpeg bytes", "image/jpeg") is False
    assert session.error == "Please upload a valid PNG file (got image/jpeg)."
    assert session.result is previous
    assert session.source is source
    assert session.view is ViewState.READY


def test_jpeg_upload_on_empty_session_stays_idle():
    session = Session()
    assert session.accept_upload(b"jpeg bytes", "image/jpeg") is False
    assert session.view is ViewState.IDLE
    assert session.error


def test_color_change_reruns_and_success_clears_error():
    session = _ready_session()
    assert session.rerun("#zzzzzz") is False
    assert session.error == "Invalid color format: '#zzzzzz'"
    assert session.result.color.to_hex() == "#FF0000"
    assert session.rerun("#0000FF")
    assert session.error is None
    assert tuple(session.result.buffer.data[0, 0]) == (0, 0, 255, 255)


def test_processing_view_while_run_in_flight():
    session = _ready_session()
    session.begin_run()
    assert session.view is ViewState.PROCESSING


def test_stale_run_result_is_ignored():
    session = Session()
    session.accept_upload(_png_bytes(), "image/png")
    first = session.begin_run()
    second = session.begin_run()
    stale = run_pipeline(session.source, "image/png", "#FF0000")
    latest = run_pipeline(session.source, "image/png", "#00FF00")

    assert session.complete(second, latest)
    assert session.complete(first, stale) is False
    assert session.result is latest
    assert session.fail(first, DecodeFailure()) is False
    assert session.error is None
    assert session.view is ViewState.READY


def test_failed_latest_run_keeps_result_and_shows_error():
    session = _ready_session()
    previous = session.result
    run_id = session.begin_run()
    assert session.fail(run_id, DecodeFailure())
    assert session.result is previous
    assert session.error == DecodeFailure.default_message
    assert session.view is ViewState.READY


def test_corrupt_png_upload_fails_on_rerun():
    session = Session()
    assert session.accept_upload(b"garbage", "image/png")
    assert session.rerun("#FF0000") is False
    assert session.error == DecodeFailure.default_message
    assert session.view is ViewState.IDLE


def test_unexpected_error_does_not_leave_view_processing(monkeypatch):
    session = _ready_session()

    def boom(*args, **kwargs):
        raise RuntimeError("encoder crashed")

    monkeypatch.setattr("app.session.run_pipeline", boom)
    with pytest.raises(RuntimeError):
        session.rerun("#00FF00")
    assert session.running is False
    assert session.view is ViewState.READY
    assert session.result.color.to_hex() == "#FF0000"
