"""Entrypoint: Gradio app plus /health and /api/recolor, served via uvicorn."""

from __future__ import annotations

import argparse

import gradio as gr
import uvicorn
from fastapi import FastAPI, File, Form, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, Response

from app.config import Settings, load_settings
from app.errors import DecodeFailure, InvalidColorFormat, ReadFailure, RecolorError, UnsupportedFileType
from app.pipeline import run_pipeline
from app.ui import build_ui
from app.utils.logging_setup import configure_logging, get_logger

logger = get_logger("server")

ERROR_STATUS = {
    UnsupportedFileType: 415,
    DecodeFailure: 422,
    InvalidColorFormat: 422,
    ReadFailure: 400,
}


def health():
    return JSONResponse({"status": "ok", "service": "png-color-changer"})


def error_response(exc: RecolorError) -> JSONResponse:
    status = ERROR_STATUS.get(type(exc), 400)
    return JSONResponse({"error": exc.kind, "detail": exc.message}, status_code=status)


def get_app(settings: Settings | None = None, with_ui: bool = True) -> FastAPI:
    """Return FastAPI app with /health, /api/recolor and (optionally) Gradio mounted at /."""
    settings = settings or load_settings()
    fastapi_app = FastAPI(title="PNG Color Changer", docs_url=None, redoc_url=None)
    fastapi_app.add_api_route("/health", health, methods=["GET"])

    async def recolor_upload(file: UploadFile = File(...), color: str = Form(...)):
        try:
            try:
                data = await file.read()
            except OSError as exc:
                raise ReadFailure() from exc
            # CPU-bound stages run in the threadpool
            output = await run_in_threadpool(
                run_pipeline, data, file.content_type, color, max_pixels=settings.max_image_pixels,
            )
        except RecolorError as exc:
            return error_response(exc)
        return Response(content=output.png, media_type="image/png")

    fastapi_app.add_api_route("/api/recolor", recolor_upload, methods=["POST"])

    if with_ui:
        gr.mount_gradio_app(fastapi_app, build_ui(settings), path="/")
    return fastapi_app


def main():
    settings = load_settings()
    parser = argparse.ArgumentParser()
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    args = parser.parse_args()
    configure_logging(settings.log_level)
    app = get_app(settings)
    logger.info("serving on %s:%d", args.host, args.port)
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
