from __future__ import annotations
import logging
import os

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from importlib.metadata import PackageNotFoundError, version as pkg_version

from .config import Settings
from .loader import DEFAULT_LANG, MpxPartialLoader
from .source_type import known_extensions


log = logging.getLogger("uvicorn.error")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(title="MPX Script Extractor")

    @app.get("/api/version", response_class=JSONResponse)
    async def api_version():
        try:
            ver = pkg_version("mpxscan")
        except PackageNotFoundError:
            ver = "0.0.0"
        build = os.getenv("GIT_SHA") or os.getenv("APP_BUILD") or ""
        return {"name": "mpxscan", "version": ver, "build": build}

    @app.get("/api/languages", response_class=JSONResponse)
    async def api_languages():
        return {"default": DEFAULT_LANG, "languages": known_extensions()}

    @app.post("/api/extract", response_class=JSONResponse)
    def api_extract(payload: dict):
        source = payload.get("source")
        if not isinstance(source, str):
            log.info("extract rejected: source missing or not a string")
            raise HTTPException(400, "source must be a string")
        size = len(source.encode("utf-8"))
        if size > settings.max_document_bytes:
            log.info("extract rejected: %d bytes over limit", size)
            raise HTTPException(
                413, f"document exceeds {settings.max_document_bytes} bytes"
            )
        scripts = [s.to_dict() for s in MpxPartialLoader(source).iter_scripts()]
        return {"count": len(scripts), "scripts": scripts}

    return app


app = create_app()
