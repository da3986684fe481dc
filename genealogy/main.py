from __future__ import annotations

import logging
import os

from fastapi import FastAPI

from .middleware import RequestLogMiddleware, storage_error_handler
from .routes import families, graph, members, relations, relationship
from .store import StorageError, get_data_dir


def get_api_prefix() -> str:
    prefix = os.environ.get("GENEALOGY_API_PREFIX", "/api/genealogy").strip()
    return prefix.rstrip("/")


def _configure_logging() -> None:
    level = os.environ.get("GENEALOGY_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app() -> FastAPI:
    _configure_logging()

    application = FastAPI(title="Genealogy API", version="0.1.0")
    application.add_middleware(RequestLogMiddleware)
    application.add_exception_handler(StorageError, storage_error_handler)

    prefix = get_api_prefix()
    for module in (families, members, relations, relationship, graph):
        application.include_router(module.router, prefix=prefix)

    @application.get("/health")
    def health() -> dict[str, str]:
        return {"ok": "true"}

    logging.getLogger(__name__).info("serving families from %s", get_data_dir().resolve())
    return application


app = create_app()
