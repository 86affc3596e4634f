"""FastAPI entrypoint for the order status service."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from status_service.api.v1.api import api_router
from status_service.core.config import settings
from status_service.core.logging import configure_logging
from status_service.core.security import get_password_hash
from status_service.db import session as db_session
from status_service.db.base import Base
from status_service.domain.exceptions import StorageFailure
from status_service.services.user_service import ensure_admin_user

logger = logging.getLogger(__name__)

configure_logging()
app = FastAPI(title=settings.app_name)
app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
def on_startup() -> None:
    Base.metadata.create_all(bind=db_session.engine)
    if not (settings.admin_user and settings.admin_pass):
        logger.info("[BOOTSTRAP] ADMIN_USER/ADMIN_PASS not set; skipping admin bootstrap.")
        return
    db = db_session.SessionLocal()
    try:
        ensure_admin_user(db, settings.admin_user, get_password_hash(settings.admin_pass))
    finally:
        db.close()


@app.exception_handler(StorageFailure)
async def storage_failure_handler(request: Request, exc: StorageFailure) -> JSONResponse:
    logger.error("[STORAGE] %s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
