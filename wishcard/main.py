"""FastAPI application for Wishcard."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from wishcard import __version__
from wishcard.config import settings
from wishcard.database import close_db, init_db
from wishcard.errors import register_exception_handlers
from wishcard.routes import admin_router, auth_router, wishes_router
from wishcard.schemas import HealthResponse
from wishcard.services.retention import RetentionSweeper

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

CONTENT_SECURITY_POLICY = (
    "default-src 'self'; img-src 'self' data: blob:; "
    "script-src 'self' 'unsafe-inline'; script-src-attr 'unsafe-inline'; "
    "style-src 'self' 'unsafe-inline'"
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    settings.upload_path.mkdir(parents=True, exist_ok=True)

    sweeper = RetentionSweeper(
        get_upload_dir=lambda: settings.upload_path,
        get_max_age_seconds=lambda: settings.upload_ttl_seconds,
        interval_seconds=settings.sweep_interval_seconds,
    )
    sweeper.start()
    app.state.sweeper = sweeper
    logger.info(f"Wishcard {__version__} started")
    try:
        yield
    finally:
        await sweeper.stop()
        close_db()


app = FastAPI(title="Wishcard", version=__version__, lifespan=lifespan)

register_exception_handlers(app)

if settings.ALLOWED_ORIGIN:
    app.add_middleware(CORSMiddleware, allow_origins=[settings.ALLOWED_ORIGIN], allow_methods=["*"], allow_headers=["*"])
else:
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


@app.middleware("http")
async def limit_json_body(request: Request, call_next):
    """Reject oversized JSON bodies before they are parsed."""
    content_type = request.headers.get("content-type", "")
    content_length = request.headers.get("content-length", "")
    if content_type.startswith("application/json") and content_length.isdigit():
        if int(content_length) > settings.MAX_JSON_BODY_SIZE:
            return JSONResponse(status_code=413, content={"error": "Request body too large"})
    return await call_next(request)


@app.middleware("http")
async def security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers.setdefault("Content-Security-Policy", CONTENT_SECURITY_POLICY)
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("X-Frame-Options", "SAMEORIGIN")
    response.headers.setdefault("Referrer-Policy", "no-referrer")
    return response


app.include_router(auth_router)
app.include_router(wishes_router)
app.include_router(admin_router)

# Uploaded photos, read-only
app.mount("/uploads", StaticFiles(directory=settings.upload_path, check_dir=False), name="uploads")


@app.get("/health", response_model=HealthResponse, tags=["health"])
async def health():
    return HealthResponse(ok=True)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("wishcard.main:app", host="0.0.0.0", port=settings.PORT, reload=settings.DEBUG)
