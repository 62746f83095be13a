# storefront/main.py
from __future__ import annotations

import logging
import time
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import List, Optional, Tuple

from fastapi import Depends, FastAPI, HTTPException, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from alembic.config import Config as AlembicConfig
from alembic.script import ScriptDirectory

from storefront.core.errors import StorefrontError
from storefront.core.logging import setup_logging
from storefront.core.settings import settings
from storefront.database import SessionLocal, get_db, init_db_if_requested
from storefront.routers.category import router as categories_router
from storefront.routers.image import router as images_router
from storefront.routers.product import router as products_router
from storefront.storage.images import URL_PREFIX

API_PREFIX = "/api"
APP_STARTED_MONO = time.monotonic()

# --- Logging ---
setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger("storefront")

tags_metadata = [
    {"name": "health", "description": "Liveness/Readiness checks"},
    {"name": "categories", "description": "Category CRUD"},
    {"name": "products", "description": "Product CRUD with image upload"},
    {"name": "images", "description": "Uploaded image gallery"},
]

# --- Utilitare ---
def _get_req_id_from_headers(request: Request) -> str:
    # Prefer X-Request-ID, apoi X-Correlation-ID; dacă lipsesc, generează unul.
    return (
        request.headers.get("x-request-id")
        or request.headers.get("x-correlation-id")
        or uuid.uuid4().hex[:12]
    )

def _error_response(request: Request, status_code: int, message: str, error=None, headers=None) -> JSONResponse:
    content = {"success": False, "message": message}
    if error is not None:
        content["error"] = jsonable_encoder(error)
    headers = dict(headers or {})
    headers.setdefault("X-Request-ID", _get_req_id_from_headers(request))
    return JSONResponse(status_code=status_code, content=content, headers=headers)

# --- Middleware func (registered after app is created) ---
async def request_context_mw(request: Request, call_next):
    """
    - Generează/propagă X-Request-ID
    - Aplică headers de securitate minime
    - Server-Timing / X-Process-Time
    """
    req_id = _get_req_id_from_headers(request)

    start = time.perf_counter()
    response: Response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000

    response.headers.setdefault("X-Request-ID", req_id)
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("Referrer-Policy", "no-referrer")
    response.headers.setdefault("X-App-Version", settings.APP_VERSION)
    response.headers.setdefault("Server-Timing", f"app;dur={duration_ms:.1f}")
    response.headers.setdefault("X-Process-Time", f"{duration_ms:.1f}ms")
    logger.debug("%s %s -> %s (%.1fms) rid=%s", request.method, request.url.path, response.status_code, duration_ms, req_id)
    return response

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: tabele (opțional) + sanity check DB
    try:
        init_db_if_requested()
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        logger.info("DB startup check OK")
    except Exception:
        logger.exception("DB startup check FAILED")

    logger.info("Serving uploads from %s", Path(settings.UPLOAD_DIR).resolve())
    yield

# --- App factory (create app BEFORE registering middleware) ---
app = FastAPI(
    title=settings.APP_TITLE,
    version=settings.APP_VERSION,
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

app.middleware("http")(request_context_mw)
app.add_middleware(GZipMiddleware, minimum_size=1024)

# CORS din settings: CORS_ORIGINS="http://localhost:5173,https://example.com" sau "*"
_origins = settings.cors_origins
if _origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_origins,
        allow_credentials="*" not in _origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Total-Count", "X-Request-ID", "Server-Timing", "X-Process-Time", "X-App-Version"],
    )

# --- Exception handlers → envelope {success: false, message, error?} ---
@app.exception_handler(StorefrontError)
async def _storefront_error_handler(request: Request, exc: StorefrontError):
    return _error_response(request, exc.status_code, exc.message, exc.details)

@app.exception_handler(IntegrityError)
async def _integrity_handler(request: Request, exc: IntegrityError):
    logger.warning("Integrity error escaped CRUD layer: %s", exc.orig)
    return _error_response(request, status.HTTP_400_BAD_REQUEST, "Integrity error.", str(exc.orig))

@app.exception_handler(RequestValidationError)
async def _validation_handler(request: Request, exc: RequestValidationError):
    return _error_response(request, status.HTTP_400_BAD_REQUEST, "Invalid request", exc.errors())

# Prinde 404/405 Starlette și răspunde JSON unitar
@app.exception_handler(StarletteHTTPException)
async def _starlette_http_exc_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) else "HTTP error"
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = "Not Found"
    elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        message = "Method Not Allowed"
    return _error_response(request, exc.status_code, message, {"path": str(request.url.path)}, exc.headers)

@app.exception_handler(Exception)
async def _unhandled_exc_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error: %s", exc)
    # mesajul brut e expus intenționat în câmpul error
    return _error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error", str(exc))

# --- Helpers Alembic/health ---
def _get_db_alembic_version(db: Session) -> Tuple[Optional[str], bool]:
    try:
        version = db.execute(text("SELECT version_num FROM alembic_version")).scalar_one_or_none()
        return version, True
    except Exception:
        db.rollback()
        return None, False

def _get_pkg_alembic_heads() -> List[str]:
    cfg = AlembicConfig(settings.ALEMBIC_CONFIG)
    script = ScriptDirectory.from_config(cfg)
    return list(script.get_heads())

# --- Routes: health ---
@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}

@app.get("/health/uptime", tags=["health"])
def health_uptime():
    return {"uptime_seconds": round(time.monotonic() - APP_STARTED_MONO, 3)}

@app.get("/health/db", tags=["health"])
def health_db(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        return {"status": "ok", "db": "up", "dialect": db.get_bind().dialect.name}
    except Exception:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="DB not ready")

@app.get("/health/migrations", tags=["health"])
def health_migrations(db: Session = Depends(get_db)):
    db_version, present = _get_db_alembic_version(db)
    try:
        heads = _get_pkg_alembic_heads()
    except Exception as e:
        return {"db_version": db_version, "present": present, "pkg_heads_error": str(e), "in_sync": False if present else None}
    head = heads[0] if heads else None
    return {"db_version": db_version, "present": present, "pkg_heads": heads, "in_sync": bool(db_version and head and db_version == head)}

# --- Routers ---
app.include_router(categories_router, prefix=API_PREFIX)
app.include_router(products_router, prefix=API_PREFIX)
app.include_router(images_router, prefix=API_PREFIX)

# Fișierele încărcate, servite direct
Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
app.mount(URL_PREFIX, StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False), name="uploads")
