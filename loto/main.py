"""
FastAPI application entry point.
Includes global error handlers (structured {success: false, error} failures) and all routers.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from loto.routers import breakers, locks, personnel, plans, history, stats, health
from loto.database import create_tables
from loto.config import settings
from loto.exceptions import NotFoundError
from loto.utils.logger import get_logger
import time

logger = get_logger(__name__)

app = FastAPI(
    title=f"{settings.APP_NAME} API",
    description="Lockout/tagout tracking — breakers, locks, personnel, plans and audit trail.",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS (desktop front-end is served from its own origin) ──────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


# ── Exception Handlers ───────────────────────────────────────────────────────
@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return _failure(status.HTTP_404_NOT_FOUND, str(exc))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _failure(exc.status_code, str(exc.detail))


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning(f"Constraint violation on {request.url.path}: {exc.orig}")
    return _failure(status.HTTP_409_CONFLICT, f"Constraint violation: {exc.orig}")


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Store failure on {request.url.path}: {exc}", exc_info=True)
    return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, f"Database error: {exc.__class__.__name__}")


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(breakers.router,  prefix="/api/v1", tags=["Breakers"])
app.include_router(locks.router,     prefix="/api/v1", tags=["Locks"])
app.include_router(personnel.router, prefix="/api/v1", tags=["Personnel"])
app.include_router(plans.router,     prefix="/api/v1", tags=["Electrical Plans"])
app.include_router(history.router,   prefix="/api/v1", tags=["History"])
app.include_router(stats.router,     prefix="/api/v1", tags=["Stats"])
app.include_router(health.router,    prefix="/api/v1", tags=["Health"])


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info(f"🚀 {settings.APP_NAME} v{settings.APP_VERSION} starting up...")
    create_tables()
    logger.info("✅ Database tables ready")
    logger.info(f"🌐 Listening on http://{settings.BACKEND_HOST}:{settings.BACKEND_PORT}")
    logger.info("📖 API docs at /docs")


@app.on_event("shutdown")
async def shutdown():
    logger.info(f"🛑 {settings.APP_NAME} shutting down...")
