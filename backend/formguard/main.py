"""FormGuard — HTTP service for declarative form validation.

Main FastAPI application with lifespan management and global error handling.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from formguard import __version__
from formguard.api.router import api_router
from formguard.config import get_settings
from formguard.exceptions import ConfigurationError, DetachedElementError, DocumentError
from formguard.logging_config import configure_logging
from formguard.validators import get_registry

configure_logging()

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    settings = get_settings()

    # ── Startup ──
    logger.info("app_starting", debug=settings.DEBUG)

    # Registrations happen before any request is validated
    registry = get_registry()
    logger.info("validators_loaded", validators=registry.names())

    logger.info("app_started")

    yield

    # ── Shutdown ──
    logger.info("app_stopped")


# ── Create Application ──

app = FastAPI(
    title="FormGuard",
    description=(
        "Declarative form validation. Named validators scoped by CSS selectors "
        "are applied to the fields of a submitted form, which is returned "
        "annotated with error classes and inline error lists."
    ),
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ── Global Exception Handlers ──

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all error handler for unhandled exceptions."""
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please try again.",
        },
    )


@app.exception_handler(DocumentError)
async def document_error_handler(request: Request, exc: DocumentError):
    """Unparsable markup or missing form."""
    return JSONResponse(
        status_code=422,
        content={"error": "document_error", "message": str(exc)},
    )


@app.exception_handler(DetachedElementError)
async def detached_element_handler(request: Request, exc: DetachedElementError):
    """A field could not be matched because it has no parent."""
    return JSONResponse(
        status_code=422,
        content={"error": "detached_element", "message": str(exc)},
    )


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    """Invalid selectors passed in by the caller, e.g. a bad form selector."""
    return JSONResponse(
        status_code=422,
        content={"error": "configuration_error", "message": str(exc)},
    )


# ── Routes ──

app.include_router(api_router, prefix="/api/v1")


# ── Root endpoint ──

@app.get("/")
async def root():
    """Root endpoint — API info."""
    return {
        "name": "FormGuard",
        "version": __version__,
        "description": "Declarative form validation service",
        "docs": "/docs",
        "health": "/api/v1/health",
    }


def run() -> None:
    """Serve the app with uvicorn using FORMGUARD_HOST / FORMGUARD_PORT."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "formguard.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
