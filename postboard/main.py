"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from postboard.api import auth, posts
from postboard.api.responses import error_envelope
from postboard.config import get_settings
from postboard.services.errors import ApiError, AuthenticationError

settings = get_settings()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info(f"Starting Postboard API ({settings.environment})")
    yield


app = FastAPI(
    title="Postboard API",
    description="Token-authenticated API for personally-owned text posts",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    """Render service errors as the JSON envelope."""
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    # Field errors carry the detail, the generic message would only repeat it
    message = None if exc.errors else exc.message
    return error_envelope(exc.status_code, message, exc.errors, headers)


def _field_name(loc: tuple) -> str:
    parts = [str(part) for part in loc[1:]] or [str(loc[0])]
    return ".".join(parts)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Render malformed requests as field errors, and bad path ids as 404."""
    if any(error["loc"] and error["loc"][0] == "path" for error in exc.errors()):
        return error_envelope(status.HTTP_404_NOT_FOUND, "Not found")

    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        errors.setdefault(_field_name(tuple(error["loc"])), []).append(error["msg"])
    return error_envelope(422, errors=errors)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render routing errors (unknown path, wrong method) as the envelope."""
    return error_envelope(exc.status_code, str(exc.detail), headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled application error", exc_info=exc)
    return error_envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server Error")


# Register routers
app.include_router(auth.router, prefix=settings.api_prefix)
app.include_router(posts.router, prefix=settings.api_prefix)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
