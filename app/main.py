from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from contextlib import asynccontextmanager

from app.utils.config import Settings
from app.utils.logging import setup_logging
from app.utils.posthog_client import shutdown_posthog
from app.routers import function
from app.routers.function import bad_request

import logging

# Load configuration
settings = Settings()

# Configure logging
setup_logging(settings.log_format)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown."""
    # Startup
    logging.info(f"🚀 Fig Service starting on {settings.host}:{settings.port}")
    logging.info(f"Environment: {settings.app_env}")
    logging.info(
        "Routers registered: /v1/explain, /v1/translate, /v1/complexity, /v1/ask"
    )
    yield
    # Shutdown
    shutdown_posthog()


app = FastAPI(title="Fig Service", lifespan=lifespan)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all incoming requests."""

    async def dispatch(self, request: Request, call_next):
        try:
            response = await call_next(request)
            return response
        except Exception as e:
            logging.error(
                f"Request failed: {request.method} {request.url.path} - {type(e).__name__}: {e}"
            )
            raise


app.add_middleware(RequestLoggingMiddleware)


# Health endpoint
@app.get("/health", tags=["health"])
async def health():
    return {"status": "ok"}


# Exception handlers
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Fig functions answer every bad body with the same opaque 400
    if request.url.path.startswith("/v1/"):
        logging.warning(f"Malformed body for {request.url.path}: {exc.errors()}")
        return bad_request()
    return await request_validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    logging.error(
        f"Unhandled exception for {request.method} {request.url.path}: {type(exc).__name__}",
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


app.include_router(function.router)
