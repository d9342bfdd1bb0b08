import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shortlink_app.config import Settings, get_settings
from shortlink_app.database.connection import engine, Base
from shortlink_app.api.v1 import links
from shortlink_app.logging_config import setup_logging
from shortlink_app.middleware import LoggingMiddleware

# Import models to ensure they're registered with Base
from shortlink_app.models import Link  # noqa: F401

logger = logging.getLogger("shortlink.app")


def _error_body(status_code: int, message) -> dict:
    return {"statusCode": status_code, "message": message}


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.status_code, exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors (400), like an invalid URL."""
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{field}: {error.get('msg')}" if field else error.get("msg"))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(status.HTTP_400_BAD_REQUEST, messages),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    """Anything the routes did not turn into an HTTP error is a 500 with the usual body."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"),
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI app: middleware, error handlers and routers."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.storage_backend == "sql":
            # Create database tables
            Base.metadata.create_all(bind=engine)
        logger.info(
            "%s %s started (storage=%s, base_url=%s)",
            settings.app_name, settings.app_version,
            settings.storage_backend, settings.base_url,
        )
        yield
        logger.info("%s stopped", settings.app_name)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="A URL shortener service built with FastAPI",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.get("/")
    def read_root():
        """Root endpoint with API information"""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "api": settings.api_prefix or "/",
            "docs": "/docs",
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "environment": settings.environment}

    ######## Include routers
    app.include_router(links.router, prefix=settings.api_prefix)

    return app


settings = get_settings()
setup_logging(level=settings.log_level, log_file=settings.log_file, json_format=settings.log_json)
app = create_app(settings)


if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
