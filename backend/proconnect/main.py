"""
Main module for the FastAPI application.
"""
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .__version__ import __version__
from .api.v1.comments import router as comments_router
from .api.v1.connections import router as connections_router
from .api.v1.jobs import router as jobs_router
from .api.v1.messages import router as messages_router
from .api.v1.posts import router as posts_router
from .api.v1.users import router as users_router
from .auth.routes import router as auth_router
from .core.config import settings
from .core.exceptions import AppError
from .db.session import engine

# Setup logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# Lifespan event handler
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan event handler - runs on startup and shutdown.
    """
    logger.info(f"ProConnect API {__version__} starting")
    if os.getenv("DATABASE_URL"):
        logger.info("Database: using DATABASE_URL")
    else:
        logger.info(f"Database: using DB_* settings ({settings.DB_HOST}:{settings.DB_PORT}/{settings.DB_NAME})")
    logger.info(f"Routes mounted under {settings.API_PREFIX}")

    yield

    # Shutdown
    await engine.dispose()
    logger.info("ProConnect API shutting down")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def _validation_message(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
        message = error.get("msg", "Invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return ", ".join(messages) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """Turn every error into the ``{"success": false, "error": ...}`` envelope."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path}: {exc.message}")
        else:
            logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return _error(status.HTTP_400_BAD_REQUEST, _validation_message(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        response = _error(exc.status_code, str(exc.detail))
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server Error")


def create_app() -> FastAPI:
    app = FastAPI(
        title="ProConnect API",
        description="Professional networking backend: profiles, posts, connections, messaging and jobs",
        version=__version__,
        lifespan=lifespan,
    )

    # Configure CORS
    if settings.CORS_ORIGINS:
        origins = settings.CORS_ORIGINS
        if isinstance(origins, str):
            origins = [origins]
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials="*" not in origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    for router in (
        auth_router,
        users_router,
        posts_router,
        comments_router,
        connections_router,
        messages_router,
        jobs_router,
    ):
        app.include_router(router, prefix=settings.API_PREFIX)

    @app.get("/")
    async def root():
        """
        Root endpoint for health checks.
        """
        return {"message": "ProConnect API is running"}

    @app.get("/health")
    async def health():
        """
        Health check endpoint.
        """
        return {"status": "ok", "version": __version__}

    return app


app = create_app()


if __name__ == "__main__":
    """
    Run the application directly.
    """
    import uvicorn

    uvicorn.run(
        "proconnect.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=True,
    )
