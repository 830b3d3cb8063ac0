import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlmodel import SQLModel
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from course_access.app.repositories.errors import StorageError
from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_storage_error(request: Request, exc: StorageError):
    error_dict = {"code": "STORAGE_ERROR", "message": "Internal server error"}
    logger.error(f"Storage error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration of every request."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f}ms)"
        )
        return response


def _init_sentry(ApplicationConfig) -> None:
    import sentry_sdk

    sentry_sdk.init(
        dsn=ApplicationConfig.DSN_SENTRY,
        environment=ApplicationConfig.SENTRY_ENVIRONMENT,
    )
    logger.info(f"Sentry enabled for environment {ApplicationConfig.SENTRY_ENVIRONMENT}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    from course_access.depends import engine

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield
    await engine.dispose()


def create_app(ApplicationConfig) -> FastAPI:
    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if ApplicationConfig.ENABLE_SENTRY and ApplicationConfig.DSN_SENTRY:
        _init_sentry(ApplicationConfig)

    app = FastAPI(title="Course Access API", version="0.1.0", lifespan=lifespan)

    if ApplicationConfig.ENABLE_LOGGING_MIDDLEWARE:
        app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from course_access.api.routes import access, admin, auth, catalog, health_check, lessons, payments

    prefix = ApplicationConfig.API_PREFIX.rstrip("/")
    app.include_router(health_check.router, prefix=prefix, tags=["Health"])
    app.include_router(auth.router, prefix=prefix, tags=["Authentication"])
    app.include_router(access.router, prefix=prefix, tags=["Access"])
    app.include_router(catalog.router, prefix=prefix, tags=["Catalog"])
    app.include_router(lessons.router, prefix=prefix, tags=["Lessons"])
    app.include_router(payments.router, prefix=prefix, tags=["Payments"])
    app.include_router(admin.router, prefix=prefix, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(StorageError, handle_storage_error)

    return app
