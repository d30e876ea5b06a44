import time
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import Response

from promoposter.api.routes import router
from promoposter.config.settings import Settings
from promoposter.errors import AppError
from promoposter.logging.logger import Log
from promoposter.processor.service import PosterService, build_service

STATIC_MOUNTS = ("images", "edit-images", "posters")


async def log_requests(request: Request, call_next: RequestResponseEndpoint) -> Response:
    start = time.perf_counter()
    request_id = request.headers.get("X-Request-Id") or uuid.uuid4().hex
    request.state.request_id = request_id
    with Log.request_scope(request_id):
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        Log.info(
            f"{request.method} {request.url.path} {response.status_code} {duration_ms:.2f}ms"
        )
    response.headers["X-Request-Id"] = request_id
    return response


async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    # Only server-side failures are logged here.
    if exc.status_code >= 500:
        Log.error(f"{request.method} {request.url.path} failed: {type(exc).__name__}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail, "code": exc.code},
    )


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    Log.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "code": "invalid_request"},
    )


def create_app(settings: Settings | None = None, service: PosterService | None = None) -> FastAPI:
    """Build the FastAPI application around one process-wide PosterService."""
    settings = settings or (service.settings if service else Settings())
    Log.configure(settings.log_level)
    service = service or build_service(settings)
    service.store.ensure_dirs()

    app = FastAPI(title="promoposter")
    app.state.service = service
    if settings.cors_allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_allow_origins,
            allow_methods=["GET", "POST"],
            allow_headers=["Content-Type", "Authorization"],
        )
    app.add_middleware(BaseHTTPMiddleware, dispatch=log_requests)
    app.add_exception_handler(AppError, handle_app_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_validation_error)  # type: ignore[arg-type]
    app.include_router(router)
    for category in STATIC_MOUNTS:
        app.mount(
            f"/{category}",
            StaticFiles(directory=service.store.directory(category)),
            name=category,
        )
    return app
