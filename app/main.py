import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import Settings, get_settings
from app.errors import APIError, InvalidPayloadError, StorageError, TaskNotFoundError
from app.logging_setup import setup_logging
from app.routes import router
from app.schemas import Envelope
from app.store import TaskStore

logger = logging.getLogger(__name__)


def envelope_response(status_code: int, message: str) -> JSONResponse:
    body = Envelope(status=status_code, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def api_error_handler(request: Request, exc: APIError):
    return envelope_response(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    # a non-integer id cannot name any task
    if any(err.get("loc", ())[:1] == ("path",) for err in exc.errors()):
        return envelope_response(TaskNotFoundError.status_code, TaskNotFoundError.message)
    return envelope_response(InvalidPayloadError.status_code, InvalidPayloadError.message)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return envelope_response(exc.status_code, message)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return envelope_response(500, "Internal server error")


def create_app(store: TaskStore, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        store.close()

    app = FastAPI(title="Task Tracker API", lifespan=lifespan)
    app.state.store = store

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(router)

    # Initialize Prometheus Instrumentator
    if settings.metrics_enabled:
        Instrumentator().instrument(app).expose(app, endpoint="/metrics")

    # everything else is the browser client
    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        logger.warning("Static directory %s not found; serving API only", static_dir)

    return app


def main():
    settings = get_settings()
    setup_logging(settings.log_level)

    store = TaskStore(settings.database_url)
    try:
        store.initialize()
    except StorageError:
        logger.critical("Cannot open task database %s, exiting", settings.database_url)
        sys.exit(1)

    app = create_app(store, settings)

    import uvicorn
    logger.info("Server is running on http://%s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
