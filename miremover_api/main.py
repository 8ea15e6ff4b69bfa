"""MiRemover API - FastAPI app entry point."""
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from miremover_api import __version__
from miremover_api.core.config import Settings, get_settings
from miremover_api.core.context import AppContext
from miremover_api.core.errors import ServiceError
from miremover_api.core.logger import get_logger, setup_logger
from miremover_api.core.security import api_key_gate
from miremover_api.db.session import create_all
from miremover_api.routers import admin, stats, users


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{location}: {first.get('msg')}" if location else str(first.get("msg"))


def register_exception_handlers(app: FastAPI) -> None:
    logger = get_logger(__name__)

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": _validation_message(exc)})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    logger = setup_logger(settings.log_level)
    context = AppContext.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await create_all(context.engine)
        logger.info("%s started (db: %s)", settings.app_name, context.engine.url.render_as_string(hide_password=True))
        yield
        await context.dispose()
        logger.info("%s stopped", settings.app_name)

    app = FastAPI(
        title=settings.app_name,
        description="User registry and usage statistics sync for the MiRemover client",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.context = context

    # CORS is added last so it wraps the key gate and answers preflights itself
    app.middleware("http")(api_key_gate)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(users.router)
    app.include_router(stats.router)
    app.include_router(admin.router)

    @app.get("/")
    async def root():
        return {"message": f"{settings.app_name} online"}

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "miremover_api.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
