import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app import __version__
from app.core.config import get_settings
from app.core.container import get_container
from app.infrastructure.database import dispose_engine, init_db
from app.interfaces.http import create_api_router
from app.interfaces.http.errors import register_exception_handlers
from app.interfaces.http.middleware import register_access_log
from app.schemas import HealthResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    get_container()
    await init_db()
    logger.info("%s %s started", app.title, __version__)
    yield
    await dispose_engine()
    logger.info("%s stopped", app.title)


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.project_name,
        description="Inventory of physical devices and their lifecycle state",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    if settings.logging.access_log:
        register_access_log(app)
    register_exception_handlers(app)

    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health() -> HealthResponse:
        return HealthResponse()

    return app


app = create_app()
