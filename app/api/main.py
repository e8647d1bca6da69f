"""FastAPI entrypoint and HTTP routes."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.admin import router as admin_router
from app.config.settings import get_settings
from app.db.session import init_db
from app.metrics.prometheus_exporter import create_metrics_app
from app.monitoring.logging import configure_logging


@asynccontextmanager
async def lifespan(_: FastAPI):
    await init_db()
    yield


def create_app() -> FastAPI:
    """Initialise the FastAPI application."""

    settings = get_settings()
    configure_logging()
    app = FastAPI(
        title="Media Purge API",
        version="0.1.0",
        docs_url="/docs" if settings.environment != "prod" else None,
        redoc_url="/redoc" if settings.environment != "prod" else None,
        lifespan=lifespan,
    )

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Simple health endpoint used for readiness probes."""

        return {"status": "ok"}

    app.include_router(admin_router)
    app.mount("/metrics", create_metrics_app())

    return app


app = create_app()
