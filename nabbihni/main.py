"""
FastAPI application factory
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from nabbihni.config import get_settings
from nabbihni.infrastructure.db.session import check_db_connection
from nabbihni.api.v1 import countdowns, events

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    if settings.AUTO_ADVANCE_ENABLED:
        from nabbihni.application.scheduler import start_scheduler, shutdown_scheduler

        start_scheduler()
        try:
            yield
        finally:
            shutdown_scheduler()
    else:
        logger.info("Auto-advance disabled, scheduler not started")
        yield


def create_app(with_scheduler: bool = True) -> FastAPI:
    """
    Application factory

    Args:
        with_scheduler: start background jobs on startup (tests pass False)

    Returns:
        Configured FastAPI app
    """
    settings = get_settings()

    app = FastAPI(
        title="Nabbihni",
        debug=settings.DEBUG,
        lifespan=lifespan if with_scheduler else None,
    )

    # Routers
    app.include_router(events.router)
    app.include_router(countdowns.router)

    # Health checks
    @app.get("/health", response_class=PlainTextResponse, tags=["system"])
    def health():
        """Health check endpoint"""
        return "ok"

    @app.get("/ready", response_class=PlainTextResponse, tags=["system"])
    async def ready():
        """Readiness check endpoint (checks the database)"""
        await check_db_connection()
        return "ok"

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "nabbihni.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )
