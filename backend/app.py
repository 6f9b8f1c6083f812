"""
FastAPI entry point serving the community pulse dashboard as JSON
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from api.dashboard import router as dashboard_router
from core.config import Settings, settings
from data.base import create_http_client
from services.dashboard import DashboardService


def create_app(config: Settings = settings) -> FastAPI:

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with create_http_client(config) as client:
            app.state.dashboard = DashboardService(client, config)
            logger.info(f"Community pulse API ready, upstream {config.API_BASE_URL}")
            yield
        logger.info("Community pulse API stopped")

    app = FastAPI(title="community-pulse", version="0.1.0", lifespan=lifespan)
    app.include_router(dashboard_router, prefix="/api/pulse", tags=["pulse"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app:app", host="0.0.0.0", port=8080)
