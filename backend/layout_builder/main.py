"""FastAPI Application Entry Point."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from layout_builder.config import get_settings
from layout_builder.api import catalog, layouts

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings = get_settings()

    # Create storage directory
    storage_path = Path(settings.storage_path)
    (storage_path / "layouts").mkdir(parents=True, exist_ok=True)

    logger.info("Layout Builder backend starting...")
    logger.info(f"Storage path: {storage_path.absolute()}")
    logger.info(f"Field catalog: {settings.catalog_path or 'packaged default'}")

    yield

    logger.info("Layout Builder backend shutting down...")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title="Layout Builder API",
        description="Stores and serves drag-and-drop form layouts",
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # API routers
    app.include_router(layouts.router, prefix="/api/v1", tags=["layouts"])
    app.include_router(catalog.router, prefix="/api/v1", tags=["catalog"])

    @app.get("/")
    async def root():
        """Root endpoint - API info."""
        return {
            "name": "Layout Builder API",
            "version": "0.1.0",
            "docs": "/docs",
        }

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "layout_builder.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
