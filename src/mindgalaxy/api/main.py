"""FastAPI application for Mind Galaxy.

Serves one galaxy session: the lifespan starts its frame loop on the
server's event loop and stops it on shutdown.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mindgalaxy.api.routes import router
from mindgalaxy.config import settings
from mindgalaxy.galaxy import Galaxy

logger = logging.getLogger(__name__)


def create_app(galaxy: Galaxy | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Without an explicit session the app starts from the seeded demo galaxy.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Manage application lifespan - startup and shutdown."""
        session = galaxy or Galaxy.seeded()
        app.state.galaxy = session

        # Startup
        logger.info(f"Starting Mind Galaxy API with {len(session.graph)} thoughts...")
        logger.info(f"Collaborator backend: {settings.services_backend}")
        session.start()

        yield

        # Shutdown
        logger.info("Shutting down Mind Galaxy API...")
        await session.close()

    app = FastAPI(
        title="Mind Galaxy",
        description="Force-directed thought graph with clustering and thinker sparks",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        "mindgalaxy.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )
