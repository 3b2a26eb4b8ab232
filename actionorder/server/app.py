"""
FastAPI Application Entry Point for ActionOrder.

This module creates and configures the FastAPI application with:
- HTTP routes for the turn-order operations of each table
- WebSocket endpoint for live action-indicator updates
- CORS middleware for the browser logger
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from actionorder import __version__
from actionorder.core.rules import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_LOG_LEVEL
from actionorder.server.routes import router
from actionorder.server.websocket import TableManager, websocket_endpoint


logger = logging.getLogger(__name__)


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure root logging for the server process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("ActionOrder server starting up...")
    yield
    for table_id in list(app.state.tables.tables):
        app.state.tables.remove_table(table_id)
    logger.info("ActionOrder server shutting down...")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Each application owns its own TableManager, so separate apps (for
    example in tests) never share table state.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="ActionOrder",
        description="Turn-order engine for live poker hand logging",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.tables = TableManager()

    # CORS middleware for the browser logger
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include HTTP routes
    app.include_router(router)

    # WebSocket endpoint
    app.websocket("/ws/{table_id}")(websocket_endpoint)

    return app


configure_logging()

# Create the application instance
app = create_app()


def main():
    """Run the server (for use as entry point)."""
    import uvicorn
    uvicorn.run(
        "actionorder.server.app:app",
        host=DEFAULT_HOST,
        port=DEFAULT_PORT,
        reload=False,
    )


if __name__ == "__main__":
    main()
