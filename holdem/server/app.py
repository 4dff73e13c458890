"""
FastAPI Application Entry Point for the Hold'em engine.

This module creates and configures the FastAPI application with:
- HTTP routes for the action API
- WebSocket endpoint for real-time updates
- CORS middleware for a locally served UI
"""

import logging
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from holdem import __version__
from holdem.core.rules import TableConfig
from holdem.server.routes import router
from holdem.server.session import TableSession, websocket_endpoint

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_app(config: Optional[TableConfig] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Table settings; defaults to a 7-seat table with one human seat

    Returns:
        Configured FastAPI application instance
    """
    config = config or TableConfig()

    app = FastAPI(
        title="Hold'em Engine",
        description="No-Limit Texas Hold'em table with heuristic AI seats",
        version=__version__,
    )

    # CORS middleware for a UI served from another local port
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.session = TableSession(config)

    # Include HTTP routes
    app.include_router(router)

    # WebSocket endpoint
    app.websocket("/ws")(websocket_endpoint)

    @app.on_event("startup")
    async def startup_event():
        logger.info(
            f"Table ready: {config.player_count} seats, blinds "
            f"{config.small_blind}/{config.big_blind}, stacks {config.starting_stack}"
        )

    @app.on_event("shutdown")
    async def shutdown_event():
        app.state.session.cancel_pending()
        logger.info("Server shutting down...")

    return app


# Create the application instance
app = create_app()


def main():
    """Run the server with default settings (for use as entry point)."""
    import uvicorn
    uvicorn.run(
        "holdem.server.app:app",
        host="127.0.0.1",
        port=8000,
    )


if __name__ == "__main__":
    main()
