"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from conquest.api.dependencies import set_game_manager
from conquest.api.game_manager import GameManager
from conquest.api.routes import api_router
from conquest.config import GameConfig
from conquest.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: GameConfig | None = None, save_path: str | Path | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = GameConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        manager = GameManager(_config, save_path)
        set_game_manager(manager)
        manager.start()
        logger.info("API server started, game running.")
        yield
        manager.stop()
        set_game_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Conquest Simulation",
        description=(
            "Tick-driven territory conquest simulation: renderer and input API.\n\n"
            "## API Groups\n\n"
            "- **State**: Live game state: empires, ownership, buildings, events\n"
            "- **Map**: Static terrain data (fetch once)\n"
            "- **Commands**: Player commands: select, capture, build, pause, speed\n"
            "- **Control**: Pause, resume, reset and save\n"
            "- **Config**: Read-only game configuration\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS: any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)
    return app
