"""
FastAPI application for the NPC voice relay.

This module builds the FastAPI application that the game server talks to.
It sets up:
- CORS middleware so browser-based tooling can call the relay directly
- The service container (audio store, transcription, dialogue, synthesis)
- All API routes plus the ``/audio`` static mount
- A lifespan hook that starts and stops the audio sweeper

The app is built by a factory so tests can inject fake services. To serve it
with uvicorn directly:

    uvicorn --factory npc_relay.api.server:create_app
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from npc_relay import __version__
from npc_relay.api.routes import register_routes
from npc_relay.config import config
from npc_relay.services import RelayServices, build_services

logger = logging.getLogger(__name__)


def log_startup_status(services: RelayServices) -> None:
    """Log the settings an operator checks first when something is off."""
    cfg = services.config
    logger.info("NPC relay listening on port %d", cfg.server.port)
    logger.info("  GROQ_API_KEY : %s", "OK" if cfg.provider.has_api_key else "MISSING")
    logger.info("  BASE_URL     : %s", cfg.server.public_base_url or "(local)")
    logger.info("  STT          : %s", cfg.provider.transcription_model)
    logger.info("  LLM          : %s", cfg.provider.chat_model)
    logger.info("  TTS voices   : %s / %s", cfg.speech.male_voice, cfg.speech.female_voice)
    logger.info("  Audio dir    : %s", services.store.root)


def create_app(services: RelayServices | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        services: Pre-built service container. Production callers pass
                  nothing and get ``build_services()`` from the live config.

    Returns:
        A configured FastAPI app.
    """
    services = services or build_services()

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        log_startup_status(services)
        services.store.start_sweeper()
        try:
            yield
        finally:
            services.store.stop_sweeper()

    app = FastAPI(title="NPC Voice Relay", version=__version__, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=services.config.security.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.services = services
    register_routes(app, services)
    return app


def start_server(host: str | None = None, port: int | None = None) -> None:
    """
    Run the relay under uvicorn until interrupted.

    Args:
        host: Interface to bind; defaults to ``config.server.host``.
        port: Port to bind; defaults to ``config.server.port``. Also used to
              build local audio URLs when no public base URL is configured.
    """
    import uvicorn

    if port is not None:
        config.server.port = port
    if host is not None:
        config.server.host = host

    app = create_app()
    uvicorn.run(app, host=config.server.host, port=config.server.port, log_config=None)


if __name__ == "__main__":
    start_server()
