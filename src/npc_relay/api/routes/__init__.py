"""
Route registration entry point for the FastAPI application.

Each router module exposes a ``router(services)`` factory so handlers get
their collaborators from the :class:`~npc_relay.services.RelayServices`
container rather than from module globals.
"""

from fastapi import FastAPI

from npc_relay.api.routes import audio, chat, health, transcribe
from npc_relay.services import RelayServices


def register_routes(app: FastAPI, services: RelayServices) -> None:
    """Register all API routes and the audio mount with the FastAPI app."""
    app.include_router(health.router(services))
    app.include_router(transcribe.router(services))
    app.include_router(chat.router(services))
    audio.register_audio_routes(app, services.store)
