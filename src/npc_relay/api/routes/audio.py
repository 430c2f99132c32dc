"""Static retrieval of synthesized audio.

The store directory is mounted as-is under ``/audio``.  A file the sweep has
already evicted simply 404s.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from npc_relay.storage import AudioStore


def register_audio_routes(app: FastAPI, store: AudioStore) -> None:
    """
    Mount the audio store on the app.

    Static files must be mounted on the FastAPI app (not an APIRouter),
    otherwise Starlette will not serve them.
    """
    app.mount("/audio", StaticFiles(directory=str(store.root)), name="audio")
