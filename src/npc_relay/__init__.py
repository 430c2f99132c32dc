"""NPC Voice Relay.

A small HTTP relay that lets a game server drive a conversational NPC:
player audio is transcribed, a chat model scripts the NPC's reply and an
action tag, and the reply is synthesized to speech that the game client can
download.

Version Management
------------------
``__version__`` is read from the installed package metadata at import time.
The single source of truth is the ``version`` field in ``pyproject.toml``.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__: str = version("npc_relay")
except PackageNotFoundError:
    __version__ = "0.2.0"
