"""Transient on-disk storage for audio artifacts."""

from npc_relay.storage.audio_store import AudioStore

__all__ = ["AudioStore"]
