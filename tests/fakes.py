"""
Test doubles for the remote provider and the speech engine.

``FakeGroqClient`` mirrors the public surface of
:class:`npc_relay.providers.groq.GroqClient` and records every call so tests
can assert on exactly what would have been sent over the wire.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from tests.constants import FOLLOW_REPLY_JSON


class FakeGroqClient:
    """In-memory stand-in for the Groq client."""

    def __init__(self, content: str = FOLLOW_REPLY_JSON, transcript: str = "  seguime  "):
        self.content = content
        self.transcript = transcript
        self.error: Exception | None = None
        self.chat_calls: list[dict[str, Any]] = []
        self.transcribe_calls: list[dict[str, Any]] = []

    def chat_completion(self, messages, **kwargs) -> str:
        self.chat_calls.append({"messages": list(messages), **kwargs})
        if self.error is not None:
            raise self.error
        return self.content

    def transcribe(self, audio_path: Path, *, model: str, language: str) -> str:
        self.transcribe_calls.append(
            {
                "path": audio_path,
                "existed": audio_path.exists(),
                "bytes": audio_path.read_bytes() if audio_path.exists() else b"",
                "model": model,
                "language": language,
            }
        )
        if self.error is not None:
            raise self.error
        return self.transcript


class FakeCommunicate:
    """Stand-in for ``edge_tts.Communicate`` that writes a tiny mp3 instantly."""

    def __init__(self, text: str, voice: str):
        self.text = text
        self.voice = voice

    async def save(self, audio_fname: str) -> None:
        Path(audio_fname).write_bytes(b"ID3fake-mp3")
