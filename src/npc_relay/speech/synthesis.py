"""Text-to-speech for NPC replies via the ``edge_tts`` library.

Reply text is handed to ``edge_tts.Communicate`` in-process, so it never
passes through a shell or an argument parser.  The character allow-list in
:func:`sanitize_text` still applies; it keeps the synthesized speech free of
markup and symbols the voice would read aloud.

``Communicate.save`` is a coroutine.  Route handlers are synchronous and run
in FastAPI's thread pool, which has no running event loop, so each call gets
its own ``asyncio.run``.
"""

from __future__ import annotations

import asyncio
import logging
import re
from pathlib import Path

import aiohttp
import edge_tts
from edge_tts.exceptions import (
    NoAudioReceived,
    UnexpectedResponse,
    UnknownResponse,
    WebSocketError,
)

from npc_relay.storage.audio_store import AudioStore

logger = logging.getLogger(__name__)

# Everything outside: ASCII word characters, whitespace, Spanish diacritics,
# inverted marks, and basic punctuation.
_DISALLOWED_CHARS = re.compile(r"[^A-Za-z0-9_\sáéíóúüñÁÉÍÓÚÜÑ¿¡.,!?;:'-]")

# Failures the engine reports from the service or the transport.
_ENGINE_ERRORS = (
    NoAudioReceived,
    UnexpectedResponse,
    UnknownResponse,
    WebSocketError,
    aiohttp.ClientError,
    OSError,
    ValueError,
)

DEFAULT_GENDER = "hombre"


class SynthesisError(Exception):
    """The engine did not produce an audio file."""


def sanitize_text(text: str) -> str:
    """Normalize reply text before it reaches the speech engine."""
    cleaned = text.replace('"', "'")
    cleaned = _DISALLOWED_CHARS.sub("", cleaned)
    return cleaned.strip()


def build_voice_profiles(male_voice: str, female_voice: str) -> dict[str, str]:
    """Map the game's gender selector to an engine voice id."""
    return {"hombre": male_voice, "mujer": female_voice}


class SpeechSynthesizer:
    """Renders reply text to an ``.mp3`` inside the audio store.

    Attributes:
        _timeout:  Seconds before a synthesis call is abandoned.
        _voices:   Gender selector → voice id.
    """

    def __init__(
        self,
        store: AudioStore,
        *,
        voices: dict[str, str],
        timeout_seconds: float = 20.0,
    ) -> None:
        if DEFAULT_GENDER not in voices:
            raise ValueError(f"voice profiles must define {DEFAULT_GENDER!r}")
        self._store = store
        self._voices = dict(voices)
        self._timeout = timeout_seconds

    def voice_for(self, gender: str | None) -> str:
        """Resolve a voice id; unknown selectors use the male voice."""
        return self._voices.get(gender or DEFAULT_GENDER, self._voices[DEFAULT_GENDER])

    def synthesize(self, text: str, voice: str) -> str:
        """Synthesize ``text`` with ``voice`` and return the file name.

        Raises:
            SynthesisError: on empty input, timeout, an engine or network
                failure, or when no audio was written.
        """
        clean = sanitize_text(text)
        if not clean:
            raise SynthesisError("nothing to synthesize after sanitizing")

        output = self._store.new_artifact_path(".mp3")
        try:
            asyncio.run(asyncio.wait_for(_save(clean, voice, output), timeout=self._timeout))
        except asyncio.TimeoutError as exc:
            self._discard(output)
            raise SynthesisError(f"edge-tts timed out after {self._timeout:.0f}s") from exc
        except _ENGINE_ERRORS as exc:
            self._discard(output)
            raise SynthesisError(f"edge-tts failed: {exc}") from exc

        if not output.is_file() or output.stat().st_size == 0:
            self._discard(output)
            raise SynthesisError("audio file was not generated")

        return output.name

    @staticmethod
    def _discard(path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.debug("SpeechSynthesizer: could not remove %s: %s", path.name, exc)


async def _save(text: str, voice: str, output: Path) -> None:
    communicate = edge_tts.Communicate(text, voice)
    await communicate.save(str(output))
