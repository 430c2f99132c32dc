"""Speech-to-text for uploaded player recordings."""

from __future__ import annotations

import logging
from collections.abc import Callable

from npc_relay.providers.groq import GroqClient, ProviderError, get_groq_client
from npc_relay.storage.audio_store import AudioStore

logger = logging.getLogger(__name__)


class TranscriptionError(Exception):
    """The recording could not be transcribed."""


class TranscriptionClient:
    """Turns a raw audio buffer into trimmed transcript text.

    The buffer is parked in the store's scratch space for the duration of the
    remote call, because the provider only accepts a named file upload.  The
    scratch file is gone once :meth:`transcribe` returns or raises.
    """

    def __init__(
        self,
        store: AudioStore,
        *,
        model: str,
        language: str,
        client_factory: Callable[[], GroqClient] = get_groq_client,
    ) -> None:
        self._store = store
        self._model = model
        self._language = language
        self._client_factory = client_factory

    def transcribe(self, audio: bytes, *, suffix: str = ".webm") -> str:
        """Transcribe ``audio`` and return the stripped text (possibly empty).

        Raises:
            TranscriptionError: wrapping any provider or file I/O failure.
        """
        try:
            with self._store.scratch_file(audio, suffix=suffix) as path:
                text = self._client_factory().transcribe(
                    path, model=self._model, language=self._language
                )
        except (ProviderError, OSError) as exc:
            raise TranscriptionError(str(exc)) from exc

        return text.strip()
