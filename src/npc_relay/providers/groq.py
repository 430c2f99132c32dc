"""Groq HTTP client shared by the transcription and dialogue layers.

Groq exposes an OpenAI-compatible REST surface, so the client only needs
two endpoints:

- ``POST {base_url}/chat/completions``      (JSON body)
- ``POST {base_url}/audio/transcriptions``  (multipart body with a file)

``GroqClient`` is a thin, synchronous wrapper around a ``requests.Session``.
FastAPI runs the relay's sync route handlers inside its thread pool, so a
blocking call here stalls only the request that issued it.

Process-wide singleton
----------------------
``get_groq_client()`` builds the client lazily on first use from the live
``config.provider`` settings and caches it for the lifetime of the process.
A missing API key raises :class:`MissingCredentialError` at that point, not
at import or startup, so ``/health`` keeps answering on a misconfigured
deployment.  ``reset_groq_client()`` drops the cached instance (tests).

No request timeout is set by default: transcription and chat calls rely on
the transport's own behaviour, and nothing is retried.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any

import requests

from npc_relay.config import config

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """A remote provider call failed (network, HTTP status, or payload shape)."""


class MissingCredentialError(ProviderError):
    """The provider API key is not configured."""


class GroqClient:
    """Synchronous client for Groq's OpenAI-compatible endpoints.

    Attributes:
        _base_url:  API root, e.g. ``https://api.groq.com/openai/v1``.
        _timeout:   Per-request timeout in seconds, ``None`` for transport
                    defaults.
        _session:   Shared ``requests.Session`` carrying the auth header.
    """

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str,
        timeout_seconds: float | None = None,
    ) -> None:
        if not api_key:
            raise MissingCredentialError("GROQ_API_KEY is not configured")
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._session = requests.Session()
        self._session.headers.update({"Authorization": f"Bearer {api_key}"})

    # ── Chat completions ──────────────────────────────────────────────────────

    def chat_completion(
        self,
        messages: list[dict[str, str]],
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        response_format: dict[str, str] | None = None,
    ) -> str:
        """Run a chat completion and return the first choice's content.

        Returns an empty string when the first choice carries no content;
        the caller decides what an empty reply means.

        Raises:
            ProviderError: on network failure, non-2xx status, a non-JSON
                body, or a body without a well-formed first choice.
        """
        payload: dict[str, Any] = {
            "model": model,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        if response_format is not None:
            payload["response_format"] = response_format

        data = self._post("/chat/completions", json=payload)

        choices = data.get("choices")
        if not isinstance(choices, list) or not choices:
            raise ProviderError("chat completion returned no choices")
        first = choices[0]
        message = first.get("message") if isinstance(first, dict) else None
        if not isinstance(message, dict):
            raise ProviderError("chat completion choice has no message object")
        content = message.get("content")
        if content is not None and not isinstance(content, str):
            raise ProviderError("chat completion content is not a string")
        return content or ""

    # ── Audio transcriptions ──────────────────────────────────────────────────

    def transcribe(self, audio_path: Path, *, model: str, language: str) -> str:
        """Upload an audio file and return the transcript text (untrimmed).

        Raises:
            ProviderError: on network failure, non-2xx status, a non-JSON
                body, or a non-string ``text`` field.
            OSError: if ``audio_path`` cannot be opened.
        """
        with audio_path.open("rb") as handle:
            data = self._post(
                "/audio/transcriptions",
                files={"file": (audio_path.name, handle)},
                data={"model": model, "language": language, "response_format": "json"},
            )
        text = data.get("text")
        if text is not None and not isinstance(text, str):
            raise ProviderError("transcription text is not a string")
        return text or ""

    # ── Internal helpers ──────────────────────────────────────────────────────

    def _post(self, path: str, **kwargs: Any) -> dict[str, Any]:
        url = f"{self._base_url}{path}"
        try:
            response = self._session.post(url, timeout=self._timeout, **kwargs)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.Timeout as exc:
            raise ProviderError(f"request to {path} timed out") from exc
        except requests.exceptions.ConnectionError as exc:
            raise ProviderError(f"cannot connect to {self._base_url}") from exc
        except requests.exceptions.RequestException as exc:
            raise ProviderError(f"request to {path} failed: {exc}") from exc
        except ValueError as exc:
            raise ProviderError(f"{path} returned a non-JSON body") from exc

        if not isinstance(data, dict):
            raise ProviderError(f"{path} returned an unexpected payload")
        return data


# ── Process-wide singleton ────────────────────────────────────────────────────

_client: GroqClient | None = None
_client_lock = threading.Lock()


def get_groq_client() -> GroqClient:
    """Return the shared client, creating it on first use.

    Raises:
        MissingCredentialError: if ``GROQ_API_KEY`` is not configured.
    """
    global _client
    if _client is None:
        with _client_lock:
            if _client is None:
                settings = config.provider
                if not settings.has_api_key:
                    raise MissingCredentialError("GROQ_API_KEY is not configured")
                _client = GroqClient(api_key=settings.api_key, base_url=settings.base_url)
                logger.debug("GroqClient created (base_url=%s)", settings.base_url)
    return _client


def reset_groq_client() -> None:
    """Forget the cached client so the next call rebuilds it from config."""
    global _client
    with _client_lock:
        _client = None
