"""Chat-completion renderer for the NPC dialogue layer.

``ChatRenderer`` is the only place in the dialogue layer that makes a
network call.  It forwards the assembled message list to the provider with
the fixed sampling settings and returns the raw text for the parser.

The JSON-object response format is always requested; the parser still
copes with models that ignore it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from npc_relay.dialogue.types import ChatTurn
from npc_relay.providers.groq import GroqClient, get_groq_client

logger = logging.getLogger(__name__)

# High enough to keep repeated lines varied, short replies keep it coherent.
_DEFAULT_TEMPERATURE = 0.88

# One to three sentences of dialogue plus the JSON envelope.
_DEFAULT_MAX_TOKENS = 120

_JSON_OBJECT_FORMAT = {"type": "json_object"}


class ChatRenderer:
    """Synchronous renderer over the shared provider client.

    Attributes:
        _model:          Chat model id (e.g. ``"llama-3.3-70b-versatile"``).
        _temperature:    Sampling temperature.
        _max_tokens:     Generation ceiling.
        _client_factory: Returns the provider client; resolved per call so a
                         missing credential surfaces on use, not at startup.
    """

    def __init__(
        self,
        *,
        model: str,
        temperature: float = _DEFAULT_TEMPERATURE,
        max_tokens: int = _DEFAULT_MAX_TOKENS,
        client_factory: Callable[[], GroqClient] = get_groq_client,
    ) -> None:
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._client_factory = client_factory

    def render(self, messages: list[ChatTurn]) -> str:
        """Return the model's raw reply text.

        Raises:
            ProviderError: on any provider failure, including a missing
                credential.
        """
        client = self._client_factory()
        return client.chat_completion(
            list(messages),  # type: ignore[arg-type]
            model=self._model,
            temperature=self._temperature,
            max_tokens=self._max_tokens,
            response_format=_JSON_OBJECT_FORMAT,
        )
