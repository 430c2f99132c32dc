"""NPC dialogue service.

``NpcDialogueService`` is the single public entry-point for the dialogue
layer.  It builds the message list (``prompt``), calls the chat model
(``ChatRenderer``) and parses the answer (``parse_reply``).

Caller contract
---------------
``reply()`` returns an :class:`NpcReply` whenever the model answered, even
if the answer was malformed (the parser fills in defaults).  It raises
:class:`DialogueError` only when the model could not be reached or returned
an unusable envelope; the gateway turns that into the fixed apologetic
fallback so the NPC always has a line to speak.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from npc_relay.dialogue.parser import parse_reply
from npc_relay.dialogue.prompt import build_messages
from npc_relay.dialogue.renderer import ChatRenderer
from npc_relay.dialogue.types import ChatTurn, NpcReply
from npc_relay.providers.groq import ProviderError

logger = logging.getLogger(__name__)


class DialogueError(Exception):
    """The chat model could not produce a reply."""


class NpcDialogueService:
    """Scripts one NPC line from persona, player input, and recent history."""

    def __init__(self, renderer: ChatRenderer, *, history_limit: int = 12) -> None:
        self._renderer = renderer
        self._history_limit = history_limit

    @property
    def history_limit(self) -> int:
        return self._history_limit

    def reply(
        self,
        *,
        npc_name: str,
        npc_personality: str,
        player_text: str,
        is_proactive: bool = False,
        history: Sequence[ChatTurn] = (),
    ) -> NpcReply:
        """Ask the model for the NPC's next line and action.

        Raises:
            DialogueError: when the provider call fails.
        """
        messages = build_messages(
            npc_name=npc_name,
            npc_personality=npc_personality,
            player_text=player_text,
            is_proactive=is_proactive,
            history=history,
            history_limit=self._history_limit,
        )

        try:
            raw = self._renderer.render(messages)
        except ProviderError as exc:
            raise DialogueError(str(exc)) from exc

        reply = parse_reply(raw)
        logger.info('[LLM] %s: "%s" | %s', npc_name, reply.text, reply.action)
        return reply
