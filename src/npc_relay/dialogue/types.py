"""Value types shared across the dialogue layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal, TypedDict


class ActionTag(str, Enum):
    """Closed vocabulary of behaviours the game client knows how to run."""

    FOLLOW = "FOLLOW"
    STOP = "STOP"
    ATTACK = "ATTACK"
    ENTER_VEHICLE = "ENTER_VEHICLE"
    EXIT_VEHICLE = "EXIT_VEHICLE"
    NONE = "NONE"


class ChatTurn(TypedDict):
    """One chat message as forwarded to the model, oldest first."""

    role: Literal["system", "user", "assistant"]
    content: str


@dataclass(frozen=True)
class NpcReply:
    """The NPC's scripted line and action.

    ``action`` is a plain string rather than an :class:`ActionTag`: values the
    model invents outside the vocabulary are passed through to the game
    client, uppercased.
    """

    text: str
    action: str = ActionTag.NONE.value


# Said when the model answers with no usable ``texto``.
CLARIFY_TEXT = "¿Decías algo?"

# Said when the chat model cannot be reached at all.
FALLBACK_TEXT = "Se me trabó la lengua, preguntame de vuelta"

FALLBACK_REPLY = NpcReply(text=FALLBACK_TEXT, action=ActionTag.NONE.value)
