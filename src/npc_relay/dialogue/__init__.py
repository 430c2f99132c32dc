"""NPC dialogue layer.

Package structure
-----------------
types.py     ActionTag, ChatTurn, NpcReply and the fixed fallback lines.
prompt.py    System prompt template and message-list assembly.
renderer.py  ChatRenderer: the one network call (chat completion).
parser.py    parse_reply: tolerant JSON parsing of the model output.
service.py   NpcDialogueService: orchestrates the three above.

Typical call flow (inside the ``/v1/npc/chat`` route)
-----------------------------------------------------
1. ``service.reply(npc_name=..., player_text=..., history=...)``
2. prompt builds system + last N history turns + user turn
3. renderer calls the chat model in JSON-object mode
4. parser turns the raw text into an ``NpcReply``
5. on provider failure → ``DialogueError``; the route answers with
   ``FALLBACK_REPLY``
"""

from npc_relay.dialogue.service import DialogueError, NpcDialogueService
from npc_relay.dialogue.types import FALLBACK_REPLY, ActionTag, ChatTurn, NpcReply

__all__ = [
    "FALLBACK_REPLY",
    "ActionTag",
    "ChatTurn",
    "DialogueError",
    "NpcDialogueService",
    "NpcReply",
]
