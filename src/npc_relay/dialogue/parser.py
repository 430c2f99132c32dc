"""Reply parser for the NPC chat model.

``parse_reply`` turns the model's raw text into an :class:`NpcReply`.  It
never raises: the game client must always get something to say.

Parsing pipeline (applied in order)
-----------------------------------
1. **Direct parse**: the model was asked for a bare JSON object, and with
   ``response_format=json_object`` it usually complies.
2. **Brace extraction**: some models still wrap the object in prose or a
   markdown fence; the span from the first ``{`` to the last ``}`` is
   parsed instead.
3. **Empty object**: anything else (including valid JSON that is not an
   object) is treated as ``{}``.
4. **Field defaults**: blank, missing or non-string ``texto`` becomes a short
   clarifying question; missing or non-string ``accion`` becomes ``NONE``.
5. **Action normalisation**: uppercased only.  Values outside the action
   vocabulary are passed through for the game client to ignore.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from npc_relay.dialogue.types import CLARIFY_TEXT, ActionTag, NpcReply

logger = logging.getLogger(__name__)

_OBJECT_SPAN = re.compile(r"\{.*\}", re.DOTALL)


def _load_object(raw: str) -> dict[str, Any]:
    try:
        data = json.loads(raw)
    except ValueError:
        match = _OBJECT_SPAN.search(raw)
        if match is None:
            logger.warning("Reply parser: no JSON object in model output %r", raw[:120])
            return {}
        try:
            data = json.loads(match.group(0))
        except ValueError:
            logger.warning("Reply parser: unparseable JSON in model output %r", raw[:120])
            return {}

    if not isinstance(data, dict):
        return {}
    return data


def parse_reply(raw: str) -> NpcReply:
    """Parse raw model output into an :class:`NpcReply`."""
    data = _load_object(raw or "")

    text = data.get("texto")
    text = text.strip() if isinstance(text, str) else ""
    if not text:
        text = CLARIFY_TEXT

    action = data.get("accion")
    action = action.strip().upper() if isinstance(action, str) else ""
    if not action:
        action = ActionTag.NONE.value

    return NpcReply(text=text, action=action)
