"""NPC chat endpoint: dialogue, then speech synthesis.

Failure handling
----------------
- Dialogue failure → the fixed fallback line with action ``NONE`` and no
  audio.  The HTTP status comes from ``dialogue.fallback_status`` (500 by
  default, which is what deployed game clients were built against); the
  body shape is the same as a successful reply either way.
- Synthesis failure → logged, the reply is returned with ``audioUrl: ""``.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from npc_relay.api.models import NpcChatRequest, NpcChatResponse
from npc_relay.dialogue import FALLBACK_REPLY, DialogueError
from npc_relay.services import RelayServices
from npc_relay.speech import SynthesisError

logger = logging.getLogger(__name__)


def router(services: RelayServices) -> APIRouter:
    """Build the chat router."""
    api = APIRouter()

    @api.post("/v1/npc/chat", response_model=NpcChatResponse)
    def npc_chat(request: NpcChatRequest | None = None):
        """
        Script the NPC's next line and voice it.

        The body is optional; a request without one gets the defaults.
        Declared sync so FastAPI runs the blocking provider and engine calls
        in its thread pool.
        """
        request = request or NpcChatRequest()
        logger.info('[CHAT] "%s" | proactive=%s', request.player_text, request.is_proactive)

        voice = services.synthesizer.voice_for(request.gender)

        try:
            reply = services.dialogue.reply(
                npc_name=request.npc_name,
                npc_personality=request.npc_personality,
                player_text=request.player_text,
                is_proactive=request.is_proactive,
                history=[turn.model_dump() for turn in request.history],
            )
        except DialogueError as exc:
            logger.error("[LLM Error] %s", exc)
            fallback = NpcChatResponse(
                texto=FALLBACK_REPLY.text, accion=FALLBACK_REPLY.action, audio_url=""
            )
            return JSONResponse(
                status_code=services.config.dialogue.fallback_status,
                content=fallback.model_dump(by_alias=True),
            )

        audio_url = ""
        try:
            file_name = services.synthesizer.synthesize(reply.text, voice)
            audio_url = services.store.public_url(file_name)
        except SynthesisError as exc:
            logger.error("[TTS Error] %s", exc)

        return NpcChatResponse(texto=reply.text, accion=reply.action, audio_url=audio_url)

    return api
