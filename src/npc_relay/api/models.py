"""
Pydantic models for API requests and responses.

Field names on the wire are the ones the game client already sends and
reads (``npcName``, ``texto``, ``audioUrl``...).  The models expose them
through aliases so Python code can use snake_case attributes.

Models are organized into two categories:
1. Request models: Data sent FROM the game client TO the relay
2. Response models: Data sent FROM the relay TO the game client
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# ============================================================================
# REQUEST MODELS (Game client → Relay)
# ============================================================================


class ChatTurnModel(BaseModel):
    """
    One prior turn of the conversation, as resent by the game client.

    Attributes:
        role: "system", "user" or "assistant"
        content: Message text
    """

    role: Literal["system", "user", "assistant"]
    content: str


class NpcChatRequest(BaseModel):
    """
    Request for the NPC's next line.

    Every field is optional; defaults match what the game client assumes.

    Attributes:
        npc_name: Display name the NPC answers to
        npc_personality: Free-text persona description
        player_text: What the player said (or a world event when proactive)
        is_proactive: True when the game world, not the player, starts the turn
        gender: Voice selector, "hombre" or "mujer"
        history: Prior turns, oldest first; only the most recent are used
    """

    model_config = ConfigDict(populate_by_name=True)

    npc_name: str = Field(default="Rulo", alias="npcName")
    npc_personality: str = Field(default="", alias="npcPersonality")
    player_text: str = Field(default="", alias="playerText")
    is_proactive: bool = Field(default=False, alias="isProactive")
    gender: str = "hombre"
    history: list[ChatTurnModel] = Field(default_factory=list)


# ============================================================================
# RESPONSE MODELS (Relay → Game client)
# ============================================================================


class NpcChatResponse(BaseModel):
    """
    The NPC's line, its action tag, and where to download the spoken audio.

    Attributes:
        texto: Line of dialogue
        accion: Uppercase action tag (unknown tags are passed through)
        audio_url: Absolute URL of the synthesized audio, "" if synthesis failed
    """

    model_config = ConfigDict(populate_by_name=True)

    texto: str
    accion: str
    audio_url: str = Field(default="", alias="audioUrl")


class TranscribeResponse(BaseModel):
    """Transcript of an uploaded recording (may be empty)."""

    transcript: str


class ErrorResponse(BaseModel):
    """Error body used by the transcription endpoint."""

    error: str


class HealthResponse(BaseModel):
    """
    Liveness check.

    Attributes:
        status: Always "ok" while the process serves requests
        groq_key: Whether the provider credential is configured
    """

    model_config = ConfigDict(populate_by_name=True)

    status: str = "ok"
    groq_key: bool = Field(alias="groqKey")
