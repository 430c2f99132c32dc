"""Tests for the NPC dialogue service."""

import pytest

from npc_relay.dialogue import DialogueError, NpcDialogueService, NpcReply
from npc_relay.dialogue.prompt import PROACTIVE_MARKER
from npc_relay.dialogue.renderer import ChatRenderer
from npc_relay.providers import ProviderError


@pytest.fixture
def service(fake_groq) -> NpcDialogueService:
    return NpcDialogueService(
        ChatRenderer(model="m", client_factory=lambda: fake_groq), history_limit=12
    )


@pytest.mark.unit
def test_reply_parses_model_output(service):
    reply = service.reply(npc_name="Rulo", npc_personality="", player_text="seguime")

    assert reply == NpcReply(text="Dale, pibe, te sigo a donde vayas.", action="FOLLOW")


@pytest.mark.unit
def test_reply_builds_prompt_from_inputs(service, fake_groq):
    history = [{"role": "user", "content": f"t{i}"} for i in range(15)]

    service.reply(
        npc_name="Chola",
        npc_personality="vendedora de empanadas",
        player_text="un patrullero pasa",
        is_proactive=True,
        history=history,
    )

    messages = fake_groq.chat_calls[0]["messages"]
    assert messages[0]["content"].startswith("Sos Chola,")
    assert len(messages) == 14
    assert messages[1]["content"] == "t3"
    assert messages[-1]["content"] == f"{PROACTIVE_MARKER}un patrullero pasa"


@pytest.mark.unit
def test_provider_failure_becomes_dialogue_error(service, fake_groq):
    fake_groq.error = ProviderError("cannot connect")

    with pytest.raises(DialogueError, match="cannot connect"):
        service.reply(npc_name="Rulo", npc_personality="", player_text="hola")


@pytest.mark.unit
def test_history_limit_is_exposed(service):
    assert service.history_limit == 12
