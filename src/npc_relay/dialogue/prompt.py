"""System prompt and message list for the NPC chat model.

The template uses ``{{key}}`` placeholders resolved by plain string
replacement, so no template engine is needed.  The reply contract at the end
of the template (``{"texto": ..., "accion": ...}``) and the action list are
what the game client parses; change them only together with the client.
"""

from __future__ import annotations

from collections.abc import Sequence

from npc_relay.dialogue.types import ActionTag, ChatTurn

# Marks a turn that comes from the game world rather than the player's mouth.
PROACTIVE_MARKER = "[SISTEMA]: "

# Trigger description shown to the model for each action.
ACTION_TRIGGERS: dict[ActionTag, str] = {
    ActionTag.FOLLOW: "seguirte, ir con vos",
    ActionTag.STOP: "parar, quedarse, esperar",
    ActionTag.ATTACK: "atacar a alguien",
    ActionTag.ENTER_VEHICLE: "subirse al auto/vehículo",
    ActionTag.EXIT_VEHICLE: "bajarse del auto",
    ActionTag.NONE: "conversación normal",
}

NPC_SYSTEM_TEMPLATE = """Sos {{npc_name}}, un NPC de un servidor GTA V roleplay argentino.
Personalidad: {{npc_personality}}.

REGLAS:
- Hablás siempre en español rioplatense (vos, che, boludo, pibe, etc.)
- Respuestas CORTAS: 1 a 3 oraciones máximo, naturales y directas
- Si el jugador te da una ORDEN, la obedecés y comentás algo al respecto
- Recordás lo que se habló antes
- Si es proactivo, arrancá conversación de forma casual y natural

ACCIONES DISPONIBLES (solo usar cuando el jugador te lo pide explícitamente):
{{action_list}}

RESPONDÉ ÚNICAMENTE con este JSON (sin markdown, sin comillas extras):
{"texto":"lo que decís","accion":"NONE"}"""


def _format_action_list() -> str:
    width = max(len(tag.value) for tag in ACTION_TRIGGERS)
    return "\n".join(
        f"- {tag.value.ljust(width)} → {trigger}" for tag, trigger in ACTION_TRIGGERS.items()
    )


def render_system_prompt(npc_name: str, npc_personality: str) -> str:
    """Fill the NPC template.

    The personality is substituted last so a description containing
    ``{{...}}`` cannot collide with the other placeholders.
    """
    rendered = NPC_SYSTEM_TEMPLATE
    rendered = rendered.replace("{{action_list}}", _format_action_list())
    rendered = rendered.replace("{{npc_name}}", npc_name)
    rendered = rendered.replace("{{npc_personality}}", npc_personality)
    return rendered


def build_user_content(player_text: str, *, is_proactive: bool) -> str:
    if is_proactive:
        return f"{PROACTIVE_MARKER}{player_text}"
    return player_text


def build_messages(
    *,
    npc_name: str,
    npc_personality: str,
    player_text: str,
    is_proactive: bool,
    history: Sequence[ChatTurn],
    history_limit: int,
) -> list[ChatTurn]:
    """Assemble system prompt, trailing history, and the new user turn.

    Only the last ``history_limit`` turns are kept, in their original order.
    """
    messages: list[ChatTurn] = [
        {"role": "system", "content": render_system_prompt(npc_name, npc_personality)}
    ]
    recent = list(history)[-history_limit:] if history_limit > 0 else []
    messages.extend({"role": turn["role"], "content": turn["content"]} for turn in recent)
    messages.append(
        {"role": "user", "content": build_user_content(player_text, is_proactive=is_proactive)}
    )
    return messages
