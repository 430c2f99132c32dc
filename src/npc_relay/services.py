"""Service container handed to every route module.

Routes receive one :class:`RelayServices` instead of reaching for globals,
which keeps them testable with fakes (see ``tests/conftest.py``).
"""

from __future__ import annotations

from dataclasses import dataclass

from npc_relay.config import RelayConfig, config
from npc_relay.dialogue import NpcDialogueService
from npc_relay.dialogue.renderer import ChatRenderer
from npc_relay.speech import SpeechSynthesizer, TranscriptionClient
from npc_relay.speech.synthesis import build_voice_profiles
from npc_relay.storage import AudioStore


@dataclass
class RelayServices:
    """Everything a request handler may delegate to."""

    config: RelayConfig
    store: AudioStore
    transcriber: TranscriptionClient
    dialogue: NpcDialogueService
    synthesizer: SpeechSynthesizer


def build_services(cfg: RelayConfig | None = None) -> RelayServices:
    """Wire the production services from configuration.

    Creates the audio directory if needed.  Does not contact any remote
    service; the provider client is created lazily on first use.
    """
    cfg = cfg or config

    store = AudioStore(
        cfg.storage.absolute_audio_dir,
        public_base_url=cfg.public_base_url,
        retention_seconds=cfg.storage.retention_seconds,
        sweep_interval_seconds=cfg.storage.sweep_interval_seconds,
    )
    transcriber = TranscriptionClient(
        store,
        model=cfg.provider.transcription_model,
        language=cfg.provider.transcription_language,
    )
    dialogue = NpcDialogueService(
        ChatRenderer(
            model=cfg.provider.chat_model,
            temperature=cfg.dialogue.temperature,
            max_tokens=cfg.dialogue.max_tokens,
        ),
        history_limit=cfg.dialogue.history_limit,
    )
    synthesizer = SpeechSynthesizer(
        store,
        voices=build_voice_profiles(cfg.speech.male_voice, cfg.speech.female_voice),
        timeout_seconds=cfg.speech.timeout_seconds,
    )
    return RelayServices(
        config=cfg,
        store=store,
        transcriber=transcriber,
        dialogue=dialogue,
        synthesizer=synthesizer,
    )
