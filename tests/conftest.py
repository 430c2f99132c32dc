"""
Shared pytest fixtures for the relay test suite.

This module provides fixtures that are automatically available to all test files:
- A temporary audio store
- A fake provider client wired into the service container
- A patched speech engine that writes a file instead of calling edge-tts
- FastAPI TestClient instances built on those services

No fixture here touches the network or spawns a real process.
"""

from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from npc_relay.config import RelayConfig
from npc_relay.dialogue import NpcDialogueService
from npc_relay.dialogue.renderer import ChatRenderer
from npc_relay.providers import reset_groq_client
from npc_relay.services import RelayServices
from npc_relay.speech import SpeechSynthesizer, TranscriptionClient
from npc_relay.speech.synthesis import build_voice_profiles
from npc_relay.storage import AudioStore
from tests.constants import TEST_BASE_URL
from tests.fakes import FakeCommunicate, FakeGroqClient

# ============================================================================
# PROVIDER FIXTURES
# ============================================================================


@pytest.fixture(autouse=True)
def _isolate_provider_singleton() -> Generator[None, None, None]:
    """Make sure no test inherits a cached provider client from another."""
    reset_groq_client()
    yield
    reset_groq_client()


@pytest.fixture
def fake_groq() -> FakeGroqClient:
    """A fake provider client returning a FOLLOW reply and a short transcript."""
    return FakeGroqClient()


# ============================================================================
# STORAGE AND SPEECH FIXTURES
# ============================================================================


@pytest.fixture
def audio_store(tmp_path: Path) -> AudioStore:
    """An audio store rooted in a per-test temporary directory."""
    return AudioStore(
        tmp_path / "audio",
        public_base_url=TEST_BASE_URL,
        retention_seconds=300,
        sweep_interval_seconds=600,
    )


@pytest.fixture
def fake_tts() -> Generator:
    """Patch the speech engine so synthesis writes a small file instantly."""
    with patch(
        "npc_relay.speech.synthesis.edge_tts.Communicate", side_effect=FakeCommunicate
    ) as mock_communicate:
        yield mock_communicate


# ============================================================================
# SERVICE CONTAINER AND TEST CLIENT FIXTURES
# ============================================================================


@pytest.fixture
def relay_config(tmp_path: Path) -> RelayConfig:
    """Default configuration pointing at the temporary audio directory."""
    cfg = RelayConfig()
    cfg.storage.audio_dir = str(tmp_path / "audio")
    cfg.server.public_base_url = TEST_BASE_URL
    return cfg


@pytest.fixture
def relay_services(
    relay_config: RelayConfig, audio_store: AudioStore, fake_groq: FakeGroqClient
) -> RelayServices:
    """
    Real relay components wired to the fake provider.

    Only the provider client is faked; prompt building, parsing, scratch
    files, and sanitizing all run for real.
    """
    return RelayServices(
        config=relay_config,
        store=audio_store,
        transcriber=TranscriptionClient(
            audio_store,
            model=relay_config.provider.transcription_model,
            language=relay_config.provider.transcription_language,
            client_factory=lambda: fake_groq,
        ),
        dialogue=NpcDialogueService(
            ChatRenderer(
                model=relay_config.provider.chat_model,
                temperature=relay_config.dialogue.temperature,
                max_tokens=relay_config.dialogue.max_tokens,
                client_factory=lambda: fake_groq,
            ),
            history_limit=relay_config.dialogue.history_limit,
        ),
        synthesizer=SpeechSynthesizer(
            audio_store,
            voices=build_voice_profiles(
                relay_config.speech.male_voice, relay_config.speech.female_voice
            ),
            timeout_seconds=relay_config.speech.timeout_seconds,
        ),
    )


@pytest.fixture
def test_client(relay_services: RelayServices) -> TestClient:
    """
    A TestClient over an app built from the fake-backed services.

    The lifespan (and so the background sweeper) does not run unless the
    test enters the client as a context manager.

    Example:
        def test_health(test_client):
            response = test_client.get("/health")
            assert response.status_code == 200
    """
    from npc_relay.api.server import create_app

    return TestClient(create_app(relay_services))
