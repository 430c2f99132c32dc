"""Tests for the transcription client."""

import pytest

from npc_relay.providers import MissingCredentialError, ProviderError
from npc_relay.speech import TranscriptionClient, TranscriptionError
from tests.constants import TEST_AUDIO_BYTES
from tests.fakes import FakeGroqClient


@pytest.fixture
def transcriber(audio_store, fake_groq) -> TranscriptionClient:
    return TranscriptionClient(
        audio_store,
        model="whisper-large-v3-turbo",
        language="es",
        client_factory=lambda: fake_groq,
    )


@pytest.mark.unit
def test_transcript_is_stripped(transcriber):
    assert transcriber.transcribe(TEST_AUDIO_BYTES) == "seguime"


@pytest.mark.unit
def test_upload_is_on_disk_during_call_and_removed_after(transcriber, fake_groq, audio_store):
    transcriber.transcribe(TEST_AUDIO_BYTES, suffix=".ogg")

    call = fake_groq.transcribe_calls[0]
    assert call["existed"]
    assert call["bytes"] == TEST_AUDIO_BYTES
    assert call["path"].suffix == ".ogg"
    assert call["model"] == "whisper-large-v3-turbo"
    assert call["language"] == "es"
    assert not call["path"].exists()
    assert list(audio_store.root.iterdir()) == []


@pytest.mark.unit
def test_empty_transcript_is_returned_as_empty_string(transcriber, fake_groq):
    fake_groq.transcript = "   "

    assert transcriber.transcribe(TEST_AUDIO_BYTES) == ""


@pytest.mark.unit
def test_provider_failure_is_wrapped_and_scratch_removed(transcriber, fake_groq, audio_store):
    fake_groq.error = ProviderError("503 Service Unavailable")

    with pytest.raises(TranscriptionError, match="503"):
        transcriber.transcribe(TEST_AUDIO_BYTES)

    assert list(audio_store.root.iterdir()) == []


@pytest.mark.unit
def test_missing_credential_is_wrapped(audio_store):
    def no_client() -> FakeGroqClient:
        raise MissingCredentialError("GROQ_API_KEY is not configured")

    transcriber = TranscriptionClient(
        audio_store, model="m", language="es", client_factory=no_client
    )

    with pytest.raises(TranscriptionError, match="GROQ_API_KEY"):
        transcriber.transcribe(TEST_AUDIO_BYTES)
    assert list(audio_store.root.iterdir()) == []


@pytest.mark.unit
def test_malformed_provider_payload_is_wrapped(transcriber, fake_groq, audio_store):
    fake_groq.error = ProviderError("transcription text is not a string")

    with pytest.raises(TranscriptionError, match="not a string"):
        transcriber.transcribe(TEST_AUDIO_BYTES)
    assert list(audio_store.root.iterdir()) == []
