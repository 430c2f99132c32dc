"""Speech-to-text and text-to-speech clients."""

from npc_relay.speech.synthesis import SpeechSynthesizer, SynthesisError
from npc_relay.speech.transcription import TranscriptionClient, TranscriptionError

__all__ = [
    "SpeechSynthesizer",
    "SynthesisError",
    "TranscriptionClient",
    "TranscriptionError",
]
