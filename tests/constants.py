"""
Shared test constants.

Canned model output and addresses used across test modules.
"""

# Base URL the test audio store builds links from.
TEST_BASE_URL = "http://relay.test"

# A well-formed model reply that asks the NPC to follow (lowercase on purpose).
FOLLOW_REPLY_JSON = '{"texto": "Dale, pibe, te sigo a donde vayas.", "accion": "follow"}'

# Bytes standing in for a short recording; the fakes never decode them.
TEST_AUDIO_BYTES = b"\x1aE\xdf\xa3fake-webm-payload"
