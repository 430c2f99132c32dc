"""Remote service providers.

Only Groq is wired today; both the speech-to-text and the chat-completion
calls go through :func:`get_groq_client`.
"""

from npc_relay.providers.groq import (
    GroqClient,
    MissingCredentialError,
    ProviderError,
    get_groq_client,
    reset_groq_client,
)

__all__ = [
    "GroqClient",
    "MissingCredentialError",
    "ProviderError",
    "get_groq_client",
    "reset_groq_client",
]
