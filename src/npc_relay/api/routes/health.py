"""Health and root endpoints.

``/health`` reports whether the provider credential is configured.  The
process answers here even when it is not, since a missing key only fails
the transcription and chat calls that need it.
"""

from fastapi import APIRouter

from npc_relay import __version__
from npc_relay.api.models import HealthResponse
from npc_relay.services import RelayServices


def router(services: RelayServices) -> APIRouter:
    """Build the health router."""
    api = APIRouter()

    @api.get("/")
    async def root():
        """Root endpoint showing service identity and current version."""
        return {"message": "NPC Voice Relay", "version": __version__}

    @api.get("/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint."""
        return HealthResponse(status="ok", groq_key=services.config.provider.has_api_key)

    return api
