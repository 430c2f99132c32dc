"""Speech-to-text endpoint."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from fastapi import APIRouter, File, UploadFile
from fastapi.responses import JSONResponse

from npc_relay.api.models import ErrorResponse, TranscribeResponse
from npc_relay.services import RelayServices
from npc_relay.speech import TranscriptionError

logger = logging.getLogger(__name__)

# The provider infers the container format from the extension.
_SAFE_SUFFIX = re.compile(r"^\.[A-Za-z0-9]{1,8}$")
_DEFAULT_SUFFIX = ".webm"


def _upload_suffix(filename: str | None) -> str:
    suffix = Path(filename or "").suffix.lower()
    return suffix if _SAFE_SUFFIX.match(suffix) else _DEFAULT_SUFFIX


def router(services: RelayServices) -> APIRouter:
    """Build the transcription router."""
    api = APIRouter()
    max_bytes = services.config.storage.max_upload_bytes

    @api.post(
        "/v1/transcribe",
        response_model=TranscribeResponse,
        responses={
            400: {"model": ErrorResponse},
            413: {"model": ErrorResponse},
            500: {"model": ErrorResponse},
        },
    )
    def transcribe(file: UploadFile | None = File(default=None)):
        """
        Transcribe an uploaded recording (multipart field ``file``).

        Declared sync so FastAPI runs the blocking provider call in its
        thread pool.
        """
        if file is None:
            return JSONResponse(status_code=400, content={"error": "No se recibió audio"})

        # Read one byte past the limit so oversize uploads are detectable
        # without buffering the whole body.
        audio = file.file.read(max_bytes + 1)
        if not audio:
            return JSONResponse(status_code=400, content={"error": "No se recibió audio"})
        if len(audio) > max_bytes:
            return JSONResponse(
                status_code=413,
                content={"error": f"El audio supera el límite de {max_bytes // (1024 * 1024)} MB"},
            )

        try:
            text = services.transcriber.transcribe(audio, suffix=_upload_suffix(file.filename))
        except TranscriptionError as exc:
            logger.error("[STT Error] %s", exc)
            return JSONResponse(status_code=500, content={"error": "Error al transcribir"})

        logger.info('[STT] "%s"', text)
        return TranscribeResponse(transcript=text)

    return api
