from __future__ import annotations

import logging

from fastapi import Request
from pydantic import ValidationError
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException

from castnotes.core.config import Settings
from castnotes.core.constants import DEFAULT_AUDIO_MEDIA_TYPE
from castnotes.core.errors import InvalidRequestError
from castnotes.schemas.transcripts import AudioSource, TranscribeResponse, TranscribeUrlRequest
from castnotes.services.fetcher import fetch_audio
from castnotes.services.transcriber import transcribe_audio
from castnotes.validators import normalize_url

logger = logging.getLogger(__name__)

NO_AUDIO_MESSAGE = "No audio file or valid URL provided"
UNSUPPORTED_INPUT_MESSAGE = "Unsupported content type or missing inputs"


async def _read_upload(upload: UploadFile) -> AudioSource | None:
    content = await upload.read()
    # Browsers send an empty, unnamed part for an untouched file input.
    if not content and not upload.filename:
        return None
    return AudioSource(
        filename=upload.filename or "audio",
        content=content,
        media_type=upload.content_type or DEFAULT_AUDIO_MEDIA_TYPE,
    )


async def _read_multipart(request: Request, settings: Settings) -> AudioSource:
    try:
        async with request.form() as form:
            upload = form.get("file")
            audio = await _read_upload(upload) if isinstance(upload, UploadFile) else None
            url = normalize_url(form.get("url"))
    except HTTPException as exc:
        raise InvalidRequestError(str(exc.detail)) from exc

    if audio is not None:
        # An uploaded file wins; the URL is never fetched.
        return audio
    if url is None:
        raise InvalidRequestError(NO_AUDIO_MESSAGE)
    return await fetch_audio(url, settings.audio_fetch_timeout_seconds)


async def _read_json(request: Request, settings: Settings) -> AudioSource:
    body = await request.body()
    try:
        payload = TranscribeUrlRequest.model_validate_json(body or b"{}")
    except ValidationError:
        payload = TranscribeUrlRequest()

    url = normalize_url(payload.url)
    if url is None:
        raise InvalidRequestError(UNSUPPORTED_INPUT_MESSAGE)
    return await fetch_audio(url, settings.audio_fetch_timeout_seconds)


async def read_audio_source(request: Request, settings: Settings) -> AudioSource:
    """Resolve the request into audio bytes, choosing the parser by Content-Type."""

    content_type = (request.headers.get("content-type") or "").lower()
    if "multipart/form-data" in content_type:
        return await _read_multipart(request, settings)
    return await _read_json(request, settings)


async def transcribe_request(request: Request, settings: Settings) -> TranscribeResponse:
    audio = await read_audio_source(request, settings)
    logger.info("Transcribing audio", extra={"audio_filename": audio.filename, "bytes": len(audio.content)})
    transcript = await transcribe_audio(
        audio,
        settings.openai_api_key,
        settings.transcription_model,
        settings.openai_base_url,
    )
    return TranscribeResponse(transcript=transcript)
