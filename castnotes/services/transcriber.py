from __future__ import annotations

import logging
from typing import Any

from openai import OpenAIError

from castnotes.core.constants import TRANSCRIPTION_TEMPERATURE
from castnotes.core.errors import UpstreamServiceError, upstream_message
from castnotes.schemas.transcripts import AudioSource
from castnotes.services.provider import create_provider_client

logger = logging.getLogger(__name__)


class TranscriptionError(UpstreamServiceError):
    pass


def _extract_text(response: Any) -> str:
    # No speech yields an empty transcript, not an error.
    text = getattr(response, "text", None)
    return text if isinstance(text, str) else ""


async def transcribe_audio(
    audio: AudioSource,
    api_key: str | None,
    model: str,
    base_url: str | None = None,
) -> str:
    try:
        async with create_provider_client(api_key, base_url) as client:
            response = await client.audio.transcriptions.create(
                file=audio.as_upload(),
                model=model,
                response_format="json",
                temperature=TRANSCRIPTION_TEMPERATURE,
            )
    except OpenAIError as exc:
        raise TranscriptionError(upstream_message(exc, "Failed to call transcription provider.")) from exc

    transcript = _extract_text(response)
    logger.info("Transcribed audio", extra={"model": model, "chars": len(transcript)})
    return transcript
