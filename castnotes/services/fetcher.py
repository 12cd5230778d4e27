from __future__ import annotations

import logging

import httpx

from castnotes.core.constants import DEFAULT_AUDIO_MEDIA_TYPE, URL_AUDIO_FILENAME
from castnotes.core.errors import InvalidRequestError, UpstreamServiceError, upstream_message
from castnotes.schemas.transcripts import AudioSource

logger = logging.getLogger(__name__)

FETCH_FAILED_MESSAGE = "Failed to fetch audio URL"


class AudioFetchError(UpstreamServiceError):
    pass


def _create_http_client(timeout_seconds: float) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=timeout_seconds, follow_redirects=True)


def _media_type(response: httpx.Response) -> str:
    raw = response.headers.get("content-type") or ""
    media_type = raw.split(";", 1)[0].strip()
    return media_type or DEFAULT_AUDIO_MEDIA_TYPE


async def fetch_audio(url: str, timeout_seconds: float) -> AudioSource:
    """Download a directly fetchable audio resource into memory."""

    try:
        async with _create_http_client(timeout_seconds) as client:
            response = await client.get(url)
    except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
        logger.warning("Rejected audio URL", extra={"url": url, "error_type": type(exc).__name__})
        raise InvalidRequestError(FETCH_FAILED_MESSAGE) from exc
    except httpx.HTTPError as exc:
        raise AudioFetchError(upstream_message(exc, "Failed to retrieve audio resource.")) from exc

    if not response.is_success:
        logger.warning("Audio URL returned non-success status", extra={"url": url, "status_code": response.status_code})
        raise InvalidRequestError(FETCH_FAILED_MESSAGE)

    audio = AudioSource(filename=URL_AUDIO_FILENAME, content=response.content, media_type=_media_type(response))
    logger.info("Fetched audio", extra={"bytes": len(audio.content), "media_type": audio.media_type})
    return audio
