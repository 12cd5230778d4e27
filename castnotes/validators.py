from __future__ import annotations

from typing import Any

from castnotes.core.errors import InvalidRequestError

MISSING_TRANSCRIPT_MESSAGE = "Missing transcript"


def validate_transcript(transcript: Any) -> str:
    # An empty string is a valid (silent) transcript.
    if not isinstance(transcript, str):
        raise InvalidRequestError(MISSING_TRANSCRIPT_MESSAGE)
    return transcript


def normalize_url(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    return value.strip() or None
