from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel


@dataclass(frozen=True)
class AudioSource:
    """Audio bytes ready to hand to the transcription provider."""

    filename: str
    content: bytes
    media_type: str

    def as_upload(self) -> tuple[str, bytes, str]:
        return (self.filename, self.content, self.media_type)


class TranscribeUrlRequest(BaseModel):
    url: str | None = None


class TranscribeResponse(BaseModel):
    transcript: str
