"""HTTP client that runs the transcribe -> summarize sequence against a castnotes server."""

from __future__ import annotations

import logging
import pathlib
from dataclasses import dataclass
from typing import Any

import httpx

from castnotes.schemas.summaries import SummaryDocument

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://127.0.0.1:8000"
MISSING_INPUT_MESSAGE = "Please provide an audio file or a direct audio URL."


class PipelineError(Exception):
    """A pipeline stage failed; carries whatever transcript was obtained first."""

    def __init__(self, message: str, *, stage: str, transcript: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.stage = stage
        self.transcript = transcript


@dataclass(frozen=True)
class PipelineResult:
    transcript: str
    summary: SummaryDocument
    raw_summary: dict[str, Any]


def _error_message(response: httpx.Response, fallback: str) -> str:
    try:
        payload = response.json()
    except ValueError:
        return fallback
    message = payload.get("error") if isinstance(payload, dict) else None
    return message if isinstance(message, str) and message else fallback


class PipelineClient:
    def __init__(self, http_client: httpx.Client) -> None:
        self._http = http_client

    @classmethod
    def connect(cls, base_url: str = DEFAULT_BASE_URL, timeout: float | None = None) -> PipelineClient:
        # timeout=None leaves the transport's own defaults in charge.
        kwargs: dict[str, Any] = {"base_url": base_url}
        if timeout is not None:
            kwargs["timeout"] = timeout
        return cls(httpx.Client(**kwargs))

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> PipelineClient:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    def transcribe(self, file: pathlib.Path | None = None, url: str | None = None) -> str:
        if file is not None:
            data = {"url": url} if url else {}
            with file.open("rb") as handle:
                response = self._http.post("/transcribe", data=data, files={"file": (file.name, handle)})
        else:
            # A URL alone goes through the JSON body path.
            response = self._http.post("/transcribe", json={"url": url})

        if not response.is_success:
            raise PipelineError(_error_message(response, "Transcription failed"), stage="transcribe")

        transcript = response.json().get("transcript")
        return transcript if isinstance(transcript, str) else ""

    def summarize(self, transcript: str) -> dict[str, Any]:
        response = self._http.post("/summarize", json={"transcript": transcript})
        if not response.is_success:
            raise PipelineError(
                _error_message(response, "Summarization failed"),
                stage="summarize",
                transcript=transcript,
            )
        return response.json()

    def process(self, file: pathlib.Path | None = None, url: str | None = None) -> PipelineResult:
        """Transcribe, then summarize. Stops at the first failing stage."""

        url = (url or "").strip() or None
        if file is None and url is None:
            raise PipelineError(MISSING_INPUT_MESSAGE, stage="input")

        transcript = self.transcribe(file=file, url=url)
        logger.info("Transcript received", extra={"chars": len(transcript)})

        raw_summary = self.summarize(transcript)
        # The raw payload stays on the result; only the sections that fit are displayed.
        summary, skipped = SummaryDocument.from_payload(raw_summary)
        if skipped:
            logger.warning(
                "Summary sections did not match the expected shape",
                extra={"sections": ",".join(skipped)},
            )

        return PipelineResult(transcript=transcript, summary=summary, raw_summary=raw_summary)
