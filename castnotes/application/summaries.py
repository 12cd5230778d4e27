from __future__ import annotations

from typing import Any

from castnotes.core.config import Settings
from castnotes.schemas.summaries import SummarizeRequest
from castnotes.services.summarizer import summarize_transcript
from castnotes.validators import validate_transcript


async def create_summary(body: Any, settings: Settings) -> dict[str, Any]:
    # Arrays, strings and numbers carry no transcript field at all.
    request = SummarizeRequest.model_validate(body) if isinstance(body, dict) else SummarizeRequest()
    transcript = validate_transcript(request.transcript)
    return await summarize_transcript(
        transcript,
        settings.openai_api_key,
        settings.summary_model,
        settings.openai_base_url,
    )
