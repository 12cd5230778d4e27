from __future__ import annotations

import json
import logging
from typing import Any

from openai import OpenAIError

from castnotes.core.constants import SUMMARY_SYSTEM_PROMPT, SUMMARY_TEMPERATURE, SUMMARY_USER_PROMPT_TEMPLATE
from castnotes.core.errors import UpstreamServiceError, upstream_message
from castnotes.schemas.summaries import SummaryDocument
from castnotes.services.provider import create_provider_client

logger = logging.getLogger(__name__)


class SummarizationError(UpstreamServiceError):
    pass


def build_messages(transcript: str) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": SUMMARY_SYSTEM_PROMPT},
        {"role": "user", "content": SUMMARY_USER_PROMPT_TEMPLATE.format(transcript=transcript)},
    ]


def parse_summary_content(content: str | None) -> dict[str, Any]:
    """
    Decode the model's reply.

    Anything that is not a JSON object becomes the empty document; a valid
    object is returned untouched, whatever its item counts.
    """
    try:
        parsed = json.loads(content or "{}")
    except json.JSONDecodeError as exc:
        logger.warning("Summary response was not valid JSON", extra={"error": exc.msg, "chars": len(content or "")})
        return SummaryDocument.empty().to_payload()

    if not isinstance(parsed, dict):
        logger.warning("Summary response was not a JSON object", extra={"json_type": type(parsed).__name__})
        return SummaryDocument.empty().to_payload()

    return parsed


async def summarize_transcript(
    transcript: str,
    api_key: str | None,
    model: str,
    base_url: str | None = None,
) -> dict[str, Any]:
    try:
        async with create_provider_client(api_key, base_url) as client:
            response = await client.chat.completions.create(
                model=model,
                response_format={"type": "json_object"},
                messages=build_messages(transcript),
                temperature=SUMMARY_TEMPERATURE,
            )
    except OpenAIError as exc:
        raise SummarizationError(upstream_message(exc, "Failed to call summarization provider.")) from exc

    content: Any = response.choices[0].message.content if response.choices else None
    document = parse_summary_content(content if isinstance(content, str) else None)
    logger.info("Summarized transcript", extra={"model": model, "transcript_chars": len(transcript)})
    return document
