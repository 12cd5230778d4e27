from typing import Annotated

from fastapi import APIRouter, Depends, Request

from castnotes.application.transcripts import transcribe_request
from castnotes.core.config import Settings, get_settings
from castnotes.schemas.errors import ErrorResponse
from castnotes.schemas.transcripts import TranscribeResponse

router = APIRouter(tags=["transcripts"])


@router.post(
    "/transcribe",
    response_model=TranscribeResponse,
    responses={
        400: {"model": ErrorResponse, "description": "No audio file or URL, or the URL could not be fetched."},
        500: {"model": ErrorResponse, "description": "Audio host or transcription provider failed."},
    },
    openapi_extra={
        "requestBody": {
            "content": {
                "multipart/form-data": {
                    "schema": {
                        "type": "object",
                        "properties": {
                            "file": {"type": "string", "format": "binary"},
                            "url": {"type": "string"},
                        },
                    }
                },
                "application/json": {
                    "schema": {"type": "object", "properties": {"url": {"type": "string"}}},
                },
            }
        }
    },
)
async def transcribe(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
) -> TranscribeResponse:
    return await transcribe_request(request, settings)
