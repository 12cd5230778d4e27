from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from castnotes.application.summaries import create_summary
from castnotes.core.config import Settings, get_settings
from castnotes.schemas.errors import ErrorResponse
from castnotes.schemas.summaries import SummarizeRequest, SummaryDocument

router = APIRouter(tags=["summaries"])


@router.post(
    "/summarize",
    response_class=JSONResponse,
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": SummarizeRequest.model_json_schema()}},
        }
    },
    responses={
        200: {"model": SummaryDocument, "description": "Derived content, passed through as the model returned it."},
        400: {"model": ErrorResponse, "description": "Missing or non-string transcript."},
        500: {"model": ErrorResponse, "description": "Summarization provider failed."},
    },
)
async def summarize(
    settings: Annotated[Settings, Depends(get_settings)],
    body: Annotated[Any, Body()] = None,
) -> JSONResponse:
    # Any JSON value is accepted here; only an object with a string transcript gets past create_summary().
    document = await create_summary(body, settings)
    # Returned as-is so keys and item counts from the model are not reshaped.
    return JSONResponse(content=document)
