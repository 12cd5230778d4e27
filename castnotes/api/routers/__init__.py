"""API routers."""

from castnotes.api.routers.meta import router as meta_router
from castnotes.api.routers.summaries import router as summaries_router
from castnotes.api.routers.transcripts import router as transcripts_router

__all__ = ["meta_router", "summaries_router", "transcripts_router"]
