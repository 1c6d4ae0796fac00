"""POST /analyze-client: build a client profile from the client's website."""

from typing import Any

import structlog
from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from investor_screener.pipeline.profiler import ClientProfiler
from investor_screener.utils import Unparseable

logger = structlog.get_logger(__name__)

router = APIRouter()


class AnalyzeClientRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    client_website: str | None = None
    keywords: list[str] = Field(default_factory=list)


@router.post("/analyze-client")
async def analyze_client(body: dict[str, Any], request: Request):
    """Fetch the client website and return an extended profile."""
    try:
        analyze_request = AnalyzeClientRequest.model_validate(body)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))

    website = (analyze_request.client_website or "").strip()
    if not website:
        raise HTTPException(status_code=400, detail="Client website required")

    profiler = ClientProfiler(
        openai_client=request.app.state.openai,
        web_client=request.app.state.web,
    )
    outcome = await profiler.profile(website, analyze_request.keywords or None)

    if isinstance(outcome, Unparseable):
        if outcome.reason == "website_unreachable":
            raise HTTPException(status_code=400, detail="Could not fetch website")
        logger.error("analyze_client.failed", website=website, reason=outcome.reason)
        raise HTTPException(status_code=500, detail="Failed to parse profile")

    return {
        "profile": outcome.profile.model_dump(mode="json", by_alias=True),
        "pagesAnalyzed": outcome.pages_analyzed,
        "pageUrls": outcome.page_urls,
    }
