"""POST /screen-stream and POST /screen: screen investors for one client."""

from collections.abc import AsyncIterator
from typing import Any

import structlog
from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import ValidationError

from investor_screener.models.criteria import ScreeningRequest, SingleScreeningRequest
from investor_screener.models.result import ErrorEvent, ScreeningEvent
from investor_screener.pipeline.screener import ScreeningPipeline

logger = structlog.get_logger(__name__)

router = APIRouter()


def _pipeline(request: Request) -> ScreeningPipeline:
    return ScreeningPipeline(
        openai_client=request.app.state.openai,
        web_client=request.app.state.web,
    )


def format_sse(event: ScreeningEvent) -> str:
    """One server-sent-events frame."""
    return f"data: {event.model_dump_json(by_alias=True)}\n\n"


async def _event_stream(
    pipeline: ScreeningPipeline, screening_request: ScreeningRequest
) -> AsyncIterator[str]:
    try:
        async for event in pipeline.stream(screening_request):
            yield format_sse(event)
    except Exception as e:
        logger.error("screen_stream.failed", error=str(e), error_type=type(e).__name__)
        yield format_sse(ErrorEvent(message=str(e)))


@router.post("/screen-stream")
async def screen_stream(body: dict[str, Any], request: Request):
    """Screen every investor in the body, streaming progress as SSE frames."""
    try:
        screening_request = ScreeningRequest.model_validate(body)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))

    logger.info(
        "screen_stream.received",
        client_name=screening_request.criteria.client_name,
        investors=len(screening_request.investors),
    )

    return StreamingResponse(
        _event_stream(_pipeline(request), screening_request),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )


@router.post("/screen")
async def screen_single(body: dict[str, Any], request: Request):
    """Screen one investor and return its result."""
    try:
        single = SingleScreeningRequest.model_validate(body)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))

    pipeline = _pipeline(request)
    try:
        profile = await pipeline.resolve_client_profile(single.criteria, single.client_profile)
        result = await pipeline.screen_investor(single.investor, single.criteria, profile)
    except Exception as e:
        logger.error("screen.failed", error=str(e), error_type=type(e).__name__)
        return JSONResponse(status_code=500, content={"error": str(e)})

    return result.model_dump(mode="json")
