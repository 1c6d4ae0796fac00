"""POST /investors/generate-description: describe a stored investor."""

from typing import Any

import structlog
from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from investor_screener.errors import ExtractionError, OpenAIError
from investor_screener.models.enrichment import InvestorRecord
from investor_screener.pipeline.describer import InvestorDescriber

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/investors")


@router.post("/generate-description")
async def generate_description(body: dict[str, Any], request: Request):
    """Generate a short description from the investor's stored fields."""
    if not body.get("investor"):
        raise HTTPException(status_code=400, detail="Investor data required")

    try:
        investor = InvestorRecord.model_validate(body["investor"])
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))

    describer = InvestorDescriber(request.app.state.openai)
    try:
        description = await describer.describe(investor)
    except (OpenAIError, ExtractionError) as e:
        logger.error("describe.failed", investor=investor.name, error=str(e))
        return JSONResponse(status_code=500, content={"error": "Failed to generate description"})

    return {"description": description}
