"""Health check endpoint."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

router = APIRouter()


@router.get("/health")
async def health(request: Request):
    """Check that the OpenAI client is configured and reachable."""
    status = await request.app.state.openai.health_check()
    if not status.get("healthy"):
        return JSONResponse(status_code=503, content={"status": "unhealthy"})
    return {"status": "ok", "chat_model": status.get("chat_model")}
