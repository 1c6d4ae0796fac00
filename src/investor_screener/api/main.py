"""FastAPI application for the investor screening service."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from investor_screener.clients.openai_client import OpenAIClient
from investor_screener.clients.web_client import WebClient
from investor_screener.logging import configure_logging

from .config import get_settings
from .routes.analyze_client import router as analyze_client_router
from .routes.health import router as health_router
from .routes.investors import router as investors_router
from .routes.screen import router as screen_router

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize shared clients at startup, clean up at shutdown."""
    settings = get_settings()
    configure_logging(json_output=settings.LOG_JSON, log_level=settings.LOG_LEVEL)

    logger.info("lifespan.startup", chat_model=settings.OPENAI_CHAT_MODEL)

    # One client of each kind, shared by every request
    openai = OpenAIClient(
        api_key=settings.OPENAI_API_KEY,
        chat_model=settings.OPENAI_CHAT_MODEL,
    )
    web = WebClient()

    app.state.openai = openai
    app.state.web = web

    logger.info("lifespan.ready")
    yield

    # Shutdown
    logger.info("lifespan.shutdown")
    await web.close()
    await openai.close()


app = FastAPI(
    title="investor-screener",
    description="Screens investor lists against a client's fundraising criteria",
    lifespan=lifespan,
)

app.include_router(health_router)
app.include_router(screen_router)
app.include_router(analyze_client_router)
app.include_router(investors_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
