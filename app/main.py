import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.dependencies import make_http_client
from app.routers import ui
from app.services.sessions import ControllerRegistry
from app.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Blog Client", description="Posts, pages and a small admin panel")


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.http_client = make_http_client(settings)
    app.state.controllers = ControllerRegistry()
    logger.info(f"Blog backend at {settings.BLOG_API_URL}")

    try:
        yield
    finally:
        await app.state.http_client.aclose()
        logger.info("HTTP client closed")


app.router.lifespan_context = lifespan

app.include_router(ui.router)
