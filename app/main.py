import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.clients.prismic import create_client
from app.routers import pages, preview
from app.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.SITE_NAME, description="Blog frontend backed by Prismic")


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.http_client = create_client()
    logger.info(f"Prismic client ready for {settings.PRISMIC_API_ENDPOINT}")

    try:
        yield
    finally:
        await app.state.http_client.aclose()
        logger.info("Prismic client closed")


app.router.lifespan_context = lifespan

app.include_router(pages.router)
app.include_router(preview.router)


@app.get("/health")
async def health():
    return {"message": f"{settings.SITE_NAME} is running"}
