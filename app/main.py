import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.routers import posts
from app.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Blog API", description="Markdown blog posts indexed from disk")


@asynccontextmanager
async def lifespan(app: FastAPI):
    content_root = settings.content_root
    if content_root.is_dir():
        logger.info(f"Serving posts from {content_root.resolve()}")
    else:
        logger.info(f"Content root {content_root} not found, serving no posts")

    yield


app.router.lifespan_context = lifespan

app.include_router(posts.router)


@app.get("/")
async def root():
    return {"message": "Blog API is running"}
