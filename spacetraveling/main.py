import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from spacetraveling.db.prismic import create_prismic_client
from spacetraveling.dependencies import PAGE_CACHE, build_posts_service
from spacetraveling.repos.posts_repo import PrismicPostsRepo
from spacetraveling.routers import pages, posts, preview
from spacetraveling.services.prerender import prerender_pages
from spacetraveling.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    client = create_prismic_client()
    app.state.prismic = client
    logger.info(f"Prismic client ready for {client.endpoint}")

    if settings.PRERENDER_ON_STARTUP:
        await prerender_pages(
            build_posts_service(PrismicPostsRepo(client), settings),
            PAGE_CACHE,
            listing_revalidate=settings.LISTING_REVALIDATE_SECONDS,
            post_revalidate=settings.POST_REVALIDATE_SECONDS,
        )

    try:
        yield
    finally:
        await client.aclose()
        logger.info("Prismic client closed")


app = FastAPI(
    title="Spacetraveling",
    description="Blog pages rendered from Prismic",
    lifespan=lifespan,
)

app.include_router(posts.router)
app.include_router(preview.router)
app.include_router(pages.router)
