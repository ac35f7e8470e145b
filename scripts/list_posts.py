import asyncio
import logging

from spacetraveling.db.prismic import create_prismic_client
from spacetraveling.dependencies import build_posts_service
from spacetraveling.repos.posts_repo import PrismicPostsRepo
from spacetraveling.services.listing import PostsListing
from spacetraveling.settings import settings

logger = logging.getLogger(__name__)


async def walk_listing(service) -> PostsListing:
    """Load every listing page, the way the "load more" button does."""
    listing = PostsListing(await service.get_home_props(), service.load_more)
    while listing.has_more:
        if not await listing.load_more():
            logger.error("Stopped paging after a failed request")
            break
    return listing


async def main():
    client = create_prismic_client()
    try:
        listing = await walk_listing(
            build_posts_service(PrismicPostsRepo(client), settings)
        )
        for post in listing.items:
            logger.info(f"{post.first_publication_date} | {post.uid} | {post.title}")
        logger.info(f"{len(listing.items)} posts listed.")
    finally:
        await client.aclose()


if __name__ == "__main__":
    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper()))
    asyncio.run(main())
