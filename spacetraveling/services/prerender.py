import logging
from functools import partial

from spacetraveling.db.prismic import PrismicError
from spacetraveling.services.page_cache import PageCache
from spacetraveling.services.posts_service import InvalidDocumentError, PostsService

logger = logging.getLogger(__name__)

HOME_PATH = "/"


def post_path(slug: str) -> str:
    return f"/post/{slug}"


async def prerender_pages(
    service: PostsService,
    cache: PageCache,
    *,
    listing_revalidate: float,
    post_revalidate: float,
) -> int:
    """
    Render the listing and every known post into the cache.
    Returns the number of pages rendered; failures are logged and skipped.
    """
    rendered = 0
    try:
        await cache.get_or_render(HOME_PATH, listing_revalidate, service.get_home_props)
        rendered += 1
    except (PrismicError, InvalidDocumentError) as e:
        logger.error(f"Failed to pre-render {HOME_PATH}: {e}")

    try:
        slugs = await service.list_slugs()
    except PrismicError as e:
        logger.error(f"Failed to list post slugs: {e}")
        return rendered

    for slug in slugs:
        try:
            props = await cache.get_or_render(
                post_path(slug), post_revalidate, partial(service.get_post_props, slug)
            )
        except (PrismicError, InvalidDocumentError) as e:
            logger.warning(f"Failed to pre-render post {slug}: {e}")
            continue
        if props is not None:
            rendered += 1

    logger.info(f"Pre-rendered {rendered} pages")
    return rendered
