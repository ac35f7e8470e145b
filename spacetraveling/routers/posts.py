import logging
from functools import partial
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from spacetraveling import dependencies as deps
from spacetraveling.db.prismic import InvalidCursorError
from spacetraveling.schemas.blog import PostPageProps, PostsPagination
from spacetraveling.services.page_cache import PageCache
from spacetraveling.services.posts_service import PostsService
from spacetraveling.services.prerender import HOME_PATH, post_path
from spacetraveling.settings import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.get("/health")
async def health():
    return {"message": "Spacetraveling is running"}


@router.get("/posts", response_model=PostsPagination)
async def list_posts(
    page: Optional[str] = Query(None, description="next_page cursor of a previous response"),
    service: PostsService = Depends(deps.get_posts_service),
    cache: PageCache = Depends(deps.get_page_cache),
    current_settings: Settings = Depends(get_settings),
):
    """Get a page of post summaries."""
    try:
        if page:
            return await service.load_more(page)
        return await cache.get_or_render(
            HOME_PATH, current_settings.LISTING_REVALIDATE_SECONDS, service.get_home_props
        )
    except InvalidCursorError:
        raise HTTPException(status_code=400, detail="Invalid page cursor")
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/posts/{slug}", response_model=PostPageProps)
async def get_post(
    slug: str,
    service: PostsService = Depends(deps.get_posts_service),
    cache: PageCache = Depends(deps.get_page_cache),
    current_settings: Settings = Depends(get_settings),
):
    """Get a single post by slug."""
    try:
        props = await cache.get_or_render(
            post_path(slug),
            current_settings.POST_REVALIDATE_SECONDS,
            partial(service.get_post_props, slug),
        )
        if not props:
            raise HTTPException(status_code=404, detail="Post not found")
        return props
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")
