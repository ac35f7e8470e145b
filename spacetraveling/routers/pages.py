import logging
from functools import partial
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from spacetraveling import dependencies as deps
from spacetraveling.routers.preview import PREVIEW_COOKIE
from spacetraveling.services.comments import PageScripts, UtterancesComments
from spacetraveling.services.page_cache import PageCache
from spacetraveling.services.posts_service import PostsService
from spacetraveling.services.prerender import HOME_PATH, post_path
from spacetraveling.services.rich_text import as_html, group_blocks
from spacetraveling.settings import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter()

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))
templates.env.filters["rich_text"] = as_html
templates.env.globals["group_blocks"] = group_blocks


@router.get("/", response_class=HTMLResponse)
async def home(
    request: Request,
    service: PostsService = Depends(deps.get_posts_service),
    cache: PageCache = Depends(deps.get_page_cache),
    current_settings: Settings = Depends(get_settings),
):
    try:
        pagination = await cache.get_or_render(
            HOME_PATH, current_settings.LISTING_REVALIDATE_SECONDS, service.get_home_props
        )
    except Exception as e:
        logger.error(f"Failed to render listing: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")

    return templates.TemplateResponse(
        request,
        "home.html",
        {"site_name": current_settings.SITE_NAME, "pagination": pagination},
    )


@router.get("/post/{slug}", response_class=HTMLResponse)
async def post_page(
    slug: str,
    request: Request,
    service: PostsService = Depends(deps.get_posts_service),
    cache: PageCache = Depends(deps.get_page_cache),
    comments: UtterancesComments = Depends(deps.get_comments),
    current_settings: Settings = Depends(get_settings),
):
    preview_ref = request.cookies.get(PREVIEW_COOKIE)
    if not preview_ref and post_path(slug) not in cache:
        # the placeholder fetches /api/posts/{slug} into the cache, then reloads
        return templates.TemplateResponse(
            request,
            "loading.html",
            {"site_name": current_settings.SITE_NAME, "slug": slug},
        )

    try:
        if preview_ref:
            props = await service.get_post_props(slug, ref=preview_ref)
        else:
            props = await cache.get_or_render(
                post_path(slug),
                current_settings.POST_REVALIDATE_SECONDS,
                partial(service.get_post_props, slug),
            )
    except Exception as e:
        logger.error(f"Failed to render post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")

    if not props:
        raise HTTPException(status_code=404, detail="Post not found")

    scripts = PageScripts()
    comments.mount(scripts)

    return templates.TemplateResponse(
        request,
        "post.html",
        {
            "site_name": current_settings.SITE_NAME,
            "page": props,
            "comments": scripts,
            "preview": bool(preview_ref),
        },
    )
