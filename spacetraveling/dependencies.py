from fastapi import Depends

from spacetraveling.db.prismic import get_prismic
from spacetraveling.repos.posts_repo import PrismicPostsRepo
from spacetraveling.services.comments import UtterancesComments
from spacetraveling.services.page_cache import PageCache
from spacetraveling.services.posts_service import PostsService
from spacetraveling.settings import Settings, get_settings

PAGE_CACHE = PageCache()


def get_posts_repo(client=Depends(get_prismic)):
    return PrismicPostsRepo(client)


def build_posts_service(repo, current_settings: Settings) -> PostsService:
    return PostsService(
        repo=repo,
        date_format=current_settings.summary_date_format,
        edited_format=current_settings.edited_date_format,
        page_size=current_settings.POSTS_PAGE_SIZE,
    )


def get_posts_service(
    repo=Depends(get_posts_repo),
    current_settings: Settings = Depends(get_settings),
):
    return build_posts_service(repo, current_settings)


def get_page_cache() -> PageCache:
    return PAGE_CACHE


def get_comments(current_settings: Settings = Depends(get_settings)):
    return UtterancesComments(
        repo=current_settings.UTTERANCES_REPO, theme=current_settings.UTTERANCES_THEME
    )
