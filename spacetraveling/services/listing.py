import logging
from typing import Awaitable, Callable, Optional, Tuple

from spacetraveling.db.prismic import PrismicError
from spacetraveling.schemas.blog import PostsPagination, PostSummary
from spacetraveling.services.posts_service import InvalidDocumentError

logger = logging.getLogger(__name__)

FetchPage = Callable[[str], Awaitable[PostsPagination]]


class PostsListing:
    """
    Pagination state of a post listing session.

    Items are only ever appended, in the order the store returns them. A
    failed ``load_more`` leaves the state untouched so it can be retried.
    """

    def __init__(self, pagination: PostsPagination, fetch_page: FetchPage):
        self._items = list(pagination.results)
        self.next_page: Optional[str] = pagination.next_page
        self._fetch_page = fetch_page
        self._loading = False

    @property
    def items(self) -> Tuple[PostSummary, ...]:
        return tuple(self._items)

    @property
    def has_more(self) -> bool:
        return bool(self.next_page)

    @property
    def loading(self) -> bool:
        return self._loading

    async def load_more(self) -> bool:
        """Append the next page. Returns True when new state was applied."""
        if not self.next_page:
            return False
        if self._loading:
            logger.debug("Ignoring load_more while a page is already loading")
            return False

        cursor = self.next_page
        self._loading = True
        try:
            page = await self._fetch_page(cursor)
        except (PrismicError, InvalidDocumentError) as e:
            logger.error(f"Failed to load more posts from {cursor}: {e}")
            return False
        finally:
            self._loading = False

        self._items.extend(page.results)
        self.next_page = page.next_page
        return True
