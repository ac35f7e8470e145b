import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

logger = logging.getLogger(__name__)

RenderFn = Callable[[], Awaitable[Optional[Any]]]


@dataclass
class CachedPage:
    props: Any
    rendered_at: float


class PageCache:
    """
    Page props keyed by path, regenerated once older than the page's
    revalidation interval. A failed regeneration keeps serving the last
    good version.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._pages: Dict[str, CachedPage] = {}

    def __contains__(self, path: str) -> bool:
        return path in self._pages

    def __len__(self) -> int:
        return len(self._pages)

    async def get_or_render(
        self, path: str, revalidate: float, render: RenderFn
    ) -> Optional[Any]:
        now = self._clock()
        cached = self._pages.get(path)
        if cached and now - cached.rendered_at < revalidate:
            return cached.props

        try:
            props = await render()
        except Exception as e:
            if cached is None:
                raise
            logger.error(f"Revalidation of {path} failed, serving stale page: {e}")
            return cached.props

        if props is None:
            self._pages.pop(path, None)
            return None

        self._pages[path] = CachedPage(props=props, rendered_at=now)
        logger.debug(f"Rendered {path}")
        return props
