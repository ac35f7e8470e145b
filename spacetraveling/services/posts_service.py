import logging
import math
from typing import Iterable, List, Optional

from pydantic import ValidationError

from spacetraveling.schemas.blog import (
    AdjacentPost,
    PostDetail,
    PostPageProps,
    PostsPagination,
    PostSummary,
    Section,
)
from spacetraveling.services.rich_text import as_text
from spacetraveling.utils import DateFormat, format_date, parse_timestamp

logger = logging.getLogger(__name__)

WORDS_PER_MINUTE = 200
DEFAULT_PAGE_SIZE = 2


class InvalidDocumentError(Exception):
    """Raised when a Prismic document lacks the fields a page needs."""


class PostsService:
    def __init__(
        self,
        repo,
        date_format: DateFormat,
        edited_format: Optional[DateFormat] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.repo = repo
        self.date_format = date_format
        self.edited_format = edited_format or date_format
        self.page_size = page_size

    async def get_home_props(self) -> PostsPagination:
        response = await self.repo.list_summaries(self.page_size)
        return self._project_page(response)

    async def load_more(self, cursor: str) -> PostsPagination:
        response = await self.repo.fetch_page(cursor)
        return self._project_page(response)

    async def get_post_props(
        self, slug: str, ref: Optional[str] = None
    ) -> Optional[PostPageProps]:
        ref = ref or await self.repo.master_ref()
        doc = await self.repo.get_post(slug, ref=ref)
        if not doc:
            logger.info(f"Post {slug} not found")
            return None

        post = project_detail(doc)
        previous_doc = await self.repo.get_neighbor(doc["id"], descending=True, ref=ref)
        next_doc = await self.repo.get_neighbor(doc["id"], descending=False, ref=ref)

        return PostPageProps(
            post=post,
            published_on=format_date(post.first_publication_date, self.date_format),
            edited_on=edited_marker(post, self.edited_format),
            reading_time=calculate_reading_time(post.content),
            previous_post=project_adjacent(previous_doc) if previous_doc else None,
            next_post=project_adjacent(next_doc) if next_doc else None,
        )

    async def list_slugs(self) -> List[str]:
        return await self.repo.list_uids()

    def _project_page(self, response: dict) -> PostsPagination:
        try:
            return PostsPagination(
                next_page=response.get("next_page") or None,
                results=[
                    project_summary(doc, self.date_format) for doc in response["results"]
                ],
            )
        except (KeyError, TypeError, AttributeError, ValidationError) as e:
            raise InvalidDocumentError(f"Malformed listing response: {e}") from e


def project_summary(doc: dict, date_format: DateFormat) -> PostSummary:
    try:
        data = doc["data"]
        return PostSummary(
            uid=doc["uid"],
            first_publication_date=format_date(
                doc.get("first_publication_date"), date_format
            ),
            title=data["title"],
            subtitle=data.get("subtitle"),
            author=data["author"],
        )
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidDocumentError(
            f"Invalid post summary {_label(doc)}: {e}"
        ) from e


def project_detail(doc: dict) -> PostDetail:
    try:
        data = doc["data"]
        if not doc["id"]:
            raise ValueError("missing document id")
        for key in ("first_publication_date", "last_publication_date"):
            if doc.get(key):
                parse_timestamp(doc[key])
        return PostDetail(
            uid=doc["uid"],
            first_publication_date=doc.get("first_publication_date"),
            last_publication_date=doc.get("last_publication_date"),
            title=data["title"],
            subtitle=data.get("subtitle"),
            banner={"url": data["banner"]["url"]},
            author=data["author"],
            content=[
                {
                    "heading": section.get("heading"),
                    "body": [
                        {
                            "type": block["type"],
                            "text": block.get("text") or "",
                            "spans": list(block.get("spans") or []),
                        }
                        for block in section.get("body") or []
                    ],
                }
                for section in data["content"]
            ],
        )
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise InvalidDocumentError(f"Invalid post {_label(doc)}: {e}") from e


def project_adjacent(doc: dict) -> AdjacentPost:
    try:
        return AdjacentPost(uid=doc["uid"], title=doc["data"]["title"])
    except (KeyError, TypeError, ValidationError) as e:
        raise InvalidDocumentError(f"Invalid adjacent post {_label(doc)}: {e}") from e


def calculate_reading_time(content: Iterable[Section]) -> int:
    minutes = 0
    sections = 0
    for section in content:
        words = len(as_text(section.body).split())
        minutes += math.ceil(words / WORDS_PER_MINUTE)
        sections += 1
    return max(minutes, 1) if sections else 0


def edited_marker(post: PostDetail, date_format: DateFormat) -> Optional[str]:
    # shows the first publication date once the post has been republished
    if post.last_publication_date == post.first_publication_date:
        return None
    return format_date(post.first_publication_date, date_format)


def _label(doc) -> str:
    if isinstance(doc, dict):
        return repr(doc.get("uid") or doc.get("id"))
    return repr(doc)
