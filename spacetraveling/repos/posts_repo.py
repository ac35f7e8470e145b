from typing import List, Optional

from spacetraveling.db.prismic import PrismicClient, at

POST_TYPE = "post"
SUMMARY_FIELDS = ["post.title", "post.subtitle", "post.author"]
ADJACENT_FIELDS = ["post.title"]
PUBLICATION_ORDER = "[document.first_publication_date]"
PUBLICATION_ORDER_DESC = "[document.first_publication_date desc]"
SLUGS_PAGE_SIZE = 100


class PrismicPostsRepo:
    def __init__(self, client: PrismicClient):
        self.client = client

    async def master_ref(self) -> str:
        return await self.client.get_master_ref()

    async def list_summaries(self, page_size: int) -> dict:
        return await self.client.query(
            [at("document.type", POST_TYPE)],
            fetch=SUMMARY_FIELDS,
            page_size=page_size,
        )

    async def fetch_page(self, cursor: str) -> dict:
        return await self.client.get_page(cursor)

    async def get_post(self, slug: str, ref: Optional[str] = None) -> Optional[dict]:
        return await self.client.get_by_uid(POST_TYPE, slug, ref=ref)

    async def get_neighbor(
        self, doc_id: str, *, descending: bool, ref: Optional[str] = None
    ) -> Optional[dict]:
        response = await self.client.query(
            [at("document.type", POST_TYPE)],
            fetch=ADJACENT_FIELDS,
            page_size=1,
            after=doc_id,
            orderings=PUBLICATION_ORDER_DESC if descending else PUBLICATION_ORDER,
            ref=ref,
        )
        results = response.get("results") or []
        return results[0] if results else None

    async def list_uids(self) -> List[str]:
        uids: List[str] = []
        page = 1
        ref = await self.master_ref()
        while True:
            response = await self.client.query(
                [at("document.type", POST_TYPE)],
                fetch=ADJACENT_FIELDS,
                page_size=SLUGS_PAGE_SIZE,
                page=page,
                ref=ref,
            )
            uids.extend(doc["uid"] for doc in response.get("results", []) if doc.get("uid"))
            if not response.get("next_page"):
                return uids
            page += 1
