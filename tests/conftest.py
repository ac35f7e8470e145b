from spacetraveling.db.prismic import PrismicError
from spacetraveling.schemas.blog import PostsPagination, PostSummary
from spacetraveling.utils import DateFormat

UTC_DATE_FORMAT = DateFormat(pattern="%d %b %Y", locale="pt-BR", timezone="UTC")


def make_summary_doc(uid: str, published: str = "2021-03-25T19:25:28+0000", **data):
    return {
        "id": f"id-{uid}",
        "uid": uid,
        "type": "post",
        "first_publication_date": published,
        "data": {
            "title": data.get("title", uid.replace("-", " ").title()),
            "subtitle": data.get("subtitle", f"About {uid}"),
            "author": data.get("author", "Joseph Oliveira"),
        },
    }


def make_post_doc(
    uid: str,
    *,
    first: str = "2021-03-25T19:25:28+0000",
    last: str = "2021-03-25T19:25:28+0000",
    sections=None,
):
    if sections is None:
        sections = [
            {
                "heading": "Introdução",
                "body": [{"type": "paragraph", "text": "Hello world", "spans": []}],
            }
        ]
    return {
        "id": f"id-{uid}",
        "uid": uid,
        "type": "post",
        "first_publication_date": first,
        "last_publication_date": last,
        "data": {
            "title": uid.replace("-", " ").title(),
            "subtitle": f"About {uid}",
            "author": "Joseph Oliveira",
            "banner": {"url": f"https://images.prismic.io/{uid}.png"},
            "content": sections,
        },
    }


def words(count: int) -> str:
    return " ".join(["palavra"] * count)


class FakePrismicClient:
    """
    Records every call; answers from canned responses.
    """

    def __init__(self, responses=None, docs_by_uid=None, master_ref="master-ref"):
        self.responses = list(responses or [])
        self.docs_by_uid = docs_by_uid or {}
        self.master_ref = master_ref
        self.calls = []

    async def get_master_ref(self):
        self.calls.append(("get_master_ref",))
        return self.master_ref

    async def query(self, predicates, **options):
        self.calls.append(("query", list(predicates), options))
        return self.responses.pop(0) if self.responses else {"results": [], "next_page": None}

    async def get_by_uid(self, doc_type, uid, *, ref=None, fetch=None):
        self.calls.append(("get_by_uid", doc_type, uid, ref))
        return self.docs_by_uid.get(uid)

    async def get_page(self, cursor):
        self.calls.append(("get_page", cursor))
        return self.responses.pop(0)


class FakeRepo:
    """
    Minimal repo stand-in used in service tests.
    """

    def __init__(
        self,
        listing=None,
        pages=None,
        posts=None,
        neighbors=None,
        uids=None,
        error=None,
    ):
        self.listing = listing or {"results": [], "next_page": None}
        self.pages = pages or {}
        self.posts = posts or {}
        self.neighbors = neighbors or {}
        self.uids = uids or []
        self.error = error
        self.calls = []

    async def master_ref(self):
        self.calls.append(("master_ref",))
        if self.error:
            raise self.error
        return "master-ref"

    async def list_summaries(self, page_size):
        self.calls.append(("list_summaries", page_size))
        if self.error:
            raise self.error
        return self.listing

    async def fetch_page(self, cursor):
        self.calls.append(("fetch_page", cursor))
        if self.error:
            raise self.error
        if cursor not in self.pages:
            raise PrismicError(f"unknown cursor {cursor}")
        return self.pages[cursor]

    async def get_post(self, slug, ref=None):
        self.calls.append(("get_post", slug, ref))
        if self.error:
            raise self.error
        return self.posts.get(slug)

    async def get_neighbor(self, doc_id, *, descending, ref=None):
        direction = "previous" if descending else "next"
        self.calls.append((direction, doc_id, ref))
        return self.neighbors.get((doc_id, direction))

    async def list_uids(self):
        self.calls.append(("list_uids",))
        if self.error:
            raise self.error
        return list(self.uids)


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    """

    def __init__(self, home_props=None, pages=None, post_props=None, error=None):
        self.home_props = home_props or PostsPagination()
        self.pages = pages or {}
        self.post_props = post_props or {}
        self.error = error
        self.calls = []

    async def get_home_props(self):
        self.calls.append(("get_home_props",))
        if self.error:
            raise self.error
        return self.home_props

    async def load_more(self, cursor):
        self.calls.append(("load_more", cursor))
        if self.error:
            raise self.error
        return self.pages[cursor]

    async def get_post_props(self, slug, ref=None):
        self.calls.append(("get_post_props", slug, ref))
        if self.error:
            raise self.error
        return self.post_props.get(slug)

    async def list_slugs(self):
        self.calls.append(("list_slugs",))
        return list(self.post_props)


def summary(uid: str, date: str = "25 mar 2021") -> PostSummary:
    return PostSummary(
        uid=uid,
        first_publication_date=date,
        title=uid.title(),
        subtitle=f"About {uid}",
        author="Joseph Oliveira",
    )
