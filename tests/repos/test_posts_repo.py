import asyncio

from spacetraveling.repos.posts_repo import (
    PUBLICATION_ORDER,
    PUBLICATION_ORDER_DESC,
    SUMMARY_FIELDS,
    PrismicPostsRepo,
)
from tests.conftest import FakePrismicClient

POST_PREDICATE = '[at(document.type, "post")]'


def test_list_summaries_queries_posts_with_allowlist():
    client = FakePrismicClient(responses=[{"results": [], "next_page": "cursor"}])
    repo = PrismicPostsRepo(client)

    response = asyncio.run(repo.list_summaries(2))

    assert response["next_page"] == "cursor"
    _, predicates, options = client.calls[0]
    assert predicates == [POST_PREDICATE]
    assert options["fetch"] == SUMMARY_FIELDS
    assert options["page_size"] == 2
    assert "orderings" not in options


def test_fetch_page_follows_cursor():
    client = FakePrismicClient(responses=[{"results": [], "next_page": None}])
    asyncio.run(PrismicPostsRepo(client).fetch_page("cursor_A"))
    assert client.calls == [("get_page", "cursor_A")]


def test_get_post_uses_uid_lookup_and_ref():
    client = FakePrismicClient(docs_by_uid={"hello": {"uid": "hello"}})
    repo = PrismicPostsRepo(client)

    assert asyncio.run(repo.get_post("hello", ref="preview")) == {"uid": "hello"}
    assert asyncio.run(repo.get_post("missing-post")) is None
    assert client.calls[0] == ("get_by_uid", "post", "hello", "preview")


def test_get_neighbor_orders_by_publication_date():
    client = FakePrismicClient(
        responses=[
            {"results": [{"uid": "older"}], "next_page": None},
            {"results": [], "next_page": None},
        ]
    )
    repo = PrismicPostsRepo(client)

    previous = asyncio.run(repo.get_neighbor("doc-1", descending=True))
    following = asyncio.run(repo.get_neighbor("doc-1", descending=False, ref="r"))

    assert previous == {"uid": "older"}
    assert following is None
    desc_options = client.calls[0][2]
    asc_options = client.calls[1][2]
    assert desc_options["orderings"] == PUBLICATION_ORDER_DESC
    assert asc_options["orderings"] == PUBLICATION_ORDER
    assert desc_options["after"] == asc_options["after"] == "doc-1"
    assert desc_options["page_size"] == asc_options["page_size"] == 1
    assert asc_options["ref"] == "r"


def test_list_uids_walks_every_page_on_one_ref():
    client = FakePrismicClient(
        responses=[
            {"results": [{"uid": "a"}, {"uid": "b"}], "next_page": "page-2"},
            {"results": [{"uid": "c"}, {"id": "no-uid"}], "next_page": None},
        ]
    )

    uids = asyncio.run(PrismicPostsRepo(client).list_uids())

    assert uids == ["a", "b", "c"]
    queries = [call for call in client.calls if call[0] == "query"]
    assert [q[2]["page"] for q in queries] == [1, 2]
    assert all(q[2]["ref"] == "master-ref" for q in queries)


def test_master_ref_delegates_to_client():
    client = FakePrismicClient(master_ref="ref-42")

    assert asyncio.run(PrismicPostsRepo(client).master_ref()) == "ref-42"
    assert client.calls == [("get_master_ref",)]
