import logging
from typing import Iterable, List, Optional

import httpx
from fastapi import Request

from spacetraveling.settings import settings

logger = logging.getLogger(__name__)

ACCESS_TOKEN_PARAM = "access_token"


class PrismicError(Exception):
    """Raised when the Prismic API cannot be reached or answers garbage."""


class InvalidCursorError(PrismicError):
    """Raised when a pagination cursor does not belong to this repository."""


def at(path: str, value: str) -> str:
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'[at({path}, "{escaped}")]'


class PrismicClient:
    """
    Minimal async client for the Prismic REST API v2.
    Only the read operations the blog needs are implemented.
    """

    def __init__(
        self,
        endpoint: str,
        access_token: str = "",
        http: Optional[httpx.AsyncClient] = None,
    ):
        self.endpoint = endpoint.rstrip("/")
        self.access_token = access_token
        self.http = http or httpx.AsyncClient()

    @property
    def search_url(self) -> str:
        return f"{self.endpoint}/documents/search"

    async def get_master_ref(self) -> str:
        api = await self._get_json(self.endpoint, self._auth_params())
        for ref in api.get("refs", []):
            if ref.get("isMasterRef"):
                return ref["ref"]
        raise PrismicError(f"No master ref published by {self.endpoint}")

    async def query(
        self,
        predicates: Iterable[str],
        *,
        fetch: Optional[List[str]] = None,
        page_size: Optional[int] = None,
        after: Optional[str] = None,
        orderings: Optional[str] = None,
        ref: Optional[str] = None,
        page: Optional[int] = None,
    ) -> dict:
        params = {
            "ref": ref or await self.get_master_ref(),
            "q": f"[{''.join(predicates)}]",
            **self._auth_params(),
        }
        if fetch:
            params["fetch"] = ",".join(fetch)
        if page_size is not None:
            params["pageSize"] = page_size
        if after:
            params["after"] = after
        if orderings:
            params["orderings"] = orderings
        if page is not None:
            params["page"] = page

        logger.debug(f"Querying Prismic with {params['q']}")
        return self._public_response(await self._get_json(self.search_url, params))

    async def get_by_uid(
        self,
        doc_type: str,
        uid: str,
        *,
        ref: Optional[str] = None,
        fetch: Optional[List[str]] = None,
    ) -> Optional[dict]:
        response = await self.query(
            [at(f"my.{doc_type}.uid", uid)], fetch=fetch, page_size=1, ref=ref
        )
        results = response.get("results") or []
        return results[0] if results else None

    async def get_by_id(self, doc_id: str, *, ref: Optional[str] = None) -> Optional[dict]:
        response = await self.query([at("document.id", doc_id)], page_size=1, ref=ref)
        results = response.get("results") or []
        return results[0] if results else None

    async def get_page(self, cursor: str) -> dict:
        """Follow a ``next_page`` cursor returned by a previous query."""
        if not cursor or not cursor.startswith(self.search_url):
            raise InvalidCursorError(f"Cursor does not point at {self.search_url}")

        url = httpx.URL(cursor)
        if self.access_token:
            url = url.copy_set_param(ACCESS_TOKEN_PARAM, self.access_token)
        return self._public_response(await self._get_json(url))

    async def aclose(self) -> None:
        await self.http.aclose()

    def _auth_params(self) -> dict:
        return {ACCESS_TOKEN_PARAM: self.access_token} if self.access_token else {}

    async def _get_json(self, url, params: Optional[dict] = None) -> dict:
        try:
            response = await self.http.get(url, params=params)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as e:
            raise PrismicError(f"Request to Prismic failed: {e}") from e
        except ValueError as e:
            raise PrismicError(f"Prismic returned invalid JSON: {e}") from e
        if not isinstance(body, dict):
            raise PrismicError(f"Prismic returned {type(body).__name__}, expected an object")
        return body

    @staticmethod
    def _public_response(body: dict) -> dict:
        """Strip the access token from the cursor so it can be handed to browsers."""
        next_page = body.get("next_page")
        if next_page is not None and not isinstance(next_page, str):
            raise PrismicError(f"Invalid next_page cursor: {next_page!r}")
        if next_page:
            body["next_page"] = str(
                httpx.URL(next_page).copy_remove_param(ACCESS_TOKEN_PARAM)
            )
        return body


def create_prismic_client() -> PrismicClient:
    """
    Build the shared Prismic client.
    Called from the app lifespan to avoid import-time connections.
    """
    return PrismicClient(settings.PRISMIC_API_ENDPOINT, settings.PRISMIC_ACCESS_TOKEN)


def get_prismic(request: Request) -> PrismicClient:
    return request.app.state.prismic
