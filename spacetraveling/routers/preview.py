import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import RedirectResponse

from spacetraveling.db.prismic import PrismicClient, PrismicError, get_prismic

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

PREVIEW_COOKIE = "io.prismic.preview"
PREVIEW_COOKIE_MAX_AGE = 30 * 60


@router.get("/preview")
async def preview(
    token: str = Query(..., min_length=1),
    document_id: Optional[str] = Query(None, alias="documentId"),
    client: PrismicClient = Depends(get_prismic),
):
    """Enter preview mode and redirect to the previewed post."""
    location = "/"
    if document_id:
        try:
            doc = await client.get_by_id(document_id, ref=token)
        except PrismicError as e:
            logger.warning(f"Could not resolve preview document {document_id}: {e}")
            doc = None
        if doc and doc.get("type") == "post" and doc.get("uid"):
            location = f"/post/{doc['uid']}"

    response = RedirectResponse(location, status_code=307)
    response.set_cookie(
        PREVIEW_COOKIE, token, max_age=PREVIEW_COOKIE_MAX_AGE, httponly=True, samesite="lax"
    )
    return response


@router.get("/exit-preview")
async def exit_preview():
    """Leave preview mode and go back to the listing."""
    response = RedirectResponse("/", status_code=307)
    response.delete_cookie(PREVIEW_COOKIE)
    return response
