import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import RedirectResponse

from app import dependencies as deps
from app.errors import ContentSourceError
from app.repos.posts_repo import ContentSource
from app.settings import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.get("/preview")
async def enter_preview(
    token: str = Query(...),
    document_id: str = Query(..., alias="documentId"),
    source: ContentSource = Depends(deps.get_posts_repo),
):
    """Start a preview session for a draft and redirect to it."""
    try:
        uid = await source.resolve_preview(token, document_id)
    except ContentSourceError as e:
        logger.error(f"Failed to resolve preview for {document_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to resolve preview")

    response = RedirectResponse(f"/post/{uid}" if uid else "/", status_code=307)
    response.set_cookie(
        settings.PREVIEW_COOKIE_NAME, token, httponly=True, samesite="lax"
    )
    return response


@router.get("/exit-preview")
def exit_preview():
    """Clear the preview session and go back to the listing."""
    response = RedirectResponse("/", status_code=307)
    response.delete_cookie(settings.PREVIEW_COOKIE_NAME)
    return response
