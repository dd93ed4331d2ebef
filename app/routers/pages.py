import logging
from typing import Optional
from urllib.parse import urlparse

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse

from app import dependencies as deps
from app.errors import ContentSourceError, LoadMoreError
from app.repos.posts_repo import ContentSource
from app.schemas.blog import MorePostsResponse
from app.security import get_revalidate_key
from app.services.detail import DetailPage, DetailState
from app.services.listing import ListingPage
from app.services.page_cache import PageCache
from app.services.rich_text import RichTextRenderer
from app.settings import settings
from app.templating import render_detail, render_listing, render_post_cards

logger = logging.getLogger(__name__)

router = APIRouter()


def _cached_response(html: str, cache: PageCache) -> HTMLResponse:
    return HTMLResponse(html, headers={"Cache-Control": cache.cache_control})


def _is_backend_cursor(cursor: str) -> bool:
    parsed = urlparse(cursor)
    return parsed.scheme in ("http", "https") and parsed.netloc == settings.api_host


@router.get("/", response_class=HTMLResponse)
async def home(
    source: ContentSource = Depends(deps.get_posts_repo),
    cache: PageCache = Depends(deps.get_page_cache),
):
    """First page of the post listing."""
    html = cache.get("/")
    if html is not None:
        return _cached_response(html, cache)

    try:
        listing = await ListingPage.build(source, settings.PAGE_SIZE)
    except ContentSourceError as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")

    html = render_listing(listing.posts, listing.next_page)
    cache.set("/", html)
    return _cached_response(html, cache)


@router.get("/posts/more", response_model=MorePostsResponse)
async def load_more_posts(
    request: Request,
    cursor: str = Query(..., description="next_page URL returned by the backend"),
    source: ContentSource = Depends(deps.get_posts_repo),
):
    """Fetch the page behind a listing cursor, as JSON or as an HTML fragment."""
    if not _is_backend_cursor(cursor):
        raise HTTPException(status_code=400, detail="Invalid cursor")

    listing = ListingPage(source, next_page=cursor)
    try:
        new_posts = await listing.load_more()
    except LoadMoreError:
        raise HTTPException(status_code=502, detail="Failed to load more posts")

    if "text/html" in request.headers.get("accept", ""):
        headers = {"X-Next-Page": listing.next_page} if listing.next_page else {}
        return HTMLResponse(render_post_cards(new_posts), headers=headers)
    return MorePostsResponse(results=new_posts, next_page=listing.next_page)


@router.get("/post/{uid}", response_class=HTMLResponse)
async def post_detail(
    uid: str,
    source: ContentSource = Depends(deps.get_posts_repo),
    renderer: RichTextRenderer = Depends(deps.get_renderer),
    cache: PageCache = Depends(deps.get_page_cache),
    preview_ref: Optional[str] = Depends(deps.get_preview_ref),
):
    """A single post, its neighbours and, in preview mode, the exit link."""
    path = f"/post/{uid}"
    if preview_ref is None:
        html = cache.get(path)
        if html is not None:
            return _cached_response(html, cache)

    page = DetailPage(source, renderer, uid, ref=preview_ref)
    try:
        state = await page.load()
    except ContentSourceError as e:
        logger.error(f"Unexpected error retrieving post {uid}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")

    html = render_detail(page)
    if state is DetailState.NOT_FOUND:
        return HTMLResponse(html, status_code=404)
    if preview_ref is not None:
        return HTMLResponse(html, headers={"Cache-Control": "no-store"})

    cache.set(path, html)
    return _cached_response(html, cache)


@router.post("/api/revalidate", dependencies=[Depends(get_revalidate_key)])
def revalidate(cache: PageCache = Depends(deps.get_page_cache)):
    """Drop every cached page so the next request renders fresh content."""
    return {"revalidated": cache.clear()}
