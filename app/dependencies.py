from typing import Optional

from fastapi import Depends, Request

from app.clients.prismic import get_http_client
from app.repos.posts_repo import PrismicPostsRepo
from app.services.page_cache import PageCache, page_cache
from app.services.rich_text import PrismicHtmlRenderer
from app.settings import settings


def get_posts_repo(client=Depends(get_http_client)):
    return PrismicPostsRepo(client)


def get_renderer():
    return PrismicHtmlRenderer()


def get_page_cache() -> PageCache:
    return page_cache


def get_preview_ref(request: Request) -> Optional[str]:
    return request.cookies.get(settings.PREVIEW_COOKIE_NAME) or None
