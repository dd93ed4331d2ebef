import asyncio
import logging
from typing import List, Optional

from app.errors import ContentSourceError, LoadMoreError
from app.repos.posts_repo import ContentSource
from app.schemas.blog import PostCard
from app.services.formatter import format_summary

logger = logging.getLogger(__name__)


class ListingPage:
    """
    Accumulated post listing plus the cursor for the next page.
    State only changes through load_more, one call at a time.
    """

    def __init__(
        self,
        source: ContentSource,
        posts: Optional[List[PostCard]] = None,
        next_page: Optional[str] = None,
    ):
        self.source = source
        self._posts: List[PostCard] = list(posts or [])
        self._next_page = next_page
        self._lock = asyncio.Lock()

    @classmethod
    async def build(cls, source: ContentSource, page_size: int) -> "ListingPage":
        page = await source.list_posts(page_size)
        posts = [format_summary(post) for post in page.results]
        logger.info(f"Listing built with {len(posts)} posts")
        return cls(source, posts=posts, next_page=page.next_page)

    @property
    def posts(self) -> List[PostCard]:
        return list(self._posts)

    @property
    def next_page(self) -> Optional[str]:
        return self._next_page

    @property
    def has_more(self) -> bool:
        return self._next_page is not None

    async def load_more(self) -> List[PostCard]:
        """
        Fetch the page behind the current cursor and append it.
        Returns the newly appended cards; empty when there is nothing left.
        """
        async with self._lock:
            cursor = self._next_page
            if cursor is None:
                return []

            try:
                page = await self.source.fetch_page(cursor)
                new_posts = [format_summary(post) for post in page.results]
            except (ContentSourceError, ValueError) as e:
                logger.error(f"Failed to load more posts from {cursor}: {e}")
                raise LoadMoreError(str(e)) from e

            self._posts = self._posts + new_posts
            self._next_page = page.next_page
            logger.debug(
                f"Appended {len(new_posts)} posts, next page {self._next_page}"
            )
            return new_posts
