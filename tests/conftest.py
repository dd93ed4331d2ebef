from typing import Dict, List, Optional

from app.errors import ContentSourceError
from app.schemas.blog import (
    ContentSection,
    NavigationLink,
    NavigationPair,
    PostDetail,
    PostPage,
    PostSummary,
)


def make_summary(uid: str, date: Optional[str] = "2021-03-25T19:25:28+0000") -> PostSummary:
    return PostSummary(
        uid=uid,
        first_publication_date=date,
        title=f"Title {uid}",
        subtitle=f"Subtitle {uid}",
        author="Joseph Oliveira",
    )


def make_detail(uid: str, **overrides) -> PostDetail:
    fields = {
        "id": f"id-{uid}",
        "uid": uid,
        "first_publication_date": "2021-03-25T19:25:28+0000",
        "last_publication_date": "2021-03-25T19:25:28+0000",
        "title": f"Title {uid}",
        "subtitle": "",
        "author": "Joseph Oliveira",
        "banner": {"url": "https://images.prismic.io/banner.png", "alt": "banner"},
        "content": [
            ContentSection(
                heading="Proin et varius",
                body=[{"type": "paragraph", "text": "Lorem ipsum dolor", "spans": []}],
            )
        ],
    }
    fields.update(overrides)
    return PostDetail(**fields)


def make_prismic_doc(uid: str, **data) -> dict:
    """Raw Prismic search result document."""
    return {
        "id": f"id-{uid}",
        "uid": uid,
        "type": "posts",
        "first_publication_date": "2021-03-25T19:25:28+0000",
        "last_publication_date": "2021-03-25T19:25:28+0000",
        "data": {
            "title": f"Title {uid}",
            "subtitle": f"Subtitle {uid}",
            "author": "Joseph Oliveira",
            **data,
        },
    }


class FakeContentSource:
    """
    In-memory content source.
    pages maps cursor URLs to the PostPage they return; set fail_on to a cursor
    to make fetching it raise.
    """

    def __init__(
        self,
        first_page: Optional[PostPage] = None,
        pages: Optional[Dict[str, PostPage]] = None,
        posts: Optional[Dict[str, PostDetail]] = None,
        neighbors: Optional[Dict[str, NavigationPair]] = None,
        fail_on: Optional[str] = None,
    ):
        self.first_page = first_page or PostPage()
        self.pages = pages or {}
        self.posts = posts or {}
        self.neighbors = neighbors or {}
        self.fail_on = fail_on
        self.calls: List[tuple] = []

    async def list_posts(self, page_size: int, cursor: Optional[str] = None) -> PostPage:
        self.calls.append(("list_posts", page_size, cursor))
        if cursor:
            return await self.fetch_page(cursor)
        return self.first_page

    async def fetch_page(self, cursor: str) -> PostPage:
        self.calls.append(("fetch_page", cursor))
        if cursor == self.fail_on or cursor not in self.pages:
            raise ContentSourceError(f"boom: {cursor}")
        return self.pages[cursor]

    async def get_post_by_uid(self, uid: str, ref: Optional[str] = None):
        self.calls.append(("get_post_by_uid", uid, ref))
        return self.posts.get(uid)

    async def get_neighbors(self, post: PostDetail, ref: Optional[str] = None):
        self.calls.append(("get_neighbors", post.uid, ref))
        return self.neighbors.get(post.uid, NavigationPair())

    async def list_uids(self) -> List[str]:
        self.calls.append(("list_uids",))
        return list(self.posts)

    async def resolve_preview(self, token: str, document_id: str) -> Optional[str]:
        self.calls.append(("resolve_preview", token, document_id))
        for post in self.posts.values():
            if post.id == document_id:
                return post.uid
        return None


class FakeRenderer:
    def as_html(self, blocks) -> str:
        return "".join(f"<p>{block.get('text', '')}</p>" for block in blocks)

    def as_text(self, blocks) -> str:
        return " ".join(block.get("text", "") for block in blocks)


def _link(uid: Optional[str]) -> Optional[NavigationLink]:
    return NavigationLink(uid=uid, title=f"Title {uid}") if uid else None


def nav(previous: Optional[str] = None, following: Optional[str] = None):
    return NavigationPair(previous=_link(previous), next=_link(following))
