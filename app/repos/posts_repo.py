import logging
import re
from typing import List, Optional, Protocol

import httpx
from pydantic import ValidationError

from app.errors import ContentSourceError
from app.schemas.blog import (
    Banner,
    ContentSection,
    NavigationLink,
    NavigationPair,
    PostDetail,
    PostPage,
    PostSummary,
)
from app.settings import Settings, settings

logger = logging.getLogger(__name__)

ORDER_NEWEST_FIRST = "[document.first_publication_date desc]"
ORDER_OLDEST_FIRST = "[document.first_publication_date]"
UID_BATCH_SIZE = 100
# Prismic uids are slugs; document ids are url-safe base64
IDENTIFIER_RE = re.compile(r"[\w-]+")


class ContentSource(Protocol):
    async def list_posts(
        self, page_size: int, cursor: Optional[str] = None
    ) -> PostPage: ...

    async def fetch_page(self, cursor: str) -> PostPage: ...

    async def get_post_by_uid(
        self, uid: str, ref: Optional[str] = None
    ) -> Optional[PostDetail]: ...

    async def get_neighbors(
        self, post: PostDetail, ref: Optional[str] = None
    ) -> NavigationPair: ...

    async def list_uids(self) -> List[str]: ...

    async def resolve_preview(self, token: str, document_id: str) -> Optional[str]: ...


class PrismicPostsRepo:
    def __init__(self, client: httpx.AsyncClient, settings_obj: Settings = settings):
        self.client = client
        self.settings = settings_obj
        self._master_ref: Optional[str] = None

    async def list_posts(
        self, page_size: int, cursor: Optional[str] = None
    ) -> PostPage:
        if cursor:
            return await self.fetch_page(cursor)

        payload = await self._search(
            self._type_predicate(),
            pageSize=page_size,
            orderings=ORDER_NEWEST_FIRST,
            fetch=self._summary_fields(),
        )
        return parse_post_page(payload)

    async def fetch_page(self, cursor: str) -> PostPage:
        """The cursor is the backend's own next_page URL, fetched as-is."""
        logger.debug(f"Fetching next page {cursor}")
        payload = await self._get_json(cursor)
        return parse_post_page(payload)

    async def get_post_by_uid(
        self, uid: str, ref: Optional[str] = None
    ) -> Optional[PostDetail]:
        doc_type = self.settings.POSTS_DOCUMENT_TYPE
        if not is_valid_identifier(uid):
            logger.info(f"Rejected malformed {doc_type} uid {uid!r}")
            return None
        payload = await self._search(
            f'[[at(my.{doc_type}.uid,"{uid}")]]', ref=ref, pageSize=1
        )
        results = payload.get("results") or []
        if not results:
            logger.info(f"No {doc_type} document found for uid {uid}")
            return None
        return parse_post_detail(results[0])

    async def get_neighbors(
        self, post: PostDetail, ref: Optional[str] = None
    ) -> NavigationPair:
        previous = await self._neighbor(post.id, ORDER_NEWEST_FIRST, ref)
        following = await self._neighbor(post.id, ORDER_OLDEST_FIRST, ref)
        return NavigationPair(previous=previous, next=following)

    async def list_uids(self) -> List[str]:
        uids: List[str] = []
        page = await self.list_posts(UID_BATCH_SIZE)
        uids.extend(post.uid for post in page.results)
        while page.next_page:
            page = await self.fetch_page(page.next_page)
            uids.extend(post.uid for post in page.results)
        return uids

    async def resolve_preview(self, token: str, document_id: str) -> Optional[str]:
        if not is_valid_identifier(document_id):
            logger.warning(f"Rejected malformed preview id {document_id!r}")
            return None
        payload = await self._search(
            f'[[at(document.id,"{document_id}")]]', ref=token, pageSize=1
        )
        results = payload.get("results") or []
        if not results:
            logger.warning(f"Preview document {document_id} could not be resolved")
            return None
        return results[0].get("uid")

    async def _neighbor(
        self, document_id: str, orderings: str, ref: Optional[str]
    ) -> Optional[NavigationLink]:
        payload = await self._search(
            self._type_predicate(),
            ref=ref,
            pageSize=1,
            after=document_id,
            orderings=orderings,
            fetch=f"{self.settings.POSTS_DOCUMENT_TYPE}.title",
        )
        results = payload.get("results") or []
        if not results:
            return None
        doc = results[0]
        try:
            return NavigationLink(uid=doc["uid"], title=doc["data"]["title"])
        except (KeyError, TypeError, ValidationError) as e:
            raise ContentSourceError(f"Malformed neighbour document: {e}") from e

    async def _search(self, q: str, ref: Optional[str] = None, **params) -> dict:
        query = {"q": q, "ref": ref or await self._get_master_ref(), **params}
        if self.settings.PRISMIC_ACCESS_TOKEN:
            query["access_token"] = self.settings.PRISMIC_ACCESS_TOKEN
        return await self._get_json(self.settings.search_url, params=query)

    async def _get_master_ref(self) -> str:
        if self._master_ref:
            return self._master_ref

        params = {}
        if self.settings.PRISMIC_ACCESS_TOKEN:
            params["access_token"] = self.settings.PRISMIC_ACCESS_TOKEN
        api = await self._get_json(self.settings.PRISMIC_API_ENDPOINT, params=params)
        master = next(
            (r for r in api.get("refs", []) if r.get("isMasterRef")), None
        )
        if not master or not master.get("ref"):
            raise ContentSourceError("Prismic API did not return a master ref")
        self._master_ref = master["ref"]
        return self._master_ref

    async def _get_json(self, url: str, params: Optional[dict] = None) -> dict:
        try:
            response = await self.client.get(url, params=params)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as e:
            logger.warning(f"Prismic request to {url} failed: {e}")
            raise ContentSourceError(f"Request to {url} failed") from e
        except ValueError as e:
            logger.warning(f"Prismic returned invalid JSON for {url}: {e}")
            raise ContentSourceError(f"Invalid JSON from {url}") from e

        if not isinstance(payload, dict):
            raise ContentSourceError(f"Unexpected payload from {url}")
        return payload

    def _type_predicate(self) -> str:
        return f'[[at(document.type,"{self.settings.POSTS_DOCUMENT_TYPE}")]]'

    def _summary_fields(self) -> str:
        doc_type = self.settings.POSTS_DOCUMENT_TYPE
        fields = ("title", "subtitle", "author", "content")
        return ",".join(f"{doc_type}.{name}" for name in fields)


def is_valid_identifier(value: str) -> bool:
    return bool(value) and IDENTIFIER_RE.fullmatch(value) is not None


def parse_post_page(payload: dict) -> PostPage:
    try:
        return PostPage(
            results=[parse_post_summary(doc) for doc in payload["results"]],
            next_page=payload.get("next_page"),
            page=payload.get("page") or 1,
        )
    except (KeyError, TypeError, ValidationError) as e:
        raise ContentSourceError(f"Malformed listing page: {e}") from e


def parse_post_summary(doc: dict) -> PostSummary:
    data = doc["data"]
    return PostSummary(
        uid=doc["uid"],
        first_publication_date=doc.get("first_publication_date"),
        title=data["title"],
        subtitle=data.get("subtitle") or "",
        author=data.get("author") or "",
    )


def parse_post_detail(doc: dict) -> PostDetail:
    try:
        data = doc["data"]
        banner = data.get("banner") or {}
        return PostDetail(
            id=doc["id"],
            uid=doc["uid"],
            first_publication_date=doc.get("first_publication_date"),
            last_publication_date=doc.get("last_publication_date"),
            title=data["title"],
            subtitle=data.get("subtitle") or "",
            author=data.get("author") or "",
            banner=Banner(url=banner["url"], alt=banner.get("alt"))
            if banner.get("url")
            else None,
            content=[
                ContentSection(
                    heading=section.get("heading") or "",
                    body=list(section.get("body") or []),
                )
                for section in data.get("content") or []
            ],
        )
    except (KeyError, TypeError, ValidationError) as e:
        raise ContentSourceError(f"Malformed post document: {e}") from e
