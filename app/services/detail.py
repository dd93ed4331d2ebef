import enum
import logging
from typing import Optional

from app.errors import ContentSourceError, InvalidTransition
from app.repos.posts_repo import ContentSource
from app.schemas.blog import NavigationPair, PostDetail, PostView, SectionView
from app.services.formatter import (
    calculate_reading_time,
    format_date,
    format_edited_at,
    is_edited,
)
from app.services.rich_text import RichTextRenderer

logger = logging.getLogger(__name__)


class DetailState(str, enum.Enum):
    LOADING = "loading"
    RENDERED = "rendered"
    NOT_FOUND = "not_found"


class DetailPage:
    """Loading -> Rendered or Loading -> NotFound, both terminal."""

    def __init__(
        self,
        source: ContentSource,
        renderer: RichTextRenderer,
        uid: str,
        ref: Optional[str] = None,
    ):
        self.source = source
        self.renderer = renderer
        self.uid = uid
        self.ref = ref
        self.state = DetailState.LOADING
        self.view: Optional[PostView] = None

    @property
    def preview(self) -> bool:
        return self.ref is not None

    async def load(self) -> DetailState:
        if self.state is not DetailState.LOADING:
            raise InvalidTransition(f"Post {self.uid} already {self.state.value}")

        post = await self.source.get_post_by_uid(self.uid, ref=self.ref)
        if post is None:
            logger.info(f"Post {self.uid} not found")
            self.state = DetailState.NOT_FOUND
            return self.state

        navigation = await self.source.get_neighbors(post, ref=self.ref)
        try:
            self.view = build_post_view(
                post, self.renderer, navigation=navigation, preview=self.preview
            )
        except ValueError as e:
            logger.warning(f"Post {self.uid} has malformed fields: {e}")
            raise ContentSourceError(f"Malformed post {self.uid}: {e}") from e
        self.state = DetailState.RENDERED
        return self.state


def build_post_view(
    post: PostDetail,
    renderer: RichTextRenderer,
    navigation: Optional[NavigationPair] = None,
    preview: bool = False,
) -> PostView:
    edited_at = (
        format_edited_at(post.last_publication_date)
        if is_edited(post.first_publication_date, post.last_publication_date)
        else None
    )
    return PostView(
        uid=post.uid,
        title=post.title,
        author=post.author,
        banner=post.banner,
        first_publication_date=format_date(post.first_publication_date),
        edited_at=edited_at,
        reading_time=calculate_reading_time(post.content),
        sections=[
            SectionView(heading=section.heading, html=renderer.as_html(section.body))
            for section in post.content
        ],
        navigation=navigation or NavigationPair(),
        preview=preview,
    )
