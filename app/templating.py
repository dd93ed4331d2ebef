from pathlib import Path
from typing import List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.schemas.blog import PostCard, PostView
from app.services.detail import DetailPage, DetailState
from app.settings import settings

TEMPLATES_DIR = Path(__file__).parent / "templates"

env = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(["html"]),
)
env.globals["site_name"] = settings.SITE_NAME


def render_listing(posts: List[PostCard], next_page: Optional[str]) -> str:
    return env.get_template("index.html").render(posts=posts, next_page=next_page)


def render_post_cards(posts: List[PostCard]) -> str:
    return env.get_template("_post_cards.html").render(posts=posts)


def render_post(post: PostView) -> str:
    return env.get_template("post.html").render(post=post)


def render_loading() -> str:
    return env.get_template("loading.html").render()


def render_not_found() -> str:
    return env.get_template("not_found.html").render()


def render_detail(page: DetailPage) -> str:
    """Render whatever state the detail page is in."""
    if page.state is DetailState.RENDERED:
        return render_post(page.view)
    if page.state is DetailState.NOT_FOUND:
        return render_not_found()
    return render_loading()
