"""
Static site builder.

Writes the listing's first page, one page per published post and the
loading placeholder served for paths that were not generated at build time:

    <out>/index.html
    <out>/post/<uid>/index.html
    <out>/post/_fallback.html
"""
import logging
from pathlib import Path
from typing import Dict

from app.errors import ContentSourceError
from app.repos.posts_repo import ContentSource
from app.services.detail import DetailPage, DetailState
from app.services.listing import ListingPage
from app.services.rich_text import RichTextRenderer
from app.settings import settings
from app.templating import render_detail, render_listing, render_loading

logger = logging.getLogger(__name__)


async def build_site(
    source: ContentSource,
    renderer: RichTextRenderer,
    out_dir: Path,
    page_size: int = settings.PAGE_SIZE,
) -> Dict[str, int]:
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    listing = await ListingPage.build(source, page_size)
    _write(out_dir / "index.html", render_listing(listing.posts, listing.next_page))
    _write(out_dir / "post" / "_fallback.html", render_loading())

    built, skipped = 0, 0
    for uid in await source.list_uids():
        page = DetailPage(source, renderer, uid)
        try:
            state = await page.load()
        except ContentSourceError as e:
            logger.warning(f"Skipping post {uid}: {e}")
            skipped += 1
            continue

        if state is not DetailState.RENDERED:
            logger.warning(f"Skipping post {uid}: {state.value}")
            skipped += 1
            continue

        _write(out_dir / "post" / uid / "index.html", render_detail(page))
        built += 1

    logger.info(f"Site built in {out_dir}: {built} posts, {skipped} skipped")
    return {"posts": built, "skipped": skipped}


def _write(file_path: Path, content: str) -> None:
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content, encoding="utf-8")
