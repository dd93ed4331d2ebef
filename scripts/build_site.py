import argparse
import asyncio
import logging
from pathlib import Path

from app.clients.prismic import create_client
from app.repos.posts_repo import PrismicPostsRepo
from app.services.rich_text import PrismicHtmlRenderer
from app.services.site_builder import build_site
from app.settings import settings

logger = logging.getLogger(__name__)


async def main(out_dir: Path) -> None:
    async with create_client() as client:
        await build_site(PrismicPostsRepo(client), PrismicHtmlRenderer(), out_dir)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate the static blog")
    parser.add_argument("--out", type=Path, default=Path("dist"))
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    try:
        asyncio.run(main(args.out))
        logger.info("Static build completed successfully.")
    except Exception as e:
        logger.error(f"Static build failed: {e}", exc_info=True)
        raise SystemExit(1)
