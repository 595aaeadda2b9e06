import asyncio
import logging
from pathlib import Path

from spacetraveling.clients.prismic import create_prismic_client
from spacetraveling.repos.posts_repo import PrismicPostsRepo
from spacetraveling.services.posts_service import PostsService
from spacetraveling.services.renderer import PageRenderer
from spacetraveling.services.static_site import StaticSite
from spacetraveling.settings import settings

logger = logging.getLogger(__name__)


async def build(output_dir: Path) -> None:
    client = create_prismic_client(settings)
    try:
        repo = PrismicPostsRepo(
            client,
            page_size=settings.POSTS_PAGE_SIZE,
            paths_page_size=settings.PATHS_PAGE_SIZE,
        )
        site = StaticSite(PostsService(repo, settings), PageRenderer(settings))
        await site.build()
        site.export(output_dir)
    finally:
        await client.aclose()


if __name__ == "__main__":
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    asyncio.run(build(Path(settings.STATIC_EXPORT_DIR)))
    logger.info("Static export completed successfully.")
