import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from spacetraveling.clients.prismic import create_prismic_client
from spacetraveling.repos.posts_repo import PrismicPostsRepo
from spacetraveling.routers import pages, posts, preview
from spacetraveling.services.posts_service import PostsService
from spacetraveling.services.renderer import PageRenderer
from spacetraveling.services.static_site import StaticSite
from spacetraveling.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="spacetraveling", description="Blog front end over Prismic")


@asynccontextmanager
async def lifespan(app: FastAPI):
    client = create_prismic_client(settings)
    renderer = PageRenderer(settings)
    repo = PrismicPostsRepo(
        client,
        page_size=settings.POSTS_PAGE_SIZE,
        paths_page_size=settings.PATHS_PAGE_SIZE,
    )
    app.state.prismic_client = client
    app.state.renderer = renderer
    app.state.static_site = StaticSite(PostsService(repo, settings), renderer)
    logger.info(f"Prismic client opened for {client.endpoint}")

    try:
        if settings.PRERENDER_ON_STARTUP:
            await app.state.static_site.build()
        yield
    finally:
        await client.aclose()
        logger.info("Prismic client closed")


app.router.lifespan_context = lifespan

app.include_router(pages.router)
app.include_router(posts.router)
app.include_router(preview.router)
