from typing import Optional

from fastapi import Depends, Request

from spacetraveling.clients.prismic import PrismicClient
from spacetraveling.repos.posts_repo import PrismicPostsRepo
from spacetraveling.services.posts_service import PostsService
from spacetraveling.services.renderer import PageRenderer
from spacetraveling.services.static_site import StaticSite
from spacetraveling.settings import Settings, settings


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings


def get_prismic_client(request: Request) -> PrismicClient:
    return request.app.state.prismic_client


def get_posts_repo(
    client=Depends(get_prismic_client),
    current_settings: Settings = Depends(get_settings),
):
    return PrismicPostsRepo(
        client,
        page_size=current_settings.POSTS_PAGE_SIZE,
        paths_page_size=current_settings.PATHS_PAGE_SIZE,
    )


def get_posts_service(
    repo=Depends(get_posts_repo),
    current_settings: Settings = Depends(get_settings),
):
    return PostsService(repo=repo, settings_obj=current_settings)


def get_renderer(request: Request) -> PageRenderer:
    return request.app.state.renderer


def get_static_site(request: Request) -> StaticSite:
    return request.app.state.static_site


def get_preview_ref(
    request: Request, current_settings: Settings = Depends(get_settings)
) -> Optional[str]:
    return request.cookies.get(current_settings.PREVIEW_COOKIE_NAME) or None
