import logging
from typing import Optional

from spacetraveling.schemas.blog import (
    Banner,
    ContentSection,
    HomeProps,
    Navigation,
    NavigationPost,
    NavigationPostData,
    PostData,
    PostDetail,
    PostDetailData,
    PostPagination,
    PostProps,
    PostSummary,
    RichTextBlock,
    StaticPaths,
)
from spacetraveling.settings import Settings, settings
from spacetraveling.utils import format_publication_date

logger = logging.getLogger(__name__)


class PostsService:
    def __init__(self, repo, settings_obj: Settings = settings):
        self.repo = repo
        self.settings = settings_obj

    async def get_home_props(
        self, *, preview: bool = False, ref: Optional[str] = None
    ) -> HomeProps:
        response = await self.repo.first_page(ref=ref)
        return HomeProps(posts_pagination=to_post_pagination(response), preview=preview)

    async def get_static_paths(self) -> StaticPaths:
        docs = await self.repo.list_all_posts()
        paths = [post_path(doc["uid"]) for doc in docs if doc.get("uid")]
        logger.info(f"Enumerated {len(paths)} post paths")
        return StaticPaths(paths=paths, fallback=True)

    async def get_post_props(
        self, slug: str, *, preview: bool = False, ref: Optional[str] = None
    ) -> PostProps:
        doc = await self.repo.get_post(slug, ref=ref)
        prev_docs, next_docs = await self.repo.get_neighbors(doc["id"], ref=ref)
        return PostProps(
            post=to_post_detail(doc),
            navigation=Navigation(
                prev_post=[to_navigation_post(d) for d in prev_docs if d.get("uid")],
                next_post=[to_navigation_post(d) for d in next_docs if d.get("uid")],
            ),
            preview=preview,
        )

    async def load_page(self, cursor: str) -> PostPagination:
        return to_post_pagination(await self.repo.fetch_page(cursor))

    def format_date(self, value: Optional[str]) -> Optional[str]:
        return format_publication_date(
            value, self.settings.DATE_FORMAT, self.settings.DATE_LOCALE
        )


def post_path(slug: str) -> str:
    return f"/post/{slug}"


def to_post_pagination(response: dict) -> PostPagination:
    return PostPagination(
        next_page=response.get("next_page"),
        results=[to_post_summary(doc) for doc in response.get("results", [])],
    )


def to_post_summary(doc: dict) -> PostSummary:
    data = doc.get("data") or {}
    return PostSummary(
        uid=doc.get("uid"),
        first_publication_date=doc.get("first_publication_date"),
        data=PostData(
            title=data.get("title") or "",
            subtitle=data.get("subtitle"),
            author=data.get("author") or "",
        ),
    )


def to_post_detail(doc: dict) -> PostDetail:
    data = doc.get("data") or {}
    banner = data.get("banner") or {}
    return PostDetail(
        id=doc.get("id"),
        uid=doc.get("uid"),
        first_publication_date=doc.get("first_publication_date"),
        last_publication_date=doc.get("last_publication_date"),
        data=PostDetailData(
            title=data.get("title") or "",
            subtitle=data.get("subtitle"),
            author=data.get("author") or "",
            banner=Banner(url=banner.get("url"), alt=banner.get("alt")),
            content=[
                ContentSection(
                    heading=section.get("heading") or "",
                    body=[
                        RichTextBlock.model_validate(block)
                        for block in section.get("body") or []
                    ],
                )
                for section in data.get("content") or []
            ],
        ),
    )


def to_navigation_post(doc: dict) -> NavigationPost:
    data = doc.get("data") or {}
    return NavigationPost(
        uid=doc["uid"], data=NavigationPostData(title=data.get("title") or "")
    )
