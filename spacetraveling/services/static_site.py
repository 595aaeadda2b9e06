import logging
import time
from pathlib import Path
from typing import Dict, List, Optional, Set

from spacetraveling.clients.prismic import DocumentNotFoundError
from spacetraveling.services.listing import initial_state
from spacetraveling.services.posts_service import PostsService, post_path
from spacetraveling.services.renderer import PageRenderer

logger = logging.getLogger(__name__)

HOME_PATH = "/"
MISSING_TTL_SECONDS = 60
MAX_MISSING_PATHS = 512


class StaticSite:
    """
    In-memory store of pre-rendered pages.

    Paths enumerated at build time are rendered up front. Any other post path
    is served the fallback placeholder until its first generation finishes.
    A path the CMS does not know is answered with 404 for ``missing_ttl``
    seconds, then looked up again; at most ``max_missing`` such paths are kept.
    """

    def __init__(
        self,
        service: PostsService,
        renderer: PageRenderer,
        missing_ttl: float = MISSING_TTL_SECONDS,
        max_missing: int = MAX_MISSING_PATHS,
    ):
        self.service = service
        self.renderer = renderer
        self.pages: Dict[str, str] = {}
        self._pending: Set[str] = set()
        self.missing_ttl = missing_ttl
        self.max_missing = max_missing
        self._missing: Dict[str, float] = {}

    async def render_home(
        self, *, preview: bool = False, ref: Optional[str] = None
    ) -> str:
        props = await self.service.get_home_props(preview=preview, ref=ref)
        state = initial_state(props.posts_pagination, self.service.format_date)
        return self.renderer.render_home(state, preview=props.preview)

    async def render_post(
        self, slug: str, *, preview: bool = False, ref: Optional[str] = None
    ) -> str:
        props = await self.service.get_post_props(slug, preview=preview, ref=ref)
        return self.renderer.render_post(props)

    async def build(self) -> List[str]:
        """Render the listing and every known post path."""
        await self.generate_home()
        static_paths = await self.service.get_static_paths()
        for path in static_paths.paths:
            await self.generate_post(path.removeprefix("/post/"))
        logger.info(f"Static build rendered {len(self.pages)} pages")
        return sorted(self.pages)

    async def generate_home(self) -> str:
        html = await self.render_home()
        self.pages[HOME_PATH] = html
        return html

    async def generate_post(self, slug: str) -> Optional[str]:
        path = post_path(slug)
        try:
            html = await self.render_post(slug)
        except DocumentNotFoundError:
            logger.warning(
                f"No post found for {path}, serving 404 for {self.missing_ttl}s"
            )
            self._remember_missing(path)
            return None
        finally:
            self._pending.discard(path)

        self.pages[path] = html
        self._missing.pop(path, None)
        logger.info(f"Generated {path}")
        return html

    def lookup(self, path: str) -> Optional[str]:
        return self.pages.get(path)

    def is_missing(self, path: str) -> bool:
        seen = self._missing.get(path)
        if seen is None:
            return False
        if time.monotonic() - seen >= self.missing_ttl:
            self._missing.pop(path, None)
            return False
        return True

    def _remember_missing(self, path: str) -> None:
        now = time.monotonic()
        self._missing.pop(path, None)
        self._missing[path] = now
        if len(self._missing) > self.max_missing:
            self._prune_missing(now)

    def _prune_missing(self, now: float) -> None:
        stale_paths = [
            path
            for path, seen in self._missing.items()
            if now - seen >= self.missing_ttl
        ]
        for path in stale_paths:
            self._missing.pop(path, None)
        # oldest first; dict keeps insertion order
        while len(self._missing) > self.max_missing:
            self._missing.pop(next(iter(self._missing)))

    def schedule(self, slug: str) -> bool:
        """Reserve ``slug`` for generation; False if it is built or already queued."""
        path = post_path(slug)
        if path in self.pages or path in self._pending:
            return False
        self._pending.add(path)
        return True

    def render_fallback(self, slug: str) -> str:
        return self.renderer.render_fallback(slug)

    def export(self, directory: Path) -> List[Path]:
        written = []
        for path, html in sorted(self.pages.items()):
            target = directory / path.lstrip("/") / "index.html"
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(html, encoding="utf-8")
            written.append(target)
        logger.info(f"Exported {len(written)} pages to {directory}")
        return written
