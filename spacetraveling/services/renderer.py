"""
HTML page rendering for the blog.
Handles Jinja2 template loading and the per-page view context.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from spacetraveling.schemas.blog import ListingState, PostProps
from spacetraveling.services.richtext import as_html
from spacetraveling.settings import Settings, settings
from spacetraveling.utils import calculate_reading_time, format_publication_date

EXIT_PREVIEW_URL = "/api/exit-preview"
LOAD_MORE_URL = "/api/posts"
EDIT_INFORMATION_CLASS = "editInformation"


class PageRenderer:
    """
    Renders blog pages using Jinja2 templates.

    Usage:
        renderer = PageRenderer()
        html = renderer.render_home(state, preview=False)
    """

    def __init__(
        self, settings_obj: Settings = settings, templates_dir: Optional[Path] = None
    ):
        if templates_dir is None:
            templates_dir = Path(__file__).resolve().parent.parent / "templates"

        self.settings = settings_obj
        self.templates_dir = templates_dir
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.globals.update(
            site_name=settings_obj.SITE_NAME,
            exit_preview_url=EXIT_PREVIEW_URL,
            load_more_url=LOAD_MORE_URL,
        )

    def render_home(self, state: ListingState, preview: bool = False) -> str:
        template = self.env.get_template("home.html")
        return template.render(listing=state, preview=preview)

    def render_post_items(self, state: ListingState) -> str:
        """Render the listing fragment returned to the load more button."""
        template = self.env.get_template("partials/post_items.html")
        return template.render(listing=state)

    def render_post(self, props: PostProps) -> str:
        template = self.env.get_template("post.html")
        return template.render(**self.post_context(props))

    def render_fallback(self, slug: str) -> str:
        template = self.env.get_template("fallback.html")
        return template.render(slug=slug)

    def post_context(self, props: PostProps) -> Dict[str, Any]:
        post = props.post
        minutes = calculate_reading_time(
            post.data.content, self.settings.WORDS_PER_MINUTE
        )
        # an unedited post was last published when it was first published
        edited_at = post.last_publication_date or post.first_publication_date

        return {
            "post": post,
            "navigation": props.navigation,
            "preview": props.preview,
            "reading_time": f"{minutes} min",
            "published_at": self._format(post.first_publication_date),
            "edited_date": self._format(edited_at),
            "edited_time": self._format(edited_at, self.settings.TIME_FORMAT),
            "edit_class": (
                EDIT_INFORMATION_CLASS if not post.last_publication_date else None
            ),
            "sections": [
                {
                    "heading": section.heading,
                    "html": as_html(block.model_dump() for block in section.body),
                }
                for section in post.data.content
            ],
            "utterances_repo": self.settings.UTTERANCES_REPO,
        }

    def _format(self, value: Optional[str], pattern: Optional[str] = None):
        return format_publication_date(
            value, pattern or self.settings.DATE_FORMAT, self.settings.DATE_LOCALE
        )
