import logging
from typing import Awaitable, Callable, Iterable, Optional, Tuple

from spacetraveling.schemas.blog import (
    ListingState,
    ListingStatus,
    PostPagination,
    PostSummary,
)

logger = logging.getLogger(__name__)

PageFetcher = Callable[[str], Awaitable[PostPagination]]
DateFormatter = Callable[[Optional[str]], Optional[str]]


def format_posts(
    posts: Iterable[PostSummary], formatter: DateFormatter
) -> Tuple[PostSummary, ...]:
    return tuple(
        post.model_copy(
            update={"first_publication_date": formatter(post.first_publication_date)}
        )
        for post in posts
    )


def initial_state(pagination: PostPagination, formatter: DateFormatter) -> ListingState:
    return ListingState(
        posts=format_posts(pagination.results, formatter),
        next_page=pagination.next_page,
        current_page=1,
        status=ListingStatus.IDLE if pagination.next_page else ListingStatus.EXHAUSTED,
    )


class PostListing:
    """
    View state behind the "load more" button.

    Each transition replaces ``state``; posts are only ever appended. A call
    made while a previous one is in flight is dropped.

    This models a single client's view. ``/api/posts`` rebuilds it from the
    cursor on every request, so there the double-click guard is the button's
    ``hx-disabled-elt``, not the ``loading`` status.
    """

    def __init__(
        self, state: ListingState, fetch_page: PageFetcher, formatter: DateFormatter
    ):
        self.state = state
        self.fetch_page = fetch_page
        self.formatter = formatter

    async def load_more(self) -> ListingState:
        current = self.state
        if not current.next_page:
            logger.info("No more posts to load")
            return current
        if current.status == ListingStatus.LOADING:
            logger.info("Load more already in progress, ignoring")
            return current

        self.state = current.model_copy(update={"status": ListingStatus.LOADING})
        try:
            pagination = await self.fetch_page(current.next_page)
        except Exception:
            self.state = current.model_copy(update={"status": ListingStatus.ERROR})
            raise

        new_posts = format_posts(pagination.results, self.formatter)
        self.state = ListingState(
            posts=current.posts + new_posts,
            next_page=pagination.next_page,
            current_page=current.current_page + 1,
            status=(
                ListingStatus.IDLE if pagination.next_page else ListingStatus.EXHAUSTED
            ),
        )
        logger.debug(
            f"Loaded page {self.state.current_page} with {len(new_posts)} posts"
        )
        return self.state
