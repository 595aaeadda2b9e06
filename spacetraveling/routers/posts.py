import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse

from spacetraveling import dependencies as deps
from spacetraveling.clients.prismic import InvalidCursorError
from spacetraveling.schemas.blog import ListingState
from spacetraveling.services.listing import PostListing
from spacetraveling.services.posts_service import PostsService
from spacetraveling.services.renderer import PageRenderer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.get("/posts", response_model=ListingState)
async def load_more_posts(
    request: Request,
    cursor: str = Query(..., min_length=1),
    page: int = Query(1, ge=1),
    service: PostsService = Depends(deps.get_posts_service),
    renderer: PageRenderer = Depends(deps.get_renderer),
):
    """Fetch the page behind ``cursor``; htmx callers get an HTML fragment."""
    listing = PostListing(
        ListingState(next_page=cursor, current_page=page),
        fetch_page=service.load_page,
        formatter=service.format_date,
    )
    try:
        state = await listing.load_more()
    except InvalidCursorError as e:
        logger.warning(f"Rejected pagination cursor: {e}")
        raise HTTPException(status_code=400, detail="Invalid pagination cursor")
    except Exception as e:
        logger.error(f"Unexpected error loading page {page + 1}: {e}")
        raise HTTPException(status_code=500, detail="Failed to load more posts")

    if request.headers.get("HX-Request"):
        return HTMLResponse(renderer.render_post_items(state))
    return state
