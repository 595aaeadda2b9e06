import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from fastapi.responses import HTMLResponse

from spacetraveling import dependencies as deps
from spacetraveling.clients.prismic import DocumentNotFoundError
from spacetraveling.services.posts_service import post_path
from spacetraveling.services.static_site import HOME_PATH, StaticSite

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def home(
    site: StaticSite = Depends(deps.get_static_site),
    preview_ref: Optional[str] = Depends(deps.get_preview_ref),
):
    """Listing page, pre-rendered unless a preview session is active."""
    try:
        if preview_ref:
            return HTMLResponse(await site.render_home(preview=True, ref=preview_ref))
        html = site.lookup(HOME_PATH) or await site.generate_home()
        return HTMLResponse(html)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error rendering home: {e}")
        raise HTTPException(status_code=500, detail="Failed to render posts")


@router.get("/post/{slug}", response_class=HTMLResponse)
async def post(
    slug: str,
    background_tasks: BackgroundTasks,
    site: StaticSite = Depends(deps.get_static_site),
    preview_ref: Optional[str] = Depends(deps.get_preview_ref),
):
    """Post page; unknown paths get the fallback while they are generated."""
    if preview_ref:
        try:
            return HTMLResponse(
                await site.render_post(slug, preview=True, ref=preview_ref)
            )
        except DocumentNotFoundError:
            raise HTTPException(status_code=404, detail="Post not found")
        except Exception as e:
            logger.error(f"Unexpected error previewing post {slug}: {e}")
            raise HTTPException(status_code=500, detail="Failed to render post")

    path = post_path(slug)
    html = site.lookup(path)
    if html:
        return HTMLResponse(html)
    if site.is_missing(path):
        raise HTTPException(status_code=404, detail="Post not found")

    if site.schedule(slug):
        logger.info(f"Scheduling generation of {path}")
        background_tasks.add_task(site.generate_post, slug)
    return HTMLResponse(site.render_fallback(slug))
