import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import RedirectResponse

from spacetraveling import dependencies as deps
from spacetraveling.clients.prismic import DocumentNotFoundError, PrismicClient
from spacetraveling.services.posts_service import post_path
from spacetraveling.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.get("/preview")
async def enter_preview(
    token: Optional[str] = Query(None),
    document_id: Optional[str] = Query(None, alias="documentId"),
    client: PrismicClient = Depends(deps.get_prismic_client),
    current_settings: Settings = Depends(deps.get_settings),
):
    """
    Start a preview session for the release behind ``token``.
    Redirects to the previewed document.
    """
    if not token:
        raise HTTPException(status_code=401, detail="Invalid preview token")

    location = "/"
    if document_id:
        try:
            doc = await client.get_by_id(document_id, ref=token)
        except DocumentNotFoundError:
            raise HTTPException(status_code=404, detail="Document not found")
        except Exception as e:
            logger.error(f"Failed to resolve preview document {document_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to start preview")
        if doc.get("type") == "post" and doc.get("uid"):
            location = post_path(doc["uid"])

    logger.info(f"Entering preview mode, redirecting to {location}")
    response = RedirectResponse(url=location, status_code=307)
    response.set_cookie(
        current_settings.PREVIEW_COOKIE_NAME, token, httponly=True, samesite="lax"
    )
    return response


@router.api_route(
    "/exit-preview", methods=["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD"]
)
async def exit_preview(current_settings: Settings = Depends(deps.get_settings)):
    """Clear the preview session and go back home."""
    response = RedirectResponse(url="/", status_code=307)
    response.delete_cookie(current_settings.PREVIEW_COOKIE_NAME)
    return response
