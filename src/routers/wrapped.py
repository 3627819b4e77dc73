"""
Wrapped statistics and slide preview endpoints.

- GET /api/github/stats: statistics JSON for the signed-in caller or any user
- GET /api/og/{username}/{slide}: 1200x630 PNG preview of one slide
"""

import asyncio
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from config import settings, logger
from miners.errors import NotFound
from miners.validation import validate_username
from routers.session import Session, current_session
from visualization.plotter import share_card, slide_content

router = APIRouter()


def _is_own_profile(username: str, session: Optional[Session]) -> bool:
    if session is None or not session.username:
        return False
    return username.lower() == session.username.lower()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.get("/github/stats")
async def get_stats(
    request: Request,
    username: Optional[str] = Query(default=None),
    session: Optional[Session] = Depends(current_session),
):
    """Compute the wrapped statistics of ``username``, the caller by default."""
    if session is None or not session.access_token:
        return _error(401, "Unauthorized. Please sign in with GitHub.")

    username = username or session.username
    if not username:
        return _error(400, "Username is required.")
    if not validate_username(username):
        return _error(400, "Invalid username.")

    stats_service = request.app.state.stats_service
    try:
        stats = await stats_service(
            username, session.access_token, _is_own_profile(username, session)
        )
    except NotFound as e:
        logger.info({"message": "Stats requested for unknown user", "username": username})
        return _error(404, str(e))
    except Exception as e:
        logger.error(
            {
                "message": "Error fetching GitHub stats",
                "username": username,
                "error": str(e),
            }
        )
        return _error(500, str(e) or "Failed to fetch GitHub stats")

    return JSONResponse(content=stats.model_dump(mode="json", by_alias=True))


@router.get("/og")
async def get_share_card(request: Request):
    """Render the generic share card of the current year."""
    year = datetime.now(timezone.utc).year
    try:
        image = await asyncio.to_thread(
            request.app.state.renderer.render, share_card(year), year
        )
    except Exception as e:
        logger.error({"message": "Error generating share card", "error": str(e)})
        return PlainTextResponse("Error generating image", status_code=500)

    return Response(content=image, media_type="image/png")


@router.get("/og/{username}/{slide}")
async def get_slide_preview(
    request: Request,
    username: str,
    slide: int = Path(ge=1, le=8),
    session: Optional[Session] = Depends(current_session),
):
    """Render the preview image of one slide for ``username``."""
    if not validate_username(username):
        return PlainTextResponse("Invalid username", status_code=400)

    token = (session.access_token if session else None) or settings.fallback_token
    year = datetime.now(timezone.utc).year
    try:
        stats = await request.app.state.stats_service(
            username, token, _is_own_profile(username, session)
        )
        content = slide_content(slide, stats, year)
        image = await asyncio.to_thread(
            request.app.state.renderer.render, content, year
        )
    except Exception as e:
        logger.error(
            {
                "message": "Error generating preview image",
                "username": username,
                "slide": slide,
                "error": str(e),
            }
        )
        return PlainTextResponse("Error generating image", status_code=500)

    return Response(content=image, media_type="image/png")
