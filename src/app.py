"""
Main Application Entry Point.

Builds the FastAPI application serving the wrapped statistics and the slide
previews, wiring in:
- The session provider resolving the signed-in caller
- The statistics service computing GitHubStats per request
- The slide preview renderer

Run directly to serve the API with uvicorn on the configured host and port.
"""

from typing import Awaitable, Callable, Optional

import uvicorn
from fastapi import FastAPI

from config import settings, logger
from analyzers.stats import compute_stats
from routers import health, wrapped
from routers.session import HeaderSessionProvider, SessionProvider
from visualization.plotter import SlidePreviewRenderer


def create_app(
    session_provider: Optional[SessionProvider] = None,
    stats_service: Optional[Callable[..., Awaitable]] = None,
    renderer: Optional[SlidePreviewRenderer] = None,
) -> FastAPI:
    """
    Create the API application.

    Args:
        session_provider (Optional[SessionProvider]): Caller session source,
            forwarded headers by default
        stats_service (Optional[Callable[..., Awaitable]]): Coroutine function
            ``(username, token, is_own_profile) -> GitHubStats``
        renderer (Optional[SlidePreviewRenderer]): Preview image renderer

    Returns:
        FastAPI: The configured application
    """
    app = FastAPI(title=settings.app_name, version="0.1.0")
    app.state.session_provider = session_provider or HeaderSessionProvider()
    app.state.stats_service = stats_service or compute_stats
    app.state.renderer = renderer or SlidePreviewRenderer()

    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(wrapped.router, prefix="/api", tags=["wrapped"])

    logger.debug("application created")
    return app


app = create_app()


if __name__ == "__main__":
    logger.info("Starting application ...")
    uvicorn.run(app, host=settings.host, port=settings.port)
