"""FastAPI application factory.

API layer:
- Validates inputs, pulls samples from the feed
- Returns chart payloads for the UI
- Forbidden: pixel rendering, date formatting
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rating_history.api.deps import get_feed

__all__ = ["app", "create_app", "get_feed"]


def create_app() -> FastAPI:
    """Create FastAPI application.

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(
        title="Rating History API",
        description="Rating history aggregation for player charts",
        version="0.1.0",
    )

    # Add CORS middleware for UI access
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routes
    from rating_history.api.routes import history

    app.include_router(history.router, prefix="/api")

    # Health check endpoint
    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


# Default app instance
app = create_app()
