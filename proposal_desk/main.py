"""
Main FastAPI application.

WHY: This is the entry point for the application. It configures logging,
middleware, routes and exception handlers.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from proposal_desk.api import proposals, sections
from proposal_desk.core.config import settings
from proposal_desk.core.exception_handlers import register_exception_handlers
from proposal_desk.core.logging import configure_logging
from proposal_desk.middleware import RequestContextMiddleware


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    WHY: Factory pattern allows easier testing with different configurations.

    Returns:
        Configured FastAPI application instance
    """
    configure_logging()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Proposals and proposal sections, scoped to their owners",
        version=settings.VERSION,
        docs_url=f"{settings.API_V1_PREFIX}/docs",
        redoc_url=f"{settings.API_V1_PREFIX}/redoc",
        openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    )

    register_exception_handlers(app)

    # Sets the request id seen by routes, repositories and log records
    app.add_middleware(RequestContextMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", tags=["health"])
    async def health_check() -> dict:
        """Liveness probe; does not touch the database or require auth."""
        return {
            "status": "healthy",
            "version": settings.VERSION,
        }

    @app.get("/", tags=["root"])
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "name": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "docs": f"{settings.API_V1_PREFIX}/docs",
        }

    app.include_router(proposals.router, prefix=settings.API_V1_PREFIX)
    app.include_router(sections.router, prefix=settings.API_V1_PREFIX)

    return app


# Create app instance
# WHY: Module-level instance so `uvicorn proposal_desk.main:app` can import it.
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "proposal_desk.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="info" if settings.DEBUG else "warning",
    )
