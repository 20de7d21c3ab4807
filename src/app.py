"""
Main FastAPI Application

API server for the brand visibility audit.
"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from config.database import close_connection, create_redis_client
from config.settings import settings
from storage.audit_store import AuditStore
from storage.prompt_store import get_prompt_store
from utils.cache import ResponseCache
from utils.rate_limit import DailyRateLimiter

from src.routes import audit_routes, health_routes

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%H:%M:%S'
)

logger = logging.getLogger(__name__)


def init_app_state(app: FastAPI, redis_client=None) -> None:
    """Attach the shared cache, store and rate limiter to the application."""
    app.state.redis_client = redis_client
    app.state.response_cache = ResponseCache(redis_client)
    app.state.audit_store = AuditStore(redis_client)
    app.state.rate_limiter = DailyRateLimiter(redis_client)


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="API for auditing brand visibility across AI answer engines"
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-RateLimit-Remaining", "X-RateLimit-Reset"],
    )

    # Include routers
    app.include_router(health_routes.router)
    app.include_router(audit_routes.router)

    # Usable before startup (e.g. in tests); replaced once Redis is reached
    init_app_state(app)

    @app.on_event("startup")
    async def startup_event():
        """Initialize application resources on startup."""
        prompt_store = get_prompt_store()
        logger.info(f"PromptStore initialized with {len(prompt_store.prompt_templates)} categories")

        redis_client = create_redis_client()
        if redis_client is not None:
            logger.info("✅ Redis: Connected")
        else:
            logger.warning("⚠️  Redis: Not connected - caching and audit history disabled")

        init_app_state(app, redis_client)

    @app.on_event("shutdown")
    async def shutdown_event():
        """Release the Redis connection pool."""
        close_connection(app.state.redis_client)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
