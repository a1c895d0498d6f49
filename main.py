import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from brigade_site.config import settings
from brigade_site.database import init_models
from brigade_site.exception_handlers import register_exception_handlers
from brigade_site.middleware.language import LanguageMiddleware
from brigade_site.middleware.logging import RequestIdFilter, RequestLoggingMiddleware
from brigade_site.routes import categories, navigation, pages, posts

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - [%(request_id)s] %(message)s")
for handler in logging.getLogger().handlers:
    handler.addFilter(RequestIdFilter())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.environment != "production":
        await init_models()
    yield


def create_app() -> FastAPI:
    """Create the FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        description="Bilingual content site for a volunteer fire brigade",
        debug=settings.debug,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # Starlette runs middleware in reverse order of registration
    app.add_middleware(LanguageMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    app.include_router(navigation.router, prefix="/api", tags=["Navigation"])
    app.include_router(categories.router, prefix="/api", tags=["Categories"])
    app.include_router(pages.router, tags=["Pages"])
    # Catch-all /{category}/{slug} must stay last
    app.include_router(posts.router, tags=["Posts"])

    if settings.debug:
        logger.info(f"Running in {settings.environment} mode")
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.debug)
