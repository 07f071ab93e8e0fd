import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from sitecrawl.api.routers import (
    create_crawl_router,
    create_history_router,
    create_systems_router,
)
from sitecrawl.container import Container

logger = logging.getLogger(__name__)


def create_app(container: Container = None) -> FastAPI:
    """Build the FastAPI application from the DI container."""
    if container is None:
        container = Container()
    crawl_history = container.crawl_history()

    app = FastAPI(title="SiteCrawl", version="0.1.0")

    @app.exception_handler(RequestValidationError)
    async def _malformed_crawl_body(request: Request, exc: RequestValidationError):
        # an unreadable crawl body is a server-side failure for this endpoint
        if request.url.path == "/crawl":
            logger.warning("Malformed crawl request body: %s", exc.errors())
            return JSONResponse(
                status_code=500,
                content={"error": "crawl failed", "message": "malformed request body"},
            )
        return await request_validation_exception_handler(request, exc)

    app.include_router(
        create_crawl_router(
            container.crawl_executor(),
            crawl_history,
            max_content_chars=int(container.config.SITECRAWL_MAX_CONTENT_CHARS() or 0),
        )
    )
    app.include_router(create_history_router(crawl_history))
    app.include_router(create_systems_router(container.config()))
    return app
