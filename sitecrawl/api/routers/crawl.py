import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from sitecrawl.domain.crawl_request import CrawlRequest
from sitecrawl.exceptions import CrawlRequestValidationError
from sitecrawl.services.crawl_executor import CrawlExecutor
from sitecrawl.services.crawl_history import InMemoryCrawlHistory

logger = logging.getLogger(__name__)


class CrawlRequestBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: str
    depth: int = 1
    max_pages: int = Field(10, alias="maxPages")
    extract_content: bool = Field(False, alias="extractContent")
    follow_navigation: bool = Field(False, alias="followNavigation")


def create_crawl_router(crawl_executor: CrawlExecutor, crawl_history: InMemoryCrawlHistory, max_content_chars: int = 0):
    router = APIRouter(tags=["Crawl"])

    @router.post("/crawl")
    def crawl(req: CrawlRequestBody):
        # reject bad input before anything touches the network
        try:
            request = CrawlRequest.create(
                req.url,
                depth=req.depth,
                max_pages=req.max_pages,
                extract_content=req.extract_content,
                follow_navigation=req.follow_navigation,
            )
        except CrawlRequestValidationError as e:
            raise HTTPException(status_code=400, detail=e.message)

        entry = crawl_history.start(request.url)
        try:
            result = crawl_executor.crawl(request)
        except Exception as e:
            logger.exception("Crawl of %s failed", request.url)
            crawl_history.fail(entry.id, error=str(e))
            return JSONResponse(status_code=500, content={"error": "crawl failed", "message": str(e)})

        crawl_history.complete(entry.id, result)
        return result.to_dict(max_content_chars=max_content_chars or None)

    return router
