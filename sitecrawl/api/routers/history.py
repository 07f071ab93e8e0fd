from typing import Optional

from fastapi import APIRouter, HTTPException

from sitecrawl.services.crawl_history import InMemoryCrawlHistory


def create_history_router(crawl_history: InMemoryCrawlHistory):
    router = APIRouter(prefix="/history", tags=["History"])

    @router.get("")
    def list_history(limit: Optional[int] = 20):
        """Return the last `limit` crawl invocations (most recent first)."""
        return [e.to_dict() for e in crawl_history.list(limit=limit)]

    @router.get("/{entry_id}")
    def get_entry(entry_id: str):
        entry = crawl_history.get(entry_id)
        if entry is None:
            raise HTTPException(status_code=404, detail="history entry not found")
        return entry.to_dict()

    @router.delete("")
    def clear_history():
        return {"status": "cleared", "count": crawl_history.clear()}

    return router
