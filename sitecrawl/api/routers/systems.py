from fastapi import APIRouter

from sitecrawl import config


def create_systems_router(container_env: dict):
    """Create the systems router: liveness plus the effective crawl settings."""
    router = APIRouter(prefix="/systems", tags=["System"])

    @router.get("/health")
    def health():
        return {"status": "ok", "service": "sitecrawl"}

    @router.get("/config")
    def get_config():
        """Return the hard crawl limits and the container environment values."""
        return {
            "limits": {
                "maxDepth": config.MAX_DEPTH,
                "maxPages": config.MAX_PAGES,
                "maxChildrenPerNode": container_env.get(
                    "SITECRAWL_MAX_CHILDREN_PER_NODE", config.DEFAULT_MAX_CHILDREN_PER_NODE
                ),
            },
            "environment": {
                key: str(value) if value is not None else None
                for key, value in container_env.items()
            },
        }

    return router
