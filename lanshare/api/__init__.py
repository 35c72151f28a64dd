from fastapi import APIRouter

from lanshare.api.routers import content


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(content.router, tags=["content"])
    return router


__all__ = [
    "create_api_router",
]
