"""API router assembly."""

from fastapi import APIRouter

from easyride.interfaces.http.routers import recharge


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(recharge.router, prefix="/recharge", tags=["recharge"])
    return router


__all__ = [
    "create_api_router",
]
