from fastapi import APIRouter

from .posts import router as posts_router

api_router = APIRouter()
api_router.include_router(posts_router, prefix="/posts", tags=["posts"])

health_router = APIRouter()


@health_router.get("/health", summary="헬스 체크")
async def health() -> dict[str, str]:
    return {"status": "ok"}
