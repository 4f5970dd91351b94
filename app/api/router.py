from fastapi import APIRouter
from app.modules.videos.router import router as videos_router

api_router = APIRouter()
# videos_router carries both /videos/... and /thumbnails/...
api_router.include_router(videos_router, tags=["videos"])

@api_router.get("/health", tags=["health"])
async def health():
    return {"status": "ok"}
