from fastapi import APIRouter, Depends, File, Request, Response, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.db import get_session
from app.core.errors import BadRequestError
from app.core.security import get_current_user_id
from app.modules.videos.schemas import VideoOut
from app.modules.videos.service import VideoService
from app.platform.provider_registry import get_registry

router = APIRouter()

def svc(request: Request, session: AsyncSession = Depends(get_session)) -> VideoService:
    return VideoService(session, get_registry(request))

def valid_video_id(video_id: str) -> str:
    if not video_id.strip():
        raise BadRequestError("Invalid video ID")
    return video_id

@router.get("/videos", response_model=list[VideoOut])
async def list_videos(
    user_id: str = Depends(get_current_user_id),
    service: VideoService = Depends(svc),
):
    return await service.list_for_user(user_id)

@router.get("/videos/{video_id}", response_model=VideoOut)
async def get_video(
    video_id: str = Depends(valid_video_id),
    user_id: str = Depends(get_current_user_id),
    service: VideoService = Depends(svc),
):
    return await service.get(video_id, user_id)

@router.post("/videos/{video_id}/thumbnail", response_model=VideoOut)
async def upload_thumbnail(
    video_id: str = Depends(valid_video_id),
    user_id: str = Depends(get_current_user_id),
    thumbnail: UploadFile | None = File(None),
    service: VideoService = Depends(svc),
):
    return await service.upload_thumbnail(video_id, user_id, thumbnail)

@router.post("/videos/{video_id}/upload")
async def upload_video(
    video_id: str = Depends(valid_video_id),
    user_id: str = Depends(get_current_user_id),
    video: UploadFile | None = File(None),
    service: VideoService = Depends(svc),
):
    await service.upload_video(video_id, user_id, video)
    return None

@router.get("/thumbnails/{video_id}")
async def get_thumbnail(
    video_id: str = Depends(valid_video_id),
    service: VideoService = Depends(svc),
):
    asset = await service.get_thumbnail(video_id)
    return Response(
        content=asset.data,
        media_type=asset.content_type,
        headers={"Cache-Control": "no-store"},
    )
