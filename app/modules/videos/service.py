import os
import secrets
import logging
from contextlib import suppress
from typing import Sequence
from fastapi import UploadFile
from starlette.datastructures import UploadFile as StarletteUploadFile
from starlette.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.errors import BadRequestError, ForbiddenError, InternalFailureError, NotFoundError
from app.modules.videos.aspect import classify_orientation
from app.modules.videos.models import Video
from app.modules.videos.repository import VideoRepository
from app.platform.adapters.storage_memory import InMemoryAssetSink, StoredAsset
from app.platform.provider_registry import ProviderRegistry

logger = logging.getLogger(__name__)

MAX_THUMBNAIL_BYTES = 10 << 20
MAX_VIDEO_BYTES = 1 << 30
THUMBNAIL_TYPES = {"image/png", "image/jpeg"}
VIDEO_TYPES = {"video/mp4"}
CHUNK_SIZE = 1024 * 1024

def media_type_of(upload: UploadFile) -> str:
    return (upload.content_type or "").split(";", 1)[0].strip().lower()

def new_asset_key(content_type: str) -> str:
    """32 random bytes, base64url, plus the MIME subtype as extension."""
    return f"{secrets.token_urlsafe(32)}.{content_type.split('/', 1)[1]}"

def _require_file(upload, field: str) -> UploadFile:
    if not isinstance(upload, StarletteUploadFile):
        raise BadRequestError(f"Invalid {field} file")
    return upload

def _remove(path: str | None) -> None:
    if path:
        with suppress(FileNotFoundError):
            os.remove(path)

class VideoService:
    def __init__(self, session: AsyncSession, registry: ProviderRegistry):
        self.repo = VideoRepository(session)
        self.session = session
        self.registry = registry

    async def _load_owned(self, video_id: str, user_id: str) -> Video:
        video = await self.repo.get(video_id)
        if video is None:
            raise NotFoundError("Couldn't find video")
        if video.user_id != user_id:
            raise ForbiddenError("You do not have permission to modify this video")
        return video

    async def get(self, video_id: str, user_id: str) -> Video:
        return await self._load_owned(video_id, user_id)

    async def list_for_user(self, user_id: str) -> Sequence[Video]:
        return await self.repo.list_for_user(user_id)

    async def upload_thumbnail(self, video_id: str, user_id: str, upload: UploadFile | None) -> Video:
        logger.info(f"uploading thumbnail for video {video_id} by user {user_id}")
        image = _require_file(upload, "thumbnail")
        if image.size is not None and image.size > MAX_THUMBNAIL_BYTES:
            raise BadRequestError("Thumbnail file is too large")
        media_type = media_type_of(image)
        if media_type not in THUMBNAIL_TYPES:
            raise BadRequestError("Unsupported thumbnail file type")

        data = await image.read()
        if len(data) > MAX_THUMBNAIL_BYTES:
            raise BadRequestError("Thumbnail file is too large")

        video = await self._load_owned(video_id, user_id)

        sink = self.registry.asset_sink
        key = video.id if sink.keyed_by_video_id else new_asset_key(media_type)
        await run_in_threadpool(sink.put_bytes, key, data, media_type)

        video.thumbnail_url = sink.url_for(key)
        video = await self.repo.put(video)
        await self.session.commit()
        return video

    async def _stage(self, upload: UploadFile, path: str, limit: int) -> int:
        written = 0
        out = await run_in_threadpool(open, path, "wb")
        try:
            while True:
                chunk = await upload.read(CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > limit:
                    raise BadRequestError("Video file is too large")
                await run_in_threadpool(out.write, chunk)
        finally:
            await run_in_threadpool(out.close)
        return written

    async def upload_video(self, video_id: str, user_id: str, upload: UploadFile | None) -> None:
        # ownership is settled before the payload is looked at
        video = await self._load_owned(video_id, user_id)

        file = _require_file(upload, "video")
        if file.size is not None and file.size > MAX_VIDEO_BYTES:
            raise BadRequestError("Video file is too large")
        media_type = media_type_of(file)
        if media_type not in VIDEO_TYPES:
            raise BadRequestError("Unsupported video file type")

        sink = self.registry.asset_sink
        if not sink.stores_files:
            raise InternalFailureError("The configured asset sink cannot store videos")

        key = new_asset_key(media_type)
        os.makedirs(self.registry.staging_root, exist_ok=True)
        staged_path = os.path.join(self.registry.staging_root, key)
        processed_path = None
        try:
            size = await self._stage(file, staged_path, MAX_VIDEO_BYTES)
            logger.info(f"staged video {video_id} at {staged_path} ({size} bytes)")

            geometry = await self.registry.prober.probe(staged_path)
            orientation = classify_orientation(geometry.width, geometry.height)
            processed_path = await self.registry.repackager.repackage(staged_path)

            full_key = f"{orientation}/{key}"
            await run_in_threadpool(sink.put_file, full_key, processed_path, media_type)
        finally:
            _remove(staged_path)
            _remove(processed_path)

        video.video_url = sink.url_for(full_key)
        await self.repo.put(video)
        await self.session.commit()
        logger.info(f"video {video_id} stored as {full_key} ({geometry.width}x{geometry.height}, {orientation})")

    async def get_thumbnail(self, video_id: str) -> StoredAsset:
        video = await self.repo.get(video_id)
        if video is None:
            raise NotFoundError("Couldn't find video")
        sink = self.registry.asset_sink
        # only the memory sink serves bytes itself; other sinks serve via their URLs
        asset = sink.get(video_id) if isinstance(sink, InMemoryAssetSink) else None
        if asset is None:
            raise NotFoundError("Thumbnail not found")
        return asset
