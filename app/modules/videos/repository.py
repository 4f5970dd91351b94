from typing import Sequence
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.modules.videos.models import Video

class VideoRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, *, id: str, user_id: str, title: str = "", description: str | None = None) -> Video:
        obj = Video(id=id, user_id=user_id, title=title, description=description)
        self.session.add(obj)
        await self.session.flush()
        return obj

    async def get(self, video_id: str) -> Video | None:
        res = await self.session.execute(select(Video).where(Video.id == video_id))
        return res.scalar_one_or_none()

    async def list_for_user(self, user_id: str) -> Sequence[Video]:
        q = select(Video).where(Video.user_id == user_id).order_by(Video.created_at.desc())
        res = await self.session.execute(q)
        return res.scalars().all()

    async def put(self, video: Video) -> Video:
        obj = await self.session.merge(video)
        await self.session.flush()
        return obj
