from datetime import datetime
from pydantic import BaseModel, ConfigDict

class VideoOut(BaseModel):
    id: str
    user_id: str
    title: str
    description: str | None
    thumbnail_url: str | None
    video_url: str | None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
