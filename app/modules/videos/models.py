from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Text
from app.core.base import Base, TimestampedMixin

class Video(Base, TimestampedMixin):
    __mapper_args__ = {"eager_defaults": True}

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    title: Mapped[str] = mapped_column(String(200), default="")
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # URL fields are only ever replaced whole by the upload handlers
    thumbnail_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    video_url: Mapped[str | None] = mapped_column(Text, nullable=True)
