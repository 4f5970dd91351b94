from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import NullPool
from .config import settings
from .base import Base

# sqlite connections are cheap and must not outlive the event loop that opened them
if settings.DATABASE_DSN.startswith("sqlite"):
    engine = create_async_engine(settings.DATABASE_DSN, poolclass=NullPool)
else:
    engine = create_async_engine(settings.DATABASE_DSN, pool_pre_ping=True)
SessionLocal = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

async def get_session():
    async with SessionLocal() as session:
        yield session

async def init_models():
    ## In dev-only "create_all" mode the app owns the schema; otherwise migrations do.
    if settings.DB_MANAGE == "create_all":
        from app.modules.videos import models  # noqa: F401  registers tables
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
