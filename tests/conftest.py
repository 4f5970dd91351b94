"""Shared fixtures for the test suite.

The app runs against a throwaway SQLite database and a provider registry whose
media tools are fakes, so no ffmpeg, Postgres or S3 is needed.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from datetime import datetime, timedelta, timezone

_TMP = tempfile.mkdtemp(prefix="vidhost-tests-")
os.environ["DATABASE_DSN"] = f"sqlite+aiosqlite:///{_TMP}/test.db"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["ENV"] = "dev"
os.environ["ASSET_SINK_PROVIDER"] = "local"
os.environ["ASSETS_ROOT"] = os.path.join(_TMP, "assets")
os.environ["STAGING_ROOT"] = os.path.join(_TMP, "staging")
os.environ["PUBLIC_BASE_URL"] = "http://test"

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt

from app.core.base import Base
from app.core.config import settings
from app.core.db import SessionLocal, engine
from app.core.errors import MediaToolError
from app.main import app
from app.modules.videos.models import Video
from app.modules.videos.repository import VideoRepository
from app.platform.adapters.storage_local import LocalFilesystemStorage
from app.platform.adapters.storage_memory import InMemoryAssetSink
from app.platform.ports.media import Geometry
from app.platform.provider_registry import ProviderRegistry

JWT_SECRET = "test-secret"
OWNER_ID = "user-owner"
OTHER_ID = "user-other"


def make_token(user_id: str, *, secret: str = JWT_SECRET, expires_in: int = 3600) -> str:
    now = datetime.now(timezone.utc)
    claims = {"sub": user_id, "iat": now, "exp": now + timedelta(seconds=expires_in)}
    return jwt.encode(claims, secret, algorithm="HS256")


def auth(user_id: str = OWNER_ID) -> dict:
    return {"Authorization": f"Bearer {make_token(user_id)}"}


# ---------------------------------------------------------------------------
# Media tool fakes
# ---------------------------------------------------------------------------


class FakeProber:
    def __init__(self, width: int = 1920, height: int = 1080, fail: bool = False):
        self.geometry = Geometry(width=width, height=height)
        self.fail = fail
        self.calls: list[str] = []

    async def probe(self, path: str) -> Geometry:
        self.calls.append(path)
        assert os.path.exists(path), "probe ran before the upload was staged"
        if self.fail:
            raise MediaToolError("ffprobe", "failed with exit code 1", "Invalid data found when processing input")
        return self.geometry


class FakeRepackager:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.outputs: list[str] = []

    async def repackage(self, path: str) -> str:
        if self.fail:
            raise MediaToolError("ffmpeg", "failed with exit code 1", "moov atom not found")
        out_path = f"{path}.processed.mp4"
        with open(path, "rb") as src, open(out_path, "wb") as dst:
            dst.write(b"faststart:" + src.read())
        self.outputs.append(out_path)
        return out_path


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
async def db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def seed_video():
    async def _seed(video_id: str = "vid-1", user_id: str = OWNER_ID, title: str = "Boots") -> str:
        async with SessionLocal() as session:
            await VideoRepository(session).create(id=video_id, user_id=user_id, title=title)
            await session.commit()
        return video_id
    return _seed


@pytest.fixture
def fetch_video():
    async def _fetch(video_id: str) -> Video | None:
        async with SessionLocal() as session:
            return await VideoRepository(session).get(video_id)
    return _fetch


# ---------------------------------------------------------------------------
# Providers and client
# ---------------------------------------------------------------------------


@pytest.fixture
def staging_dir(tmp_path):
    path = tmp_path / "staging"
    path.mkdir()
    return path


@pytest.fixture
def prober():
    return FakeProber()


@pytest.fixture
def repackager():
    return FakeRepackager()


@pytest.fixture
def memory_sink():
    return InMemoryAssetSink("http://test/api/thumbnails")


@pytest.fixture
def local_sink(tmp_path):
    return LocalFilesystemStorage(str(tmp_path / "public"), "http://test/assets")


@pytest.fixture
def public_sink():
    """Local sink over the directory the app serves at /assets."""
    sink = LocalFilesystemStorage(settings.ASSETS_ROOT, "http://test/assets")
    yield sink
    shutil.rmtree(sink.root, ignore_errors=True)


@pytest.fixture
def registry(memory_sink, prober, repackager, staging_dir):
    return ProviderRegistry(
        asset_sink=memory_sink, prober=prober, repackager=repackager, staging_root=str(staging_dir)
    )


@pytest.fixture
async def client(registry):
    """Async test client for the FastAPI app, wired to ``registry``."""
    app.state.registry = registry
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


def pytest_sessionfinish(session, exitstatus):
    shutil.rmtree(_TMP, ignore_errors=True)
