import logging
from fastapi import Request
from app.core.config import Settings
from app.platform.ports.asset_sink import AssetSinkPort
from app.platform.ports.media import MediaProberPort, MediaRepackagerPort
from app.platform.adapters.storage_memory import InMemoryAssetSink
from app.platform.adapters.storage_local import LocalFilesystemStorage
from app.platform.adapters.storage_s3 import S3Storage
from app.platform.adapters.media_ffmpeg import FFprobeProber, FFmpegRepackager

log = logging.getLogger("provider.registry")

class ProviderRegistry:
    """Holds the collaborators handlers need. Built once at startup and kept on
    ``app.state``; tests build one with fakes."""

    def __init__(self, asset_sink: AssetSinkPort, prober: MediaProberPort,
                 repackager: MediaRepackagerPort, staging_root: str):
        self.asset_sink = asset_sink
        self.prober = prober
        self.repackager = repackager
        self.staging_root = staging_root

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProviderRegistry":
        prov = settings.ASSET_SINK_PROVIDER
        if prov == "s3":
            sink = S3Storage(
                bucket=settings.S3_BUCKET,
                region=settings.S3_REGION,
                endpoint_url=settings.S3_ENDPOINT_URL,
                access_key=settings.S3_ACCESS_KEY,
                secret_key=settings.S3_SECRET_KEY,
            )
        elif prov == "memory":
            sink = InMemoryAssetSink(f"{settings.PUBLIC_BASE_URL}{settings.API_PREFIX}/thumbnails")
        else:
            sink = LocalFilesystemStorage(settings.ASSETS_ROOT, f"{settings.PUBLIC_BASE_URL}/assets")
        log.info(f"Asset sink provider={prov} ({sink.__class__.__name__})")
        return cls(
            asset_sink=sink,
            prober=FFprobeProber(settings.FFPROBE_BIN, settings.MEDIA_TOOL_TIMEOUT_SECONDS),
            repackager=FFmpegRepackager(settings.FFMPEG_BIN, settings.MEDIA_TOOL_TIMEOUT_SECONDS),
            staging_root=settings.STAGING_ROOT,
        )

def get_registry(request: Request) -> ProviderRegistry:
    return request.app.state.registry
