import logging
from dataclasses import dataclass
from urllib.parse import quote
from app.platform.ports.asset_sink import AssetSinkPort
from app.core.errors import StorageError

log = logging.getLogger("storage.memory")

@dataclass(frozen=True)
class StoredAsset:
    data: bytes
    content_type: str

class InMemoryAssetSink(AssetSinkPort):
    """Volatile process-local sink for thumbnails. Entries are keyed by video id
    and served back through the thumbnails route. There is no locking: the last
    writer wins. Video files are refused, nothing could serve them."""

    keyed_by_video_id = True
    stores_files = False

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")
        self._assets: dict[str, StoredAsset] = {}

    def put_bytes(self, key: str, data: bytes, content_type: str) -> None:
        self._assets[key] = StoredAsset(data=bytes(data), content_type=content_type)
        log.debug(f"stored key={key} bytes={len(data)} type={content_type}")

    def put_file(self, key: str, path: str, content_type: str) -> None:
        raise StorageError(f"In-memory sink does not store files ({key})")

    def get(self, key: str) -> StoredAsset | None:
        return self._assets.get(key)

    def url_for(self, key: str) -> str:
        return f"{self.base_url}/{quote(key, safe='')}"

    def delete(self, key: str) -> None:
        self._assets.pop(key, None)
