import os
import shutil
import logging
from urllib.parse import quote
from app.platform.ports.asset_sink import AssetSinkPort
from app.core.errors import StorageError

log = logging.getLogger("storage.local")

class LocalFilesystemStorage(AssetSinkPort):
    keyed_by_video_id = False
    stores_files = True

    def __init__(self, root: str, base_url: str):
        self.root = os.path.abspath(root)
        self.base_url = base_url.rstrip("/")
        os.makedirs(self.root, exist_ok=True)

    def _path(self, key: str) -> str:
        safe = key.replace("..", "").strip("/")
        return os.path.join(self.root, safe)

    def put_bytes(self, key: str, data: bytes, content_type: str) -> None:
        path = self._path(key)
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, "wb") as f:
                f.write(data)
        except OSError as e:
            raise StorageError(f"Could not write asset {key}: {e}") from e
        log.debug(f"wrote {path} ({len(data)} bytes)")

    def put_file(self, key: str, path: str, content_type: str) -> None:
        dest = self._path(key)
        try:
            os.makedirs(os.path.dirname(dest), exist_ok=True)
            shutil.copyfile(path, dest)
        except OSError as e:
            raise StorageError(f"Could not write asset {key}: {e}") from e
        log.debug(f"copied {path} -> {dest}")

    def url_for(self, key: str) -> str:
        # served by the /assets static mount
        return f"{self.base_url}/{quote(key.strip('/'))}"

    def delete(self, key: str) -> None:
        path = self._path(key)
        if os.path.exists(path):
            os.remove(path)
