from typing import Protocol, runtime_checkable

@runtime_checkable
class AssetSinkPort(Protocol):
    # True when thumbnails are stored under the video id rather than a random key
    keyed_by_video_id: bool
    # False when the sink only holds small in-process blobs and cannot take video files
    stores_files: bool

    def put_bytes(self, key: str, data: bytes, content_type: str) -> None: ...

    def put_file(self, key: str, path: str, content_type: str) -> None: ...

    def url_for(self, key: str) -> str: ...

    def delete(self, key: str) -> None: ...
