import logging
import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError
from app.platform.ports.asset_sink import AssetSinkPort
from app.core.errors import StorageError

log = logging.getLogger("storage.s3")

class S3Storage(AssetSinkPort):
    keyed_by_video_id = False
    stores_files = True

    def __init__(self, bucket: str, region: str, endpoint_url: str | None = None,
                 access_key: str | None = None, secret_key: str | None = None, client=None):
        self.bucket = bucket
        self.region = region
        if client is None:
            session = boto3.session.Session(
                aws_access_key_id=access_key,
                aws_secret_access_key=secret_key,
                region_name=region,
            )
            client = session.client(
                "s3",
                endpoint_url=endpoint_url,
                config=Config(signature_version="s3v4"),
            )
        self.s3 = client

    def put_bytes(self, key: str, data: bytes, content_type: str) -> None:
        try:
            self.s3.put_object(Bucket=self.bucket, Key=key, Body=data, ContentType=content_type)
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"S3 put_object failed for {key}: {e}") from e
        log.debug(f"put_object bucket={self.bucket} key={key}")

    def put_file(self, key: str, path: str, content_type: str) -> None:
        try:
            self.s3.upload_file(path, self.bucket, key, ExtraArgs={"ContentType": content_type})
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"S3 upload failed for {key}: {e}") from e
        log.debug(f"upload_file bucket={self.bucket} key={key}")

    def url_for(self, key: str) -> str:
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    def delete(self, key: str) -> None:
        try:
            self.s3.delete_object(Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"S3 delete failed for {key}: {e}") from e
