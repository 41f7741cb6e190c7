# geocode_tool/infrastructure/storage/_s3.py

"""Object storage backed by an S3-compatible bucket"""

# Standard library imports
from logging import getLogger
from typing import BinaryIO

# Third party imports
import boto3
from botocore.client import BaseClient

# Local imports
from geocode_tool.core.types.protocols import StorageFileRequest

logger = getLogger(__name__)

MOD_TIME_METADATA_KEY = "mod-time"


class S3ObjectStorage:
    """Uploads and downloads cache files with boto3

    The request's bucket_name selects the bucket and its object_name is used
    as the key. The local modification time travels as object metadata.
    """

    __slots__ = ("region", "_client")

    def __init__(
        self,
        region: str | None = None,
        endpoint_url: str | None = None,
        client: BaseClient | None = None,
    ):
        """Initialize the S3 object store

        Args:
            region: AWS region name, None for the boto3 default
            endpoint_url: Override for S3-compatible services
            client: Pre-built S3 client (tests inject a mock here)
        """
        self.region = region
        self._client = client or boto3.client(
            "s3", region_name=region, endpoint_url=endpoint_url
        )

    def upload_file(self, reader: BinaryIO, request: StorageFileRequest) -> int:
        body = reader.read()
        self._client.put_object(
            Bucket=request.bucket_name,
            Key=request.object_name,
            Body=body,
            Metadata={MOD_TIME_METADATA_KEY: str(request.mod_time)},
        )
        logger.debug(
            f"Uploaded {len(body):,} bytes to s3://{request.bucket_name}/{request.object_name}"
        )
        return len(body)

    def download_file(self, writer: BinaryIO, request: StorageFileRequest) -> int:
        response = self._client.get_object(Bucket=request.bucket_name, Key=request.object_name)
        body = response["Body"].read()
        writer.write(body)
        logger.debug(
            f"Downloaded {len(body):,} bytes from s3://{request.bucket_name}/{request.object_name}"
        )
        return len(body)
