# tests/unit/infrastructure/storage/test_object_storage.py

"""Tests for the local and S3 object storage backends"""

# Standard library imports
from io import BytesIO
from os.path import exists
from os.path import join
from unittest.mock import MagicMock
from unittest.mock import patch

# Third party imports
import pytest

# Local imports
from geocode_tool.core.domain.enums import StorageBackend
from geocode_tool.core.types.protocols import StorageFileRequest
from geocode_tool.infrastructure.config import CachingConfig
from geocode_tool.infrastructure.storage import LocalObjectStorage
from geocode_tool.infrastructure.storage import S3ObjectStorage
from geocode_tool.infrastructure.storage import create_object_storage

REQUEST = StorageFileRequest(
    bucket_name="geo-bucket",
    file_name="geocode_cache.json",
    directory="/srv/data/geo",
    mod_time=1700000000,
)


class TestStorageFileRequest:
    """Test object name derivation"""

    def test_object_name(self):
        assert REQUEST.object_name == "geo/geocode_cache.json"

    def test_trailing_slash_ignored(self):
        request = StorageFileRequest("b", "geocode_cache.json", "data/geo/")
        assert request.object_name == "geo/geocode_cache.json"

    def test_no_directory(self):
        assert StorageFileRequest("b", "f.json", "").object_name == "f.json"


class TestLocalObjectStorage:
    """Test the directory-backed store"""

    def test_upload_then_download(self, tmp_path):
        storage = LocalObjectStorage(str(tmp_path / "store"))
        payload = b'{"k": {"value": 1, "expires_at": 2}}'

        assert storage.upload_file(BytesIO(payload), REQUEST) == len(payload)
        assert exists(join(str(tmp_path / "store"), "geo-bucket", "geo", "geocode_cache.json"))

        target = BytesIO()
        assert storage.download_file(target, REQUEST) == len(payload)
        assert target.getvalue() == payload

    def test_large_payload(self, tmp_path):
        """Payloads of several hundred kilobytes copy completely"""
        storage = LocalObjectStorage(str(tmp_path))
        payload = b"x" * (200 * 1024 + 7)
        storage.upload_file(BytesIO(payload), REQUEST)
        target = BytesIO()
        storage.download_file(target, REQUEST)
        assert target.getvalue() == payload

    def test_counts_bytes_from_current_position(self, tmp_path):
        """Only the unread part of the reader is stored and counted"""
        storage = LocalObjectStorage(str(tmp_path))
        reader = BytesIO(b"headerpayload")
        reader.read(6)

        assert storage.upload_file(reader, REQUEST) == len(b"payload")
        target = BytesIO(b"existing:")
        target.seek(0, 2)
        assert storage.download_file(target, REQUEST) == len(b"payload")
        assert target.getvalue() == b"existing:payload"

    def test_missing_object(self, tmp_path):
        storage = LocalObjectStorage(str(tmp_path))
        with pytest.raises(FileNotFoundError):
            storage.download_file(BytesIO(), REQUEST)

    def test_base_dir_created(self, tmp_path):
        storage = LocalObjectStorage(str(tmp_path / "new" / "store"))
        assert exists(storage.base_dir)


class TestS3ObjectStorage:
    """Test the boto3-backed store with a mocked client"""

    def test_upload(self):
        client = MagicMock()
        storage = S3ObjectStorage(client=client)

        assert storage.upload_file(BytesIO(b"abc"), REQUEST) == 3
        client.put_object.assert_called_once_with(
            Bucket="geo-bucket",
            Key="geo/geocode_cache.json",
            Body=b"abc",
            Metadata={"mod-time": "1700000000"},
        )

    def test_download(self):
        client = MagicMock()
        client.get_object.return_value = {"Body": BytesIO(b"{}")}
        storage = S3ObjectStorage(client=client)

        target = BytesIO()
        assert storage.download_file(target, REQUEST) == 2
        assert target.getvalue() == b"{}"
        client.get_object.assert_called_once_with(
            Bucket="geo-bucket", Key="geo/geocode_cache.json"
        )

    def test_client_errors_propagate(self):
        client = MagicMock()
        client.put_object.side_effect = RuntimeError("access denied")
        storage = S3ObjectStorage(client=client)
        with pytest.raises(RuntimeError, match="access denied"):
            storage.upload_file(BytesIO(b"abc"), REQUEST)

    @patch("geocode_tool.infrastructure.storage._s3.boto3")
    def test_builds_client(self, mock_boto3):
        S3ObjectStorage(region="us-west-2", endpoint_url="http://localhost:9000")
        mock_boto3.client.assert_called_once_with(
            "s3", region_name="us-west-2", endpoint_url="http://localhost:9000"
        )


class TestCreateObjectStorage:
    """Test backend selection"""

    def test_no_bucket(self):
        assert create_object_storage(CachingConfig()) is None

    def test_local_backend(self, tmp_path):
        caching = CachingConfig(bucket_name="geo-bucket", storage_dir=str(tmp_path))
        storage = create_object_storage(caching)
        assert isinstance(storage, LocalObjectStorage)
        assert storage.base_dir == str(tmp_path)

    @patch("geocode_tool.infrastructure.storage._s3.boto3")
    def test_s3_backend(self, mock_boto3):
        caching = CachingConfig(
            bucket_name="geo-bucket", storage_backend=StorageBackend.S3, region="eu-west-1"
        )
        storage = create_object_storage(caching)
        assert isinstance(storage, S3ObjectStorage)
        mock_boto3.client.assert_called_once_with("s3", region_name="eu-west-1", endpoint_url=None)

    def test_backend_from_string(self, tmp_path):
        """Config files name the backend by value"""
        caching = CachingConfig.model_validate(
            {"bucket_name": "b", "storage_backend": "local", "storage_dir": str(tmp_path)}
        )
        assert caching.storage_backend is StorageBackend.LOCAL
