# geocode_tool/infrastructure/cache/_sync.py

"""Backup and restore of the cache file through remote object storage"""

# Standard library imports
from logging import getLogger
from os import makedirs
from os import replace
from os import unlink
from os.path import basename
from os.path import dirname
from os.path import exists
from os.path import getmtime
from tempfile import NamedTemporaryFile

# Local imports
from geocode_tool.core.domain.errors import PersistenceError
from geocode_tool.core.domain.errors import SyncError
from geocode_tool.core.types.protocols import ObjectStorage
from geocode_tool.core.types.protocols import StorageFileRequest
from geocode_tool.infrastructure.cache._store import ExpiringCacheStore

logger = getLogger(__name__)


class CacheSyncAdapter:
    """Mirrors the local cache file to a bucket

    The remote object is named after the cache file's directory and base name
    (e.g. "geo/geocode_cache.json"). There is no conflict resolution: the last
    upload wins.
    """

    __slots__ = ("file_path", "bucket_name", "storage")

    def __init__(self, file_path: str, bucket_name: str, storage: ObjectStorage | None):
        """Initialize the sync adapter

        Args:
            file_path: Local cache file path
            bucket_name: Remote bucket name, empty to disable syncing
            storage: Object storage backend, None to disable syncing
        """
        self.file_path = file_path
        self.bucket_name = bucket_name
        self.storage = storage

    @property
    def enabled(self) -> bool:
        return self.storage is not None and bool(self.bucket_name)

    def _file_request(self, mod_time: int = 0) -> StorageFileRequest:
        return StorageFileRequest(
            bucket_name=self.bucket_name,
            file_name=basename(self.file_path),
            directory=dirname(self.file_path),
            mod_time=mod_time,
        )

    def download_initial(self) -> bool:
        """Fetch the remote cache file when no local copy exists

        Must run before the cache store is constructed. Failures are logged and
        leave no local file behind, so the store starts empty.

        Returns:
            True if a remote copy was written locally
        """
        if exists(self.file_path):
            logger.debug(f"Cache file {self.file_path} exists, skipping download")
            return False
        if not self.enabled:
            return False

        cache_dir = dirname(self.file_path)
        try:
            makedirs(cache_dir, exist_ok=True)
        except OSError as e:
            logger.error(f"Error creating cache directory {cache_dir}: {e}")
            return False

        request = self._file_request()
        temp_path: str | None = None
        try:
            with NamedTemporaryFile(
                mode="wb", dir=cache_dir, prefix=".download_", suffix=".tmp", delete=False
            ) as f:
                temp_path = f.name
                size = self.storage.download_file(f, request)  # type: ignore[union-attr]
            replace(temp_path, self.file_path)
        except Exception as e:
            logger.error(
                f"Error downloading cache {request.object_name} from bucket {self.bucket_name}: {e}"
            )
            if temp_path is not None and exists(temp_path):
                unlink(temp_path)
            return False

        logger.info(f"Downloaded cache file {request.object_name} ({size:,} bytes)")
        return True

    def upload_if_dirty(self, store: ExpiringCacheStore) -> int:
        """Save and upload the store if it changed since the last save

        Expired entries are purged before saving.

        Args:
            store: Cache store to persist

        Returns:
            Bytes uploaded; 0 when the store was clean or syncing is disabled

        Raises:
            PersistenceError: saving or reading the local file failed
            SyncError: the upload failed
        """
        if not store.updated():
            return 0

        store.purge_expired()
        store.save_file()
        if not self.enabled:
            return 0

        try:
            mod_time = int(getmtime(self.file_path))
        except OSError as e:
            raise PersistenceError(f"Cache file {self.file_path} inaccessible: {e}") from e
        logger.debug(f"Cache file {self.file_path} mod time {mod_time}")

        request = self._file_request(mod_time)
        try:
            f = open(self.file_path, "rb")
        except OSError as e:
            raise PersistenceError(f"Cache file {self.file_path} inaccessible: {e}") from e

        with f:
            try:
                size = self.storage.upload_file(f, request)  # type: ignore[union-attr]
            except Exception as e:
                raise SyncError(
                    f"Error uploading cache {request.object_name} "
                    f"to bucket {self.bucket_name}: {e}"
                ) from e

        logger.info(f"Uploaded cache file {request.object_name} ({size:,} bytes)")
        return size
