# geocode_tool/infrastructure/storage/_local.py

"""Object storage backed by a directory on the local filesystem"""

# Standard library imports
from logging import getLogger
from os import makedirs
from os.path import abspath
from os.path import dirname
from os.path import join
from shutil import copyfileobj
from typing import BinaryIO

# Local imports
from geocode_tool.core.types.protocols import StorageFileRequest

logger = getLogger(__name__)


class LocalObjectStorage:
    """Stores objects as files under <base_dir>/<bucket>/<object name>

    Used for development and tests in place of a remote bucket.
    """

    __slots__ = ("base_dir",)

    def __init__(self, base_dir: str = "local_filestore"):
        """Initialize the local object store

        Args:
            base_dir: Root directory for stored objects
        """
        self.base_dir = abspath(base_dir)
        makedirs(self.base_dir, exist_ok=True)

    def object_path(self, request: StorageFileRequest) -> str:
        """Filesystem path for the object addressed by request"""
        return join(self.base_dir, request.bucket_name, request.object_name)

    def upload_file(self, reader: BinaryIO, request: StorageFileRequest) -> int:
        path = self.object_path(request)
        makedirs(dirname(path), exist_ok=True)
        with open(path, "wb") as f:
            copyfileobj(reader, f)
            written = f.tell()
        logger.debug(f"Stored {written:,} bytes at {path} (mod time {request.mod_time})")
        return written

    def download_file(self, writer: BinaryIO, request: StorageFileRequest) -> int:
        path = self.object_path(request)
        with open(path, "rb") as f:
            copyfileobj(f, writer)
            read = f.tell()
        logger.debug(f"Read {read:,} bytes from {path}")
        return read
