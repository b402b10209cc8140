"""
Download Service - Fetch published source workbooks.

Source files are streamed over HTTP into a temporary file, read, and then
removed again.
"""

import os
import hashlib
import logging
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0
CHUNK_SIZE = 64 * 1024


class DownloadService:
    """
    Downloads source files into temporary files.

    Network errors are not handled here; requests exceptions propagate to
    the caller.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, download_dir: Optional[str] = None):
        """
        Initialize download service.

        Args:
            timeout: Connect/read timeout in seconds for each request
            download_dir: Directory for temporary files (default: system temp dir)
        """
        self.timeout = timeout
        self.download_dir = download_dir

        if download_dir:
            Path(download_dir).mkdir(parents=True, exist_ok=True)

    def compute_file_hash(self, file_path: str) -> str:
        """Compute the sha256 hex digest of a file."""
        hasher = hashlib.sha256()

        with open(file_path, "rb") as f:
            for byte_block in iter(lambda: f.read(4096), b""):
                hasher.update(byte_block)

        return hasher.hexdigest()

    def download(self, url: str, suffix: str = '.xlsx') -> str:
        """
        Download a URL to a new temporary file.

        The caller owns the returned file and must remove it.

        Args:
            url: Source URL
            suffix: File name suffix of the temporary file

        Returns:
            Path to the downloaded file
        """
        logger.info(f"Downloading {url}")

        fd, temp_path = tempfile.mkstemp(suffix=suffix, dir=self.download_dir)

        try:
            with os.fdopen(fd, 'wb') as f:
                with requests.get(url, stream=True, timeout=self.timeout) as response:
                    response.raise_for_status()
                    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                        if chunk:
                            f.write(chunk)
        except Exception:
            os.unlink(temp_path)
            raise

        file_size = os.path.getsize(temp_path)
        file_hash = self.compute_file_hash(temp_path)
        logger.info(f"Downloaded {url} -> {temp_path} ({file_size} bytes, sha256 {file_hash[:16]}...)")

        return temp_path

    @contextmanager
    def fetch(self, url: str, suffix: str = '.xlsx') -> Iterator[str]:
        """
        Download a URL and remove the temporary file on exit.

        Usage:
            with service.fetch(url) as path:
                ...
        """
        temp_path = self.download(url, suffix=suffix)
        try:
            yield temp_path
        finally:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
                logger.debug(f"Removed temporary file: {temp_path}")
