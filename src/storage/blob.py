"""
HTTP blob store and photo reader

Uploads report photos to an object storage endpoint and loads captured
photo bytes from the device capture directory.

Upload layout:
    PUT  {base_url}/{bucket}/{key}         (raw bytes, optional bearer token)
    GET  {public_url}/{bucket}/{key}       (durable download URL)
"""

import logging
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse, unquote, quote

import httpx

from src.core.constants import LOCAL_PHOTO_SCHEMES

logger = logging.getLogger(__name__)


class HttpBlobStore:
    """
    Client for an HTTP object storage bucket.

    Usage:
        with HttpBlobStore("https://storage.example.com", "reports") as blobs:
            url = blobs.upload(photo_bytes, "reportes_hoyos/u1/1700000000000_ab12cd3.jpg")
    """

    def __init__(
        self,
        base_url: str,
        bucket: str,
        public_url: Optional[str] = None,
        api_token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize blob store client.

        Args:
            base_url: Upload endpoint
            bucket: Bucket name
            public_url: Base of download URLs (defaults to base_url)
            api_token: Bearer token sent with uploads
            timeout: HTTP request timeout in seconds
            transport: Custom httpx transport
        """
        if not base_url:
            raise ValueError("Blob store base URL is required")

        self.base_url = base_url.rstrip("/")
        self.public_url = (public_url or base_url).rstrip("/")
        self.bucket = bucket
        self.timeout = timeout

        headers = {}
        if api_token:
            headers["Authorization"] = f"Bearer {api_token}"

        self._client = httpx.Client(timeout=timeout, headers=headers, transport=transport)

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def close(self) -> None:
        self._client.close()

    def object_url(self, key: str) -> str:
        """Public download URL for a stored object."""
        return f"{self.public_url}/{self.bucket}/{quote(key)}"

    def upload(self, data: bytes, key: str, content_type: str = "image/jpeg") -> str:
        """
        Upload bytes under the given key.

        Args:
            data: Object contents
            key: Object key inside the bucket
            content_type: MIME type of the object

        Returns:
            Public URL of the uploaded object

        Raises:
            httpx.HTTPError: On transport failure or non-2xx response
        """
        url = f"{self.base_url}/{self.bucket}/{quote(key)}"
        logger.info(f"Uploading {len(data)} bytes to {self.bucket}/{key}")

        response = self._client.put(url, content=data, headers={"Content-Type": content_type})
        response.raise_for_status()

        return self.object_url(key)


class LocalPhotoReader:
    """
    Reads captured photos from the device capture directory.

    Accepts file:// URIs and plain paths. A reference that resolves outside
    capture_dir is refused, and with no capture_dir nothing is read.
    """

    def __init__(self, capture_dir: Optional[str] = None):
        self.capture_dir = Path(capture_dir).resolve() if capture_dir else None

    def resolve(self, photo_ref: str) -> Path:
        """
        Map a photo reference to a file inside the capture directory.

        Raises:
            PermissionError: If the reference points anywhere else
        """
        if self.capture_dir is None:
            raise PermissionError("No capture directory is configured")

        parsed = urlparse(photo_ref)
        if parsed.scheme in LOCAL_PHOTO_SCHEMES:
            path = Path(unquote(parsed.netloc + parsed.path))
        elif parsed.scheme and len(parsed.scheme) > 1:
            # One-letter schemes are Windows drive letters
            raise PermissionError(f"Unsupported photo reference scheme: {parsed.scheme}")
        else:
            path = Path(photo_ref)

        if not path.is_absolute():
            path = self.capture_dir / path
        path = path.resolve()

        if path != self.capture_dir and self.capture_dir not in path.parents:
            raise PermissionError(f"Photo is outside the capture directory: {photo_ref}")

        return path

    def read(self, photo_ref: str) -> bytes:
        """
        Load the bytes behind a photo reference.

        Raises:
            PermissionError: If the reference is outside the capture directory
            OSError: If the file cannot be read
        """
        return self.resolve(photo_ref).read_bytes()
