"""
HTTP client for the upload endpoint.
Sends one Parquet file as multipart/form-data and returns the decoded payload.
"""

from typing import Any, Dict, Optional

import requests

from config.settings import settings
from core.logger import get_logger

logger = get_logger(__name__)


class UploadError(Exception):
    """Raised when the server rejects an upload or cannot be reached"""


class UploadClient:
    def __init__(self, api_url: Optional[str] = None, timeout: Optional[int] = None):
        self.api_url = (api_url or settings.viewer.api_url).rstrip("/")
        self.timeout = timeout or settings.viewer.request_timeout

    @property
    def upload_url(self) -> str:
        return f"{self.api_url}/api/upload"

    def upload(self, filename: str, data: bytes) -> Dict[str, Any]:
        files = {"file": (filename, data, "application/octet-stream")}
        logger.info("Uploading %s (%d bytes) to %s", filename, len(data), self.upload_url)

        try:
            response = requests.post(self.upload_url, files=files, timeout=self.timeout)
        except requests.exceptions.ConnectionError as e:
            raise UploadError(f"Cannot connect to backend API server at {self.api_url}.") from e

        if not response.ok:
            raise UploadError(self._error_message(response))

        return response.json()

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """Prefer the JSON error body, fall back to the raw text"""
        try:
            payload = response.json()
        except ValueError:
            return (
                f"Server error: {response.status_code} {response.reason}. "
                f"Response: {response.text}"
            )

        if isinstance(payload, dict) and payload.get("error"):
            return str(payload["error"])
        return f"Server error: {response.status_code}"
