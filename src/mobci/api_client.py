# api_client.py
from __future__ import annotations

import json
import urllib.error
import urllib.request
from pathlib import Path
from typing import Optional
from urllib.parse import quote, urljoin

from . import settings
from .job import Job


class APIError(Exception):
    """Raised when build service requests fail."""
    pass


class BuildServiceClient:
    """HTTP client for the remote build service."""

    def __init__(self, base_url: str, token: Optional[str] = None):
        """
        Initialize API client.

        Args:
            base_url: Base URL of the API (e.g., "https://api.mobci.dev")
            token: Optional bearer token
        """
        self.base_url = base_url.rstrip("/")
        self.token = token

    @classmethod
    def from_settings(cls) -> BuildServiceClient:
        return cls(settings.API_URL, settings.API_TOKEN)

    def _request(
        self,
        method: str,
        path: str,
        body: Optional[bytes] = None,
        content_type: str = "application/json",
    ) -> dict:
        """
        Make an HTTP request to the API.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: API path (e.g., "/uploads")
            body: Optional raw request body
            content_type: Content-Type of the body

        Returns:
            Parsed JSON response as dictionary

        Raises:
            APIError: If the request fails
        """
        url = urljoin(self.base_url + "/", path.lstrip("/"))

        req_headers = {
            "Content-Type": content_type,
            "Accept": "application/json",
        }
        if self.token:
            req_headers["Authorization"] = f"Bearer {self.token}"

        req = urllib.request.Request(url, data=body, headers=req_headers, method=method)

        try:
            with urllib.request.urlopen(req) as response:
                response_data = response.read().decode("utf-8")
                if response_data:
                    return json.loads(response_data)
                return {}
        except urllib.error.HTTPError as e:
            error_body = e.read().decode("utf-8") if e.fp else ""
            raise APIError(f"API request failed: {e.code} {e.reason}. {error_body}".strip())
        except urllib.error.URLError as e:
            raise APIError(f"Network error: {e.reason}")
        except json.JSONDecodeError as e:
            raise APIError(f"Invalid JSON response: {e}")

    def upload_archive(self, archive_path: Path) -> str:
        """
        Upload a project tarball.

        Returns:
            URL the build service will fetch the archive from
        """
        response = self._request(
            "POST",
            "/uploads",
            body=Path(archive_path).read_bytes(),
            content_type="application/gzip",
        )
        url = response.get("url")
        if not url:
            raise APIError("Upload response did not include an archive URL")
        return url

    def create_build(self, project_id: str, job: Job) -> str:
        """
        Submit a sanitized job.

        Returns:
            ID of the created build
        """
        response = self._request(
            "POST",
            f"/projects/{quote(project_id, safe='')}/builds",
            body=json.dumps({"job": job.to_payload()}).encode("utf-8"),
        )
        build_id = response.get("build_id")
        if not build_id:
            raise APIError("Build response did not include a build_id")
        return build_id
