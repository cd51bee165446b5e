# SPDX-License-Identifier: MIT
"""HTTP client for the Sora video API.

All outbound traffic goes through :class:`SoraClient`. It attaches the bearer
credential, turns non-success responses into :class:`RemoteApiError` and never
retries: creation, remix and deletion have real side effects.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from .config import get_api_key, get_base_url, get_http_timeout, logger
from .exceptions import ImageFetchError, RemoteApiError
from .types import ContentVariant, JSONObject


def video_path(video_id: str, *segments: str) -> str:
    """Relative API path for a video resource, e.g. ``/videos/<id>/remix``."""
    path = f"/videos/{quote(video_id, safe='')}"
    for segment in segments:
        path += f"/{segment}"
    return path


class SoraClient:
    """Stateless, authenticated access to the Sora REST endpoints.

    A fresh ``httpx.AsyncClient`` is opened per request, mirroring the
    per-call credential lookup in :func:`get_client`.

    Args:
        api_key: Bearer credential
        base_url: API root, e.g. ``https://api.openai.com/v1``
        timeout: Per-request timeout in seconds
        transport: Optional httpx transport (tests use ``httpx.MockTransport``)
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self.base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @property
    def authorization(self) -> str:
        """Value of the Authorization header sent with every API call."""
        return f"Bearer {self._api_key}"

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def content_url(self, video_id: str, variant: ContentVariant) -> str:
        """Absolute URL of a downloadable asset of a completed video."""
        return str(httpx.URL(self.url(video_path(video_id, "content")), params={"variant": variant}))

    def _http(self, **kwargs: Any) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport, **kwargs)

    async def request(
        self,
        path: str,
        method: str = "GET",
        *,
        json: Any = None,
        form: dict[str, str] | None = None,
        files: dict[str, tuple[str, bytes, str]] | None = None,
        params: dict[str, str | int] | None = None,
        headers: dict[str, str] | None = None,
        action: str = "call Sora API",
    ) -> httpx.Response:
        """Send one authenticated request and return the raw response.

        Args:
            path: Endpoint relative to the base URL (``/videos``)
            method: HTTP method
            json: JSON body
            form: Multipart form fields
            files: File parts as ``{field: (filename, bytes, content_type)}``
            params: Query parameters
            headers: Extra headers, applied after the Authorization header
            action: Short description used in error messages

        Returns:
            The httpx response (status 2xx)

        Raises:
            RemoteApiError: If the service returns a non-success status
            httpx.HTTPError: On transport failures
        """
        request_headers = {"Authorization": self.authorization}
        if headers:
            request_headers.update(headers)

        # Plain fields become filename-less parts so the body is multipart even without a file
        parts: dict[str, tuple[str | None, bytes] | tuple[str, bytes, str]] | None = None
        if form is not None or files:
            parts = {name: (None, value.encode()) for name, value in (form or {}).items()}
            parts.update(files or {})

        logger.debug("%s %s", method, path)
        async with self._http() as http:
            resp = await http.request(
                method,
                self.url(path),
                json=json,
                files=parts,
                params=params,
                headers=request_headers,
            )

        if not resp.is_success:
            raise RemoteApiError(resp.status_code, resp.text, action)
        return resp

    async def request_json(self, path: str, method: str = "GET", **kwargs: Any) -> JSONObject:
        """Like :meth:`request` but decode the JSON body."""
        resp = await self.request(path, method, **kwargs)
        return resp.json()

    async def fetch_external(self, url: str) -> tuple[bytes, str | None]:
        """Download a publicly reachable resource without credentials.

        Returns:
            (content, content_type) tuple; content_type is None when absent

        Raises:
            ImageFetchError: On transport failure or non-success status
        """
        try:
            async with self._http(follow_redirects=True) as http:
                resp = await http.get(url)
        except httpx.HTTPError as e:
            raise ImageFetchError(url, str(e)) from e

        if not resp.is_success:
            raise ImageFetchError(url, f"HTTP {resp.status_code}")
        content_type = resp.headers.get("Content-Type")
        if content_type:
            content_type = content_type.split(";", 1)[0].strip() or None
        return resp.content, content_type


# ---------- Client factory (stateless) ----------
def get_client() -> SoraClient:
    """Get a Sora API client built from the environment.

    Returns:
        Configured SoraClient

    Raises:
        MissingCredentialError: If OPENAI_API_KEY environment variable is not set
    """
    return SoraClient(api_key=get_api_key(), base_url=get_base_url(), timeout=get_http_timeout())
