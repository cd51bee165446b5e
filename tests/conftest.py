# SPDX-License-Identifier: MIT
"""Shared pytest fixtures for sora-relay tests."""

import re
from dataclasses import dataclass
from typing import Any

import httpx
import pytest

from sora_relay.client import SoraClient

BASE_URL = "https://sora.test/v1"
API_KEY = "sk-test"


def make_video(video_id: str = "video_123", status: str = "queued", **overrides: Any) -> dict[str, Any]:
    """Video job JSON as the Sora API returns it."""
    video: dict[str, Any] = {
        "id": video_id,
        "object": "video",
        "created_at": 1234567890,
        "status": status,
        "model": "sora-2",
        "progress": 100 if status == "completed" else 0,
        "seconds": "5",
        "size": "1280x720",
    }
    video.update(overrides)
    return video


@dataclass
class Part:
    """One part of a multipart/form-data body."""

    filename: str | None
    content_type: str | None
    body: bytes


def multipart_parts(request: httpx.Request) -> dict[str, Part]:
    """Parse a multipart request body into parts keyed by field name."""
    boundary = request.headers["Content-Type"].split("boundary=", 1)[1].encode()
    parts: dict[str, Part] = {}
    for chunk in request.content.split(b"--" + boundary):
        if not chunk or chunk.startswith(b"--"):
            continue
        chunk = chunk.removeprefix(b"\r\n").removesuffix(b"\r\n")
        head, _, body = chunk.partition(b"\r\n\r\n")
        name = re.search(rb'name="([^"]*)"', head)
        filename = re.search(rb'filename="([^"]*)"', head)
        content_type = re.search(rb"Content-Type: ([^\r\n]+)", head)
        assert name is not None
        parts[name.group(1).decode()] = Part(
            filename=filename.group(1).decode() if filename else None,
            content_type=content_type.group(1).decode() if content_type else None,
            body=body,
        )
    return parts


class FakeSoraApi:
    """In-memory stand-in for the Sora REST API behind an httpx.MockTransport.

    Responses are queued per (method, URL without query). The last queued
    response for a route keeps being served once the others are used up.
    Unrouted requests get a 404.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], list[dict[str, Any]]] = {}
        self.client = SoraClient(API_KEY, BASE_URL, 5.0, transport=httpx.MockTransport(self.handle))

    def add(self, method: str, path: str, status_code: int = 200, **kwargs: Any) -> None:
        """Queue a response for an API path such as ``/videos/abc``."""
        self.add_url(method, f"{BASE_URL}{path}", status_code, **kwargs)

    def add_url(self, method: str, url: str, status_code: int = 200, **kwargs: Any) -> None:
        """Queue a response for an absolute URL (used for third-party images)."""
        self._routes.setdefault((method, url), []).append({"status_code": status_code, **kwargs})

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = f"{request.url.scheme}://{request.url.host}{request.url.path}"
        queue = self._routes.get((request.method, url))
        if not queue:
            return httpx.Response(404, json={"error": {"message": f"No route for {request.method} {url}"}})
        spec = queue.pop(0) if len(queue) > 1 else queue[0]
        if "raise_" in spec:
            raise spec["raise_"]
        return httpx.Response(**spec)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture(autouse=True)
def sora_env(monkeypatch):
    """Known credential and default endpoint settings for every test."""
    monkeypatch.setenv("OPENAI_API_KEY", API_KEY)
    monkeypatch.delenv("OPENAI_BASE_URL", raising=False)
    monkeypatch.delenv("SORA_HTTP_TIMEOUT", raising=False)


@pytest.fixture
def sora_api(mocker) -> FakeSoraApi:
    """Fake Sora API wired into every module that builds a client."""
    api = FakeSoraApi()
    mocker.patch("sora_relay.tools.video.get_client", return_value=api.client)
    mocker.patch("sora_relay.polling.get_client", return_value=api.client)
    return api


@pytest.fixture
def video_factory():
    """Build video job JSON: ``video_factory("video_1", "completed", progress=100)``."""
    return make_video


@pytest.fixture
def parse_multipart():
    """Parse a captured multipart request into ``{field: Part}``."""
    return multipart_parts
