# SPDX-License-Identifier: MIT
"""Type definitions for tool payloads that are not raw API responses."""

from typing import Any, Literal, TypedDict

VideoModel = Literal["sora-2", "sora-2-pro"]
VideoSize = Literal["1920x1080", "1080x1920", "1280x720", "720x1280", "1024x1024"]
VideoSeconds = Literal[5, 10, 15, 20]
ContentVariant = Literal["video", "thumbnail", "spritesheet"]
SortOrder = Literal["asc", "desc"]

# Raw JSON object as returned by the Sora API
JSONObject = dict[str, Any]


class DownloadInfo(TypedDict):
    """Everything a caller needs to fetch a completed asset."""

    video_id: str
    variant: ContentVariant
    download_url: str
    headers: dict[str, str]
    note: str
    curl_example: str


class DeleteResult(TypedDict):
    """Acknowledgment of a remote deletion."""

    success: bool
    video_id: str
    message: str
