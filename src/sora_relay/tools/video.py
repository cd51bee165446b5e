# SPDX-License-Identifier: MIT
"""Video generation tools using OpenAI's Sora API.

This module contains all video-related operations:
- Creating video generation jobs (text only or with a reference image)
- Checking status
- Building download instructions for completed videos
- Listing, deleting and remixing videos

Every handler re-reads state from the service; nothing is cached locally.
"""

from ..client import get_client, video_path
from ..config import logger
from ..exceptions import VideoNotReadyError
from ..models import VideoJob
from ..types import (
    ContentVariant,
    DeleteResult,
    DownloadInfo,
    JSONObject,
    SortOrder,
    VideoModel,
    VideoSeconds,
    VideoSize,
)
from .reference import resolve_image_reference

# File suffix of each downloadable asset
_VARIANT_SUFFIX: dict[str, str] = {"video": "mp4", "thumbnail": "webp", "spritesheet": "jpg"}


def suffix_for_variant(variant: ContentVariant) -> str:
    return _VARIANT_SUFFIX[variant]


def _generation_form(prompt: str, model: VideoModel, size: VideoSize, seconds: VideoSeconds) -> dict[str, str]:
    return {
        "prompt": prompt,
        "model": model,
        "size": size,
        "seconds": str(int(seconds)),
    }


async def create_video(
    prompt: str,
    model: VideoModel = "sora-2",
    size: VideoSize = "1280x720",
    seconds: VideoSeconds = 5,
) -> JSONObject:
    """Create a new video generation job.

    Args:
        prompt: Text description of video content
        model: Video generation model to use
        size: Output resolution (width x height)
        seconds: Duration in seconds (5, 10, 15 or 20)

    Returns:
        The created job as returned by the API (id, status, progress, ...)

    Raises:
        MissingCredentialError: If OPENAI_API_KEY not set
        RemoteApiError: If the API rejects the request
    """
    client = get_client()
    video = await client.request_json(
        "/videos",
        "POST",
        form=_generation_form(prompt, model, size, seconds),
        action="create video",
    )
    logger.info("Started job %s (%s)", video.get("id"), video.get("status"))
    return video


async def create_video_with_image(
    prompt: str,
    image_url: str | None = None,
    image_base64: str | None = None,
    model: VideoModel = "sora-2",
    size: VideoSize = "1280x720",
    seconds: VideoSeconds = 5,
) -> JSONObject:
    """Create a video job that uses an image as its first frame.

    Args:
        prompt: Motion/action to apply to the reference image
        image_url: Publicly reachable image URL (exclusive with image_base64)
        image_base64: ``data:<mime>;base64,<payload>`` string (exclusive with image_url)
        model: Video generation model to use
        size: Output resolution, should match the image aspect ratio
        seconds: Duration in seconds (5, 10, 15 or 20)

    Returns:
        The created job as returned by the API

    Raises:
        MissingImageInputError: If neither image input is given
        AmbiguousImageInputError: If both image inputs are given
        ImageFetchError: If the image URL cannot be fetched
        InvalidImageFormatError: If image_base64 is not a base64 data URI
        RemoteApiError: If the API rejects the request
    """
    client = get_client()
    reference = await resolve_image_reference(client, image_url=image_url, image_base64=image_base64)

    video = await client.request_json(
        "/videos",
        "POST",
        form=_generation_form(prompt, model, size, seconds),
        files={"input_reference": reference.as_file_part()},
        action="create video",
    )
    logger.info("Started job %s (%s) with reference: %s", video.get("id"), video.get("status"), reference.filename)
    return video


async def get_video_status(video_id: str) -> JSONObject:
    """Get current status and progress of a video job.

    Args:
        video_id: The video ID from create_video or remix_video

    Returns:
        The job exactly as reported by the API
    """
    client = get_client()
    return await client.request_json(video_path(video_id), action="get video status")


async def download_video(video_id: str, variant: ContentVariant = "video") -> DownloadInfo:
    """Describe how to download an asset of a completed video.

    Nothing is downloaded here: the caller gets the content URL, the
    Authorization header it needs and an equivalent curl command.

    Args:
        video_id: Video ID from create_video or remix_video
        variant: Asset type (video, thumbnail, or spritesheet)

    Returns:
        DownloadInfo with URL, headers, note and curl example

    Raises:
        VideoNotReadyError: If the job status is not 'completed'
    """
    client = get_client()
    status = await client.request_json(video_path(video_id), action="get video status")
    video = VideoJob.model_validate(status)
    if video.status != "completed":
        raise VideoNotReadyError(video_id, video.status)

    download_url = client.content_url(video_id, variant)
    output = f"{video_id}.{suffix_for_variant(variant)}"
    return {
        "video_id": video_id,
        "variant": variant,
        "download_url": download_url,
        "headers": {"Authorization": client.authorization},
        "note": "Use this URL with the Authorization header to download the content. URL expires in 1 hour.",
        "curl_example": f'curl -L "{download_url}" -H "Authorization: Bearer $OPENAI_API_KEY" --output {output}',
    }


async def list_videos(
    limit: int | None = None,
    order: SortOrder | None = None,
    after: str | None = None,
) -> JSONObject:
    """List video jobs with pagination.

    Only the arguments that were given end up in the query string; the
    service applies its own defaults for the rest.

    Args:
        limit: Maximum videos to return (1-100)
        order: Sort order by creation time
        after: Cursor for pagination (ID of last item from previous page)

    Returns:
        The list response from the API (data, has_more, ...)
    """
    client = get_client()
    params: dict[str, str | int] = {}
    if limit is not None:
        params["limit"] = limit
    if order is not None:
        params["order"] = order
    if after is not None:
        params["after"] = after
    return await client.request_json("/videos", params=params, action="list videos")


async def delete_video(video_id: str) -> DeleteResult:
    """Permanently delete a video from OpenAI storage.

    Args:
        video_id: Video ID to delete

    Returns:
        DeleteResult acknowledging the deletion
    """
    client = get_client()
    await client.request(video_path(video_id), "DELETE", action="delete video")
    logger.info("Deleted %s", video_id)
    return {"success": True, "video_id": video_id, "message": "Video deleted successfully"}


async def remix_video(video_id: str, prompt: str) -> JSONObject:
    """Create a new video by remixing an existing one.

    Args:
        video_id: ID of completed video to remix
        prompt: Change to apply

    Returns:
        NEW job with a different id and status='queued'
    """
    client = get_client()
    video = await client.request_json(
        video_path(video_id, "remix"),
        "POST",
        json={"prompt": prompt},
        action="remix video",
    )
    logger.info("Started remix %s (from %s)", video.get("id"), video_id)
    return video
