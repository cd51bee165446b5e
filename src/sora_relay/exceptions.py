# SPDX-License-Identifier: MIT
"""Error types raised by sora-relay tools.

Every error carries a human-readable message. The dispatcher turns any of
them into an error result for the MCP host; nothing here is retried.
"""


class SoraRelayError(Exception):
    """Base class for all sora-relay errors."""


class MissingCredentialError(SoraRelayError, RuntimeError):
    """OPENAI_API_KEY is not configured."""


class RemoteApiError(SoraRelayError):
    """The Sora API answered with a non-success status.

    The response body is kept verbatim (not parsed) for diagnostics.
    """

    def __init__(self, status_code: int, body: str, action: str = "call Sora API"):
        self.status_code = int(status_code)
        self.body = body
        self.action = action
        super().__init__(f"Failed to {action}: {self.status_code} - {body}")


class ImageInputError(SoraRelayError, ValueError):
    """Base class for problems with a reference image input."""


class ImageFetchError(ImageInputError):
    def __init__(self, url: str, reason: str | None = None):
        self.url = url
        message = f"Failed to fetch image from URL: {url}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InvalidImageFormatError(ImageInputError):
    def __init__(self, message: str = "Invalid base64 image format. Expected data URI format."):
        super().__init__(message)


class MissingImageInputError(ImageInputError):
    def __init__(self) -> None:
        super().__init__("Either image_url or image_base64 must be provided")


class AmbiguousImageInputError(ImageInputError):
    def __init__(self) -> None:
        super().__init__("Provide only one of image_url or image_base64, not both")


class VideoNotReadyError(SoraRelayError):
    """Content was requested for a job that has not completed."""

    def __init__(self, video_id: str, current_status: str):
        self.video_id = video_id
        self.current_status = current_status
        super().__init__(f"Video is not ready for download. Current status: {current_status}")


class VideoWaitTimeoutError(SoraRelayError, TimeoutError):
    """wait_for_video gave up before the job reached a terminal state."""

    def __init__(self, video_id: str, elapsed_seconds: int):
        self.video_id = video_id
        self.elapsed_seconds = elapsed_seconds
        super().__init__(f"Timeout waiting for video {video_id} after {elapsed_seconds} seconds")


class UnknownToolError(SoraRelayError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class InvalidArgumentsError(SoraRelayError, ValueError):
    """Tool arguments do not satisfy the tool's declared parameters."""

    def __init__(self, tool: str, detail: str):
        self.tool = tool
        self.detail = detail
        super().__init__(f"Invalid arguments for {tool}: {detail}")
