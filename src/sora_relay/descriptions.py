# SPDX-License-Identifier: MIT
"""Tool descriptions for MCP server.

These descriptions are LLM-facing and tell the assistant how the tools chain
together: create -> poll/wait -> download.
"""

# ==================== VIDEO TOOL DESCRIPTIONS ====================

CREATE_VIDEO = """Create a new video generation job using OpenAI's Sora model. Returns a job ID that can be used to check status and download the video when complete.

Video generation is asynchronous and may take several minutes. Use get_video_status(video_id) or wait_for_video(video_id) until status='completed', then download_video(video_id).

Params: prompt, model (sora-2 faster|sora-2-pro quality), size (1920x1080|1080x1920|1280x720|720x1280|1024x1024), seconds (5|10|15|20)"""

CREATE_VIDEO_WITH_IMAGE = """Create a video using an image as the first frame reference. The image guides the visual style and composition of the generated video.

Provide exactly one of image_url (publicly accessible) or image_base64 (data URI, e.g. 'data:image/jpeg;base64,...'). The size should match the image aspect ratio.

Returns the new job (async), same as create_video."""

GET_VIDEO_STATUS = """Get the current status of a video generation job.

Returns: id, status (queued|in_progress|completed|failed), progress (0-100), model, seconds, size"""

DOWNLOAD_VIDEO = """Get a download URL for a completed video. Only works for videos with 'completed' status.

Returns the URL, the Authorization header it requires, and a ready-to-run curl command. The URL is valid for 1 hour.

Params: video_id, variant (video=MP4 | thumbnail=preview image | spritesheet=frame overview)"""

LIST_VIDEOS = """List video generation jobs for your account with pagination support.

Params: limit (1-100, service default 20), order (desc|asc, service default desc), after (cursor: ID of the last video from a previous page)

Returns: data (array), has_more"""

DELETE_VIDEO = """Delete a video from OpenAI's storage. This action cannot be undone.

Params: video_id"""

REMIX_VIDEO = """Create a variation of an existing completed video with targeted adjustments. Preserves the original structure while applying the specified change. Returns a NEW video_id (async).

Best for single, well-defined modifications.

Example: remix_video(video_id, "Change the color palette to teal and rust with warm backlight.")"""

WAIT_FOR_VIDEO = """Poll a video job until it completes or fails. Returns the final status with wait_time_seconds.

Useful for waiting on video generation without manual polling. Fails if the job is still running after timeout_seconds.

Params: video_id, poll_interval_seconds (default 10), timeout_seconds (default 600)"""


# ==================== PARAMETER DESCRIPTIONS ====================

PROMPT = (
    "Text description of the video to generate. For best results, describe shot type, subject, action, "
    "setting, and lighting. Example: 'Wide shot of a child flying a red kite in a grassy park, golden hour "
    "sunlight, camera slowly pans upward.'"
)
IMAGE_PROMPT = "Text description of the action/motion to apply to the reference image."
REMIX_PROMPT = (
    "Description of the change to apply. Make single, focused changes for best results. "
    "Example: 'Change the color palette to teal and rust with warm backlight.'"
)
MODEL = "Model to use. 'sora-2' is faster and good for iteration. 'sora-2-pro' produces higher quality but takes longer."
SIZE = "Resolution of the output video. Default is 1280x720."
SECONDS = "Duration of the video in seconds. Default is 5."
IMAGE_URL = "URL of the reference image to use as the first frame. Must be publicly accessible."
IMAGE_BASE64 = (
    "Base64-encoded image data (alternative to image_url). "
    "Include the data URI prefix, e.g., 'data:image/jpeg;base64,...'"
)
VIDEO_ID = "The ID of the video job."
VARIANT = (
    "Type of content to download. 'video' for MP4, 'thumbnail' for preview image, "
    "'spritesheet' for frame overview."
)
LIMIT = "Maximum number of videos to return (1-100)."
ORDER = "Sort order by creation time."
AFTER = "Cursor for pagination. Use the ID from a previous response."
POLL_INTERVAL = "Seconds between status checks."
TIMEOUT = "Maximum seconds to wait before timing out."
