# SPDX-License-Identifier: MIT
"""Wait for a video job to reach a terminal state.

States: Polling -> Completed | Failed | TimedOut.

The loop checks the elapsed time before each poll and always sleeps the full
interval between polls, so a call may overshoot ``timeout_seconds`` by up to
one interval. Errors from the API are not retried.
"""

import math
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Protocol

import anyio

from .client import get_client, video_path
from .config import logger
from .exceptions import VideoWaitTimeoutError
from .models import VideoJob
from .types import JSONObject

DEFAULT_POLL_INTERVAL = 10.0
DEFAULT_TIMEOUT = 600.0


class PollSchedule(Protocol):
    """Decides how long to sleep before the next status check."""

    def delay(self, attempt: int) -> float: ...


@dataclass(frozen=True)
class FixedInterval:
    seconds: float = DEFAULT_POLL_INTERVAL

    def delay(self, attempt: int) -> float:
        return self.seconds


class VideoPoller:
    """Poll one video job until it completes, fails, or the timeout elapses.

    Args:
        schedule: Sleep strategy between polls
        clock: Monotonic clock in seconds
        sleep: Awaitable sleep, cooperative with the event loop
    """

    def __init__(
        self,
        schedule: PollSchedule,
        clock: Callable[[], float] | None = None,
        sleep: Callable[[float], Awaitable[Any]] | None = None,
    ) -> None:
        self.schedule = schedule
        self.clock = clock or time.monotonic
        self.sleep = sleep or anyio.sleep

    async def wait(self, video_id: str, timeout_seconds: float) -> JSONObject:
        """Run the state machine for ``video_id``.

        Returns:
            The final job JSON plus ``wait_time_seconds`` and ``message``

        Raises:
            VideoWaitTimeoutError: If no terminal state was seen before the timeout
            RemoteApiError: If a status check fails
        """
        client = get_client()
        start = self.clock()
        attempt = 0

        while self.clock() - start < timeout_seconds:
            status = await client.request_json(video_path(video_id), action="get video status")
            video = VideoJob.model_validate(status)

            if video.status == "completed":
                logger.info("Video %s completed", video_id)
                return {
                    **status,
                    "wait_time_seconds": round(self.clock() - start),
                    "message": "Video generation completed successfully!",
                }

            if video.status == "failed":
                logger.info("Video %s failed: %s", video_id, video.error_message)
                return {
                    **status,
                    "wait_time_seconds": round(self.clock() - start),
                    "message": f"Video generation failed: {video.error_message}",
                }

            delay = self.schedule.delay(attempt)
            logger.debug("Video %s is %s (progress=%s), next check in %ss", video_id, video.status, video.progress, delay)
            attempt += 1
            await self.sleep(delay)

        # Rounded up so a real wait is never reported as 0 seconds
        raise VideoWaitTimeoutError(video_id, math.ceil(self.clock() - start))


async def wait_for_video(
    video_id: str,
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL,
    timeout_seconds: float = DEFAULT_TIMEOUT,
) -> JSONObject:
    """Poll a video job until it completes or fails.

    Args:
        video_id: Job to wait for
        poll_interval_seconds: Seconds between status checks
        timeout_seconds: Give up once this much time has elapsed

    Returns:
        Final job JSON with ``wait_time_seconds`` and a ``message``

    Raises:
        VideoWaitTimeoutError: If the job is still running at the deadline
    """
    poller = VideoPoller(FixedInterval(poll_interval_seconds))
    return await poller.wait(video_id, timeout_seconds)
