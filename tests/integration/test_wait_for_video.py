# SPDX-License-Identifier: MIT
"""Integration tests for the wait_for_video polling loop."""

from dataclasses import dataclass

import pytest

from sora_relay.exceptions import RemoteApiError, VideoWaitTimeoutError
from sora_relay.polling import FixedInterval, VideoPoller, wait_for_video


class FakeClock:
    """Monotonic clock that only moves when the poller sleeps."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


def make_poller(clock: FakeClock, interval: float = 10) -> VideoPoller:
    return VideoPoller(FixedInterval(interval), clock=clock, sleep=clock.sleep)


@pytest.mark.integration
class TestVideoPoller:
    async def test_already_completed_returns_without_sleeping(self, sora_api, video_factory, clock):
        sora_api.add("GET", "/videos/video_abc", json=video_factory("video_abc", "completed"))

        result = await make_poller(clock).wait("video_abc", timeout_seconds=600)

        assert clock.sleeps == []
        assert len(sora_api.requests) == 1
        assert result["id"] == "video_abc"
        assert result["status"] == "completed"
        assert result["wait_time_seconds"] == 0
        assert result["message"] == "Video generation completed successfully!"

    async def test_polls_until_completed(self, sora_api, video_factory, clock):
        sora_api.add("GET", "/videos/video_abc", json=video_factory("video_abc", "queued"))
        sora_api.add("GET", "/videos/video_abc", json=video_factory("video_abc", "in_progress", progress=50))
        sora_api.add("GET", "/videos/video_abc", json=video_factory("video_abc", "completed"))

        result = await make_poller(clock, interval=10).wait("video_abc", timeout_seconds=600)

        assert clock.sleeps == [10, 10]
        assert len(sora_api.requests) == 3
        assert result["wait_time_seconds"] == 20
        assert result["progress"] == 100

    async def test_failed_job_reports_error_detail(self, sora_api, video_factory, clock):
        failed = video_factory("video_abc", "failed", error={"code": "moderation", "message": "Prompt rejected"})
        sora_api.add("GET", "/videos/video_abc", json=video_factory("video_abc", "in_progress"))
        sora_api.add("GET", "/videos/video_abc", json=failed)

        result = await make_poller(clock, interval=5).wait("video_abc", timeout_seconds=600)

        assert result["status"] == "failed"
        assert result["error"] == {"code": "moderation", "message": "Prompt rejected"}
        assert result["wait_time_seconds"] == 5
        assert result["message"] == "Video generation failed: Prompt rejected"

    async def test_failed_job_without_detail(self, sora_api, video_factory, clock):
        sora_api.add("GET", "/videos/video_abc", json=video_factory("video_abc", "failed"))

        result = await make_poller(clock).wait("video_abc", timeout_seconds=600)

        assert result["message"] == "Video generation failed: Unknown error"

    async def test_timeout_shorter_than_interval_sleeps_once(self, sora_api, video_factory, clock):
        sora_api.add("GET", "/videos/video_abc", json=video_factory("video_abc", "in_progress"))

        with pytest.raises(VideoWaitTimeoutError) as exc_info:
            await make_poller(clock, interval=10).wait("video_abc", timeout_seconds=3)

        # The final sleep is not shortened to fit the deadline
        assert clock.sleeps == [10]
        assert len(sora_api.requests) == 1
        assert exc_info.value.video_id == "video_abc"
        assert exc_info.value.elapsed_seconds == 10
        assert str(exc_info.value) == "Timeout waiting for video video_abc after 10 seconds"

    async def test_sub_second_timeout_reports_whole_seconds_rounded_up(self, sora_api, video_factory, clock):
        sora_api.add("GET", "/videos/video_abc", json=video_factory("video_abc", "queued"))

        with pytest.raises(VideoWaitTimeoutError) as exc_info:
            await make_poller(clock, interval=0.4).wait("video_abc", timeout_seconds=0.3)

        assert clock.sleeps == [0.4]
        assert exc_info.value.elapsed_seconds == 1
        assert str(exc_info.value) == "Timeout waiting for video video_abc after 1 seconds"

    async def test_timeout_after_several_polls(self, sora_api, video_factory, clock):
        sora_api.add("GET", "/videos/video_abc", json=video_factory("video_abc", "queued"))

        with pytest.raises(VideoWaitTimeoutError):
            await make_poller(clock, interval=10).wait("video_abc", timeout_seconds=30)

        assert clock.sleeps == [10, 10, 10]
        assert len(sora_api.requests) == 3

    async def test_api_error_is_not_retried(self, sora_api, video_factory, clock):
        sora_api.add("GET", "/videos/video_abc", json=video_factory("video_abc", "in_progress"))
        sora_api.add("GET", "/videos/video_abc", 502, text="Bad Gateway")

        with pytest.raises(RemoteApiError) as exc_info:
            await make_poller(clock).wait("video_abc", timeout_seconds=600)

        assert exc_info.value.status_code == 502
        assert exc_info.value.body == "Bad Gateway"
        assert clock.sleeps == [10]
        assert len(sora_api.requests) == 2

    async def test_custom_schedule(self, sora_api, video_factory, clock):
        @dataclass
        class Doubling:
            def delay(self, attempt: int) -> float:
                return 2.0**attempt

        sora_api.add("GET", "/videos/video_abc", json=video_factory("video_abc", "queued"))
        sora_api.add("GET", "/videos/video_abc", json=video_factory("video_abc", "queued"))
        sora_api.add("GET", "/videos/video_abc", json=video_factory("video_abc", "completed"))

        poller = VideoPoller(Doubling(), clock=clock, sleep=clock.sleep)
        result = await poller.wait("video_abc", timeout_seconds=600)

        assert clock.sleeps == [1.0, 2.0]
        assert result["wait_time_seconds"] == 3


@pytest.mark.integration
async def test_wait_for_video_uses_fixed_interval(sora_api, video_factory, mocker):
    mock_sleep = mocker.patch("sora_relay.polling.anyio.sleep", new_callable=mocker.AsyncMock)
    sora_api.add("GET", "/videos/video_abc", json=video_factory("video_abc", "in_progress"))
    sora_api.add("GET", "/videos/video_abc", json=video_factory("video_abc", "completed"))

    result = await wait_for_video("video_abc", poll_interval_seconds=7, timeout_seconds=600)

    assert result["status"] == "completed"
    mock_sleep.assert_awaited_once_with(7)


@pytest.mark.integration
async def test_wait_for_video_completed_does_not_sleep(sora_api, video_factory, mocker):
    mock_sleep = mocker.patch("sora_relay.polling.anyio.sleep", new_callable=mocker.AsyncMock)
    sora_api.add("GET", "/videos/video_abc", json=video_factory("video_abc", "completed"))

    result = await wait_for_video("video_abc")

    assert result["message"] == "Video generation completed successfully!"
    mock_sleep.assert_not_awaited()
