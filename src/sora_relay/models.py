# SPDX-License-Identifier: MIT
"""Read-only view of a Sora video job.

The remote service is the only source of truth. Handlers return the raw JSON
they received; this model is used only to inspect status and error detail.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict

VideoStatus = Literal["queued", "in_progress", "completed", "failed"]


class VideoError(BaseModel):
    model_config = ConfigDict(extra="allow")

    message: str | None = None
    code: str | None = None


class VideoJob(BaseModel):
    """One asynchronous video generation job as reported by the service."""

    model_config = ConfigDict(extra="allow", frozen=True)

    id: str
    object: str = "video"
    status: VideoStatus | str
    created_at: int | None = None
    model: str | None = None
    progress: int | float | None = None
    seconds: str | int | None = None
    size: str | None = None
    quality: str | None = None
    error: VideoError | None = None

    @property
    def error_message(self) -> str:
        if self.error is not None and self.error.message:
            return self.error.message
        return "Unknown error"
