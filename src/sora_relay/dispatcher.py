# SPDX-License-Identifier: MIT
"""Route tool calls to their handlers and normalize the outcome.

The dispatcher is the only place where errors are caught: whatever a handler
raises becomes an error result, so a failing tool never takes the server down.
"""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

from . import contracts, polling
from .config import logger
from .contracts import ToolContract
from .exceptions import SoraRelayError, UnknownToolError
from .tools import video

Handler = Callable[..., Awaitable[Any]]


def render(payload: Any) -> str:
    """Serialize a tool payload as two-space indented JSON."""
    return json.dumps(payload, indent=2, ensure_ascii=False)


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one tool call: rendered text plus an error flag."""

    text: str
    is_error: bool = False

    @classmethod
    def failure(cls, message: str) -> ToolResult:
        return cls(render({"error": message}), is_error=True)


@dataclass(frozen=True)
class RegisteredTool:
    contract: ToolContract
    handler: Handler


class Dispatcher:
    """Registry of tools keyed by name."""

    def __init__(self) -> None:
        self._tools: dict[str, RegisteredTool] = {}

    def register(self, contract: ToolContract, handler: Handler) -> None:
        if contract.name in self._tools:
            raise ValueError(f"Tool already registered: {contract.name}")
        self._tools[contract.name] = RegisteredTool(contract, handler)

    def list_tools(self) -> list[ToolContract]:
        return [tool.contract for tool in self._tools.values()]

    def resolve(self, name: str) -> RegisteredTool:
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownToolError(name) from None

    async def call(self, name: str, arguments: Mapping[str, Any] | None = None) -> ToolResult:
        """Invoke a tool by name. Never raises.

        Args:
            name: Tool name
            arguments: Raw argument object from the host

        Returns:
            ToolResult with the rendered payload, or an ``{"error": ...}`` payload
        """
        try:
            tool = self.resolve(name)
            bound = tool.contract.bind(arguments)
            payload = await tool.handler(**bound)
        except SoraRelayError as e:
            logger.warning("Tool %s failed: %s", name, e)
            return ToolResult.failure(str(e))
        except Exception as e:
            logger.exception("Unexpected error in tool %s", name)
            return ToolResult.failure(str(e) or type(e).__name__)
        return ToolResult(render(payload))


def build_dispatcher() -> Dispatcher:
    """Dispatcher with every Sora tool registered."""
    dispatcher = Dispatcher()
    dispatcher.register(contracts.CREATE_VIDEO, video.create_video)
    dispatcher.register(contracts.CREATE_VIDEO_WITH_IMAGE, video.create_video_with_image)
    dispatcher.register(contracts.GET_VIDEO_STATUS, video.get_video_status)
    dispatcher.register(contracts.DOWNLOAD_VIDEO, video.download_video)
    dispatcher.register(contracts.LIST_VIDEOS, video.list_videos)
    dispatcher.register(contracts.DELETE_VIDEO, video.delete_video)
    dispatcher.register(contracts.REMIX_VIDEO, video.remix_video)
    dispatcher.register(contracts.WAIT_FOR_VIDEO, polling.wait_for_video)
    return dispatcher
