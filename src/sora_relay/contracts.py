# SPDX-License-Identifier: MIT
"""Declarative contracts for every tool the server exposes.

A contract names a tool, describes it, and lists its parameters. Each
contract builds a pydantic model from its parameters: the host receives that
model's JSON Schema, and the dispatcher validates incoming arguments against
it (required, enum, type, bounds and defaults) before a handler runs.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from functools import cached_property
from typing import Annotated, Any, Literal

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationError, create_model

from . import descriptions as d
from .config import logger
from .exceptions import InvalidArgumentsError

ParamType = Literal["string", "number", "integer"]

_NO_DEFAULT: Any = object()

_PYTHON_TYPES: dict[str, type] = {"string": str, "number": float, "integer": int}

VIDEO_MODELS = ("sora-2", "sora-2-pro")
VIDEO_SIZES = ("1920x1080", "1080x1920", "1280x720", "720x1280", "1024x1024")
VIDEO_SECONDS = (5, 10, 15, 20)
CONTENT_VARIANTS = ("video", "thumbnail", "spritesheet")
SORT_ORDERS = ("asc", "desc")


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be empty")
    return value


@dataclass(frozen=True)
class ToolParameter:
    """One named parameter of a tool."""

    name: str
    type: ParamType
    description: str
    required: bool = False
    enum: tuple[Any, ...] | None = None
    default: Any = _NO_DEFAULT
    minimum: float | None = None
    maximum: float | None = None
    exclusive_minimum: float | None = None
    min_length: int | None = None

    @property
    def has_default(self) -> bool:
        return self.default is not _NO_DEFAULT

    def annotation(self) -> Any:
        """Python type pydantic validates this parameter against."""
        if self.enum is not None:
            return Literal[self.enum]
        if self.type == "string" and self.min_length is not None:
            return Annotated[str, AfterValidator(_not_blank)]
        return _PYTHON_TYPES[self.type]

    def field(self) -> Any:
        constraints: dict[str, Any] = {
            "description": self.description,
            "ge": self.minimum,
            "le": self.maximum,
            "gt": self.exclusive_minimum,
            "min_length": self.min_length,
        }
        constraints = {k: v for k, v in constraints.items() if v is not None}
        if self.type != "string" and self.enum is None:
            # No str-to-number or bool-to-number coercion
            constraints["strict"] = True
        if self.has_default:
            return Field(default=self.default, **constraints)
        if self.required:
            return Field(**constraints)
        return Field(default=None, **constraints)


def _describe(error: Mapping[str, Any]) -> str:
    name = ".".join(str(part) for part in error["loc"])
    if error["type"] == "missing":
        return f"missing required parameter '{name}'"
    return f"'{name}': {error['msg']}"


@dataclass(frozen=True)
class ToolContract:
    """Static description of one invocable tool."""

    name: str
    description: str
    parameters: tuple[ToolParameter, ...] = ()

    @cached_property
    def arguments_model(self) -> type[BaseModel]:
        """pydantic model holding one field per parameter."""
        model_name = "".join(part.capitalize() for part in self.name.split("_")) + "Arguments"
        fields = {p.name: (p.annotation(), p.field()) for p in self.parameters}
        return create_model(model_name, __config__=ConfigDict(extra="ignore"), **fields)

    def input_schema(self) -> dict[str, Any]:
        """JSON Schema object describing the tool's arguments."""
        schema = self.arguments_model.model_json_schema()
        properties: dict[str, Any] = {}
        for param in self.parameters:
            prop = {k: v for k, v in schema["properties"][param.name].items() if k != "title"}
            prop.setdefault("type", param.type)
            if not param.has_default:
                prop.pop("default", None)
            properties[param.name] = prop
        return {
            "type": "object",
            "properties": properties,
            "required": [p.name for p in self.parameters if p.required],
        }

    def bind(self, arguments: Mapping[str, Any] | None) -> dict[str, Any]:
        """Validate raw arguments and apply defaults.

        Parameters that are omitted (or null) and have no default are left
        out of the result entirely. Unknown keys are dropped.

        Raises:
            InvalidArgumentsError: If a required parameter is missing or a value is invalid
        """
        arguments = arguments or {}
        if not isinstance(arguments, Mapping):
            raise InvalidArgumentsError(self.name, "arguments must be an object")

        unknown = set(arguments) - {p.name for p in self.parameters}
        if unknown:
            logger.debug("Ignoring unknown arguments for %s: %s", self.name, ", ".join(sorted(unknown)))

        supplied = {k: v for k, v in arguments.items() if v is not None and k not in unknown}
        try:
            model = self.arguments_model.model_validate(supplied)
        except ValidationError as e:
            detail = "; ".join(_describe(error) for error in e.errors())
            raise InvalidArgumentsError(self.name, detail) from e

        bound = model.model_dump(exclude_unset=True)
        for param in self.parameters:
            if param.has_default:
                bound.setdefault(param.name, param.default)
        return bound


# ==================== SHARED PARAMETERS ====================


def _video_id(description: str = d.VIDEO_ID) -> ToolParameter:
    return ToolParameter("video_id", "string", description, required=True, min_length=1)


def _generation_params(size_description: str = d.SIZE) -> tuple[ToolParameter, ...]:
    return (
        ToolParameter("model", "string", d.MODEL, enum=VIDEO_MODELS, default="sora-2"),
        ToolParameter("size", "string", size_description, enum=VIDEO_SIZES, default="1280x720"),
        ToolParameter("seconds", "integer", d.SECONDS, enum=VIDEO_SECONDS, default=5),
    )


# ==================== TOOL CONTRACTS ====================

CREATE_VIDEO = ToolContract(
    "create_video",
    d.CREATE_VIDEO,
    (
        ToolParameter("prompt", "string", d.PROMPT, required=True, min_length=1),
        *_generation_params(),
    ),
)

CREATE_VIDEO_WITH_IMAGE = ToolContract(
    "create_video_with_image",
    d.CREATE_VIDEO_WITH_IMAGE,
    (
        ToolParameter("prompt", "string", d.IMAGE_PROMPT, required=True, min_length=1),
        ToolParameter("image_url", "string", d.IMAGE_URL, min_length=1),
        ToolParameter("image_base64", "string", d.IMAGE_BASE64, min_length=1),
        *_generation_params("Resolution of the output video. Should match the input image aspect ratio."),
    ),
)

GET_VIDEO_STATUS = ToolContract(
    "get_video_status",
    d.GET_VIDEO_STATUS,
    (_video_id("The ID of the video job to check."),),
)

DOWNLOAD_VIDEO = ToolContract(
    "download_video",
    d.DOWNLOAD_VIDEO,
    (
        _video_id("The ID of the completed video to download."),
        ToolParameter("variant", "string", d.VARIANT, enum=CONTENT_VARIANTS, default="video"),
    ),
)

LIST_VIDEOS = ToolContract(
    "list_videos",
    d.LIST_VIDEOS,
    (
        ToolParameter("limit", "integer", d.LIMIT, minimum=1, maximum=100),
        ToolParameter("order", "string", d.ORDER, enum=SORT_ORDERS),
        ToolParameter("after", "string", d.AFTER, min_length=1),
    ),
)

DELETE_VIDEO = ToolContract(
    "delete_video",
    d.DELETE_VIDEO,
    (_video_id("The ID of the video to delete."),),
)

REMIX_VIDEO = ToolContract(
    "remix_video",
    d.REMIX_VIDEO,
    (
        _video_id("The ID of the completed video to remix."),
        ToolParameter("prompt", "string", d.REMIX_PROMPT, required=True, min_length=1),
    ),
)

WAIT_FOR_VIDEO = ToolContract(
    "wait_for_video",
    d.WAIT_FOR_VIDEO,
    (
        _video_id("The ID of the video job to wait for."),
        ToolParameter("poll_interval_seconds", "number", d.POLL_INTERVAL, default=10, exclusive_minimum=0),
        ToolParameter("timeout_seconds", "number", d.TIMEOUT, default=600, exclusive_minimum=0),
    ),
)

TOOLS: tuple[ToolContract, ...] = (
    CREATE_VIDEO,
    CREATE_VIDEO_WITH_IMAGE,
    GET_VIDEO_STATUS,
    DOWNLOAD_VIDEO,
    LIST_VIDEOS,
    DELETE_VIDEO,
    REMIX_VIDEO,
    WAIT_FOR_VIDEO,
)
