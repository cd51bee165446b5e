# SPDX-License-Identifier: MIT
"""Reference image handling for image-guided video creation.

A reference image arrives either as a public URL (fetched here, without the
API credential) or as an inline ``data:<mime>;base64,<payload>`` string.
"""

import base64
import binascii
import re
from dataclasses import dataclass

import anyio

from ..client import SoraClient
from ..config import logger
from ..exceptions import AmbiguousImageInputError, InvalidImageFormatError, MissingImageInputError

DATA_URI_PATTERN = re.compile(r"data:([^;]+);base64,(.+)")
DEFAULT_IMAGE_MIME = "image/jpeg"


@dataclass(frozen=True)
class ImageReference:
    """Image bytes ready to be attached as the ``input_reference`` part."""

    filename: str
    content: bytes
    mime_type: str

    def as_file_part(self) -> tuple[str, bytes, str]:
        return (self.filename, self.content, self.mime_type)


def extension_for_mime(mime_type: str) -> str:
    """File extension for a media type: the subtype, or ``jpg`` when there is none."""
    _, _, subtype = mime_type.partition("/")
    return subtype or "jpg"


def parse_data_uri(data_uri: str) -> tuple[str, bytes]:
    """Split a base64 data URI into (mime_type, decoded bytes).

    Raises:
        InvalidImageFormatError: If the string is not a base64 data URI or decodes to nothing
    """
    match = DATA_URI_PATTERN.fullmatch(data_uri)
    if match is None:
        raise InvalidImageFormatError()
    mime_type, payload = match.groups()
    try:
        content = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidImageFormatError(f"Invalid base64 image data: {e}") from e
    if not content:
        raise InvalidImageFormatError("Invalid base64 image data: payload is empty")
    return mime_type, content


async def resolve_image_reference(
    client: SoraClient,
    image_url: str | None = None,
    image_base64: str | None = None,
) -> ImageReference:
    """Turn the image inputs of create_video_with_image into an uploadable file.

    Exactly one of ``image_url`` / ``image_base64`` must be given.

    Raises:
        MissingImageInputError: If neither input is given
        AmbiguousImageInputError: If both inputs are given
        ImageFetchError: If the URL cannot be fetched
        InvalidImageFormatError: If the inline payload is malformed
    """
    if image_url and image_base64:
        raise AmbiguousImageInputError()

    if image_url:
        content, content_type = await client.fetch_external(image_url)
        logger.info("Fetched reference image %s (%d bytes)", image_url, len(content))
        return ImageReference("reference.jpg", content, content_type or DEFAULT_IMAGE_MIME)

    if image_base64:
        # Decode in thread pool (CPU-bound for large images)
        mime_type, content = await anyio.to_thread.run_sync(parse_data_uri, image_base64)
        return ImageReference(f"reference.{extension_for_mime(mime_type)}", content, mime_type)

    raise MissingImageInputError()
