"""Convert raw images into transport-ready base64 payloads."""

import asyncio
import base64
import binascii
from os import PathLike
from pathlib import Path
from uuid import uuid4

from catalog_studio.domain.assets import EncodedImage, ImageAsset
from catalog_studio.domain.errors import EncodingError

ImageResource = bytes | str | PathLike[str]


async def encode(
    resource: ImageResource, media_type: str | None = None
) -> EncodedImage:
    """Read an image resource and return its base64 payload and media type."""
    data = await _read_bytes(resource)
    return _encode_bytes(data, media_type)


async def create_asset(
    resource: ImageResource,
    media_type: str | None = None,
    name: str | None = None,
) -> ImageAsset:
    """Create an immutable asset from a raw resource."""
    data = await _read_bytes(resource)
    encoded = _encode_bytes(data, media_type)
    if name is None and not isinstance(resource, bytes):
        name = Path(resource).stem
    return ImageAsset(
        id=uuid4().hex,
        raw=data,
        preview=to_data_url(encoded),
        payload=encoded.payload,
        media_type=encoded.media_type,
        name=name,
    )


def decode_payload(payload: str) -> bytes:
    """Decode a base64 payload, raising EncodingError on malformed input."""
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise EncodingError("Image payload is not valid base64") from exc


def to_data_url(encoded: EncodedImage) -> str:
    """Build a data URL from an encoded image."""
    return f"data:{encoded.media_type};base64,{encoded.payload}"


def detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    if image_bytes[:6] in {b"GIF87a", b"GIF89a"}:
        return "image/gif"
    return "image/jpeg"


async def _read_bytes(resource: ImageResource) -> bytes:
    if isinstance(resource, bytes):
        data = resource
    else:
        path = Path(resource)
        try:
            data = await asyncio.to_thread(path.read_bytes)
        except OSError as exc:
            raise EncodingError(f"Could not read image {path.name}: {exc}") from exc
    if not data:
        raise EncodingError("Image is empty")
    return data


def _encode_bytes(data: bytes, media_type: str | None) -> EncodedImage:
    resolved_type = media_type or detect_mime_type(data)
    payload = base64.b64encode(data).decode("utf-8")
    return EncodedImage(payload=payload, media_type=resolved_type)
