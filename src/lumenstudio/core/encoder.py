"""Binary encoder: image assets to transportable content parts.

The encoder is the only place where asset bytes are read.  File-backed
assets are read in a worker thread so that an event loop serving several
requests is never blocked by disk I/O.
"""

from __future__ import annotations

import asyncio
import base64
import logging
from collections.abc import Iterable

from lumenstudio.core.errors import EncodingError
from lumenstudio.core.models import ImageAsset, ImagePart

logger = logging.getLogger(__name__)


async def encode(asset: ImageAsset) -> ImagePart:
    """Encode an asset into an inline image part.

    Args:
        asset: The image to encode.

    Returns:
        ImagePart with the base64 payload and the asset's MIME type.

    Raises:
        EncodingError: If the asset has no MIME type or cannot be read.
    """
    if not asset.mime_type:
        raise EncodingError(f"Image '{asset.filename or '<memory>'}' has no MIME type")

    try:
        if asset.data is not None:
            raw = asset.data
        else:
            raw = await asyncio.to_thread(asset.read_bytes)
    except OSError as e:
        raise EncodingError(f"Failed to read image '{asset.filename}': {e}") from e

    logger.debug(f"Encoded {asset.filename or 'image'} ({len(raw)} bytes, {asset.mime_type})")
    return ImagePart(data=base64.b64encode(raw).decode("ascii"), mime_type=asset.mime_type)


async def encode_all(assets: Iterable[ImageAsset]) -> list[ImagePart]:
    """Encode several assets concurrently.

    The returned list follows the input order regardless of which read
    finishes first, so callers can rely on it for positional part ordering.
    Every read is awaited before a failure is reported; the first failure
    in input order is raised.
    """
    results = await asyncio.gather(*(encode(a) for a in assets), return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return list(results)


def decode(part: ImagePart) -> bytes:
    """Return the raw bytes carried by an image part."""
    return part.to_bytes()
