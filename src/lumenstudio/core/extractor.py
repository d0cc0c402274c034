"""Response extractor: normalized replies to operation results."""

from __future__ import annotations

import logging

from lumenstudio.core.errors import EmptyResponseError, NoImageReturnedError
from lumenstudio.core.models import (
    ImagePart,
    ImageResult,
    OperationResult,
    OutputKind,
    RawResponse,
    TextPart,
    TextResult,
)

logger = logging.getLogger(__name__)


def extract(response: RawResponse, output_kind: OutputKind) -> OperationResult:
    """Turn a capability reply into an :data:`OperationResult`.

    For image output every part is scanned in sequence and the first inline
    image wins, wherever it sits.  For text output the aggregated ``text``
    field is preferred; otherwise the text parts are concatenated.

    Raises:
        NoImageReturnedError: No part carried image data.  The model may
            have declined (safety filters), so this is retryable.
        EmptyResponseError: Text output was requested but none came back.
    """
    if output_kind is OutputKind.IMAGE:
        for part in response.parts:
            if isinstance(part, ImagePart) and part.data:
                return ImageResult(base64=part.data, mime_type=part.mime_type)
        declined = " ".join(p.text for p in response.parts if isinstance(p, TextPart)).strip()
        if declined:
            logger.warning(f"Model replied with text instead of an image: {declined[:200]}")
        raise NoImageReturnedError("No image was returned by the model")

    text = response.text
    if text is None:
        text = "".join(p.text for p in response.parts if isinstance(p, TextPart))
    if not text.strip():
        raise EmptyResponseError("The model returned an empty response")
    return TextResult(text=text.strip())
