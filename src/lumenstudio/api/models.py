"""Pydantic request and response models for the Lumen Studio API.

These models define the JSON schema for every API endpoint.  FastAPI uses
them for automatic request validation, serialisation, and OpenAPI
documentation generation.

Images travel as base64 JSON objects (:class:`ImagePayload`).  Tool
controls reuse the core parameter bundles from
:mod:`lumenstudio.core.bundles` unchanged, so slider ranges and option
domains are validated once, in one place.

Models
------
ImagePayload
    One uploaded image: base64 data, MIME type and optional filename.
*Request
    One request body per endpoint.
ImageResponse / TextResponse
    Successful operation results.
ErrorResponse
    Body returned for every :class:`~lumenstudio.core.errors.StudioError`.
"""

from __future__ import annotations

import base64
from typing import Any, Literal

from pydantic import BaseModel, Field

from lumenstudio.core.bundles import (
    BuildPromptParams,
    ComposeParams,
    MergeParams,
    MockupParams,
    PerspectiveParams,
    ReconstructParams,
    RelightParams,
    UpscaleParams,
)
from lumenstudio.core.models import DEFAULT_IMAGE_MIME, ImageAsset, ImageResult, TextResult


class ImagePayload(BaseModel):
    """An image sent by the browser.

    Attributes:
        data: Base64-encoded image bytes or a full ``data:`` URL.
        mime_type: Declared MIME type, e.g. ``image/jpeg``.
        filename: Original file name, if known.
    """

    data: str = Field(..., description="Base64-encoded image bytes.")
    mime_type: str = Field(default=DEFAULT_IMAGE_MIME, description="Image MIME type.")
    filename: str | None = Field(default=None, description="Original file name.")

    def to_asset(self) -> ImageAsset:
        """Decode into an :class:`ImageAsset`.

        A ``data:<mime>;base64,`` URL is accepted too.  Its media type is used
        unless ``mime_type`` was given explicitly.

        Raises:
            EncodingError: If ``data`` is not valid base64.
        """
        data = self.data
        mime_type = self.mime_type
        # Tolerate full data URLs pasted from the browser.
        if data.startswith("data:") and "," in data:
            header, data = data.split(",", 1)
            declared = header[len("data:") :].split(";", 1)[0]
            if declared and "mime_type" not in self.model_fields_set:
                mime_type = declared
        return ImageAsset.from_base64(data, mime_type=mime_type, filename=self.filename)


def to_asset(payload: ImagePayload | None) -> ImageAsset | None:
    return payload.to_asset() if payload is not None else None


# ---------------------------------------------------------------------------
# Request bodies.
# ---------------------------------------------------------------------------


class GenerateRequest(BaseModel):
    """Request body for ``POST /api/generate``.

    ``style_preset`` may be a preset name (``"Cinematic"``) or a raw style
    suffix; names are resolved by the route.
    """

    prompt: str = Field(default="", description="Image description.")
    style_preset: str | None = Field(default=None, description="Style preset name or suffix.")


class EditRequest(BaseModel):
    image: ImagePayload | None = None
    instruction: str = Field(default="", description="What to change in the image.")


class UpscaleRequest(BaseModel):
    """Request body for ``POST /api/upscale``.

    When ``preset`` is set it replaces every control in ``params`` except
    the scale.
    """

    image: ImagePayload | None = None
    preset: Literal["clean", "realistic", "cinematic", "artistic", "smooth"] | None = None
    params: UpscaleParams = Field(default_factory=UpscaleParams)


class BuildPromptRequest(BuildPromptParams):
    """Request body for ``POST /api/prompt/build``."""


class SuggestionsRequest(BaseModel):
    description: str = ""
    image: ImagePayload | None = None


class ImageRequest(BaseModel):
    """Request body for tools that only take an image (analyze, feedback)."""

    image: ImagePayload | None = None


class ComposeRequest(BaseModel):
    """Layer images plus zone controls.  Only ``background`` is required."""

    background: ImagePayload | None = None
    midground: ImagePayload | None = None
    foreground: ImagePayload | None = None
    palette: ImagePayload | None = None
    params: ComposeParams = Field(default_factory=ComposeParams)


class MergeRequest(BaseModel):
    """Subject image, background image and merge controls.

    ``preset`` is applied on top of ``params``.
    """

    object_image: ImagePayload | None = None
    background_image: ImagePayload | None = None
    preset: Literal["realistic", "preserve", "cinematic"] | None = None
    params: MergeParams = Field(default_factory=MergeParams)


class BackgroundRequest(BaseModel):
    prompt: str = Field(default="", description="Background description.")


class ReconstructRequest(BaseModel):
    image: ImagePayload | None = None
    params: ReconstructParams = Field(default_factory=ReconstructParams)


class MockupRequest(BaseModel):
    design: ImagePayload | None = None
    params: MockupParams = Field(default_factory=MockupParams)


class PerspectiveRequest(BaseModel):
    image: ImagePayload | None = None
    params: PerspectiveParams = Field(default_factory=PerspectiveParams)


class RelightRequest(BaseModel):
    image: ImagePayload | None = None
    params: RelightParams = Field(default_factory=RelightParams)


class PreviewRequest(BaseModel):
    """Raw bundle fields for an instruction preview."""

    params: dict[str, Any] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Response bodies.
# ---------------------------------------------------------------------------


class ImageResponse(BaseModel):
    kind: Literal["image"] = "image"
    base64: str
    mime_type: str
    filename: str | None = None

    @classmethod
    def from_result(cls, result: ImageResult) -> ImageResponse:
        return cls(base64=result.base64, mime_type=result.mime_type)

    @classmethod
    def from_asset(cls, asset: ImageAsset) -> ImageResponse:
        return cls(
            base64=base64.b64encode(asset.read_bytes()).decode("ascii"),
            mime_type=asset.mime_type,
            filename=asset.filename,
        )


class TextResponse(BaseModel):
    kind: Literal["text"] = "text"
    text: str

    @classmethod
    def from_result(cls, result: TextResult) -> TextResponse:
        return cls(text=result.text)


class PreviewResponse(BaseModel):
    operation: str
    instruction: str


class ErrorResponse(BaseModel):
    """Error body.

    Attributes:
        error: Error class name (``MissingInputError``...).
        detail: Human-readable message.
        operation: Operation that failed.
        retryable: Whether trying again may succeed.
    """

    error: str
    detail: str
    operation: str | None = None
    retryable: bool = False
