"""Value records shared by the encoder, compilers, dispatcher and extractor.

All records are immutable.  Binary data only ever travels inside
:class:`ImagePart` (base64) or :class:`ImageAsset` (raw bytes); compiled
prompts are plain text.
"""

from __future__ import annotations

import base64
import binascii
import mimetypes
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Union

from lumenstudio.core.errors import EncodingError

DEFAULT_IMAGE_MIME = "image/png"


class OutputKind(str, Enum):
    """What the caller expects back from the remote service."""

    IMAGE = "image"
    TEXT = "text"


class OperationKind(str, Enum):
    """User-facing capabilities, plus the two derived image operations."""

    GENERATE = "generate"
    EDIT = "edit"
    UPSCALE = "upscale"
    BUILD_PROMPT = "build_prompt"
    SUGGESTIONS = "suggestions"
    ANALYZE = "analyze"
    COMPOSE = "compose"
    MERGE = "merge"
    MERGE_BACKGROUND = "merge_background"
    RECONSTRUCT = "reconstruct"
    MOCKUP = "mockup"
    PERSPECTIVE = "perspective"
    FEEDBACK = "feedback"
    RELIGHT = "relight"

    @property
    def output_kind(self) -> OutputKind:
        if self in _TEXT_OPERATIONS:
            return OutputKind.TEXT
        return OutputKind.IMAGE

    @property
    def is_text_to_image(self) -> bool:
        """True for pure text-to-image operations (no input images)."""
        return self in (OperationKind.GENERATE, OperationKind.MERGE_BACKGROUND)


_TEXT_OPERATIONS = frozenset(
    {
        OperationKind.BUILD_PROMPT,
        OperationKind.SUGGESTIONS,
        OperationKind.ANALYZE,
        OperationKind.FEEDBACK,
    }
)


@dataclass(frozen=True)
class ImageAsset:
    """An opaque image blob with its declared MIME type.

    Assets are created by the caller (upload) or from a previous result
    (:meth:`ImageResult.to_asset`).  A file-backed asset keeps only its path
    until the encoder reads it.
    """

    data: bytes | None
    mime_type: str
    filename: str | None = None
    path: Path | None = field(default=None, compare=False)

    @classmethod
    def from_path(cls, path: Path | str, mime_type: str | None = None) -> ImageAsset:
        path = Path(path)
        if mime_type is None:
            mime_type = mimetypes.guess_type(path.name)[0] or ""
        return cls(data=None, mime_type=mime_type, filename=path.name, path=path)

    @classmethod
    def from_base64(
        cls, payload: str, mime_type: str = DEFAULT_IMAGE_MIME, filename: str | None = None
    ) -> ImageAsset:
        try:
            data = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise EncodingError(f"Invalid base64 image payload: {e}") from e
        return cls(data=data, mime_type=mime_type, filename=filename)

    def read_bytes(self) -> bytes:
        """Return the raw bytes, reading the backing file if needed."""
        if self.data is not None:
            return self.data
        if self.path is None:
            raise OSError("Image asset has neither data nor a backing file")
        return self.path.read_bytes()


@dataclass(frozen=True)
class ImagePart:
    """Inline image content part: base64 payload plus MIME type."""

    data: str
    mime_type: str

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.data)


@dataclass(frozen=True)
class TextPart:
    """Text content part."""

    text: str


ContentPart = Union[ImagePart, TextPart]


@dataclass(frozen=True)
class OperationRequest:
    """One outbound request: ordered parts plus the expected output kind."""

    operation: OperationKind
    parts: tuple[ContentPart, ...]
    output_kind: OutputKind

    @property
    def image_parts(self) -> tuple[ImagePart, ...]:
        return tuple(p for p in self.parts if isinstance(p, ImagePart))

    @property
    def instruction(self) -> str:
        """The trailing instruction text."""
        last = self.parts[-1] if self.parts else None
        return last.text if isinstance(last, TextPart) else ""


@dataclass(frozen=True)
class RawResponse:
    """A capability reply normalized to ordered content parts.

    ``text`` is the service's aggregated text field when it provides one.
    """

    parts: tuple[ContentPart, ...] = ()
    text: str | None = None


@dataclass(frozen=True)
class ImageResult:
    """Successful image operation result."""

    base64: str
    mime_type: str = DEFAULT_IMAGE_MIME
    kind: str = field(default="image", init=False)

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.base64)

    def to_asset(self, filename: str | None = None) -> ImageAsset:
        """Convert back into an input asset for a follow-up operation."""
        return ImageAsset(data=self.to_bytes(), mime_type=self.mime_type, filename=filename)


@dataclass(frozen=True)
class TextResult:
    """Successful text operation result."""

    text: str
    kind: str = field(default="text", init=False)


OperationResult = Union[ImageResult, TextResult]
