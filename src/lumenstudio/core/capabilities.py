"""Remote capability interface and its implementations.

A capability is the only thing that talks to the outside world.  It receives
a fully resolved :class:`CapabilityCall` (model identifier, ordered parts,
output kind) and returns a :class:`RawResponse` whose parts are normalized to
our own :class:`ImagePart` / :class:`TextPart` records, so the extractor
never sees SDK types.

Implementations
---------------
GeminiCapability
    Calls the Google Gemini API through the ``google-genai`` async client.
    Multimodal calls use ``generate_content``; Imagen models (used for pure
    text-to-image generation) use ``generate_images``.
ScriptedCapability
    In-memory fake that replays queued responses and records every call.
    Used by the test-suite and for offline front-end development.
"""

from __future__ import annotations

import asyncio
import base64
import logging
from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from lumenstudio.core.config import StudioConfig
from lumenstudio.core.errors import RemoteServiceError
from lumenstudio.core.models import (
    ContentPart,
    ImagePart,
    OperationKind,
    OutputKind,
    RawResponse,
    TextPart,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CapabilityCall:
    """A resolved remote call.

    Attributes:
        operation: The operation being served (for logging).
        model: Remote model identifier chosen by the dispatcher.
        parts: Ordered content parts; the instruction text is last.
        output_kind: Whether an image or text reply is expected.
        response_modalities: Modalities requested from a multimodal model.
    """

    operation: OperationKind
    model: str
    parts: tuple[ContentPart, ...]
    output_kind: OutputKind
    response_modalities: tuple[str, ...] = ()

    @property
    def prompt(self) -> str:
        last = self.parts[-1] if self.parts else None
        return last.text if isinstance(last, TextPart) else ""


class Capability(ABC):
    """Abstract remote capability."""

    @abstractmethod
    async def invoke(self, call: CapabilityCall) -> RawResponse:
        """Perform the call and return the normalized reply.

        Raises:
            RemoteServiceError: On transport, authentication, quota or
                service-side failures.
        """


class GeminiCapability(Capability):
    """Capability backed by the Google Gemini API.

    Args:
        client: A configured ``genai.Client``.
        generation_mime_type: Output MIME type requested from Imagen models.
    """

    def __init__(self, client: genai.Client, generation_mime_type: str = "image/png") -> None:
        self.client = client
        self.generation_mime_type = generation_mime_type

    @classmethod
    def from_config(cls, cfg: StudioConfig) -> GeminiCapability:
        """Build the capability from configuration.

        Raises:
            ConfigurationError: If no API key is configured.
        """
        client = genai.Client(api_key=cfg.require_api_key())
        return cls(client, generation_mime_type=cfg.generation_mime_type)

    async def invoke(self, call: CapabilityCall) -> RawResponse:
        try:
            if _is_imagen(call.model):
                return await self._generate_images(call)
            return await self._generate_content(call)
        except genai_errors.APIError as e:
            logger.error(f"Remote call failed for {call.operation.value} ({call.model}): {e}")
            raise RemoteServiceError(
                e.message or str(e), operation=call.operation.value, status_code=e.code
            ) from e
        except (httpx.HTTPError, asyncio.TimeoutError) as e:
            logger.error(f"Transport error for {call.operation.value} ({call.model}): {e!r}")
            raise RemoteServiceError(
                str(e) or "Request timed out", operation=call.operation.value
            ) from e

    async def _generate_content(self, call: CapabilityCall) -> RawResponse:
        contents = [_to_sdk_part(part) for part in call.parts]
        config = None
        if call.response_modalities:
            config = types.GenerateContentConfig(
                response_modalities=list(call.response_modalities)
            )

        response = await self.client.aio.models.generate_content(
            model=call.model,
            contents=contents,
            config=config,
        )

        parts: list[ContentPart] = []
        if response.candidates:
            content = response.candidates[0].content
            for sdk_part in (content.parts if content and content.parts else []):
                if sdk_part.inline_data and sdk_part.inline_data.data:
                    parts.append(
                        ImagePart(
                            data=base64.b64encode(sdk_part.inline_data.data).decode("ascii"),
                            mime_type=sdk_part.inline_data.mime_type or "image/png",
                        )
                    )
                elif sdk_part.text:
                    parts.append(TextPart(text=sdk_part.text))

        text = None
        if call.output_kind is OutputKind.TEXT:
            text = "".join(p.text for p in parts if isinstance(p, TextPart)) or None
        return RawResponse(parts=tuple(parts), text=text)

    async def _generate_images(self, call: CapabilityCall) -> RawResponse:
        response = await self.client.aio.models.generate_images(
            model=call.model,
            prompt=call.prompt,
            config=types.GenerateImagesConfig(
                number_of_images=1,
                output_mime_type=self.generation_mime_type,
            ),
        )

        parts: list[ContentPart] = []
        for generated in response.generated_images or []:
            image = generated.image
            if image is None or not image.image_bytes:
                continue
            parts.append(
                ImagePart(
                    data=base64.b64encode(image.image_bytes).decode("ascii"),
                    mime_type=image.mime_type or self.generation_mime_type,
                )
            )
        return RawResponse(parts=tuple(parts))


class ScriptedCapability(Capability):
    """In-memory capability replaying scripted responses.

    Responses are consumed in order.  A scripted exception is raised instead
    of returned.  When the script runs dry the ``default`` response is
    returned, so a single default is enough for most tests.

    Args:
        responses: Responses (or exceptions) to replay, in order.
        default: Response returned once the script is exhausted.

    Examples:
        >>> fake = ScriptedCapability(default=RawResponse(text="ok"))
        >>> fake.calls
        []
    """

    def __init__(
        self,
        responses: Iterable[RawResponse | Exception] = (),
        default: RawResponse | None = None,
    ) -> None:
        self._script: deque[RawResponse | Exception] = deque(responses)
        self.default = default
        self.calls: list[CapabilityCall] = []

    def queue(self, *responses: RawResponse | Exception) -> None:
        self._script.extend(responses)

    @property
    def last_call(self) -> CapabilityCall | None:
        return self.calls[-1] if self.calls else None

    async def invoke(self, call: CapabilityCall) -> RawResponse:
        self.calls.append(call)
        if self._script:
            item = self._script.popleft()
        elif self.default is not None:
            item = self.default
        else:
            raise RemoteServiceError(
                "No scripted response left", operation=call.operation.value
            )
        if isinstance(item, Exception):
            raise item
        return item


def _is_imagen(model: str) -> bool:
    return model.startswith("imagen")


def _to_sdk_part(part: ContentPart) -> types.Part:
    if isinstance(part, ImagePart):
        return types.Part.from_bytes(data=part.to_bytes(), mime_type=part.mime_type)
    return types.Part.from_text(text=part.text)
