"""Orchestration entry points for every studio tool.

:class:`Studio` is the public face of the core.  Each entry point follows the
same pipeline:

1. Validate required inputs (:class:`MissingInputError` names the field).
2. Encode the images in their fixed positional order.
3. Compile the instruction from the parameter bundle.
4. Assemble an :class:`OperationRequest` (images first, instruction last).
5. Dispatch it and extract the result.

Nothing is caught except to tag a :class:`StudioError` with the operation
name; every failure reaches the caller.

Usage Example
-------------
    from lumenstudio.core.capabilities import GeminiCapability
    from lumenstudio.core.config import config
    from lumenstudio.core.studio import Studio

    studio = Studio(GeminiCapability.from_config(config), config)
    result = await studio.relight(ImageAsset.from_path("portrait.jpg"), RelightParams())
"""

from __future__ import annotations

import logging
import mimetypes
from collections.abc import Callable, Sequence
from typing import Any

from lumenstudio.core.bundles import (
    BuildPromptParams,
    ComposeImages,
    ComposeParams,
    EditParams,
    GenerateParams,
    MergeImages,
    MergeParams,
    MockupImages,
    MockupParams,
    PerspectiveParams,
    ReconstructParams,
    RelightParams,
    SuggestionParams,
    UpscaleParams,
)
from lumenstudio.core.capabilities import Capability
from lumenstudio.core.config import StudioConfig
from lumenstudio.core.dispatcher import Dispatcher
from lumenstudio.core.encoder import encode_all
from lumenstudio.core.errors import MissingInputError, StudioError
from lumenstudio.core.extractor import extract
from lumenstudio.core.history import EditHistory
from lumenstudio.core.models import (
    ImageAsset,
    ImageResult,
    OperationKind,
    OperationRequest,
    OperationResult,
    TextPart,
    TextResult,
)
from lumenstudio.core.prompts import (
    compile_analysis,
    compile_build_prompt,
    compile_compose,
    compile_edit,
    compile_feedback,
    compile_generate,
    compile_merge,
    compile_mockup,
    compile_perspective,
    compile_reconstruct,
    compile_relight,
    compile_suggestions,
    compile_upscale,
)

logger = logging.getLogger(__name__)

# Compilers keyed by operation, with the bundle type each one accepts.
# Used for instruction previews; the entry points call compilers directly.
COMPILERS: dict[OperationKind, tuple[type | None, Callable[..., str]]] = {
    OperationKind.GENERATE: (GenerateParams, compile_generate),
    OperationKind.EDIT: (EditParams, compile_edit),
    OperationKind.UPSCALE: (UpscaleParams, compile_upscale),
    OperationKind.BUILD_PROMPT: (BuildPromptParams, compile_build_prompt),
    OperationKind.SUGGESTIONS: (SuggestionParams, compile_suggestions),
    OperationKind.ANALYZE: (None, compile_analysis),
    OperationKind.COMPOSE: (ComposeParams, compile_compose),
    OperationKind.MERGE: (MergeParams, compile_merge),
    OperationKind.RECONSTRUCT: (ReconstructParams, compile_reconstruct),
    OperationKind.MOCKUP: (MockupParams, compile_mockup),
    OperationKind.PERSPECTIVE: (PerspectiveParams, compile_perspective),
    OperationKind.FEEDBACK: (None, compile_feedback),
    OperationKind.RELIGHT: (RelightParams, compile_relight),
}


def preview_instruction(operation: OperationKind, params: dict[str, Any] | None = None) -> str:
    """Compile an operation's instruction without calling the remote service.

    Args:
        operation: Any operation with a compiler (not ``MERGE_BACKGROUND``).
        params: Raw bundle fields; validated into the operation's bundle.

    Raises:
        KeyError: If the operation has no compiler.
        pydantic.ValidationError: If ``params`` is not a valid bundle.
    """
    bundle_type, compiler = COMPILERS[operation]
    if bundle_type is None:
        return compiler()
    return compiler(bundle_type.model_validate(params or {}))


def _require(field: str, value: object) -> None:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MissingInputError(field)


def _single(image: ImageAsset | None) -> tuple[ImageAsset, ...]:
    return (image,) if image is not None else ()


class Studio:
    """Async entry points for the twelve studio tools plus the derived
    upscale, background-generation and history-edit operations.

    Args:
        capability: Remote capability used for every call.
        config: Supplies model identifiers to the dispatcher.
    """

    def __init__(self, capability: Capability, config: StudioConfig) -> None:
        self.dispatcher = Dispatcher(capability, config)

    async def _run(
        self,
        operation: OperationKind,
        images: Sequence[ImageAsset],
        instruction: str,
    ) -> OperationResult:
        parts = await encode_all(images)
        request = OperationRequest(
            operation=operation,
            parts=(*parts, TextPart(text=instruction)),
            output_kind=operation.output_kind,
        )
        response = await self.dispatcher.dispatch(request)
        result = extract(response, request.output_kind)
        logger.info(f"{operation.value} completed ({result.kind} result)")
        return result

    async def _invoke(
        self,
        operation: OperationKind,
        required: dict[str, object],
        images: Sequence[ImageAsset],
        compile_: Callable[[], str],
    ) -> OperationResult:
        try:
            for field, value in required.items():
                _require(field, value)
            return await self._run(operation, images, compile_())
        except StudioError as e:
            raise e.with_operation(operation.value)

    # ------------------------------------------------------------------
    # Generation and editing
    # ------------------------------------------------------------------

    async def generate(self, params: GenerateParams) -> ImageResult:
        """Text-to-image generation with an optional style preset."""
        return await self._invoke(
            OperationKind.GENERATE,
            {"prompt": params.prompt},
            (),
            lambda: compile_generate(params),
        )

    async def edit(self, image: ImageAsset | None, params: EditParams) -> ImageResult:
        return await self._invoke(
            OperationKind.EDIT,
            {"image": image, "instruction": params.instruction},
            _single(image),
            lambda: compile_edit(params),
        )

    async def upscale(
        self, image: ImageAsset | None, params: UpscaleParams | None = None
    ) -> ImageResult:
        """Super-resolution upscale: an edit with a synthesized instruction."""
        params = params or UpscaleParams()
        return await self._invoke(
            OperationKind.UPSCALE,
            {"image": image},
            _single(image),
            lambda: compile_upscale(params),
        )

    async def edit_from_history(self, history: EditHistory, instruction: str) -> ImageAsset:
        """Edit the active history step and append the result.

        Any steps after the active one are discarded.  The returned asset is
        the new active step, carrying the exact bytes and MIME type the
        model returned.
        """
        result = await self.edit(history.current, EditParams(instruction=instruction))
        extension = mimetypes.guess_extension(result.mime_type) or ".png"
        asset = result.to_asset(
            filename=f"edited-image-step-{history.active_index + 1}{extension}"
        )
        return history.push(asset)

    # ------------------------------------------------------------------
    # Text assistants
    # ------------------------------------------------------------------

    async def build_prompt(self, params: BuildPromptParams) -> TextResult:
        return await self._invoke(
            OperationKind.BUILD_PROMPT,
            {"details": params.details},
            (),
            lambda: compile_build_prompt(params),
        )

    async def suggestions(
        self, params: SuggestionParams, image: ImageAsset | None = None
    ) -> TextResult:
        """Creative suggestions; the optional reference image goes first."""
        return await self._invoke(
            OperationKind.SUGGESTIONS,
            {"description": params.description},
            _single(image),
            lambda: compile_suggestions(params),
        )

    async def analyze(self, image: ImageAsset | None) -> TextResult:
        return await self._invoke(
            OperationKind.ANALYZE, {"image": image}, _single(image), compile_analysis
        )

    async def feedback(self, image: ImageAsset | None) -> TextResult:
        return await self._invoke(
            OperationKind.FEEDBACK, {"image": image}, _single(image), compile_feedback
        )

    # ------------------------------------------------------------------
    # Multi-layer tools
    # ------------------------------------------------------------------

    async def compose(
        self, images: ComposeImages, params: ComposeParams | None = None
    ) -> ImageResult:
        """Compose background, midground, foreground and palette layers.

        The layer flags on ``params`` are derived from ``images`` so the
        instruction lists exactly the layers that are sent.
        """
        params = (params or ComposeParams()).model_copy(
            update={
                "has_midground": images.midground is not None,
                "has_foreground": images.foreground is not None,
                "has_palette": images.palette is not None,
            }
        )
        return await self._invoke(
            OperationKind.COMPOSE,
            {"background": images.background},
            images.ordered(),
            lambda: compile_compose(params),
        )

    async def merge(self, images: MergeImages, params: MergeParams | None = None) -> ImageResult:
        params = params or MergeParams()
        return await self._invoke(
            OperationKind.MERGE,
            {"object_image": images.object_image, "background_image": images.background_image},
            images.ordered(),
            lambda: compile_merge(params),
        )

    async def generate_background(
        self, prompt: str, filename: str = "generated-background.png"
    ) -> ImageAsset:
        """Generate a background for the merger and return it as an asset.

        The prompt is sent as-is.  The returned asset holds the exact bytes
        and MIME type of the generated image, ready to be passed to
        :meth:`merge`.
        """
        result = await self._invoke(
            OperationKind.MERGE_BACKGROUND,
            {"prompt": prompt},
            (),
            lambda: prompt.strip(),
        )
        return result.to_asset(filename=filename)

    async def reconstruct(
        self, image: ImageAsset | None, params: ReconstructParams
    ) -> ImageResult:
        return await self._invoke(
            OperationKind.RECONSTRUCT,
            {"image": image, "prompt": params.prompt},
            _single(image),
            lambda: compile_reconstruct(params),
        )

    # ------------------------------------------------------------------
    # Single-image re-rendering
    # ------------------------------------------------------------------

    async def mockup(self, images: MockupImages, params: MockupParams | None = None) -> ImageResult:
        params = params or MockupParams()
        return await self._invoke(
            OperationKind.MOCKUP,
            {"design": images.design},
            images.ordered(),
            lambda: compile_mockup(params),
        )

    async def perspective(
        self, image: ImageAsset | None, params: PerspectiveParams | None = None
    ) -> ImageResult:
        params = params or PerspectiveParams()
        return await self._invoke(
            OperationKind.PERSPECTIVE,
            {"image": image},
            _single(image),
            lambda: compile_perspective(params),
        )

    async def relight(
        self, image: ImageAsset | None, params: RelightParams | None = None
    ) -> ImageResult:
        params = params or RelightParams()
        return await self._invoke(
            OperationKind.RELIGHT,
            {"image": image},
            _single(image),
            lambda: compile_relight(params),
        )
