"""Request dispatcher: resolve the remote model and send one request.

The dispatcher is stateless.  It selects the model identifier from the
operation's output kind, checks the positional ordering contract (exactly
one instruction text part, placed last, after every image) and hands the
call to the configured :class:`~lumenstudio.core.capabilities.Capability`.
"""

from __future__ import annotations

import logging

from lumenstudio.core.capabilities import Capability, CapabilityCall
from lumenstudio.core.config import StudioConfig
from lumenstudio.core.models import OperationRequest, OutputKind, RawResponse, TextPart

logger = logging.getLogger(__name__)

IMAGE_MODALITIES = ("IMAGE",)


class Dispatcher:
    """Sends :class:`OperationRequest` objects to a capability.

    Args:
        capability: Remote capability (real or scripted).
        config: Supplies the model identifiers.
    """

    def __init__(self, capability: Capability, config: StudioConfig) -> None:
        self.capability = capability
        self.config = config

    def select_model(self, request: OperationRequest) -> str:
        """Pick the remote model for a request.

        Text output goes to the text/vision model.  Image output goes to the
        image model, except pure text-to-image operations which use the
        dedicated generation model.
        """
        if request.output_kind is OutputKind.TEXT:
            return self.config.text_model
        if request.operation.is_text_to_image:
            return self.config.generation_model
        return self.config.image_model

    @staticmethod
    def check_ordering(request: OperationRequest) -> None:
        """Enforce the part-ordering contract.

        Raises:
            ValueError: If there is not exactly one text part or it is not
                the last part.
        """
        text_positions = [i for i, p in enumerate(request.parts) if isinstance(p, TextPart)]
        if len(text_positions) != 1:
            raise ValueError(
                f"{request.operation.value}: expected exactly one text part, "
                f"got {len(text_positions)}"
            )
        if text_positions[0] != len(request.parts) - 1:
            raise ValueError(f"{request.operation.value}: the text part must come last")

    async def dispatch(self, request: OperationRequest) -> RawResponse:
        self.check_ordering(request)
        model = self.select_model(request)
        modalities = IMAGE_MODALITIES if request.output_kind is OutputKind.IMAGE else ()

        logger.info(
            f"Dispatching {request.operation.value} to {model} "
            f"({len(request.image_parts)} image part(s), {request.output_kind.value} output)"
        )
        call = CapabilityCall(
            operation=request.operation,
            model=model,
            parts=request.parts,
            output_kind=request.output_kind,
            response_modalities=modalities,
        )
        return await self.capability.invoke(call)
