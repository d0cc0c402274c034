"""Tests for lumenstudio.core.dispatcher: model selection and ordering."""

from __future__ import annotations

import asyncio

import pytest

from lumenstudio.core.capabilities import ScriptedCapability
from lumenstudio.core.dispatcher import Dispatcher
from lumenstudio.core.models import (
    ImagePart,
    OperationKind,
    OperationRequest,
    RawResponse,
    TextPart,
)

IMAGE = ImagePart(data="QUJD", mime_type="image/png")


def _request(operation: OperationKind, *parts) -> OperationRequest:
    return OperationRequest(operation=operation, parts=parts, output_kind=operation.output_kind)


class TestSelectModel:
    """Output kind decides the model."""

    @pytest.mark.parametrize(
        ("operation", "expected"),
        [
            (OperationKind.ANALYZE, "text-model"),
            (OperationKind.FEEDBACK, "text-model"),
            (OperationKind.BUILD_PROMPT, "text-model"),
            (OperationKind.SUGGESTIONS, "text-model"),
            (OperationKind.GENERATE, "imagen-test"),
            (OperationKind.MERGE_BACKGROUND, "imagen-test"),
            (OperationKind.EDIT, "image-model"),
            (OperationKind.MERGE, "image-model"),
            (OperationKind.RELIGHT, "image-model"),
            (OperationKind.UPSCALE, "image-model"),
        ],
    )
    def test_model_for_operation(self, test_config, operation, expected):
        dispatcher = Dispatcher(ScriptedCapability(), test_config)
        request = _request(operation, TextPart(text="x"))
        assert dispatcher.select_model(request) == expected


class TestCheckOrdering:
    """Exactly one text part, placed last."""

    def test_images_then_text(self):
        Dispatcher.check_ordering(_request(OperationKind.MERGE, IMAGE, IMAGE, TextPart(text="x")))

    def test_text_before_image(self):
        with pytest.raises(ValueError, match="must come last"):
            Dispatcher.check_ordering(_request(OperationKind.EDIT, TextPart(text="x"), IMAGE))

    def test_two_text_parts(self):
        request = _request(OperationKind.EDIT, TextPart(text="a"), IMAGE, TextPart(text="b"))
        with pytest.raises(ValueError, match="exactly one text part"):
            Dispatcher.check_ordering(request)

    def test_no_text_part(self):
        with pytest.raises(ValueError):
            Dispatcher.check_ordering(_request(OperationKind.EDIT, IMAGE))


class TestDispatch:
    def test_image_output_requests_image_modality(self, test_config):
        capability = ScriptedCapability(default=RawResponse())
        dispatcher = Dispatcher(capability, test_config)

        asyncio.run(dispatcher.dispatch(_request(OperationKind.EDIT, IMAGE, TextPart(text="x"))))

        call = capability.last_call
        assert call.model == "image-model"
        assert call.response_modalities == ("IMAGE",)
        assert call.prompt == "x"
        assert call.parts[0] == IMAGE

    def test_text_output_requests_no_modality(self, test_config):
        capability = ScriptedCapability(default=RawResponse(text="ok"))
        dispatcher = Dispatcher(capability, test_config)

        response = asyncio.run(
            dispatcher.dispatch(_request(OperationKind.ANALYZE, IMAGE, TextPart(text="x")))
        )

        assert response.text == "ok"
        assert capability.last_call.response_modalities == ()

    def test_bad_ordering_never_reaches_capability(self, test_config):
        capability = ScriptedCapability(default=RawResponse())
        dispatcher = Dispatcher(capability, test_config)
        with pytest.raises(ValueError):
            asyncio.run(
                dispatcher.dispatch(_request(OperationKind.EDIT, TextPart(text="x"), IMAGE))
            )
        assert capability.calls == []
