"""Tests for lumenstudio.api.models: request and response schemas."""

from __future__ import annotations

import base64

import pytest
from pydantic import ValidationError

from lumenstudio.api.models import (
    ErrorResponse,
    ImagePayload,
    ImageResponse,
    MergeRequest,
    RelightRequest,
    TextResponse,
    UpscaleRequest,
    to_asset,
)
from lumenstudio.core.errors import EncodingError
from lumenstudio.core.models import ImageAsset, ImageResult, TextResult


class TestImagePayload:
    """Browser image payloads."""

    def test_to_asset(self, png_bytes):
        payload = ImagePayload(
            data=base64.b64encode(png_bytes).decode("ascii"),
            mime_type="image/png",
            filename="red.png",
        )
        asset = payload.to_asset()
        assert asset.data == png_bytes
        assert asset.mime_type == "image/png"
        assert asset.filename == "red.png"

    def test_data_url_prefix_is_stripped(self, jpeg_bytes):
        encoded = base64.b64encode(jpeg_bytes).decode("ascii")
        payload = ImagePayload(data=f"data:image/jpeg;base64,{encoded}", mime_type="image/jpeg")
        assert payload.to_asset().data == jpeg_bytes

    def test_data_url_declares_mime(self, jpeg_bytes):
        encoded = base64.b64encode(jpeg_bytes).decode("ascii")
        asset = ImagePayload(data=f"data:image/jpeg;base64,{encoded}").to_asset()
        assert asset.mime_type == "image/jpeg"
        assert asset.data == jpeg_bytes

    def test_explicit_mime_wins_over_data_url(self, png_bytes):
        encoded = base64.b64encode(png_bytes).decode("ascii")
        payload = ImagePayload(
            data=f"data:application/octet-stream;base64,{encoded}", mime_type="image/png"
        )
        assert payload.to_asset().mime_type == "image/png"

    def test_default_mime(self):
        assert ImagePayload(data="QUJD").mime_type == "image/png"

    def test_invalid_base64(self):
        with pytest.raises(EncodingError):
            ImagePayload(data="%%%").to_asset()

    def test_none(self):
        assert to_asset(None) is None


class TestRequests:
    def test_nested_params_validated(self):
        with pytest.raises(ValidationError):
            RelightRequest.model_validate({"params": {"intensity": 150}})

    def test_defaults(self):
        req = MergeRequest()
        assert req.object_image is None
        assert req.params.realism == 90
        assert req.preset is None

    def test_unknown_preset(self):
        with pytest.raises(ValidationError):
            UpscaleRequest.model_validate({"preset": "vintage"})


class TestResponses:
    def test_image_from_result(self):
        response = ImageResponse.from_result(ImageResult(base64="QUJD", mime_type="image/webp"))
        assert response.model_dump() == {
            "kind": "image",
            "base64": "QUJD",
            "mime_type": "image/webp",
            "filename": None,
        }

    def test_image_from_asset(self):
        asset = ImageAsset(data=b"ABC", mime_type="image/png", filename="bg.png")
        response = ImageResponse.from_asset(asset)
        assert response.base64 == "QUJD"
        assert response.filename == "bg.png"

    def test_text_from_result(self):
        assert TextResponse.from_result(TextResult(text="## Hi")).model_dump() == {
            "kind": "text",
            "text": "## Hi",
        }

    def test_error_defaults(self):
        body = ErrorResponse(error="MissingInputError", detail="Missing required input: image")
        assert body.retryable is False
        assert body.operation is None
