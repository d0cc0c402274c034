"""Shared pytest fixtures for Lumen Studio tests."""

from __future__ import annotations

import base64
import io
import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from lumenstudio.api.main import app
from lumenstudio.core.capabilities import ScriptedCapability
from lumenstudio.core.config import StudioConfig
from lumenstudio.core.models import ImageAsset, ImagePart, RawResponse, TextPart
from lumenstudio.core.studio import Studio


def _image_bytes(fmt: str, color: tuple[int, int, int]) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (8, 8), color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config() -> StudioConfig:
    """Create a test configuration that ignores the environment's .env file."""
    return StudioConfig(
        api_key="test-key",
        text_model="text-model",
        image_model="image-model",
        generation_model="imagen-test",
        _env_file=None,
    )


@pytest.fixture
def png_bytes() -> bytes:
    """A real 8x8 red PNG."""
    return _image_bytes("PNG", (255, 0, 0))


@pytest.fixture
def jpeg_bytes() -> bytes:
    """A real 8x8 blue JPEG."""
    return _image_bytes("JPEG", (0, 0, 255))


@pytest.fixture
def png_asset(png_bytes: bytes) -> ImageAsset:
    return ImageAsset(data=png_bytes, mime_type="image/png", filename="red.png")


@pytest.fixture
def jpeg_asset(jpeg_bytes: bytes) -> ImageAsset:
    return ImageAsset(data=jpeg_bytes, mime_type="image/jpeg", filename="blue.jpg")


@pytest.fixture
def result_png_bytes() -> bytes:
    """PNG bytes the fake service returns as its generated image."""
    return _image_bytes("PNG", (0, 255, 0))


@pytest.fixture
def image_response(result_png_bytes: bytes) -> RawResponse:
    """A reply carrying one inline PNG."""
    payload = base64.b64encode(result_png_bytes).decode("ascii")
    return RawResponse(parts=(ImagePart(data=payload, mime_type="image/png"),))


@pytest.fixture
def text_response() -> RawResponse:
    text = "## Analysis\nLooks great."
    return RawResponse(parts=(TextPart(text=text),), text=text)


@pytest.fixture
def scripted(image_response: RawResponse) -> ScriptedCapability:
    """Scripted capability answering every call with ``image_response``."""
    return ScriptedCapability(default=image_response)


@pytest.fixture
def studio(scripted: ScriptedCapability, test_config: StudioConfig) -> Studio:
    return Studio(scripted, test_config)


@pytest.fixture
def test_client(studio: Studio) -> Generator[TestClient, None, None]:
    """TestClient with a scripted studio.

    The client is not used as a context manager, so the lifespan (which
    needs a real API key) does not run.
    """
    app.state.studio = studio
    try:
        yield TestClient(app)
    finally:
        app.state.studio = None
