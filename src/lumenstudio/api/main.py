"""Lumen Studio: FastAPI Application.

This module is the single entry point for the web application.  It defines
the FastAPI ``app`` instance, all REST API routes, and the ``main()`` CLI
function that launches the uvicorn server.

Architecture
------------
The application follows a stateless REST pattern:

- **Configuration** comes from :data:`~lumenstudio.core.config.config` and
  the option domains are served to the browser via ``GET /api/config``.
- **Operations** are performed by :class:`~lumenstudio.core.studio.Studio`,
  created once in the lifespan and stored on ``app.state``.
- **Images** travel as base64 JSON in both directions; nothing is written
  to disk.
- **Errors** raised by the core are mapped to HTTP status codes by a single
  exception handler, so routes contain no ``try`` blocks.

Endpoints
---------
========  ==================================  ==============================
Method    Path                                Purpose
========  ==================================  ==============================
GET       ``/api/config``                     Option domains, presets, models
POST      ``/api/generate``                   Text-to-image generation
POST      ``/api/edit``                       Instruction-based image edit
POST      ``/api/upscale``                    Super-resolution upscale
POST      ``/api/prompt/build``               Expand an idea into a prompt
POST      ``/api/suggestions``                Creative suggestions
POST      ``/api/analyze``                    Image analysis
POST      ``/api/feedback``                   Art director critique
POST      ``/api/compose``                    Multi-layer scene composition
POST      ``/api/merge``                      Subject/background merge
POST      ``/api/merge/background``           Generate a merge background
POST      ``/api/reconstruct``                Scene reconstruction
POST      ``/api/mockup``                     Product mockup
POST      ``/api/perspective``                Camera/perspective change
POST      ``/api/relight``                    Virtual relighting
POST      ``/api/prompt/preview/{operation}`` Preview a compiled instruction
========  ==================================  ==============================

Error Mapping
-------------
=========================================  ======
Error                                      Status
=========================================  ======
``MissingInputError``, ``EncodingError``   400
``NoImageReturnedError``,
``EmptyResponseError``                     422
``RemoteServiceError``                     502
=========================================  ======

Usage
-----
CLI (installed entry point)::

    lumenstudio

Direct invocation::

    python -m lumenstudio.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import get_args

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from lumenstudio import __version__
from lumenstudio.api.models import (
    BackgroundRequest,
    BuildPromptRequest,
    ComposeRequest,
    EditRequest,
    ErrorResponse,
    GenerateRequest,
    ImageRequest,
    ImageResponse,
    MergeRequest,
    MockupRequest,
    PerspectiveRequest,
    PreviewRequest,
    PreviewResponse,
    ReconstructRequest,
    RelightRequest,
    SuggestionsRequest,
    TextResponse,
    UpscaleRequest,
    to_asset,
)
from lumenstudio.core import bundles
from lumenstudio.core.bundles import (
    BuildPromptParams,
    ComposeImages,
    EditParams,
    GenerateParams,
    MergeImages,
    MockupImages,
    SuggestionParams,
)
from lumenstudio.core.capabilities import GeminiCapability
from lumenstudio.core.config import config
from lumenstudio.core.errors import (
    EmptyResponseError,
    NoImageReturnedError,
    RemoteServiceError,
    StudioError,
)
from lumenstudio.core.models import OperationKind
from lumenstudio.core.prompts import (
    GENERATOR_STYLE_PRESETS,
    MERGE_PRESETS,
    UPSCALE_PRESETS,
    apply_merge_preset,
    upscale_preset,
)
from lumenstudio.core.prompts.presets import MERGE_PRESET_NAMES, UPSCALE_PRESET_NAMES
from lumenstudio.core.studio import COMPILERS, Studio, preview_instruction

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Application lifecycle: remote capability setup.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application startup and shutdown lifecycle.

    On startup:
        Builds the Gemini capability and a :class:`Studio` around it, and
        stores the studio on ``app.state``.  A missing API key raises
        :class:`~lumenstudio.core.errors.ConfigurationError` here, which
        stops the server before it accepts any request.

    On shutdown:
        Drops the studio reference.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    # --- Startup -----------------------------------------------------------
    capability = GeminiCapability.from_config(config)
    app.state.studio = Studio(capability, config)
    logger.info(
        f"Studio ready (text={config.text_model}, image={config.image_model}, "
        f"generation={config.generation_model})"
    )

    yield  # Application runs here.

    # --- Shutdown ----------------------------------------------------------
    app.state.studio = None
    logger.info("Studio released on shutdown.")


# ---------------------------------------------------------------------------
# FastAPI application instance.
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Lumen Studio",
    description="Prompt compilation and orchestration for multimodal image tools.",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Error handling.
# ---------------------------------------------------------------------------


def _status_for(error: StudioError) -> int:
    if isinstance(error, RemoteServiceError):
        return 502
    if isinstance(error, (NoImageReturnedError, EmptyResponseError)):
        return 422
    return 400


@app.exception_handler(StudioError)
async def studio_error_handler(request: Request, exc: StudioError) -> JSONResponse:
    """Convert a core error into a JSON error body.

    The ``retryable`` flag lets the browser tell "try again" apart from
    "fix your input".
    """
    status = _status_for(exc)
    log = logger.warning if status < 500 else logger.error
    log(f"{request.url.path} failed: {exc}")
    body = ErrorResponse(
        error=type(exc).__name__,
        detail=exc.message,
        operation=exc.operation,
        retryable=exc.retryable,
    )
    return JSONResponse(status_code=status, content=body.model_dump())


def _studio(request: Request) -> Studio:
    return request.app.state.studio


# ---------------------------------------------------------------------------
# Configuration.
# ---------------------------------------------------------------------------


@app.get("/api/config")
async def get_config() -> dict:
    """Return option domains, presets and model identifiers for the frontend.

    Returns:
        Dictionary with ``version``, ``models``, ``options`` (one list per
        enumerated control) and ``presets``.
    """
    return {
        "version": __version__,
        "models": {
            "text": config.text_model,
            "image": config.image_model,
            "generation": config.generation_model,
        },
        "options": {
            "upscale_factors": list(bundles.UPSCALE_FACTORS),
            "upscale_modes": list(get_args(bundles.UpscaleMode)),
            "prompt_categories": list(get_args(bundles.PromptCategory)),
            "angle_presets": list(get_args(bundles.AnglePreset)),
            "light_types": list(get_args(bundles.LightType)),
            "light_directions": list(get_args(bundles.LightDirection)),
            "camera_angles": list(get_args(bundles.CameraAngle)),
            "merge_lighting_styles": list(get_args(bundles.MergeLighting)),
            "reconstruct_styles": list(get_args(bundles.ReconstructStyle)),
            "reconstruct_lighting": list(get_args(bundles.ReconstructLighting)),
            "product_types": list(get_args(bundles.ProductType)),
        },
        "presets": {
            "generator": [
                {"name": name, "prompt": prompt}
                for name, prompt in GENERATOR_STYLE_PRESETS.items()
            ],
            "upscale": [
                {"id": preset_id, "name": UPSCALE_PRESET_NAMES[preset_id]}
                for preset_id in UPSCALE_PRESETS
            ],
            "merge": [
                {"id": preset_id, "name": MERGE_PRESET_NAMES[preset_id]}
                for preset_id in MERGE_PRESETS
            ],
        },
    }


# ---------------------------------------------------------------------------
# Generation and editing.
# ---------------------------------------------------------------------------


@app.post("/api/generate")
async def generate(req: GenerateRequest, request: Request) -> ImageResponse:
    """Generate an image from a prompt.

    A ``style_preset`` matching a preset name is replaced by that preset's
    style suffix; any other value is appended verbatim.
    """
    style = GENERATOR_STYLE_PRESETS.get(req.style_preset or "", req.style_preset)
    params = GenerateParams(prompt=req.prompt, style_preset=style)
    result = await _studio(request).generate(params)
    return ImageResponse.from_result(result)


@app.post("/api/edit")
async def edit(req: EditRequest, request: Request) -> ImageResponse:
    result = await _studio(request).edit(
        to_asset(req.image), EditParams(instruction=req.instruction)
    )
    return ImageResponse.from_result(result)


@app.post("/api/upscale")
async def upscale(req: UpscaleRequest, request: Request) -> ImageResponse:
    """Upscale an image.  A ``preset`` overrides every control but the scale."""
    params = req.params
    if req.preset is not None:
        params = upscale_preset(req.preset, scale=params.scale)
    result = await _studio(request).upscale(to_asset(req.image), params)
    return ImageResponse.from_result(result)


# ---------------------------------------------------------------------------
# Text assistants.
# ---------------------------------------------------------------------------


@app.post("/api/prompt/build")
async def build_prompt(req: BuildPromptRequest, request: Request) -> TextResponse:
    params = BuildPromptParams(category=req.category, details=req.details)
    result = await _studio(request).build_prompt(params)
    return TextResponse.from_result(result)


@app.post("/api/suggestions")
async def suggestions(req: SuggestionsRequest, request: Request) -> TextResponse:
    result = await _studio(request).suggestions(
        SuggestionParams(description=req.description), image=to_asset(req.image)
    )
    return TextResponse.from_result(result)


@app.post("/api/analyze")
async def analyze(req: ImageRequest, request: Request) -> TextResponse:
    result = await _studio(request).analyze(to_asset(req.image))
    return TextResponse.from_result(result)


@app.post("/api/feedback")
async def feedback(req: ImageRequest, request: Request) -> TextResponse:
    result = await _studio(request).feedback(to_asset(req.image))
    return TextResponse.from_result(result)


# ---------------------------------------------------------------------------
# Multi-layer tools.
# ---------------------------------------------------------------------------


@app.post("/api/compose")
async def compose(req: ComposeRequest, request: Request) -> ImageResponse:
    images = ComposeImages(
        background=to_asset(req.background),
        midground=to_asset(req.midground),
        foreground=to_asset(req.foreground),
        palette=to_asset(req.palette),
    )
    result = await _studio(request).compose(images, req.params)
    return ImageResponse.from_result(result)


@app.post("/api/merge")
async def merge(req: MergeRequest, request: Request) -> ImageResponse:
    """Merge a subject into a background.  A ``preset`` is applied on top of
    ``params``."""
    params = req.params
    if req.preset is not None:
        params = apply_merge_preset(params, req.preset)
    images = MergeImages(
        object_image=to_asset(req.object_image),
        background_image=to_asset(req.background_image),
    )
    result = await _studio(request).merge(images, params)
    return ImageResponse.from_result(result)


@app.post("/api/merge/background")
async def merge_background(req: BackgroundRequest, request: Request) -> ImageResponse:
    """Generate a background image for the merger.

    The response carries a filename so the browser can hand it straight
    back as ``background_image``.
    """
    asset = await _studio(request).generate_background(req.prompt)
    return ImageResponse.from_asset(asset)


@app.post("/api/reconstruct")
async def reconstruct(req: ReconstructRequest, request: Request) -> ImageResponse:
    result = await _studio(request).reconstruct(to_asset(req.image), req.params)
    return ImageResponse.from_result(result)


# ---------------------------------------------------------------------------
# Single-image re-rendering.
# ---------------------------------------------------------------------------


@app.post("/api/mockup")
async def mockup(req: MockupRequest, request: Request) -> ImageResponse:
    result = await _studio(request).mockup(MockupImages(design=to_asset(req.design)), req.params)
    return ImageResponse.from_result(result)


@app.post("/api/perspective")
async def perspective(req: PerspectiveRequest, request: Request) -> ImageResponse:
    result = await _studio(request).perspective(to_asset(req.image), req.params)
    return ImageResponse.from_result(result)


@app.post("/api/relight")
async def relight(req: RelightRequest, request: Request) -> ImageResponse:
    result = await _studio(request).relight(to_asset(req.image), req.params)
    return ImageResponse.from_result(result)


# ---------------------------------------------------------------------------
# Instruction preview.
# ---------------------------------------------------------------------------


@app.post("/api/prompt/preview/{operation}")
async def preview(operation: str, req: PreviewRequest) -> PreviewResponse:
    """Return the compiled instruction for an operation without calling the
    remote service.

    Raises:
        HTTPException: 404 for an unknown operation, 422 for invalid params.
    """
    try:
        kind = OperationKind(operation)
    except ValueError:
        kind = None
    if kind not in COMPILERS:
        raise HTTPException(status_code=404, detail=f"Unknown operation: {operation}")
    try:
        instruction = preview_instruction(kind, req.params)
    except ValidationError as e:
        raise HTTPException(
            status_code=422, detail=e.errors(include_url=False, include_context=False)
        ) from e
    return PreviewResponse(operation=kind.value, instruction=instruction)


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host, port and log level from
    :data:`~lumenstudio.core.config.config` (``LUMEN_SERVER_HOST``,
    ``LUMEN_SERVER_PORT`` and ``LUMEN_LOG_LEVEL``).  Defaults to
    ``0.0.0.0:7860``.

    This function is registered as the ``lumenstudio`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(
        "lumenstudio.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
