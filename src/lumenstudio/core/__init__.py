"""Core functionality for Lumen Studio.

This module provides the core components behind every studio tool:

- **Studio**: Async entry points, one per tool
- **Prompt compilers**: Pure functions turning parameter bundles into instructions
- **Dispatcher / Capability**: Model selection and the remote service boundary
- **StudioConfig**: Configuration management using Pydantic Settings
- **config**: Global configuration instance (loads from environment variables)

Architecture Overview
---------------------
The core follows a leaf-first pipeline:

1. **Encoder** (encoder.py):
   - Reads image assets and produces base64 content parts

2. **Prompt Compilers** (prompts/):
   - One compiler per tool, threshold band tables and named presets

3. **Dispatcher** (dispatcher.py, capabilities.py):
   - Picks the remote model and enforces the part ordering contract
   - Gemini-backed and scripted capability implementations

4. **Extractor** (extractor.py):
   - Turns the remote reply into an image or text result

5. **Orchestration** (studio.py, history.py):
   - Validate, encode, compile, dispatch, extract
   - Undo/redo chain for the image editor

Usage Example
-------------
    from lumenstudio.core import Studio, config
    from lumenstudio.core.bundles import GenerateParams
    from lumenstudio.core.capabilities import GeminiCapability

    studio = Studio(GeminiCapability.from_config(config), config)
    result = await studio.generate(GenerateParams(prompt="a red cube"))
"""

from lumenstudio.core.config import StudioConfig, config
from lumenstudio.core.errors import (
    ConfigurationError,
    EmptyResponseError,
    EncodingError,
    MissingInputError,
    NoImageReturnedError,
    RemoteServiceError,
    StudioError,
)
from lumenstudio.core.history import EditHistory
from lumenstudio.core.models import ImageAsset, ImageResult, OperationKind, TextResult
from lumenstudio.core.studio import Studio

__all__ = [
    "ConfigurationError",
    "EditHistory",
    "EmptyResponseError",
    "EncodingError",
    "ImageAsset",
    "ImageResult",
    "MissingInputError",
    "NoImageReturnedError",
    "OperationKind",
    "RemoteServiceError",
    "Studio",
    "StudioConfig",
    "StudioError",
    "TextResult",
    "config",
]
