"""Lumen Studio - Prompt compilation and orchestration for multimodal image tools."""

__version__ = "0.1.0"

from lumenstudio.core.config import StudioConfig, config
from lumenstudio.core.studio import Studio

__all__ = [
    "Studio",
    "StudioConfig",
    "config",
]
