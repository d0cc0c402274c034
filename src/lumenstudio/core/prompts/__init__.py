"""Prompt compilers: pure functions from parameter bundles to instructions.

Every compiler is deterministic and free of I/O.  Compiling the same bundle
twice yields byte-identical strings.
"""

from lumenstudio.core.prompts.assistant import (
    compile_analysis,
    compile_build_prompt,
    compile_feedback,
    compile_suggestions,
)
from lumenstudio.core.prompts.composition import compile_compose, compile_merge, compile_reconstruct
from lumenstudio.core.prompts.generation import compile_edit, compile_generate, compile_upscale
from lumenstudio.core.prompts.presets import (
    GENERATOR_STYLE_PRESETS,
    MERGE_PRESETS,
    UPSCALE_PRESETS,
    apply_merge_preset,
    upscale_preset,
)
from lumenstudio.core.prompts.rendering import compile_mockup, compile_perspective, compile_relight

__all__ = [
    "compile_analysis",
    "compile_build_prompt",
    "compile_compose",
    "compile_edit",
    "compile_feedback",
    "compile_generate",
    "compile_merge",
    "compile_mockup",
    "compile_perspective",
    "compile_reconstruct",
    "compile_relight",
    "compile_suggestions",
    "compile_upscale",
    "GENERATOR_STYLE_PRESETS",
    "MERGE_PRESETS",
    "UPSCALE_PRESETS",
    "apply_merge_preset",
    "upscale_preset",
]
