"""Compilers for the generator, the editor and the super-resolution upscaler.

The generator prompt is the user's text with an optional style suffix.  The
editor forwards the user's instruction unchanged.  The upscaler has no
free text at all: it synthesizes a long structured instruction from its
scale, mode and nine enhancement sliders, which are inserted as raw values.
"""

from __future__ import annotations

from lumenstudio.core.bundles import EditParams, GenerateParams, UpscaleParams


def compile_generate(params: GenerateParams) -> str:
    """Compile a text-to-image prompt.

    Args:
        params: Prompt text and optional style preset string.

    Returns:
        ``"{prompt}, {style_preset}"`` when a preset is selected, otherwise
        the prompt alone.

    Examples:
        >>> compile_generate(GenerateParams(prompt="a red cube"))
        'a red cube'
        >>> compile_generate(GenerateParams(prompt="a red cube", style_preset="anime style"))
        'a red cube, anime style'
    """
    prompt = params.prompt.strip()
    preset = (params.style_preset or "").strip()
    if preset:
        return f"{prompt}, {preset}"
    return prompt


def compile_edit(params: EditParams) -> str:
    """The editor sends the user's instruction as-is."""
    return params.instruction.strip()


def _format_scale(scale: float) -> str:
    # 4.0 -> "4", 1.5 -> "1.5"
    return f"{scale:g}"


def compile_upscale(params: UpscaleParams) -> str:
    """Compile the structured super-resolution instruction.

    All slider values are inserted verbatim on a 0-100 scale; the model is
    told what each one controls rather than being given banded phrases.
    """
    p = params
    lines = [
        "**Task**: Perform a professional-grade AI Super Resolution upscale on the provided image.",
        "**Objective**: Transform the image into a crystal-clear, high-fidelity, 8K-equivalent "
        "output. Combine advanced super-resolution, texture restoration, and AI fine detail "
        "synthesis.",
        "",
        "**Instructions & Parameters**:",
        "",
        f"1. **Upscale Factor**: Scale the image resolution by **{_format_scale(p.scale)}x**. "
        "The final result should be sharp and detailed as if it were 8K.",
        "",
        f"2. **Processing Mode**: Use **{p.mode} Mode**.",
        "    - In 'Precision' mode, prioritize preserving the original image's details and "
        "structure with maximum fidelity.",
        "    - In 'Creative' mode, use AI to reimagine and generate new, plausible fine details "
        "and textures.",
        "    - In 'Hybrid' mode, find a balance between preservation and creative enhancement.",
        "    - In 'Automatic' mode, analyze the image content to choose the best approach.",
        "",
        "3. **Creative Control (Sliders 0-100)**:",
        f"    - **Creativity**: {p.creativity}. Controls how much the AI adds new details.",
        f"    - **HDR**: {p.hdr}. Enhances dynamic range, making lights brighter and shadows "
        "darker.",
        f"    - **Resemblance**: {p.resemblance}. How strictly the output must adhere to the "
        "original image's composition and color.",
        f"    - **Fractality**: {p.fractality}. Adds intricate micro-details and textures.",
        f"    - **Sharpness**: {p.sharpness}. Controls the crispness of edges.",
        f"    - **Smoothness**: {p.smoothness}. Reduces noise and smooths out textures.",
        f"    - **Color Intensity**: {p.color_intensity}. Boosts color saturation and vibrance.",
        f"    - **Highlight Recovery**: {p.highlight_recovery}. Restores detail in overexposed "
        "areas.",
        f"    - **Shadow Depth**: {p.shadow_depth}. Enhances detail and contrast in dark areas.",
        "",
        "4. **Execution**:",
        "    - Analyze the image for different regions (faces, fabrics, backgrounds) and apply "
        "enhancements adaptively.",
        "    - Fix compression artifacts and color banding.",
        "    - The final output must be a single, flawlessly upscaled image. Do not add any text "
        "or borders.",
    ]
    return "\n".join(lines)
