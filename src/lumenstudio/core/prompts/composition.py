"""Compilers for the multi-layer tools: scene composer, smart merger and
scene reconstructor.

These are the longest instructions in the studio.  Each is assembled from a
list of lines so that optional passes can be dropped without leaving blank
bullets behind.  Boolean controls that give guidance in both states always
emit one of two clauses; optional passes are simply omitted when off.

The merge instruction refers to its inputs as the 'Object Image' and the
'Background Image', and the compose instruction names its layers.  Both
depend on the positional order produced by the image bundles in
:mod:`lumenstudio.core.bundles`.
"""

from __future__ import annotations

from lumenstudio.core.bundles import ComposeParams, MergeParams, ReconstructParams, ZoneControls
from lumenstudio.core.prompts.bands import (
    HARMONIZATION_STRENGTH,
    REALISM,
    SHADOW_SOFTNESS,
    pick_band,
)

# ---------------------------------------------------------------------------
# Scene composer.
# ---------------------------------------------------------------------------

_PALETTE_FROM_REFERENCE = (
    "Analyze the 'Palette Reference Image' and extract its dominant colors, overall "
    "temperature (warm/cool), and lighting characteristics. Apply this mood and color grade "
    "across the entire final scene."
)
_PALETTE_FROM_BACKGROUND = "Create a natural and balanced color palette based on the background image."

_ATMOSPHERE_ON = (
    "Apply a subtle atmospheric effect (like haze, fog, or aerial perspective) that increases "
    "with distance. This means the background should be slightly more faded or color-shifted "
    "than the foreground, enhancing the sense of depth."
)
_ATMOSPHERE_OFF = "Maintain clear visibility across all depths."


def _zone(controls: ZoneControls) -> str:
    return (
        f"luminosity to {controls.luminosity}%, contrast to {controls.contrast}%, "
        f"and saturation to {controls.saturation}%"
    )


def compile_compose(params: ComposeParams) -> str:
    """Compile the scene-composition and luminosity-balancing instruction.

    The background layer is always present; midground, foreground and
    palette layers are listed only when their ``has_*`` flag is set.
    """
    layers = ["    - Background Image: The main environment and furthest elements."]
    if params.has_midground:
        layers.append("    - Midground Image: Contains elements in the middle distance.")
    if params.has_foreground:
        layers.append(
            "    - Foreground Image: Contains the primary subject(s) closest to the camera."
        )
    if params.has_palette:
        layers.append(
            "    - Palette Reference Image: Use this image to define the global color palette, "
            "mood, and lighting style for the entire composite."
        )

    palette = _PALETTE_FROM_REFERENCE if params.has_palette else _PALETTE_FROM_BACKGROUND
    atmosphere = _ATMOSPHERE_ON if params.atmospheric_effect else _ATMOSPHERE_OFF

    lines = [
        '**Task**: Perform an advanced "Scene Composition and Luminosity Balancing". Your goal '
        "is to merge multiple image layers into a single, photorealistic, and cohesive scene. "
        "You must follow detailed instructions on lighting, color, and depth.",
        "",
        "**Input Layers Provided** (in the order the images are supplied):",
        *layers,
        "",
        "**Core Instructions**:",
        "",
        "1. **Layer Integration**:",
        "    - Isolate the main subjects from the foreground and midground images (if provided).",
        "    - Place them into the background image, respecting their designated depth order "
        "(Foreground > Midground > Background).",
        "    - Ensure correct scale and perspective alignment between layers for a seamless "
        "composition.",
        "",
        "2. **Global Color Harmonization**:",
        f"    - {palette}",
        "    - All layers must look like they belong in the same color space and were captured "
        "under the same lighting conditions.",
        "",
        "3. **Depth-Aware Luminosity & Contrast Balancing**:",
        "    - This is critical for realism. Adjust each layer based on its position in the scene "
        "to create a convincing sense of depth.",
        "    - **Foreground Zone**: Should have the highest visual presence. Adjust "
        f"{_zone(params.foreground)}.",
        f"    - **Midground Zone**: Create a balanced transition. Adjust {_zone(params.midground)}.",
        "    - **Background Zone**: Should appear furthest away. Adjust "
        f"{_zone(params.background)}.",
        "",
        "4. **Atmospheric Perspective**:",
        f"    - {atmosphere}",
        "",
        "5. **Relighting and Shadows**:",
        "    - Analyze the primary light source from the background (or palette image).",
        "    - Re-light the foreground and midground subjects to match this light source in "
        "direction, softness, and color.",
        "    - Cast realistic shadows from the foreground/midground objects onto the layers "
        "behind them, considering the light source and environment.",
        "",
        "**Output Requirement**:",
        "    - A single, flawlessly merged, high-resolution image that looks like it was captured "
        "with a single camera. Do not output any text, artifacts, or borders.",
    ]
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Smart merger.
# ---------------------------------------------------------------------------

NO_SHADOW_CLAUSE = "Do not cast any shadows from the subject."
NO_REFLECTION_CLAUSE = "The subject should have no environmental reflections."


def _shadow_clause(params: MergeParams) -> str:
    if not params.cast_shadow:
        return NO_SHADOW_CLAUSE
    softness = pick_band(SHADOW_SOFTNESS, params.shadow_softness)
    return f"Cast physically correct shadows from the subject onto the background, {softness}"


def _reflection_clause(params: MergeParams) -> str:
    if not params.map_reflections:
        return NO_REFLECTION_CLAUSE
    return (
        "Generate precise, distorted reflections of the background environment onto the "
        "subject's surfaces. The overall intensity of these reflections should be approximately "
        f"{params.reflection_intensity}%."
    )


def compile_merge(params: MergeParams) -> str:
    """Compile the deep scene-fusion instruction.

    Expects the subject image first and the background image second.
    """
    lines = [
        '**Task**: Perform a professional, ultra-realistic "deep scene fusion." Your goal is to '
        "seamlessly integrate the primary subject from the 'Object Image' into the 'Background "
        "Image' as if it were photographed in that exact environment, following the user's "
        "creative direction.",
        "",
        "**Inputs**: The first image provided is the 'Object Image'. The second image provided "
        "is the 'Background Image'.",
        "",
        "**AI Instructions**:",
        "1. **Scene Analysis**: First, deeply analyze the 'Background Image'. Identify its "
        "intrinsic properties: the direction, color, and quality of light, ambient color "
        "temperature, perspective, and depth map.",
    ]
    if params.auto_remove_distractions:
        lines.append(
            "2. **Distraction Removal**: Before integration, analyze the 'Background Image' for "
            "any visually distracting or out-of-place objects. Use intelligent, texture-aware "
            "inpainting to seamlessly remove them, creating a clean canvas."
        )
    lines += [
        "3. **Subject Integration & Photorealistic Compositing**: Isolate the main subject from "
        "the 'Object Image' and place it into the background. Re-render the subject to achieve "
        "a flawless, physically accurate composite.",
        f"    - **Realism Level**: {pick_band(REALISM, params.realism)}",
        "    - **Depth Occlusion**: Analyze the background's depth map. Place the subject "
        "realistically within the 3D space, ensuring correct occlusion by foreground elements "
        "(e.g., placing the subject *behind* a tree if appropriate).",
        "    - **Perspective Matching**: Align the subject to the specified **Camera "
        f"Perspective**: '{params.camera_angle}'.",
        "    - **Photometric Tonemapping & Relighting**:",
        f"        - {pick_band(HARMONIZATION_STRENGTH, params.harmonization_strength)}",
        f"        - The overall lighting style should be '{params.lighting_style}'.",
        "        - Adjust the final scene to a color temperature of approximately "
        f"{params.color_temperature}K.",
        f"    - **Shadows**: {_shadow_clause(params)}",
        f"    - **Reflections**: {_reflection_clause(params)}",
    ]
    direction = params.prompt.strip()
    if direction:
        lines += [
            "",
            "**User's Creative Direction**: In addition to the automatic analysis, apply the "
            f'following style and mood: "{direction}"',
        ]
    lines += [
        "",
        "**Output Requirement**:",
        "- The final output must be a single, cohesive, and high-quality merged image. Do not "
        "show original images, text, or any artifacts. Only the final composite matters.",
    ]
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Scene reconstructor.
# ---------------------------------------------------------------------------

KEEP_LAYOUT_CLAUSE = "Strictly maintain the original positions and arrangement of the elements."
FREE_LAYOUT_CLAUSE = (
    "You have creative freedom to slightly adjust the positions of elements for a more "
    "balanced and effective composition."
)


def compile_reconstruct(params: ReconstructParams) -> str:
    """Compile the multi-pass scene-reconstruction instruction.

    Sky, atmospheric depth, color grade, glow and retouch passes appear only
    when their toggle is on.  Pass numbers stay fixed so the model sees the
    same pipeline skeleton whichever passes are enabled.
    """
    p = params
    goal = p.prompt.strip()
    layout = KEEP_LAYOUT_CLAUSE if p.keep_layout else FREE_LAYOUT_CLAUSE

    lines = [
        "**Task**: World-Class AI Scene Reconstruction. Your objective is to transform a rough "
        "composite image into a single, fully unified, photorealistic, and cinematic scene. You "
        "must follow a multi-pass process, rebuilding the environment, lighting, and mood based "
        "on the user's creative direction. The quality must be paramount, aiming for "
        "studio-shot realism.",
        "",
        "**User's Creative Direction**:",
        f'- **Main Goal & Description**: "{goal}"',
        f'- **Overall Style**: A "{p.style}" aesthetic.',
        f'- **Lighting Environment**: A "{p.lighting}" setup.',
        "",
        "**AI Reconstruction Pipeline**:",
        "",
        "1. **Scene Analysis & Segmentation**:",
        "    - Analyze the provided composite image. Identify all distinct elements, their "
        "boundaries, and their implied depth (foreground, midground, background).",
        f"    - {layout}",
    ]
    if p.sky_enhance:
        lines += [
            "",
            "2. **Sky & Atmosphere Reconstruction**:",
            "    - Detect the sky region in the image.",
            "    - Completely replace or dynamically re-render the sky to create a realistic "
            f'"{p.lighting}" atmosphere that matches the prompt: "{goal}".',
            "    - The new sky must become the primary light source for the entire scene. "
            "Generate soft, volumetric light from the sky that creates a global ambience.",
        ]
    lines += [
        "",
        "3. **Global Relighting & Harmonization**:",
        "    - Based on the new sky (if applicable) and the prompt's lighting direction, re-light "
        "every element in the scene.",
        "    - Cast consistent, physically accurate shadows and generate environmental "
        "reflections on all appropriate surfaces (water, metal, glass).",
        "    - Harmonize the color grading and exposure across all elements to make them appear "
        "as if they were shot with the same camera at the same time.",
    ]
    if p.atmospheric_depth:
        lines += [
            "",
            "4. **Atmospheric Depth Pass**:",
            "    - Apply a realistic atmospheric perspective. Elements in the background should "
            "have slightly lower contrast, softened details, and a subtle haze or color shift to "
            "create a convincing sense of cinematic depth.",
        ]
    if p.color_regrade:
        lines += [
            "",
            "5. **Cinematic Color Grading Pass**:",
            "    - Perform a final, global color grading pass on the entire scene to unify the "
            "tones and achieve the desired mood.",
            "    - Adjust the final scene's color temperature to approximately "
            f"{p.color_temperature}K.",
        ]
    if p.add_glow:
        lines += [
            "",
            "6. **Glow & Highlight Pass**:",
            "    - Add a subtle, cinematic glow or bloom effect to the brightest highlights, light "
            "sources, and reflective surfaces.",
            f"    - The intensity of this glow effect should be {p.glow_intensity}%. This should "
            "enhance realism, not create an overly stylized look unless requested.",
        ]
    if p.global_retouch:
        lines += [
            "",
            "7. **Final Retouch & Polish Pass**:",
            "    - Apply a professional retouching pass. Subtly smooth textures on surfaces like "
            "skin or fabric, clean up any remaining hard edges between elements, and enhance fine "
            "details for a polished, high-end commercial look.",
        ]
    lines += [
        "",
        "**Core Technical Constraints**:",
        f"- **Refine Strength**: Apply all the above changes with an overall intensity of "
        f"{p.refine_strength}%. A lower value means more subtle adjustments, while a higher value "
        "allows for a complete creative rework of the scene.",
        "- **Seamless Blending**: The highest priority is to ensure there are no visible seams, "
        "halos, or artifacts. All elements must be perfectly blended.",
        "",
        "**Output Requirement**:",
        "- Produce a single, high-resolution, flawlessly reconstructed image. Do not output any "
        "text, explanations, or borders. The final image should be indistinguishable from a "
        "professional photograph or a still from a high-budget film.",
    ]
    return "\n".join(lines)
