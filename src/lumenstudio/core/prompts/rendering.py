"""Compilers for the single-image re-rendering tools: product mockups,
camera/perspective changes and virtual relighting."""

from __future__ import annotations

from lumenstudio.core.bundles import MockupParams, PerspectiveParams, RelightParams

PERSPECTIVE_CORRECTION_ON = (
    "Apply automatic perspective correction to ensure vertical lines are straight and avoid "
    "distortion."
)
PERSPECTIVE_CORRECTION_OFF = "Natural lens distortion is acceptable."

LIGHTING_LOCK_ON = (
    "Preserve the original lighting direction and quality. Shadows and highlights should be "
    "recalculated for the new perspective but originate from the same light source."
)
LIGHTING_LOCK_OFF = "Generate new, natural lighting that best fits the new camera angle."


def compile_mockup(params: MockupParams) -> str:
    """The design image must be supplied first; the instruction calls it
    'the first image provided'."""
    product = params.product_type
    lines = [
        "**Task**: High-Fidelity 3D Product Mockup Generation.",
        "**Objective**: Apply the user-provided design onto a photorealistic 3D model of a "
        f"'{product}'. The final image must be 8K resolution, suitable for professional "
        "marketing.",
        "",
        "**Inputs**:",
        "1. **Design Image**: The first image provided. This is the user's logo, label, or "
        "artwork.",
        f"2. **Product Type**: '{product}'",
        "",
        "**Instructions**:",
        f"1. **Model Creation**: Generate a clean, high-quality, 3D model of the specified "
        f"'{product}'.",
        "2. **Texture Application**: Realistically apply the 'Design Image' onto the surface of "
        "the 3D model. The design should wrap correctly around the product's contours, respecting "
        "its material properties (e.g., matte, gloss, texture).",
        "3. **Scene & Lighting**: Place the final product model in a neutral, professional studio "
        "environment (e.g., a clean white or light gray infinity cove). The lighting should be "
        "soft and realistic, casting subtle, physically accurate shadows on the ground plane.",
        "4. **Rendering**: Render the scene with extreme photorealism. Ensure the final output is "
        "sharp, detailed, and at a very high resolution (8K equivalent).",
        "",
        "**Output Requirement**: A single, final, rendered image of the product mockup. Do not "
        "output any text, borders, or explanations.",
    ]
    return "\n".join(lines)


def compile_perspective(params: PerspectiveParams) -> str:
    """Compile the virtual camera placement instruction.

    Orbit and tilt are inserted in degrees, elevation and depth of field as
    percentages and the focal length in millimetres.
    """
    p = params
    correction = PERSPECTIVE_CORRECTION_ON if p.perspective_correction else PERSPECTIVE_CORRECTION_OFF
    lighting = LIGHTING_LOCK_ON if p.lighting_lock else LIGHTING_LOCK_OFF

    lines = [
        "**Task**: Advanced AI Camera & Perspective Transformation.",
        "**Objective**: Re-render the provided image from a completely new, precisely defined "
        "camera viewpoint. You must perform a full 3D scene reconstruction to generate a "
        "photorealistic result with accurate perspective, lighting, and depth of field.",
        "",
        "**Input Image**: The user has provided an image to be transformed.",
        "",
        "**Camera & Viewpoint Instructions**:",
        "",
        f"1. **Primary Angle**: The camera is positioned for a '{p.angle_preset}' view.",
        "2. **360° Orbit Rotation**: The camera is rotated horizontally around the subject by "
        f"{p.orbit}° from the front. (0° is front, 90° is right, -90° is left, 180° is rear).",
        f"3. **Elevation**: The camera's vertical height is at {p.elevation}%. (0% is ground "
        "level, 50% is eye-level, 100% is directly above).",
        f"4. **Tilt (Pitch)**: The camera is tilted by {p.tilt}°. (-90° is looking straight "
        "down, 0° is level, 90° is looking straight up).",
        "5. **Lens Simulation**:",
        f"    - **Focal Length**: Simulate a {p.focal_length}mm lens. This will affect field of "
        "view and background compression.",
        "    - **Depth of Field**: Apply a depth of field effect with an intensity of "
        f"{p.dof_intensity}%. The main subject should be in sharp focus, with the background and "
        "foreground progressively blurred according to the lens simulation.",
        "6. **Corrections**:",
        f"    - **Perspective Correction**: {correction}",
        f"    - **Lighting**: {lighting}",
    ]
    direction = p.prompt.strip()
    if direction:
        lines += [
            "",
            "**User's Creative Direction**: In addition to the technical settings, apply this "
            f'creative style: "{direction}"',
        ]
    lines += [
        "",
        "**AI Execution Pipeline**:",
        "1. **Scene Deconstruction**: Analyze the original image to create an implicit 3D model "
        "of the scene, understanding object placement, scale, and textures.",
        "2. **Virtual Camera Placement**: Position the new virtual camera according to all the "
        "specified rotation, elevation, tilt, and lens parameters.",
        "3. **Scene Re-rendering**: Render the scene from this new viewpoint. Intelligently "
        "generate and inpaint any occluded or previously non-existent details that would be "
        "visible from the new angle.",
        "4. **Physics Recalculation**: Based on the new view, accurately recalculate all "
        "shadows, highlights, and reflections. Apply the specified depth of field effect.",
        "5. **Final Polish**: Ensure the final output is a single, cohesive, high-resolution "
        "image, free of artifacts, maintaining the style and identity of the original subject.",
        "",
        "**Output Requirement**: A single, final, re-rendered image. Do not output any text, "
        "borders, or explanations.",
    ]
    return "\n".join(lines)


def compile_relight(params: RelightParams) -> str:
    p = params
    lines = [
        "**Task**: Professional AI Virtual Lighting Studio.",
        "**Objective**: Re-light the provided image with a new, physically accurate light "
        "source, simulating realistic shadows and reflections.",
        "",
        "**Input Image**: The user has provided an image to be re-lit.",
        "",
        "**Lighting Setup**:",
        f"- **Light Type**: {p.light_type}. This defines the quality of the light (e.g., a "
        "'Softbox' creates diffuse light, a 'Spotlight' creates a hard, focused beam).",
        f"- **Light Direction**: The primary light should come from the **{p.light_direction}**.",
        f"- **Light Intensity**: The strength of the light should be at {p.intensity}%.",
        "- **Light Color Temperature**: The color of the light should be approximately "
        f"{p.color_temperature}K (lower is warmer/orange, higher is cooler/blue).",
        "",
        "**AI Instructions**:",
        "1. **Scene Analysis**: Analyze the input image to understand its 3D geometry, subject, "
        "and surface materials.",
        "2. **Isolate Subject**: If there is a clear subject, isolate it from the background to "
        "apply the new lighting accurately.",
        "3. **Remove Old Lighting**: Neutralize the existing lighting and shadows in the original "
        "image.",
        "4. **Apply New Light Source**: Introduce a new virtual light source according to the "
        "specified 'Lighting Setup'. The new light must wrap realistically around the subjects "
        "and environment.",
        "5. **Simulate Shadows & Reflections**: This is critical. Cast physically correct, soft "
        "or hard shadows based on the new light source. Generate accurate specular highlights "
        "and reflections on surfaces like eyes, metal, or water.",
        "6. **Recompose Scene**: Blend the re-lit subject and background back into a single, "
        "cohesive, and photorealistic image.",
        "",
        "**Output Requirement**: A single, final, re-rendered image. Do not output any text, "
        "borders, or explanations.",
    ]
    return "\n".join(lines)
