"""Named presets for the generator, upscaler and smart merger.

Presets are plain data.  The upscaler presets describe a whole bundle, so
:func:`upscale_preset` returns a fresh :class:`UpscaleParams` (keeping the
caller's scale).  Merge presets only touch some controls; they are applied on
top of an existing bundle with :func:`apply_merge_preset`, leaving every
other field as it was.
"""

from __future__ import annotations

from typing import Any

from lumenstudio.core.bundles import MergeParams, UpscaleParams

# Style suffixes appended to the generator prompt, keyed by display name.
GENERATOR_STYLE_PRESETS: dict[str, str] = {
    "Cinematic": "cinematic, hyperrealistic, dramatic lighting, 8k",
    "Photorealistic": "photorealistic, ultra detailed, sharp focus, professional photography",
    "Anime": "anime style, vibrant colors, detailed background, masterpiece",
    "Concept Art": "digital concept art, detailed, epic composition, matte painting",
}

UPSCALE_PRESET_NAMES: dict[str, str] = {
    "clean": "Clean & Sharp",
    "realistic": "Realistic",
    "cinematic": "Cinematic HDR",
    "artistic": "Artistic Detail",
    "smooth": "Smooth Natural",
}

UPSCALE_PRESETS: dict[str, dict[str, Any]] = {
    "clean": {
        "mode": "Precision",
        "creativity": 10,
        "hdr": 5,
        "resemblance": 90,
        "fractality": 10,
        "sharpness": 80,
        "smoothness": 5,
        "color_intensity": 5,
        "highlight_recovery": 40,
        "shadow_depth": 10,
    },
    "realistic": {
        "mode": "Hybrid",
        "creativity": 20,
        "hdr": 10,
        "resemblance": 75,
        "fractality": 25,
        "sharpness": 60,
        "smoothness": 15,
        "color_intensity": 10,
        "highlight_recovery": 50,
        "shadow_depth": 20,
    },
    "cinematic": {
        "mode": "Creative",
        "creativity": 40,
        "hdr": 70,
        "resemblance": 60,
        "fractality": 30,
        "sharpness": 50,
        "smoothness": 20,
        "color_intensity": 40,
        "highlight_recovery": 60,
        "shadow_depth": 50,
    },
    "artistic": {
        "mode": "Creative",
        "creativity": 80,
        "hdr": 25,
        "resemblance": 40,
        "fractality": 80,
        "sharpness": 40,
        "smoothness": 10,
        "color_intensity": 60,
        "highlight_recovery": 30,
        "shadow_depth": 25,
    },
    "smooth": {
        "mode": "Precision",
        "creativity": 5,
        "hdr": 0,
        "resemblance": 85,
        "fractality": 5,
        "sharpness": 30,
        "smoothness": 80,
        "color_intensity": 5,
        "highlight_recovery": 20,
        "shadow_depth": 5,
    },
}

MERGE_PRESET_NAMES: dict[str, str] = {
    "realistic": "Auto Realistic",
    "preserve": "Preserve Original",
    "cinematic": "Cinematic Match",
}

MERGE_PRESETS: dict[str, dict[str, Any]] = {
    "realistic": {
        "harmonization_strength": 100,
        "cast_shadow": True,
        "map_reflections": True,
        "lighting_style": "Daylight",
        "color_temperature": 5500,
        "realism": 95,
        "prompt": "",
    },
    "preserve": {
        "harmonization_strength": 10,
        "cast_shadow": True,
        "map_reflections": False,
        "realism": 80,
    },
    "cinematic": {
        "harmonization_strength": 85,
        "cast_shadow": True,
        "shadow_softness": 70,
        "map_reflections": True,
        "reflection_intensity": 50,
        "lighting_style": "Cinematic",
        "color_temperature": 4800,
        "realism": 75,
        "prompt": "dramatic, cinematic grading, anamorphic lens flare, film grain",
    },
}


def upscale_preset(preset_id: str, scale: float = 4) -> UpscaleParams:
    """Build the upscaler bundle for a preset.

    Args:
        preset_id: One of ``clean``, ``realistic``, ``cinematic``,
            ``artistic`` or ``smooth``.
        scale: Upscale factor; presets do not change it.

    Raises:
        KeyError: If the preset is unknown.
    """
    if preset_id not in UPSCALE_PRESETS:
        raise KeyError(f"Unknown upscale preset: {preset_id}")
    return UpscaleParams(scale=scale, **UPSCALE_PRESETS[preset_id])


def apply_merge_preset(bundle: MergeParams, preset_id: str) -> MergeParams:
    """Return a copy of ``bundle`` with the preset's controls applied.

    The result is re-validated so a preset can never produce an
    out-of-range bundle.
    """
    if preset_id not in MERGE_PRESETS:
        raise KeyError(f"Unknown merge preset: {preset_id}")
    return MergeParams.model_validate({**bundle.model_dump(), **MERGE_PRESETS[preset_id]})
