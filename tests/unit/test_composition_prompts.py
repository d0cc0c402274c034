"""Tests for the compose, merge and reconstruct compilers.

Tests cover:
- Boolean-gated clauses and their compensating negative clauses.
- Raw insertion of percentage and Kelvin values.
- Banded phrases chosen from the slider values.
- Optional creative direction and optional passes.
"""

from __future__ import annotations

import pytest

from lumenstudio.core.bundles import ComposeParams, MergeParams, ReconstructParams, ZoneControls
from lumenstudio.core.prompts import compile_compose, compile_merge, compile_reconstruct
from lumenstudio.core.prompts.composition import (
    FREE_LAYOUT_CLAUSE,
    KEEP_LAYOUT_CLAUSE,
    NO_REFLECTION_CLAUSE,
    NO_SHADOW_CLAUSE,
)

SOFTNESS_PHRASES = (
    "with sharp, defined edges (hard lighting).",
    "with a balanced mix of hard and soft edges.",
    "with very diffuse, soft edges (soft lighting).",
)


class TestCompileCompose:
    """Scene composition instruction."""

    def test_only_background_listed_by_default(self):
        text = compile_compose(ComposeParams())
        assert "Background Image: The main environment" in text
        assert "Midground Image" not in text
        assert "Foreground Image" not in text
        assert "Palette Reference Image:" not in text

    def test_provided_layers_listed(self):
        text = compile_compose(
            ComposeParams(has_foreground=True, has_midground=True, has_palette=True)
        )
        assert "Midground Image: Contains elements in the middle distance." in text
        assert "Foreground Image: Contains the primary subject(s)" in text
        assert "Palette Reference Image: Use this image" in text

    def test_layer_listing_follows_part_order(self):
        """Background, midground, foreground, palette: the order images are sent."""
        text = compile_compose(
            ComposeParams(has_foreground=True, has_midground=True, has_palette=True)
        )
        positions = [
            text.index("- Background Image:"),
            text.index("- Midground Image:"),
            text.index("- Foreground Image:"),
            text.index("- Palette Reference Image:"),
        ]
        assert positions == sorted(positions)

    def test_palette_clause_depends_on_palette(self):
        without = compile_compose(ComposeParams())
        with_palette = compile_compose(ComposeParams(has_palette=True))
        assert "based on the background image" in without
        assert "extract its dominant colors" not in without
        assert "extract its dominant colors" in with_palette
        assert "based on the background image." not in with_palette

    def test_zone_values_inserted_as_percentages(self):
        params = ComposeParams(
            foreground=ZoneControls(luminosity=61, contrast=62, saturation=63),
            background=ZoneControls(luminosity=11, contrast=12, saturation=13),
        )
        text = compile_compose(params)
        assert "luminosity to 61%, contrast to 62%, and saturation to 63%" in text
        assert "luminosity to 50%, contrast to 50%, and saturation to 50%" in text
        assert "luminosity to 11%, contrast to 12%, and saturation to 13%" in text

    def test_atmospheric_effect_off(self):
        text = compile_compose(ComposeParams(atmospheric_effect=False))
        assert "Maintain clear visibility across all depths." in text
        assert "Apply a subtle atmospheric effect" not in text

    def test_atmospheric_effect_on(self):
        text = compile_compose(ComposeParams(atmospheric_effect=True))
        assert "Apply a subtle atmospheric effect" in text
        assert "Maintain clear visibility" not in text


class TestCompileMerge:
    """Deep scene fusion instruction."""

    def test_no_shadow_excludes_softness_phrases(self):
        """With cast_shadow off only the negative clause is present."""
        text = compile_merge(MergeParams(cast_shadow=False, shadow_softness=10))
        assert NO_SHADOW_CLAUSE in text
        for phrase in SOFTNESS_PHRASES:
            assert phrase not in text
        assert "Cast physically correct shadows" not in text

    @pytest.mark.parametrize(
        ("softness", "phrase"),
        [(29, SOFTNESS_PHRASES[0]), (30, SOFTNESS_PHRASES[1]), (70, SOFTNESS_PHRASES[1]),
         (71, SOFTNESS_PHRASES[2])],
    )
    def test_shadow_softness_band(self, softness, phrase):
        text = compile_merge(MergeParams(cast_shadow=True, shadow_softness=softness))
        assert f"onto the background, {phrase}" in text
        assert NO_SHADOW_CLAUSE not in text

    def test_reflections_off(self):
        text = compile_merge(MergeParams(map_reflections=False, reflection_intensity=80))
        assert NO_REFLECTION_CLAUSE in text
        assert "80%" not in text

    def test_reflections_on(self):
        text = compile_merge(MergeParams(map_reflections=True, reflection_intensity=60))
        assert "approximately 60%." in text
        assert NO_REFLECTION_CLAUSE not in text

    def test_camera_lighting_and_temperature(self):
        text = compile_merge(
            MergeParams(camera_angle="Aerial View", lighting_style="Neon", color_temperature=3200)
        )
        assert "'Aerial View'" in text
        assert "lighting style should be 'Neon'" in text
        assert "approximately 3200K" in text

    def test_distraction_removal_optional(self):
        assert "Distraction Removal" not in compile_merge(MergeParams())
        assert "Distraction Removal" in compile_merge(MergeParams(auto_remove_distractions=True))

    def test_creative_direction_only_when_non_blank(self):
        assert "User's Creative Direction" not in compile_merge(MergeParams(prompt="   "))
        text = compile_merge(MergeParams(prompt="moody dusk"))
        assert 'apply the following style and mood: "moody dusk"' in text

    def test_harmonization_and_realism_bands(self):
        text = compile_merge(MergeParams(harmonization_strength=0, realism=30))
        assert "Preserve the subject's original lighting" in text
        assert "stylized, artistic render" in text

    def test_object_image_named_first(self):
        text = compile_merge(MergeParams())
        assert "The first image provided is the 'Object Image'" in text

    def test_deterministic(self):
        params = MergeParams(prompt="x", realism=50, shadow_softness=80)
        assert compile_merge(params) == compile_merge(params)


class TestCompileReconstruct:
    """Scene reconstruction instruction."""

    def test_keep_layout_toggle(self):
        kept = compile_reconstruct(ReconstructParams(prompt="a plaza", keep_layout=True))
        freed = compile_reconstruct(ReconstructParams(prompt="a plaza", keep_layout=False))
        assert KEEP_LAYOUT_CLAUSE in kept and FREE_LAYOUT_CLAUSE not in kept
        assert FREE_LAYOUT_CLAUSE in freed and KEEP_LAYOUT_CLAUSE not in freed

    def test_optional_passes_omitted_when_off(self):
        text = compile_reconstruct(
            ReconstructParams(
                prompt="a plaza",
                sky_enhance=False,
                atmospheric_depth=False,
                color_regrade=False,
                add_glow=False,
                global_retouch=False,
            )
        )
        for heading in (
            "Sky & Atmosphere Reconstruction",
            "Atmospheric Depth Pass",
            "Cinematic Color Grading Pass",
            "Glow & Highlight Pass",
            "Final Retouch & Polish Pass",
        ):
            assert heading not in text
        assert "Global Relighting & Harmonization" in text

    def test_all_passes_present_when_on(self):
        text = compile_reconstruct(
            ReconstructParams(
                prompt="a plaza at dusk",
                lighting="Sunset",
                global_retouch=True,
                glow_intensity=35,
                color_temperature=4200,
                refine_strength=60,
            )
        )
        assert 'realistic "Sunset" atmosphere that matches the prompt: "a plaza at dusk"' in text
        assert "approximately 4200K" in text
        assert "should be 35%." in text
        assert "Final Retouch & Polish Pass" in text
        assert "overall intensity of 60%" in text

    def test_style_and_goal(self):
        text = compile_reconstruct(ReconstructParams(prompt="neon alley", style="Neon"))
        assert '- **Main Goal & Description**: "neon alley"' in text
        assert 'A "Neon" aesthetic.' in text
