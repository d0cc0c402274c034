"""Tests for lumenstudio.core.prompts.presets: named presets."""

from __future__ import annotations

import pytest

from lumenstudio.core.bundles import MergeParams
from lumenstudio.core.prompts import (
    GENERATOR_STYLE_PRESETS,
    MERGE_PRESETS,
    UPSCALE_PRESETS,
    apply_merge_preset,
    upscale_preset,
)


class TestGeneratorPresets:
    def test_names(self):
        assert list(GENERATOR_STYLE_PRESETS) == [
            "Cinematic",
            "Photorealistic",
            "Anime",
            "Concept Art",
        ]


class TestUpscalePresets:
    """Upscaler presets build complete bundles."""

    @pytest.mark.parametrize("preset_id", list(UPSCALE_PRESETS))
    def test_every_preset_is_valid(self, preset_id):
        params = upscale_preset(preset_id)
        assert params.scale == 4

    def test_clean_values(self):
        params = upscale_preset("clean")
        assert params.mode == "Precision"
        assert params.sharpness == 80
        assert params.resemblance == 90

    def test_scale_is_kept(self):
        assert upscale_preset("cinematic", scale=8).scale == 8

    def test_unknown_preset(self):
        with pytest.raises(KeyError):
            upscale_preset("vintage")


class TestMergePresets:
    """Merge presets only touch the controls they name."""

    def test_preserve_keeps_other_fields(self):
        base = MergeParams(camera_angle="Top View", shadow_softness=20, prompt="keep me")
        result = apply_merge_preset(base, "preserve")
        assert result.harmonization_strength == 10
        assert result.map_reflections is False
        assert result.realism == 80
        assert result.camera_angle == "Top View"
        assert result.shadow_softness == 20
        assert result.prompt == "keep me"

    def test_realistic_clears_prompt(self):
        result = apply_merge_preset(MergeParams(prompt="something"), "realistic")
        assert result.prompt == ""
        assert result.realism == 95
        assert result.lighting_style == "Daylight"

    def test_cinematic(self):
        result = apply_merge_preset(MergeParams(), "cinematic")
        assert result.lighting_style == "Cinematic"
        assert result.color_temperature == 4800
        assert "film grain" in result.prompt

    def test_original_bundle_unchanged(self):
        base = MergeParams()
        apply_merge_preset(base, "cinematic")
        assert base.lighting_style == "Daylight"

    def test_unknown_preset(self):
        with pytest.raises(KeyError):
            apply_merge_preset(MergeParams(), "noir")

    def test_presets_declared(self):
        assert set(MERGE_PRESETS) == {"realistic", "preserve", "cinematic"}
