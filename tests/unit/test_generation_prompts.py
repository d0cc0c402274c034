"""Tests for the generator, editor, upscaler and text-assistant compilers."""

from __future__ import annotations

import pytest

from lumenstudio.core.bundles import (
    BuildPromptParams,
    EditParams,
    GenerateParams,
    SuggestionParams,
    UpscaleParams,
)
from lumenstudio.core.prompts import (
    GENERATOR_STYLE_PRESETS,
    compile_analysis,
    compile_build_prompt,
    compile_edit,
    compile_feedback,
    compile_generate,
    compile_suggestions,
    compile_upscale,
)


class TestCompileGenerate:
    """Generator prompt: text plus optional style suffix."""

    def test_prompt_without_preset(self):
        """No preset means the prompt is sent unchanged."""
        assert compile_generate(GenerateParams(prompt="a red cube")) == "a red cube"

    def test_prompt_with_preset(self):
        """A preset is appended after a comma."""
        params = GenerateParams(
            prompt="a red cube",
            style_preset="cinematic, hyperrealistic, dramatic lighting, 8k",
        )
        assert compile_generate(params) == (
            "a red cube, cinematic, hyperrealistic, dramatic lighting, 8k"
        )

    def test_cinematic_preset_value(self):
        preset = GENERATOR_STYLE_PRESETS["Cinematic"]
        params = GenerateParams(prompt="a red cube", style_preset=preset)
        assert compile_generate(params).endswith("dramatic lighting, 8k")

    def test_blank_preset_is_ignored(self):
        params = GenerateParams(prompt="a red cube", style_preset="  ")
        assert compile_generate(params) == "a red cube"

    def test_deterministic(self):
        params = GenerateParams(prompt="a castle", style_preset="anime style")
        assert compile_generate(params) == compile_generate(params)


class TestCompileEdit:
    def test_instruction_passthrough(self):
        assert compile_edit(EditParams(instruction=" add a hat ")) == "add a hat"


class TestCompileUpscale:
    """Structured super-resolution instruction."""

    def test_default_values_inserted_raw(self):
        """Sliders appear as bare numbers, scale as Nx and mode by name."""
        text = compile_upscale(UpscaleParams())
        assert "**4x**" in text
        assert "**Hybrid Mode**" in text
        assert "**Creativity**: 20." in text
        assert "**Resemblance**: 75." in text
        assert "**Highlight Recovery**: 50." in text

    def test_fractional_scale(self):
        assert "**1.5x**" in compile_upscale(UpscaleParams(scale=1.5))

    def test_invalid_scale_rejected(self):
        with pytest.raises(ValueError):
            UpscaleParams(scale=3)

    def test_deterministic(self):
        params = UpscaleParams(scale=8, mode="Creative", hdr=70)
        assert compile_upscale(params) == compile_upscale(params)


class TestAssistantCompilers:
    """Prompt builder, suggestions, analysis and feedback."""

    def test_build_prompt_includes_category_and_details(self):
        text = compile_build_prompt(
            BuildPromptParams(category="Car Concept Art", details="a desert racer")
        )
        assert "- Category: Car Concept Art" in text
        assert "- User's Details: a desert racer" in text
        assert "just output the final prompt" in text

    def test_suggestions_quotes_description(self):
        text = compile_suggestions(SuggestionParams(description="a foggy harbour"))
        assert text.endswith('Description: "a foggy harbour"')
        assert "Format your response as markdown." in text

    def test_analysis_is_static(self):
        assert compile_analysis() == compile_analysis()
        assert "- Composition:" in compile_analysis()

    def test_feedback_sections(self):
        text = compile_feedback()
        assert "### **Overall Impression**" in text
        assert "### **Strengths (What Works Well)**" in text
        assert "### **Areas for Improvement (Actionable Suggestions)**" in text
