"""Compilers for the text-output tools.

Prompt builder, creative assistant, image analyzer and art-director
feedback all ask the text/vision model for prose.  Only the prompt builder
and the assistant take user input; the analyzer and the art director send a
fixed instruction next to the image.
"""

from __future__ import annotations

from lumenstudio.core.bundles import BuildPromptParams, SuggestionParams

_ANALYSIS_INSTRUCTION = """You are an expert art director and image analyst.
Analyze this image in detail. Provide a comprehensive breakdown covering:
- Subject & Focus: What is the main subject and what draws the eye?
- Composition: Comment on the framing, rule of thirds, leading lines, etc.
- Lighting & Color: Describe the lighting style (e.g., soft, harsh, dramatic) and the color palette.
- Mood & Storytelling: What emotions or story does the image convey?
- Technical Quality: Comment on sharpness, focus, and potential areas for improvement.

Format your response as markdown."""

_FEEDBACK_INSTRUCTION = """You are a world-class Art Director with a keen eye for detail, known for giving insightful, constructive, and professional feedback.
Analyze the provided image and provide a professional critique. Your goal is to help the creator improve their work.

Structure your feedback in markdown format with the following sections:

### **Overall Impression**
- A brief, high-level summary of the image's strengths and mood.

### **Strengths (What Works Well)**
- **Composition**: Point out specific elements that are well-placed (e.g., "Excellent use of the rule of thirds to position the subject...").
- **Lighting**: Comment on positive aspects of the lighting (e.g., "The soft key light creates a flattering look...").
- **Color Palette**: Note any harmonious or effective color choices.
- **Storytelling**: Describe the narrative or emotional impact that is successfully conveyed.

### **Areas for Improvement (Actionable Suggestions)**
- **Composition**: Suggest specific changes to improve balance or focus (e.g., "Consider cropping the left side to remove the distracting element...").
- **Lighting**: Provide concrete advice on lighting adjustments (e.g., "The shadows on the right are a bit harsh; try adding a soft fill light or a reflector to lift them.").
- **Color Grading**: Suggest color adjustments to enhance the mood (e.g., "Lowering the overall saturation and adding a subtle blue tint in the shadows could create a more cinematic, moody feel.").
- **Subject/Focus**: Recommend ways to make the main subject pop (e.g., "A slight vignette could help draw the viewer's eye more directly to the center.").

Be specific and use professional terminology, but keep the tone encouraging and helpful."""


def compile_build_prompt(params: BuildPromptParams) -> str:
    """Ask the model to expand a short idea into a full image prompt."""
    return "\n".join(
        [
            "You are a professional prompt engineer for an advanced AI image generation model.",
            "Your task is to expand a user's simple idea into a detailed, rich, and effective "
            "prompt.",
            f"- Category: {params.category}",
            f"- User's Details: {params.details.strip()}",
            "",
            "Create a single, cohesive prompt that includes details about subject, style, "
            "lighting, composition, and mood, tailored to the category. Do not include any "
            "explanations, just output the final prompt.",
        ]
    )


def compile_suggestions(params: SuggestionParams) -> str:
    """Creative suggestions for a described concept (image optional)."""
    return "\n".join(
        [
            "You are a creative visual assistant. Based on the following description and "
            "optional reference image, provide creative suggestions.",
            "Analyze the concept and suggest improvements for lighting, composition, mood, "
            "and storytelling.",
            "Format your response as markdown.",
            "",
            f'Description: "{params.description.strip()}"',
        ]
    )


def compile_analysis() -> str:
    return _ANALYSIS_INSTRUCTION


def compile_feedback() -> str:
    return _FEEDBACK_INSTRUCTION
