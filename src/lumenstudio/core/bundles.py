"""Typed parameter and image bundles, one per operation.

Parameter bundles are frozen Pydantic models.  Every slider declares its
range and every enumerated control its domain, so an out-of-range value is
rejected when the bundle is built; compilers can then assume valid input.
The defaults mirror the initial state of each tool in the browser front end.

Image bundles are frozen dataclasses naming each image role.  Their
``ordered()`` method is the single source of truth for the positional part
order that compiled instructions rely on ("the first image", "the second
image").
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from lumenstudio.core.models import ImageAsset

# ---------------------------------------------------------------------------
# Enumerated domains.
# ---------------------------------------------------------------------------

UPSCALE_FACTORS: tuple[float, ...] = (1.5, 2, 4, 6, 8)

UpscaleMode = Literal["Precision", "Creative", "Hybrid", "Automatic"]

PromptCategory = Literal["Cinematic Photography", "Arabic Cultural Visuals", "Car Concept Art"]

AnglePreset = Literal[
    "Eye-Level", "Low Angle", "High Angle", "Side View", "Top/Aerial View", "3/4 View", "Rear View"
]

LightType = Literal["Softbox", "Rim Light", "Spotlight", "Golden Hour", "Neon Glow", "Dramatic"]

LightDirection = Literal[
    "Top-Left", "Top", "Top-Right", "Left", "Front", "Right", "Bottom-Left", "Bottom", "Bottom-Right"
]

CameraAngle = Literal[
    "Low Angle", "High Angle", "Side View", "Front View", "Back View", "Aerial View", "Top View"
]

MergeLighting = Literal[
    "Daylight", "Golden Hour", "Sunset", "Night", "Neon", "Studio", "Cinematic", "Soft", "Dramatic"
]

ReconstructStyle = Literal[
    "Realistic", "Cinematic", "Studio", "Neon", "Minimal", "Product", "Fantasy"
]

ReconstructLighting = Literal[
    "Daylight", "Sunset", "Golden Hour", "Night", "Neon", "Overcast", "HDR"
]

ProductType = Literal[
    "Coffee Cup",
    "Soda Can",
    "Cardboard Box",
    "Tote Bag",
    "Shampoo Bottle",
    "Wine Bottle",
    "Book Cover",
    "T-Shirt",
    "Shopping Bag",
]


class _Bundle(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


# ---------------------------------------------------------------------------
# Parameter bundles.
# ---------------------------------------------------------------------------


class GenerateParams(_Bundle):
    """Text-to-image generation: prompt plus an optional style suffix."""

    prompt: str = ""
    style_preset: str | None = None


class EditParams(_Bundle):
    """Free-form edit instruction."""

    instruction: str = ""


class UpscaleParams(_Bundle):
    """Super-resolution controls.  Defaults match the "Realistic" preset."""

    scale: float = 4
    mode: UpscaleMode = "Hybrid"
    creativity: int = Field(default=20, ge=0, le=100)
    hdr: int = Field(default=10, ge=0, le=100)
    resemblance: int = Field(default=75, ge=0, le=100)
    fractality: int = Field(default=25, ge=0, le=100)
    sharpness: int = Field(default=60, ge=0, le=100)
    smoothness: int = Field(default=15, ge=0, le=100)
    color_intensity: int = Field(default=10, ge=0, le=100)
    highlight_recovery: int = Field(default=50, ge=0, le=100)
    shadow_depth: int = Field(default=20, ge=0, le=100)

    @field_validator("scale")
    @classmethod
    def _check_scale(cls, value: float) -> float:
        if value not in UPSCALE_FACTORS:
            raise ValueError(f"scale must be one of {UPSCALE_FACTORS}, got {value}")
        return value


class BuildPromptParams(_Bundle):
    category: PromptCategory = "Cinematic Photography"
    details: str = ""


class SuggestionParams(_Bundle):
    description: str = ""


class ZoneControls(_Bundle):
    """Luminosity/contrast/saturation for one depth zone (0-100 each)."""

    luminosity: int = Field(default=50, ge=0, le=100)
    contrast: int = Field(default=50, ge=0, le=100)
    saturation: int = Field(default=50, ge=0, le=100)


class ComposeParams(_Bundle):
    """Scene composition controls.

    ``has_*`` flags are filled in by the orchestration layer from the image
    bundle so the compiler only lists the layers actually provided.
    """

    foreground: ZoneControls = ZoneControls(luminosity=60, contrast=60, saturation=55)
    midground: ZoneControls = ZoneControls()
    background: ZoneControls = ZoneControls(luminosity=40, contrast=45, saturation=45)
    atmospheric_effect: bool = True
    has_foreground: bool = False
    has_midground: bool = False
    has_palette: bool = False


class MergeParams(_Bundle):
    """Smart merge controls for placing a subject into a background."""

    prompt: str = ""
    camera_angle: CameraAngle = "Low Angle"
    lighting_style: MergeLighting = "Daylight"
    color_temperature: int = Field(default=5500, ge=2500, le=7500)
    harmonization_strength: int = Field(default=100, ge=0, le=100)
    cast_shadow: bool = True
    shadow_softness: int = Field(default=50, ge=0, le=100)
    map_reflections: bool = True
    reflection_intensity: int = Field(default=60, ge=0, le=100)
    auto_remove_distractions: bool = False
    realism: int = Field(default=90, ge=0, le=100)


class ReconstructParams(_Bundle):
    """Scene reconstruction controls.  ``prompt`` is required by the operation."""

    prompt: str = ""
    style: ReconstructStyle = "Realistic"
    lighting: ReconstructLighting = "Daylight"
    refine_strength: int = Field(default=75, ge=0, le=100)
    keep_layout: bool = True
    sky_enhance: bool = True
    add_glow: bool = True
    glow_intensity: int = Field(default=40, ge=0, le=100)
    global_retouch: bool = False
    color_regrade: bool = True
    color_temperature: int = Field(default=5500, ge=2000, le=8000)
    atmospheric_depth: bool = True


class MockupParams(_Bundle):
    product_type: ProductType = "Coffee Cup"


class PerspectiveParams(_Bundle):
    """Virtual camera placement and lens simulation."""

    prompt: str = ""
    angle_preset: AnglePreset = "Eye-Level"
    orbit: int = Field(default=0, ge=-180, le=180)
    elevation: int = Field(default=50, ge=0, le=100)
    tilt: int = Field(default=0, ge=-90, le=90)
    focal_length: int = Field(default=50, ge=18, le=200)
    dof_intensity: int = Field(default=20, ge=0, le=100)
    perspective_correction: bool = True
    lighting_lock: bool = True


class RelightParams(_Bundle):
    light_type: LightType = "Softbox"
    light_direction: LightDirection = "Top-Left"
    intensity: int = Field(default=75, ge=0, le=100)
    color_temperature: int = Field(default=5500, ge=2000, le=8000)


# ---------------------------------------------------------------------------
# Image bundles.
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SingleImage:
    """Operations working on exactly one input image."""

    image: ImageAsset | None = None

    def ordered(self) -> tuple[ImageAsset, ...]:
        return (self.image,) if self.image is not None else ()


@dataclass(frozen=True)
class ComposeImages:
    """Layer images for scene composition; only the background is required."""

    background: ImageAsset | None = None
    midground: ImageAsset | None = None
    foreground: ImageAsset | None = None
    palette: ImageAsset | None = None

    def ordered(self) -> tuple[ImageAsset, ...]:
        # Background, midground, foreground, palette.
        layers = (self.background, self.midground, self.foreground, self.palette)
        return tuple(layer for layer in layers if layer is not None)


@dataclass(frozen=True)
class MergeImages:
    """Subject and background.  The instruction calls them the 'Object Image'
    and the 'Background Image' and expects them in that order."""

    object_image: ImageAsset | None = None
    background_image: ImageAsset | None = None

    def ordered(self) -> tuple[ImageAsset, ...]:
        return tuple(a for a in (self.object_image, self.background_image) if a is not None)


@dataclass(frozen=True)
class MockupImages:
    """The design image is 'the first image provided' in the mockup instruction."""

    design: ImageAsset | None = None

    def ordered(self) -> tuple[ImageAsset, ...]:
        return (self.design,) if self.design is not None else ()
