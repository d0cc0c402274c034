"""Tests for lumenstudio.core.bundles: validation and positional order."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from lumenstudio.core.bundles import (
    ComposeImages,
    MergeImages,
    MergeParams,
    MockupImages,
    PerspectiveParams,
    RelightParams,
    SingleImage,
    UpscaleParams,
    ZoneControls,
)
from lumenstudio.core.models import ImageAsset


def _asset(name: str) -> ImageAsset:
    return ImageAsset(data=name.encode(), mime_type="image/png", filename=name)


class TestParamValidation:
    """Out-of-range values are rejected when the bundle is built."""

    @pytest.mark.parametrize(
        ("factory", "kwargs"),
        [
            (MergeParams, {"realism": 101}),
            (MergeParams, {"color_temperature": 2000}),
            (MergeParams, {"camera_angle": "Dutch Angle"}),
            (PerspectiveParams, {"orbit": 181}),
            (PerspectiveParams, {"tilt": -91}),
            (PerspectiveParams, {"focal_length": 10}),
            (RelightParams, {"light_direction": "Behind"}),
            (RelightParams, {"color_temperature": 9000}),
            (ZoneControls, {"contrast": -1}),
            (UpscaleParams, {"mode": "Turbo"}),
            (UpscaleParams, {"scale": 16}),
        ],
    )
    def test_rejected(self, factory, kwargs):
        with pytest.raises(ValidationError):
            factory(**kwargs)

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            RelightParams(brightness=50)

    def test_bundles_are_frozen(self):
        params = RelightParams()
        with pytest.raises(ValidationError):
            params.intensity = 10

    @pytest.mark.parametrize("scale", [1.5, 2, 4, 6, 8])
    def test_upscale_factors(self, scale):
        assert UpscaleParams(scale=scale).scale == scale

    def test_boundaries_accepted(self):
        assert PerspectiveParams(orbit=-180, tilt=90, focal_length=200).orbit == -180
        assert MergeParams(color_temperature=7500, realism=0).realism == 0


class TestImageBundles:
    """``ordered()`` drives the positional part order."""

    def test_compose_order_skips_missing_layers(self):
        images = ComposeImages(
            background=_asset("bg"), foreground=_asset("fg"), palette=_asset("pal")
        )
        assert [a.filename for a in images.ordered()] == ["bg", "fg", "pal"]

    def test_compose_full_order(self):
        images = ComposeImages(
            palette=_asset("pal"),
            foreground=_asset("fg"),
            midground=_asset("mid"),
            background=_asset("bg"),
        )
        assert [a.filename for a in images.ordered()] == ["bg", "mid", "fg", "pal"]

    def test_merge_object_first(self):
        images = MergeImages(background_image=_asset("bg"), object_image=_asset("obj"))
        assert [a.filename for a in images.ordered()] == ["obj", "bg"]

    def test_single_and_mockup(self):
        assert SingleImage().ordered() == ()
        assert MockupImages(design=_asset("logo")).ordered()[0].filename == "logo"
