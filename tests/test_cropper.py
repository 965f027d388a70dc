"""Tests for cropper module."""

import pytest
from PIL import Image

from pdfrearrange.services.cropper import (
    CropRegion,
    crop_raster,
    fit_transform,
    widget_to_image_region,
)
from pdfrearrange.utils.exceptions import CropError, ValidationError


class TestCropRegion:
    def test_from_points_any_corner_order(self):
        assert CropRegion.from_points(50, 60, 10, 20) == CropRegion(10, 20, 40, 40)

    def test_box(self):
        assert CropRegion(5, 6, 10, 20).box == (5, 6, 15, 26)

    def test_parse(self):
        assert CropRegion.parse("10, 20, 300, 400") == CropRegion(10, 20, 300, 400)

    @pytest.mark.parametrize("text", ["1,2,3", "a,b,c,d", "0,0,0,10", "0,0,10,-5"])
    def test_parse_invalid(self, text):
        with pytest.raises(ValidationError):
            CropRegion.parse(text)

    def test_clamp_inside_is_unchanged(self):
        region = CropRegion(10, 10, 20, 20)
        assert region.clamp((100, 100)) == region

    def test_clamp_overhanging(self):
        assert CropRegion(-10, 90, 50, 50).clamp((100, 100)) == CropRegion(0, 90, 40, 10)

    def test_clamp_outside_is_empty(self):
        assert CropRegion(200, 200, 10, 10).clamp((100, 100)).is_empty


class TestCropRaster:
    def test_crops_to_region(self):
        image = Image.new("RGB", (100, 200))
        assert crop_raster(image, CropRegion(10, 20, 30, 40)).size == (30, 40)

    def test_does_not_modify_source(self):
        image = Image.new("RGB", (100, 200))
        crop_raster(image, CropRegion(0, 0, 10, 10))
        assert image.size == (100, 200)

    def test_empty_region_raises(self):
        with pytest.raises(CropError) as exc_info:
            crop_raster(Image.new("RGB", (100, 200)), CropRegion(150, 0, 10, 10))
        assert exc_info.value.image_size == (100, 200)


class TestWidgetMapping:
    def test_fit_transform_letterbox(self):
        # 100x200 image in 300x400 widget: height limits, scale 2
        assert fit_transform((100, 200), (300, 400)) == (2.0, 50.0, 0.0)

    def test_fit_transform_with_zoom(self):
        scale, offset_x, offset_y = fit_transform((100, 100), (200, 200), zoom=0.5)
        assert scale == 1.0
        assert (offset_x, offset_y) == (50.0, 50.0)

    def test_degenerate_sizes(self):
        assert fit_transform((0, 0), (100, 100)) == (1.0, 0.0, 0.0)

    def test_full_widget_drag_maps_to_whole_image(self):
        region = widget_to_image_region((50, 0), (250, 400), (100, 200), (300, 400))
        assert region == CropRegion(0, 0, 100, 200)

    def test_drag_outside_image_is_clamped(self):
        region = widget_to_image_region((0, 0), (100, 100), (100, 200), (300, 400))
        assert region == CropRegion(0, 0, 25, 50)
