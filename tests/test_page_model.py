"""Tests for page_model module (PageState and rotation normalization)."""

from PIL import Image

from pdfrearrange.editor.page_model import PageState, normalize_rotation


class TestNormalizeRotation:
    def test_wraps_full_turns(self):
        assert normalize_rotation(450) == 90
        assert normalize_rotation(360) == 0

    def test_negative_angles(self):
        assert normalize_rotation(-90) == 270
        assert normalize_rotation(-450) == 270

    def test_off_grid_rounds_to_quarter_turn(self):
        assert normalize_rotation(100) == 90
        assert normalize_rotation(350) == 0

    def test_ties_snap_clockwise(self):
        assert [normalize_rotation(a) for a in (45, 135, 225, 315)] == [90, 180, 270, 0]
        assert normalize_rotation(-45) == 0
        assert normalize_rotation(44) == 0


class TestPageState:
    def test_default_values(self):
        ps = PageState(page_id=0)
        assert ps.rotation == 0
        assert ps.crop_override is None
        assert ps.is_cropped is False

    def test_rotation_normalization(self):
        ps = PageState(page_id=1, rotation=450)
        assert ps.rotation == 90

    def test_rotate_clockwise(self):
        ps = PageState(page_id=0)
        ps.rotate(90)
        assert ps.rotation == 90
        ps.rotate(90)
        assert ps.rotation == 180

    def test_rotate_counter_clockwise(self):
        ps = PageState(page_id=0)
        ps.rotate(-90)
        assert ps.rotation == 270

    def test_half_quarter_steps_accumulate_clockwise(self):
        ps = PageState(page_id=0)
        ps.rotate(45)
        assert ps.rotation == 90
        ps.rotate(45)
        assert ps.rotation == 180

    def test_four_quarter_turns_restore_angle(self):
        ps = PageState(page_id=0, rotation=180)
        for _ in range(4):
            ps.rotate(90)
        assert ps.rotation == 180

    def test_label_is_one_indexed(self):
        assert PageState(page_id=4).label == "5"

    def test_is_cropped(self):
        ps = PageState(page_id=0, crop_override=Image.new("RGB", (5, 5)))
        assert ps.is_cropped is True
