import pytest

from gifcrop.animation import Animation, CropRect, Frame
from conftest import PALETTE, make_frame


def test_frame_rejects_wrong_pixel_count():
    with pytest.raises(ValueError):
        Frame(2, 2, bytes([0, 1, 2]), PALETTE)


def test_frame_rejects_index_outside_palette():
    with pytest.raises(ValueError):
        Frame(2, 1, bytes([0, 4]), PALETTE)


def test_frame_lookups():
    frame = Frame(2, 2, bytes([0, 1, 2, 3]), PALETTE)
    assert frame.index_at(1, 1) == 3
    assert frame.color_at(0, 1) == (0, 255, 0)


def test_frame_keeps_palette_object():
    frame = make_frame(3, 3)
    assert frame.palette is PALETTE


def test_animation_rejects_mismatched_metadata():
    frames = [ make_frame(4, 4), make_frame(4, 4) ]
    with pytest.raises(ValueError):
        Animation(frames, [10, 10], [0])
    with pytest.raises(ValueError):
        Animation(frames, [10], [0, 0])


def test_animation_canvas_defaults_to_first_frame():
    anim = Animation([ make_frame(6, 3) ], [10], [0])
    assert (anim.width, anim.height) == (6, 3)
    assert len(anim) == 1


def test_empty_animation():
    anim = Animation([], [], [])
    assert (anim.width, anim.height) == (0, 0)


def test_crop_rect_edges():
    rect = CropRect(2, 3, 4, 5)
    assert rect.right == 6
    assert rect.bottom == 8
    assert rect == CropRect(2, 3, 4, 5)
    assert rect != CropRect(2, 3, 4, 6)
