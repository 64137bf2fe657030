import pytest

from gifcrop.animation import Animation, Frame

PALETTE = ((0, 0, 0), (255, 0, 0), (0, 255, 0), (0, 0, 255))


def make_frame(width: int, height: int, offset: int = 0, palette=PALETTE) -> Frame:
    pixels = bytes((x + 2 * y + offset) % len(palette) for y in range(height) for x in range(width))
    return Frame(width, height, pixels, palette)


def make_animation(count: int = 3, width: int = 10, height: int = 10, palette=PALETTE) -> Animation:
    frames = [ make_frame(width, height, i, palette) for i in range(count) ]
    return Animation(frames, [10] * count, [1] * count, loop_count=0, background_index=2)


@pytest.fixture
def animation() -> Animation:
    return make_animation()
