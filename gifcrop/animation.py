class CropRect():
    def __init__(self, x: int, y: int, width: int, height: int):
        self.x = x
        self.y = y
        self.width = width
        self.height = height

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def __eq__(self, other):
        if not isinstance(other, CropRect):
            return NotImplemented
        return (self.x, self.y, self.width, self.height) == (other.x, other.y, other.width, other.height)

    def __repr__(self):
        return f"<rect {self.x},{self.y} {self.width}x{self.height}>"


class Frame():
    """
    An indexed-color raster. Pixels are stored row-major, one palette index per byte.
    The palette is a tuple of color tuples and is shared, never copied, between
    a frame and the frames cropped from it.
    """
    def __init__(self, width: int, height: int, pixels: bytes, palette: tuple[tuple[int, ...], ...], transparency: int | None = None):
        if len(pixels) != width * height:
            raise ValueError(f"Expected {width * height} pixels for a {width}x{height} frame, got {len(pixels)}")
        if pixels and max(pixels) >= len(palette):
            raise ValueError(f"Pixel index {max(pixels)} is outside a palette of {len(palette)} colors")
        self.width = width
        self.height = height
        self.pixels = bytes(pixels)
        self.palette = tuple(palette)
        self.transparency = transparency

    def index_at(self, x: int, y: int) -> int:
        return self.pixels[y * self.width + x]

    def color_at(self, x: int, y: int) -> tuple[int, ...]:
        return self.palette[self.index_at(x, y)]

    def __repr__(self):
        return f"<frame {self.width}x{self.height}; {len(self.palette)} colors>"


class Animation():
    def __init__(self, frames: list[Frame], delays: list[int], disposal_methods: list[int],
            loop_count: int = 0, background_index: int = 0, width: int = None, height: int = None):

        if not (len(frames) == len(delays) == len(disposal_methods)):
            raise ValueError(f"Mismatched animation: {len(frames)} frames, {len(delays)} delays, {len(disposal_methods)} disposal methods")

        # The canvas defaults to the first frame when the container doesn't declare one
        if width is None:
            width = frames[0].width if frames else 0
        if height is None:
            height = frames[0].height if frames else 0

        self.frames = list(frames)
        self.delays = list(delays)
        self.disposal_methods = list(disposal_methods)
        self.loop_count = loop_count
        self.background_index = background_index
        self.width = width
        self.height = height

    def __len__(self):
        return len(self.frames)

    def __repr__(self):
        return f"<animation {self.width}x{self.height}; {len(self.frames)} frames; loop {self.loop_count}>"
