class GifCropError(Exception):
    pass


class InvalidRegion(GifCropError, ValueError):
    def __init__(self, rect, bounds: tuple[int, int], reason: str, frame_index: int | None = None):
        self.rect = rect
        self.bounds = bounds
        self.reason = reason
        self.frame_index = frame_index
        super().__init__(str(self))

    def __str__(self):
        msg = f"Crop region {self.rect} {self.reason} (bounds {self.bounds[0]}x{self.bounds[1]})"
        if self.frame_index is not None:
            msg += f" in frame {self.frame_index}"
        return msg


class PaletteLookupFailure(GifCropError):
    def __init__(self, color: tuple, frame_index: int | None = None):
        self.color = color
        self.frame_index = frame_index
        super().__init__(str(self))

    def __str__(self):
        msg = f"Color {self.color} is not in the palette"
        if self.frame_index is not None:
            msg += f" of frame {self.frame_index}"
        return msg


class CodecFailure(GifCropError):
    pass
