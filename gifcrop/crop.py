from gifcrop.animation import Animation, CropRect, Frame
from gifcrop.errors import InvalidRegion, PaletteLookupFailure


def check_region(rect: CropRect, width: int, height: int, frame_index: int = None):
    bounds = (width, height)
    if rect.width <= 0 or rect.height <= 0:
        raise InvalidRegion(rect, bounds, "is empty", frame_index)
    if rect.x < 0 or rect.y < 0:
        raise InvalidRegion(rect, bounds, "has a negative origin", frame_index)
    if rect.right > width or rect.bottom > height:
        raise InvalidRegion(rect, bounds, "extends outside the image", frame_index)


def clip_region(rect: CropRect, width: int, height: int) -> CropRect:
    # Intersect with the canvas. Whatever is left must still be a valid region.
    x = max(rect.x, 0)
    y = max(rect.y, 0)
    clipped = CropRect(x, y, min(rect.right, width) - x, min(rect.bottom, height) - y)
    check_region(clipped, width, height)
    return clipped


def rgba_palette(palette: tuple[tuple[int, ...], ...], transparency: int = None) -> list[tuple[int, int, int, int]]:
    # The transparent entry must not collide with an opaque entry of the same RGB
    colors = []
    for i, color in enumerate(palette):
        alpha = 0 if i == transparency else (color[3] if len(color) > 3 else 255)
        colors.append(tuple(color[:3]) + (alpha,))
    return colors


def palette_lookup(palette: list[tuple[int, ...]]) -> dict[tuple[int, ...], int]:
    lookup = {}
    for i, color in enumerate(palette):
        # Duplicate entries resolve to the first one, same as a linear search would
        lookup.setdefault(color, i)
    return lookup


def nearest_index(color: tuple[int, ...], palette: tuple[tuple[int, ...], ...]) -> int:
    best_index = 0
    best_dist = None
    for i, p in enumerate(palette):
        dist = sum((a - b) ** 2 for a, b in zip(color, p))
        if best_dist is None or dist < best_dist:
            best_dist = dist
            best_index = i
            if dist == 0:
                break
    return best_index


def reindex(colors: list[tuple[int, int, int, int]], palette: tuple[tuple[int, ...], ...], nearest: bool = False, transparency: int = None) -> bytes:
    """
    Maps RGBA colors back onto palette indices. The entry at the transparency index
    only matches fully transparent colors.

    Colors missing from the palette raise PaletteLookupFailure, unless nearest is set,
    in which case the closest entry is used (lowest index on a tie).
    """
    if not palette:
        raise ValueError("Cannot index colors into an empty palette")

    resolved = rgba_palette(palette, transparency)
    lookup = palette_lookup(resolved)
    indices = bytearray(len(colors))
    for i, color in enumerate(colors):
        index = lookup.get(color)
        if index is None:
            if not nearest:
                raise PaletteLookupFailure(color)
            index = nearest_index(color, resolved)
            lookup[color] = index
        indices[i] = index
    return bytes(indices)


def crop_colors(frame: Frame, rect: CropRect) -> list[tuple[int, int, int, int]]:
    palette = rgba_palette(frame.palette, frame.transparency)
    pixels = frame.pixels
    colors = []
    for dy in range(rect.height):
        row = (rect.y + dy) * frame.width + rect.x
        for dx in range(rect.width):
            colors.append(palette[pixels[row + dx]])
    return colors


def crop_frame(frame: Frame, rect: CropRect, nearest: bool = False) -> Frame:
    check_region(rect, frame.width, frame.height)
    colors = crop_colors(frame, rect)
    pixels = reindex(colors, frame.palette, nearest, frame.transparency)
    return Frame(rect.width, rect.height, pixels, frame.palette, frame.transparency)


def crop_animation(anim: Animation, rect: CropRect, nearest: bool = False, clip: bool = False) -> Animation:
    if clip:
        rect = clip_region(rect, anim.width, anim.height)
    else:
        check_region(rect, anim.width, anim.height)

    frames = []
    for i, frame in enumerate(anim.frames):
        try:
            frames.append(crop_frame(frame, rect, nearest))
        except InvalidRegion as e:
            raise InvalidRegion(e.rect, e.bounds, e.reason, i) from e
        except PaletteLookupFailure as e:
            raise PaletteLookupFailure(e.color, i) from e

    return Animation(
        frames,
        list(anim.delays),
        list(anim.disposal_methods),
        loop_count = anim.loop_count,
        background_index = anim.background_index,
        width = rect.width,
        height = rect.height,
    )
