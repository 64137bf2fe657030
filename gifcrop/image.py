from typing import BinaryIO

from PIL import GifImagePlugin, Image, ImageSequence

from gifcrop.animation import Animation, Frame
from gifcrop.errors import CodecFailure

MAX_COLORS = 256


def _split_palette(flat: list[int], used: int) -> tuple[tuple[int, int, int], ...]:
    colors = [ tuple(flat[i:i + 3]) for i in range(0, len(flat) - 2, 3) ]
    # Pillow trims the palette to what the file declares. Pad if pixels point past it.
    while len(colors) < used:
        colors.append((0, 0, 0))
    return tuple(colors)


def _indexed_frame(img: Image.Image) -> Frame:
    pixels = img.tobytes()
    used = max(pixels) + 1 if pixels else 0
    if img.mode == "L":
        palette = tuple((i, i, i) for i in range(MAX_COLORS))
    else:
        palette = _split_palette(img.getpalette() or [], used)

    transparency = img.info.get("transparency")
    if not isinstance(transparency, int):
        transparency = None
    return Frame(img.width, img.height, pixels, palette, transparency)


def _truecolor_frame(img: Image.Image) -> Frame:
    """
    Pillow hands back RGB(A) for frames with a local palette that differs from the first.
    Rebuild an exact palette from the frame's colors where possible.
    """
    rgba = img.convert("RGBA")
    colors = rgba.getcolors(MAX_COLORS)

    if colors is None:
        # Too many colors to index exactly, let Pillow pick a palette without dithering
        quantized = rgba.quantize(colors=MAX_COLORS, dither=Image.Dither.NONE)
        return _indexed_frame(quantized)

    # GIF alpha is binary, every fully transparent pixel shares one entry
    opaque = sorted({ c[:3] for _, c in colors if c[3] > 0 })
    palette = list(opaque)
    lookup = { c: i for i, c in enumerate(opaque) }
    transparency = None
    if any(c[3] == 0 for _, c in colors):
        transparency = len(palette)
        palette.append((0, 0, 0))

    data = rgba.tobytes()
    pixels = bytes(
        transparency if data[i + 3] == 0 else lookup[tuple(data[i:i + 3])]
        for i in range(0, len(data), 4)
    )
    return Frame(img.width, img.height, pixels, tuple(palette), transparency)


def _read_frame(img: Image.Image) -> Frame:
    if img.mode in ("P", "L"):
        return _indexed_frame(img)
    return _truecolor_frame(img)


def decode_animation(fp: BinaryIO) -> Animation:
    # Keep frames in "P" mode unless they bring their own palette
    strategy = GifImagePlugin.LOADING_STRATEGY
    GifImagePlugin.LOADING_STRATEGY = GifImagePlugin.LoadingStrategy.RGB_AFTER_DIFFERENT_PALETTE_ONLY
    try:
        with Image.open(fp, formats=["GIF"]) as img:
            loop_count = img.info.get("loop", -1)
            background_index = img.info.get("background", 0)
            width, height = img.size

            frames = []
            delays = []
            disposal_methods = []
            for frame in ImageSequence.Iterator(img):
                frames.append(_read_frame(frame))
                delays.append(frame.info.get("duration", 0))
                disposal_methods.append(getattr(frame, "disposal_method", 0))

    except (OSError, EOFError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
        raise CodecFailure(f"Could not decode GIF: {e}") from e
    finally:
        GifImagePlugin.LOADING_STRATEGY = strategy

    return Animation(frames, delays, disposal_methods,
        loop_count = loop_count,
        background_index = background_index,
        width = width,
        height = height,
    )


def load_animation(src: str) -> Animation:
    with open(src, "rb") as f:
        return decode_animation(f)


def _to_image(frame: Frame) -> Image.Image:
    img = Image.frombytes("P", (frame.width, frame.height), frame.pixels)
    img.putpalette([ channel for color in frame.palette for channel in color[:3] ], rawmode="RGB")
    return img


def encode_animation(anim: Animation, fp: BinaryIO):
    """
    Writes every frame as its own image block with a local palette. Pillow's save_all
    would merge identical consecutive frames and delta-encode the rest, which changes
    the frame count.
    """
    if not anim.frames:
        raise CodecFailure("Cannot encode an animation with no frames")

    images = [ _to_image(frame) for frame in anim.frames ]

    info = {
        "background": anim.background_index,
        # Don't let Pillow rewrite the palettes
        "optimize": False,
    }
    # Without a looping extension the animation plays once
    if anim.loop_count >= 0:
        info["loop"] = anim.loop_count
    images[0].info["version"] = b"89a"

    # Encode fully before writing anything to fp
    chunks = []
    try:
        header, _ = GifImagePlugin.getheader(images[0], info=info)
        chunks.extend(header)
        for frame, img, delay, disposal in zip(anim.frames, images, anim.delays, anim.disposal_methods):
            params = {
                "duration": delay,
                "disposal": disposal,
                "include_color_table": True,
                "optimize": False,
            }
            if frame.transparency is not None:
                params["transparency"] = frame.transparency
            chunks.extend(GifImagePlugin.getdata(img, **params))
        chunks.append(b";")
    except (OSError, ValueError, KeyError, TypeError) as e:
        raise CodecFailure(f"Could not encode GIF: {e}") from e

    fp.write(b"".join(chunks))


def save_animation(anim: Animation, dst: str):
    with open(dst, "wb") as f:
        encode_animation(anim, f)

