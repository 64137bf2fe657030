import os, sys, argparse, glob, contextlib
from gifcrop import crop, image
from gifcrop.animation import CropRect
from gifcrop.errors import GifCropError

SCRIPT_VERSION = "v1.0"


def print_color(text: str, color: str = "r"):
    colors = {
        "r": "\033[91m",
        "g": "\033[92m",
        "y": "\033[93m",
        "b": "\033[94m",
    }
    print(colors[color] + text + "\033[0m")

@contextlib.contextmanager
def staged_file(path: str, suffix: str = ".tmp"):
    # Write next to the destination, and only move into place if nothing went wrong
    staging = path + suffix
    try:
        yield staging
        os.replace(staging, path)
    finally:
        if os.path.exists(staging):
            os.remove(staging)

def glob_single(input_pattern: str) -> str:
    files = glob.glob(input_pattern)
    if len(files) == 0:
        raise FileNotFoundError(f"No files match \"{input_pattern}\"")
    if len(files) > 1:
        raise ValueError(f"Multiple files match \"{input_pattern}\".")
    return files[0]

def format_size(path: str) -> str:
    return f"{os.path.getsize(path) / 1024:.1f} KiB"

def non_negative_int(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {value}")
    return value

def positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return value


def process_gif(file_path: str, rect: CropRect, output_file: str, nearest: bool = False, clip: bool = False):
    print(f"Loading {file_path}")
    anim = image.load_animation(file_path)
    print(f"Loaded {len(anim)} frames, {anim.width}x{anim.height}, loop {anim.loop_count}")

    print(f"Cropping to {rect}")
    cropped = crop.crop_animation(anim, rect, nearest=nearest, clip=clip)
    if (cropped.width, cropped.height) != (rect.width, rect.height):
        print_color(f"Crop region clipped to {cropped.width}x{cropped.height}", "y")

    print(f"Saving {output_file}")
    with staged_file(output_file) as path:
        image.save_animation(cropped, path)


def create_parser() -> argparse.ArgumentParser:
    argparser = argparse.ArgumentParser(description="Crops every frame of an animated GIF")
    argparser.add_argument("--file", "-f", type=str, help="Path to the GIF file (glob patterns must match a single file)", required=True)
    argparser.add_argument("-x", type=non_negative_int, help="X coordinate for cropping", default=0)
    argparser.add_argument("-y", type=non_negative_int, help="Y coordinate for cropping", default=0)
    argparser.add_argument("--width", type=positive_int, help="Width of the cropped region", default=100)
    argparser.add_argument("--height", type=positive_int, help="Height of the cropped region", default=100)
    argparser.add_argument("--output", "-o", type=str, help="Output file name", default="cropped.gif")
    argparser.add_argument("--nearest", action="store_true", help="Use the nearest palette color when an exact match is missing")
    argparser.add_argument("--clip", action="store_true", help="Clip the crop region to the image instead of rejecting it")
    return argparser


def main(argv: list[str] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    if argv:
        argv[-1] = argv[-1].strip()  # Remove trailing carriage return for *nix/win compat.
    args = create_parser().parse_args(argv)

    print("Running gif cropper {}".format(SCRIPT_VERSION))

    try:
        file_path = glob_single(args.file)
        rect = CropRect(args.x, args.y, args.width, args.height)
        process_gif(file_path, rect, args.output, nearest=args.nearest, clip=args.clip)
    except GifCropError as e:
        print_color(f"{type(e).__name__}: {e}", "r")
        print("Aborting...")
        return 1
    except (OSError, ValueError) as e:
        print_color(f"Error processing GIF: {e}", "r")
        print("Aborting...")
        return 1

    print_color(f"GIF processed and saved to {args.output} ({format_size(args.output)})", "g")
    return 0


if __name__ == "__main__":
    sys.exit(main())
