import argparse
import logging
import sys

from .errors import PngPixelError
from .utils import load_image


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Print the channel values of a pixel in an image file"
    )
    parser.add_argument("image", help="Path to the image file")
    parser.add_argument("x", type=int, help="X coordinate of the pixel")
    parser.add_argument("y", type=int, help="Y coordinate of the pixel")
    parser.add_argument(
        "--format",
        "-f",
        choices=["rgba", "hex", "all"],
        default="all",
        help="Output format: rgba (channel values), hex (hex values), all (both)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail instead of printing a zero pixel for unreadable coordinates",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        image = load_image(args.image)
        pixel = image.get_pixel_at(args.x, args.y, strict=args.strict)
    except (OSError, PngPixelError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(
        f"Loaded image {args.image}: {image.width}x{image.height} "
        f"{image.color_model.name} {int(image.bit_depth)}-bit"
    )

    r, g, b, a = pixel.rgba
    if args.format in ("rgba", "all"):
        print(f"Pixel at ({args.x}, {args.y}):")
        print(f"Red: {r}, Green: {g}, Blue: {b}, Alpha: {a}")

    if args.format in ("hex", "all"):
        print(f"Hex: #{r:02x}{g:02x}{b:02x}{a:02x} ({int(pixel.bit_depth)}-bit)")

    return 0
