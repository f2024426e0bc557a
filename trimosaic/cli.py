"""
Command line front end

    $ trimosaic --in photo.jpg --out mosaic.png --mp 1500 --sw 0
"""
import argparse
import logging

from .config import RenderConfig, parse_color
from .errors import TrimosaicError
from .logging_config import setup_logging
from .pipeline import run

logger = logging.getLogger(__name__)


def color_arg(value):
    """argparse type for hex or named colors"""
    try:
        return parse_color(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def seed_arg(value):
    """argparse type for sampler seeds, which must be non-negative integers"""
    try:
        seed = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError("invalid seed: {!r}".format(value))
    if seed < 0:
        raise argparse.ArgumentTypeError("seed must be non-negative, got {}".format(seed))
    return seed


def build_parser():
    parser = argparse.ArgumentParser(
        prog="trimosaic",
        description="Turn an image into a mosaic of Delaunay triangles",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--in", dest="input", required=True, help="Source image")
    parser.add_argument("--out", dest="output", required=True,
                        help="Destination image, format from the extension")
    parser.add_argument("--bf", dest="blur_factor", type=float, default=1.0,
                        help="Blur radius (Gaussian sigma) before edge detection")
    parser.add_argument("--mp", dest="max_points", type=int, default=2500,
                        help="Maximum number of points in the generated image")
    parser.add_argument("--pt", dest="point_threshold", type=float, default=10.0,
                        help="Edge strength above which a pixel may become a point")
    parser.add_argument("--pr", dest="point_rate", type=float, default=0.075,
                        help="Fraction of the candidate pixels kept as points")
    parser.add_argument("--gr", dest="grayscale", action="store_true",
                        help="Convert the triangle colors to grayscale")
    parser.add_argument("--ow", dest="wireframe_only", action="store_true",
                        help="Do not fill the triangles, only stroke them")
    parser.add_argument("--sw", dest="stroke_width", type=float, default=0.1,
                        help="Stroke width in pixels, 0 disables strokes")
    parser.add_argument("--wb", dest="with_background", default=True,
                        action=argparse.BooleanOptionalAction,
                        help="Paint a solid background (--no-wb leaves it transparent)")
    parser.add_argument("--bc", dest="background_color", type=color_arg, default="white",
                        help="Background color, hex (#rrggbb) or name")
    parser.add_argument("--sc", dest="stroke_color", type=color_arg, default="black",
                        help="Stroke color, hex (#rrggbb) or name")
    parser.add_argument("--seed", type=seed_arg, default=None,
                        help="Seed of the point sampler, for reproducible output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--log-file", default=None, help="Also write the log to this file")
    return parser


def config_from_args(args):
    return RenderConfig(
        blur_factor=args.blur_factor,
        point_threshold=args.point_threshold,
        point_rate=args.point_rate,
        max_points=args.max_points,
        grayscale=args.grayscale,
        wireframe_only=args.wireframe_only,
        stroke_width=args.stroke_width,
        with_background=args.with_background,
        background_color=args.background_color,
        stroke_color=args.stroke_color,
    )


def main(argv=None):
    """
    Entry point of the console script

    Returns
    -------
    int
        0 on success, 1 when the image could not be read, triangulated
        or written
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)
    try:
        config = config_from_args(args)
    except ValueError as e:
        parser.error(str(e))

    try:
        run(args.input, args.output, config, seed=args.seed)
    except TrimosaicError as e:
        logger.error("Could not generate the triangle image: %s", e)
        return 1
    except OSError as e:
        logger.error("I/O error: %s", e)
        return 1
    logger.info("Done, triangle image saved to %s", args.output)
    return 0
