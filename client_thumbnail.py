#!/usr/bin/env python3
#
# PROJECT: stl-thumbnail
# MODULE: client_thumbnail.py
# STATUS: Level 2 - Implementation
# TRUTH_LINK: DESIGN.md Section 2.15
# LOG_REF: 2026-10-19
#

import argparse
import logging
import sys
import os

# Ensure local package is importable
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from stl_thumbnail.app import Settings, run
from stl_thumbnail.parser import StlError

# dimensions need enough pixels to stay readable
SIZE_HINT_MIN_HEIGHT = 128


def parse_args(argv=None):
    """CLI argument parser. -h is the image height, so help is --help only."""
    epilog = """\
examples:
  %(prog)s part.stl part.png                        256x256 still thumbnail
  %(prog)s part.stl part.png -w 512 -h 512 -d       Larger, with dimensions
  %(prog)s part.stl part.gif --turntable            Animated turntable
  %(prog)s huge.stl huge.png --lazy --timeout 2000  Stream the mesh, 2s budget
"""
    parser = argparse.ArgumentParser(
        prog="stl2thumbnail",
        description="Generates thumbnails from STL files",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False
    )
    parser.add_argument("input", help="Input filename")
    parser.add_argument("output", help="Output filename")
    parser.add_argument("--help", action="help",
                        help="Show this help message and exit")
    parser.add_argument("-t", "--turntable", action="store_true",
                        help="Enables turntable mode")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Be verbose")
    parser.add_argument("-l", "--lazy", action="store_true",
                        help="Enables low memory usage mode")
    parser.add_argument("-n", "--normals", action="store_true",
                        help="Always recalculate normals")
    parser.add_argument("-w", "--width", type=int, default=256,
                        help="Width of the generated image (default: 256)")
    parser.add_argument("-h", "--height", type=int, default=256,
                        help="Height of the generated image (default: 256)")
    parser.add_argument("-d", "--dimensions", action="store_true",
                        help="Draws the dimensions underneath the model "
                             "(requires height of at least 128 pixels)")
    parser.add_argument("--timeout", type=int, default=0,
                        help="Max render time per frame in ms, 0 to disable (default: 0)")
    return parser.parse_args(argv)


def settings_from_args(args) -> Settings:
    return Settings(
        verbose=args.verbose,
        lazy=args.lazy,
        recalculate_normals=args.normals,
        turntable=args.turntable,
        size_hint=args.dimensions and args.height >= SIZE_HINT_MIN_HEIGHT,
        timeout=args.timeout / 1000.0 if args.timeout > 0 else None,
    )


def main(argv=None) -> int:
    args = parse_args(argv)
    settings = settings_from_args(args)

    logging.basicConfig(
        level=logging.DEBUG if settings.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    try:
        run(args.input, args.output, args.width, args.height, settings)
    except (StlError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        if settings.verbose:
            import traceback
            traceback.print_exc()
        return 1
    return 0


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()
