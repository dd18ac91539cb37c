"""Command-line entry point: display an image file in an ANSI terminal."""

import argparse
import sys
from collections.abc import Sequence
from typing import TextIO

from loguru import logger

from .algo.ansi_render import AnsiRenderer, Renderer
from .algo.image_loader import load_image
from .algo.size_resolver import SurfaceQuery, determine_size
from .common.errors import (
    InvalidDimensionsError,
    LoadImageError,
    SurfaceSizeUnavailable,
    UnknownFilterName,
    VectorBackendUnavailable,
)
from .common.filters import ResampleFilterKind
from .common.schemas import DisplayOptions, SizingRequest
from .utils.terminal import query_surface_size

EXIT_OK = 0
EXIT_FAILURE = -1
EXIT_NO_SURFACE = 1

DESCRIPTION = """\
Display an image from <file> in an ANSI terminal.

By default it will use as much of the current terminal window as possible,
while maintaining the aspect ratio of the input image. This can be
overridden with --width and/or --height.
"""


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from exc
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value!r}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="termpix",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("file", help="Path to a raster image or an SVG document")
    parser.add_argument("--width", type=positive_int, help="Output width in terminal columns")
    parser.add_argument("--height", type=positive_int, help="Output height in terminal rows")
    parser.add_argument(
        "--max-width",
        type=positive_int,
        help="Maximum width to use when --width is excluded",
    )
    parser.add_argument(
        "--max-height",
        type=positive_int,
        help="Maximum height to use when --height is excluded",
    )
    parser.add_argument(
        "--true-color",
        "--true-colour",
        dest="true_color",
        action="store_true",
        help="Use 24-bit RGB colour. Some terminals don't support this.",
    )
    parser.add_argument(
        "--filter",
        metavar="<nearest|triangle|catmullrom|gaussian|lanczos3>",
        help="Resampling filter (default: gaussian)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log diagnostics to stderr",
    )
    return parser


def configure_logging(verbose: bool) -> None:
    logger.remove()
    _ = logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def run(
    argv: Sequence[str] | None = None,
    *,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
    renderer: Renderer | None = None,
    surface_query: SurfaceQuery = query_surface_size,
) -> int:
    """
    Parse arguments, load and size the image, and hand it to the renderer.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])
        stdout: Stream the default renderer writes to
        stderr: Stream for user-facing error messages
        renderer: Renderer to use instead of an AnsiRenderer on stdout
        surface_query: Terminal size lookup used when no dimension is given

    Returns:
        Process exit status
    """
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    args = build_parser().parse_args(argv)

    # Filter names are checked before touching the file.
    try:
        filter_kind = ResampleFilterKind.from_name(args.filter)
    except UnknownFilterName as exc:
        print(exc, file=stderr)
        return EXIT_FAILURE

    options = DisplayOptions(
        file=args.file,
        sizing=SizingRequest(
            width=args.width,
            height=args.height,
            max_width=args.max_width,
            max_height=args.max_height,
        ),
        true_color=args.true_color,
        filter=filter_kind,
        verbose=args.verbose,
    )
    configure_logging(options.verbose)

    try:
        buffer = load_image(options.file)
    except (LoadImageError, VectorBackendUnavailable) as exc:
        print(exc, file=stderr)
        return EXIT_FAILURE

    try:
        width, height = determine_size(
            buffer.width,
            buffer.height,
            options.sizing,
            surface_query=surface_query,
        )
    except SurfaceSizeUnavailable as exc:
        print(exc, file=stderr)
        return EXIT_NO_SURFACE
    except InvalidDimensionsError as exc:
        print(exc, file=stderr)
        return EXIT_FAILURE

    renderer = renderer or AnsiRenderer(stdout)
    renderer.render(buffer, options.true_color, width, height, options.filter)
    return EXIT_OK


def main() -> None:
    sys.exit(run())
