"""Output size negotiation between explicit dimensions, caps and the terminal.

Heights given in terminal rows are doubled before any aspect-ratio
arithmetic, since every row renders two vertical pixels. Widths are
columns and map one-to-one onto pixels.
"""

import math
from collections.abc import Callable
from fractions import Fraction

from loguru import logger

from ..common.errors import InvalidDimensionsError, SurfaceSizeUnavailable
from ..common.schemas import SizingRequest
from ..utils.terminal import query_surface_size

PIXELS_PER_ROW = 2

# Rows kept free below the image for the shell prompt.
RESERVED_ROWS = 1

SurfaceQuery = Callable[[], tuple[int, int] | None]


def scale_dimension(other: int, orig_this: int, orig_other: int) -> int:
    """Scale one axis so that ``this / other`` keeps the original ratio.

    Rounds half up on the exact rational value: ``floor(orig_this * other /
    orig_other + 1/2)``.

    Args:
        other: New size of the other axis
        orig_this: Original size of the axis being computed
        orig_other: Original size of the other axis

    Raises:
        InvalidDimensionsError: If ``orig_other`` is not positive
    """
    if orig_other <= 0:
        raise InvalidDimensionsError(f"Cannot scale against a dimension of {orig_other}")
    return math.floor(Fraction(orig_this * other, orig_other) + Fraction(1, 2))


def fit_to_size(
    orig_width: int,
    orig_height: int,
    terminal_width: int,
    terminal_height: int,
    max_width: int | None = None,
    max_height: int | None = None,
) -> tuple[int, int]:
    """
    Largest aspect-preserving size that fits the available cells.

    Tries the full height first; if the resulting width overflows, the
    width budget wins and the height is derived from it instead.

    Args:
        orig_width: Source width in pixels
        orig_height: Source height in pixels
        terminal_width: Usable columns
        terminal_height: Usable rows
        max_width: Optional cap on columns
        max_height: Optional cap on rows

    Returns:
        ``(width, height)`` in pixels
    """
    target_width = min(max_width, terminal_width) if max_width is not None else terminal_width
    target_height = PIXELS_PER_ROW * (
        min(max_height, terminal_height) if max_height is not None else terminal_height
    )

    calculated_width = scale_dimension(target_height, orig_width, orig_height)
    if calculated_width <= target_width:
        return calculated_width, target_height
    return target_width, scale_dimension(target_width, orig_height, orig_width)


def _check_source(orig_width: int, orig_height: int) -> None:
    if orig_width <= 0 or orig_height <= 0:
        raise InvalidDimensionsError(
            f"Source image must have positive dimensions, got {orig_width}x{orig_height}"
        )


def _surface_budget(surface_query: SurfaceQuery) -> tuple[int, int]:
    size = surface_query()
    if size is None:
        raise SurfaceSizeUnavailable()

    columns, rows = size
    usable_rows = rows - RESERVED_ROWS
    if columns <= 0 or usable_rows <= 0:
        raise InvalidDimensionsError(
            f"Terminal of {columns}x{rows} cells has no room for an image"
        )
    return columns, usable_rows


def determine_size(
    orig_width: int,
    orig_height: int,
    request: SizingRequest | None = None,
    *,
    surface_query: SurfaceQuery = query_surface_size,
) -> tuple[int, int]:
    """
    Resolve the pixel size the renderer should scale the image to.

    Explicit dimensions always win: both given are taken verbatim, one given
    derives the other from the source aspect ratio. With neither, the image
    is fitted into the terminal (minus the reserved row), honouring the caps.

    Args:
        orig_width: Native width of the decoded image
        orig_height: Native height of the decoded image
        request: Explicit dimensions and caps, in cells
        surface_query: Returns ``(columns, rows)`` or None; only called
            when no explicit dimension is given

    Returns:
        ``(width, height)`` in pixels, both at least 1

    Raises:
        InvalidDimensionsError: On a non-positive source size or a terminal
            with no usable cells
        SurfaceSizeUnavailable: If fitting to the terminal was needed but
            its size could not be determined
    """
    _check_source(orig_width, orig_height)
    request = request or SizingRequest()
    width, height = request.width, request.height

    if not request.has_explicit_dimensions:
        columns, usable_rows = _surface_budget(surface_query)
        logger.debug(f"Sizing: fit to {columns}x{usable_rows} cells")
        size = fit_to_size(
            orig_width,
            orig_height,
            columns,
            usable_rows,
            request.max_width,
            request.max_height,
        )

    elif width is not None and height is not None:
        logger.debug("Sizing: explicit width and height")
        size = width, height * PIXELS_PER_ROW

    elif width is not None:
        logger.debug("Sizing: explicit width, height from aspect ratio")
        size = width, scale_dimension(width, orig_height, orig_width)

    else:
        logger.debug("Sizing: explicit height, width from aspect ratio")
        pixel_height = height * PIXELS_PER_ROW
        size = scale_dimension(pixel_height, orig_width, orig_height), pixel_height

    resolved = max(size[0], 1), max(size[1], 1)
    logger.debug(f"Resolved {orig_width}x{orig_height} to {resolved[0]}x{resolved[1]}")
    return resolved
