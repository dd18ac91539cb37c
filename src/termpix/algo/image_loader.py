"""Image acquisition: decode raster or vector files into an RGBA pixel buffer."""

from enum import StrEnum
from io import BytesIO
from pathlib import Path

import numpy as np
from loguru import logger
from PIL import Image

from ..common.errors import (
    RasterDecodeFailure,
    VectorBackendUnavailable,
    VectorDecodeFailure,
)
from ..utils.profiling import timed

# Vector documents are rasterized at this width; height follows their aspect ratio.
VECTOR_RASTER_WIDTH = 1000

VECTOR_SUFFIXES = (".svg", ".svgz")

RGBA = tuple[int, int, int, int]


class PixelBuffer:
    """Owned 2D grid of RGBA8 pixels backed by a Pillow image."""

    def __init__(self, image: Image.Image):
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        self._image: Image.Image = image

    @classmethod
    def new(cls, width: int, height: int, fill: RGBA = (0, 0, 0, 0)) -> "PixelBuffer":
        return cls(Image.new("RGBA", (width, height), fill))

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    @property
    def size(self) -> tuple[int, int]:
        return self._image.size

    @property
    def image(self) -> Image.Image:
        return self._image

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) outside {self.width}x{self.height} buffer"
            )

    def get_pixel(self, x: int, y: int) -> RGBA:
        self._check_bounds(x, y)
        r, g, b, a = self._image.getpixel((x, y))  # type: ignore[misc]
        return r, g, b, a

    def put_pixel(self, x: int, y: int, rgba: RGBA) -> None:
        self._check_bounds(x, y)
        self._image.putpixel((x, y), tuple(rgba))

    def to_array(self) -> np.ndarray:
        """Copy of the pixels as a ``(height, width, 4)`` uint8 array."""
        return np.asarray(self._image, dtype=np.uint8).copy()

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height})"


class ImageSource(StrEnum):
    VECTOR = "vector"
    RASTER = "raster"

    @classmethod
    def from_path(cls, path: str | Path) -> "ImageSource":
        """Pick the decode path from the filename suffix alone."""
        if str(path).lower().endswith(VECTOR_SUFFIXES):
            return ImageSource.VECTOR
        return ImageSource.RASTER


def _rasterize_svg(path: Path) -> bytes:
    try:
        import cairosvg
    except (ImportError, OSError) as exc:
        raise VectorBackendUnavailable(
            "CairoSVG is not available. "
            + "Install with: pip install cairosvg (requires the cairo library)"
        ) from exc

    # cairosvg's url= argument splits '#' and '?' out of filenames.
    try:
        raw = path.read_bytes()
    except OSError as exc:
        logger.debug(f"Cannot read {path}: {exc!r}")
        raise VectorDecodeFailure("Failed to load svg") from exc

    try:
        png_data = cairosvg.svg2png(bytestring=raw, output_width=VECTOR_RASTER_WIDTH)
    except Exception as exc:
        logger.debug(f"CairoSVG rejected {path}: {exc!r}")
        raise VectorDecodeFailure("Failed to load svg") from exc

    if not png_data:
        raise VectorDecodeFailure("Failed to render svg")
    return png_data


def load_vector(path: str | Path) -> PixelBuffer:
    """
    Rasterize an SVG document into a pixel buffer.

    Args:
        path: Path to an SVG (or gzip-compressed SVGZ) document

    Returns:
        PixelBuffer VECTOR_RASTER_WIDTH pixels wide

    Raises:
        VectorDecodeFailure: If the document cannot be parsed or renders to nothing
        VectorBackendUnavailable: If CairoSVG or the cairo library is missing
    """
    path = Path(path)
    png_data = _rasterize_svg(path)

    try:
        with Image.open(BytesIO(png_data)) as rendered:
            rendered.load()
            rgba = rendered.convert("RGBA")
    except (OSError, ValueError) as exc:
        raise VectorDecodeFailure("Failed to render svg") from exc

    if rgba.width == 0 or rgba.height == 0:
        raise VectorDecodeFailure("Failed to render svg")
    return PixelBuffer(rgba)


def load_raster(path: str | Path) -> PixelBuffer:
    """
    Decode a raster image file into a pixel buffer.

    The format is detected by Pillow. For multi-frame files only the first
    frame is decoded.

    Args:
        path: Path to the raster image

    Returns:
        PixelBuffer at the image's native size

    Raises:
        RasterDecodeFailure: Wrapping whatever Pillow raised
    """
    path = Path(path)
    try:
        with Image.open(path) as img:
            img.load()
            rgba = img.convert("RGBA")
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as exc:
        raise RasterDecodeFailure(exc) from exc

    if rgba.width == 0 or rgba.height == 0:
        raise RasterDecodeFailure(ValueError(f"Decoded image has no pixels: {path}"))
    return PixelBuffer(rgba)


@timed
def load_image(path: str | Path) -> PixelBuffer:
    """
    Load any supported still image as an RGBA pixel buffer.

    Args:
        path: Path to a raster image or an SVG document

    Returns:
        Fully decoded PixelBuffer at the image's native size

    Raises:
        VectorDecodeFailure: If an SVG cannot be parsed or rendered
        RasterDecodeFailure: If the raster codec rejects the file
    """
    source = ImageSource.from_path(path)
    logger.debug(f"Loading {path} as {source} image")

    if source is ImageSource.VECTOR:
        buffer = load_vector(path)
    else:
        buffer = load_raster(path)

    logger.debug(f"Decoded {path}: {buffer.width}x{buffer.height}")
    return buffer
