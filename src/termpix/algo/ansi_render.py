"""Half-block ANSI renderer.

Each text cell shows two vertical pixels: the upper one as the foreground of
``▀`` and the lower one as the background. Transparent pixels fall back to
the terminal's default colours.
"""

from typing import Protocol, TextIO

import numpy as np
from loguru import logger
from PIL import Image, ImageFilter

from ..common.filters import ResampleFilterKind
from ..utils.profiling import timed
from .image_loader import PixelBuffer

UPPER_HALF = "▀"
LOWER_HALF = "▄"
RESET = "\x1b[0m"

# Alpha below this renders as the terminal background.
ALPHA_THRESHOLD = 128

_CUBE_LEVELS = np.array([0, 95, 135, 175, 215, 255], dtype=np.int32)

# Channel values at or above each edge snap to the next cube level; exact
# midpoints stay on the lower level.
_CUBE_EDGES = np.array([48, 116, 156, 196, 236], dtype=np.int32)

_GREY_FIRST = 8
_GREY_STEP = 10
_GREY_COUNT = 24

_CUBE_BASE = 16
_GREY_BASE = _CUBE_BASE + 216


def ansi256_from_rgb(pixels: np.ndarray) -> np.ndarray:
    """Nearest xterm-256 index for each RGB triple in ``pixels[..., :3]``.

    Squared RGB distance separates per channel, so the closest cube colour
    is the closest level on each axis. The closest grey is the ramp step
    nearest the channel mean. Ties go to the cube.
    """
    rgb = pixels[..., :3].astype(np.int32)

    levels = np.digitize(rgb, _CUBE_EDGES)
    cube_rgb = _CUBE_LEVELS[levels]
    cube_distance = ((rgb - cube_rgb) ** 2).sum(axis=-1)
    cube_index = _CUBE_BASE + 36 * levels[..., 0] + 6 * levels[..., 1] + levels[..., 2]

    lower = np.clip((rgb.sum(axis=-1) - 3 * _GREY_FIRST) // (3 * _GREY_STEP), 0, _GREY_COUNT - 1)
    upper = np.minimum(lower + 1, _GREY_COUNT - 1)
    lower_distance = ((rgb - (_GREY_FIRST + _GREY_STEP * lower)[..., np.newaxis]) ** 2).sum(axis=-1)
    upper_distance = ((rgb - (_GREY_FIRST + _GREY_STEP * upper)[..., np.newaxis]) ** 2).sum(axis=-1)
    grey_step = np.where(upper_distance < lower_distance, upper, lower)
    grey_distance = np.minimum(lower_distance, upper_distance)

    return np.where(grey_distance < cube_distance, _GREY_BASE + grey_step, cube_index)


class Renderer(Protocol):
    def render(
        self,
        buffer: PixelBuffer,
        true_color: bool,
        width: int,
        height: int,
        filter: ResampleFilterKind,
    ) -> None: ...


def resample(
    buffer: PixelBuffer, width: int, height: int, filter: ResampleFilterKind
) -> Image.Image:
    """Scale the buffer to ``width`` x ``height`` pixels with the chosen kernel."""
    image = buffer.image
    if filter.needs_preblur:
        factor = max(buffer.width / width, buffer.height / height)
        if factor > 1:
            image = image.filter(ImageFilter.GaussianBlur(radius=factor / 2))
    return image.resize((width, height), filter.resampling)


class AnsiRenderer:
    """Writes a pixel buffer to a text stream as coloured half blocks."""

    def __init__(self, stream: TextIO):
        self.stream: TextIO = stream

    def _colour(self, pixel: np.ndarray, index: int, true_color: bool, layer: int) -> str:
        # layer is 38 for foreground, 48 for background
        if true_color:
            return f"\x1b[{layer};2;{pixel[0]};{pixel[1]};{pixel[2]}m"
        return f"\x1b[{layer};5;{index}m"

    def _cell(
        self,
        top: np.ndarray,
        bottom: np.ndarray,
        top_index: int,
        bottom_index: int,
        true_color: bool,
    ) -> str:
        top_visible = top[3] >= ALPHA_THRESHOLD
        bottom_visible = bottom[3] >= ALPHA_THRESHOLD

        if top_visible and bottom_visible:
            return (
                self._colour(top, top_index, true_color, 38)
                + self._colour(bottom, bottom_index, true_color, 48)
                + UPPER_HALF
            )
        if top_visible:
            return RESET + self._colour(top, top_index, true_color, 38) + UPPER_HALF
        if bottom_visible:
            return RESET + self._colour(bottom, bottom_index, true_color, 38) + LOWER_HALF
        return RESET + " "

    def lines(
        self,
        buffer: PixelBuffer,
        true_color: bool,
        width: int,
        height: int,
        filter: ResampleFilterKind,
    ) -> list[str]:
        """Render to a list of text lines, each ending in a colour reset."""
        pixels = np.asarray(resample(buffer, width, height, filter), dtype=np.uint8)
        if height % 2:
            # Pad with a transparent row so every cell has a lower pixel.
            pixels = np.concatenate([pixels, np.zeros((1, width, 4), dtype=np.uint8)])
        if true_color:
            indices = np.zeros(pixels.shape[:2], dtype=np.int64)
        else:
            indices = ansi256_from_rgb(pixels)

        lines: list[str] = []
        for row in range(0, pixels.shape[0], 2):
            cells = [
                self._cell(
                    pixels[row, col],
                    pixels[row + 1, col],
                    int(indices[row, col]),
                    int(indices[row + 1, col]),
                    true_color,
                )
                for col in range(width)
            ]
            lines.append("".join(cells) + RESET)
        return lines

    @timed
    def render(
        self,
        buffer: PixelBuffer,
        true_color: bool,
        width: int,
        height: int,
        filter: ResampleFilterKind,
    ) -> None:
        logger.debug(
            f"Rendering {buffer!r} at {width}x{height} with {filter} "
            + ("(24-bit)" if true_color else "(256 colours)")
        )
        for line in self.lines(buffer, true_color, width, height, filter):
            _ = self.stream.write(line + "\n")
        self.stream.flush()


def render_image(
    buffer: PixelBuffer,
    true_color: bool,
    width: int,
    height: int,
    filter: ResampleFilterKind,
    stream: TextIO,
) -> None:
    AnsiRenderer(stream).render(buffer, true_color, width, height, filter)
