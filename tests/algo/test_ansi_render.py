"""Unit tests for the half-block ANSI renderer."""

from io import StringIO

import numpy as np

from termpix.algo.ansi_render import (
    LOWER_HALF,
    RESET,
    UPPER_HALF,
    AnsiRenderer,
    ansi256_from_rgb,
    render_image,
    resample,
)
from termpix.algo.image_loader import PixelBuffer
from termpix.common.filters import ResampleFilterKind

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


def solid(width: int, height: int, colour) -> PixelBuffer:
    return PixelBuffer.new(width, height, colour)


# ============================================================================
# Palette mapping
# ============================================================================


def test_ansi256_exact_cube_colours():
    """Test pure colours map onto the 6x6x6 cube."""
    pixels = np.array([[[255, 0, 0], [0, 0, 0], [255, 255, 255]]], dtype=np.uint8)

    assert ansi256_from_rgb(pixels).tolist() == [[196, 16, 231]]


def test_ansi256_greys_use_ramp():
    """Test mid greys map onto the grey ramp rather than the cube."""
    pixels = np.array([[128, 128, 128]], dtype=np.uint8)

    assert ansi256_from_rgb(pixels).tolist() == [244]


def xterm_reference(rgb) -> int:
    """Brute-force nearest xterm colour over the 240 palette entries 16-255."""
    levels = [0, 95, 135, 175, 215, 255]
    palette = [(r, g, b) for r in levels for g in levels for b in levels]
    palette += [(v, v, v) for v in range(8, 248, 10)]
    distances = [sum((int(c) - p) ** 2 for c, p in zip(rgb, entry)) for entry in palette]
    return 16 + distances.index(min(distances))


def test_ansi256_matches_full_palette_search():
    """Test the per-channel lookup picks the same colour as a full palette search."""
    rng = np.random.default_rng(7)
    samples = rng.integers(0, 256, size=(300, 3), dtype=np.uint8)
    edges = np.array(
        [[47, 48, 115], [116, 155, 156], [195, 196, 235], [236, 3, 250], [4, 4, 4], [243, 243, 243]],
        dtype=np.uint8,
    )
    pixels = np.concatenate([samples, edges])

    expected = [xterm_reference(rgb) for rgb in pixels]

    assert ansi256_from_rgb(pixels).tolist() == expected


def test_ansi256_handles_megapixel_frame():
    """Test a large frame maps to indices of the same height and width."""
    pixels = np.zeros((1000, 1000, 4), dtype=np.uint8)
    pixels[..., 0] = 255

    indices = ansi256_from_rgb(pixels)

    assert indices.shape == (1000, 1000)
    assert int(indices.min()) == int(indices.max()) == 196


# ============================================================================
# Resampling
# ============================================================================


def test_resample_to_target_size():
    """Test every kernel produces the requested size."""
    buffer = solid(40, 20, RED)

    for kind in ResampleFilterKind:
        assert resample(buffer, 8, 4, kind).size == (8, 4)


def test_resample_solid_colour_is_preserved():
    """Test downscaling a flat image keeps its colour."""
    image = resample(solid(100, 100, RED), 10, 10, ResampleFilterKind.GAUSSIAN)

    assert image.getpixel((5, 5)) == RED


# ============================================================================
# AnsiRenderer
# ============================================================================


def test_render_true_color_cells():
    """Test 24-bit mode emits RGB foreground and background codes."""
    lines = AnsiRenderer(StringIO()).lines(solid(2, 2, RED), True, 2, 2, ResampleFilterKind.NEAREST)

    cell = "\x1b[38;2;255;0;0m\x1b[48;2;255;0;0m" + UPPER_HALF
    assert lines == [cell * 2 + RESET]


def test_render_256_colour_cells():
    """Test default mode emits xterm-256 palette codes."""
    lines = AnsiRenderer(StringIO()).lines(solid(1, 2, RED), False, 1, 2, ResampleFilterKind.NEAREST)

    assert lines == ["\x1b[38;5;196m\x1b[48;5;196m" + UPPER_HALF + RESET]


def test_render_odd_height_pads_last_row():
    """Test an odd pixel height leaves the last cell's lower half transparent."""
    lines = AnsiRenderer(StringIO()).lines(solid(1, 3, RED), True, 1, 3, ResampleFilterKind.NEAREST)

    assert len(lines) == 2
    assert lines[1] == RESET + "\x1b[38;2;255;0;0m" + UPPER_HALF + RESET


def test_render_transparent_pixels():
    """Test transparent pixels fall back to the terminal background."""
    buffer = PixelBuffer.new(2, 2)
    buffer.put_pixel(1, 1, BLUE)

    lines = AnsiRenderer(StringIO()).lines(buffer, True, 2, 2, ResampleFilterKind.NEAREST)

    assert lines == [RESET + " " + RESET + "\x1b[38;2;0;0;255m" + LOWER_HALF + RESET]


def test_render_writes_one_line_per_two_rows():
    """Test render writes height / 2 newline-terminated lines to the stream."""
    stream = StringIO()

    AnsiRenderer(stream).render(solid(10, 10, RED), False, 6, 8, ResampleFilterKind.TRIANGLE)

    output = stream.getvalue()
    assert output.count("\n") == 4
    assert all(line.endswith(RESET) for line in output.splitlines())


def test_render_image_helper():
    """Test render_image drives an AnsiRenderer on the given stream."""
    stream = StringIO()

    render_image(solid(4, 4, BLUE), True, 4, 4, ResampleFilterKind.LANCZOS3, stream)

    assert stream.getvalue().count("\n") == 2
    assert "\x1b[38;2;0;0;255m" in stream.getvalue()


def test_render_large_target_in_256_colours():
    """Test a large 256-colour render produces every line at full width."""
    stream = StringIO()

    AnsiRenderer(stream).render(solid(64, 32, RED), False, 800, 400, ResampleFilterKind.NEAREST)

    lines = stream.getvalue().splitlines()
    assert len(lines) == 200
    assert lines[0] == ("\x1b[38;5;196m\x1b[48;5;196m" + UPPER_HALF) * 800 + RESET
