"""Test configuration and fixtures for termpix.

This module provides:
- Pytest configuration (markers, dependency checks)
- Function-scoped fixtures (synthetic raster and vector media in tmp_path)
"""

from pathlib import Path

import pytest
from PIL import Image, ImageDraw

# ============================================================================
# Pytest Configuration
# ============================================================================


def _cairo_available() -> bool:
    try:
        import cairosvg  # noqa: F401
    except (ImportError, OSError):
        return False
    return True


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "requires_cairo: requires CairoSVG and the cairo library",
    )


def pytest_runtest_setup(item):
    """Skip SVG rendering tests when cairo cannot be loaded."""
    if item.get_closest_marker("requires_cairo") and not _cairo_available():
        pytest.skip(
            "CairoSVG or the cairo library is not installed. "
            "Install: pip install cairosvg and apt-get install libcairo2 (Linux)"
        )


# ============================================================================
# Media Fixtures
# ============================================================================


@pytest.fixture
def synthetic_image(tmp_path: Path) -> Path:
    """Generate a 160x90 PNG with a known top-left pixel."""
    output_path = tmp_path / "synthetic.png"

    img = Image.new("RGB", (160, 90), color=(73, 109, 137))
    draw = ImageDraw.Draw(img)
    for i in range(0, 160, 20):
        draw.line([(i, 0), (i, 90)], fill=(255, 255, 255), width=1)
    draw.ellipse([60, 25, 100, 65], fill=(200, 100, 100))
    img.putpixel((0, 0), (10, 20, 30))

    img.save(output_path, "PNG")
    return output_path


@pytest.fixture
def transparent_image(tmp_path: Path) -> Path:
    """Generate a 4x4 RGBA PNG: opaque red top half, transparent bottom half."""
    output_path = tmp_path / "transparent.png"

    img = Image.new("RGBA", (4, 4), color=(0, 0, 0, 0))
    for x in range(4):
        for y in range(2):
            img.putpixel((x, y), (255, 0, 0, 255))

    img.save(output_path, "PNG")
    return output_path


@pytest.fixture
def corrupt_image(tmp_path: Path) -> Path:
    output_path = tmp_path / "corrupt.png"
    _ = output_path.write_bytes(b"this is not an image")
    return output_path


@pytest.fixture
def svg_image(tmp_path: Path) -> Path:
    """Generate a 200x100 SVG document (2:1 aspect ratio)."""
    output_path = tmp_path / "drawing.svg"
    _ = output_path.write_text(
        '<svg xmlns="http://www.w3.org/2000/svg" width="200" height="100">'
        '<rect x="0" y="0" width="200" height="100" fill="#00ff00"/>'
        "</svg>",
        encoding="utf-8",
    )
    return output_path


@pytest.fixture
def corrupt_svg(tmp_path: Path) -> Path:
    output_path = tmp_path / "corrupt.svg"
    _ = output_path.write_text("<svg><rect width=", encoding="utf-8")
    return output_path
