"""termpix - Display raster and vector images in an ANSI terminal."""

from .algo.ansi_render import AnsiRenderer, Renderer, render_image
from .algo.image_loader import ImageSource, PixelBuffer, load_image
from .algo.size_resolver import determine_size, fit_to_size, scale_dimension
from .common.errors import (
    InvalidDimensionsError,
    LoadImageError,
    RasterDecodeFailure,
    SurfaceSizeUnavailable,
    TermpixError,
    UnknownFilterName,
    VectorBackendUnavailable,
    VectorDecodeFailure,
)
from .common.filters import ResampleFilterKind
from .common.schemas import DisplayOptions, SizingRequest
from .utils.terminal import query_surface_size

__version__ = "0.1.0"

__all__ = [
    "PixelBuffer",
    "ImageSource",
    "load_image",
    "scale_dimension",
    "fit_to_size",
    "determine_size",
    "Renderer",
    "AnsiRenderer",
    "render_image",
    "ResampleFilterKind",
    "SizingRequest",
    "DisplayOptions",
    "query_surface_size",
    "TermpixError",
    "LoadImageError",
    "VectorDecodeFailure",
    "RasterDecodeFailure",
    "UnknownFilterName",
    "VectorBackendUnavailable",
    "SurfaceSizeUnavailable",
    "InvalidDimensionsError",
    "__version__",
]
