"""Common module - error taxonomy and schemas."""

from .errors import (
    InvalidDimensionsError,
    LoadImageError,
    RasterDecodeFailure,
    SurfaceSizeUnavailable,
    TermpixError,
    UnknownFilterName,
    VectorBackendUnavailable,
    VectorDecodeFailure,
)
from .filters import ResampleFilterKind
from .schemas import DisplayOptions, SizingRequest

__all__ = [
    "TermpixError",
    "LoadImageError",
    "VectorDecodeFailure",
    "RasterDecodeFailure",
    "UnknownFilterName",
    "VectorBackendUnavailable",
    "SurfaceSizeUnavailable",
    "InvalidDimensionsError",
    "ResampleFilterKind",
    "SizingRequest",
    "DisplayOptions",
]
