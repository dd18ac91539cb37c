"""Error taxonomy for image acquisition, size resolution and filter lookup."""

from typing import override


class TermpixError(Exception):
    """Base class for every error raised by termpix."""

    def __init__(self, message: str = "An unknown termpix error occurred."):
        self.message: str = message
        super().__init__(self.message)

    @override
    def __str__(self):
        return self.message


class LoadImageError(TermpixError):
    """An image file could not be turned into a pixel buffer."""


class VectorDecodeFailure(LoadImageError):
    """The vector document was unparsable or rendered to nothing."""


class RasterDecodeFailure(LoadImageError):
    """The raster codec rejected the file.

    The codec's own error is kept in ``inner`` and its description is
    reported unchanged.
    """

    def __init__(self, inner: Exception):
        self.inner: Exception = inner
        super().__init__(str(inner) or type(inner).__name__)


class UnknownFilterName(TermpixError, ValueError):
    def __init__(self, name: str):
        self.name: str = name
        super().__init__(f"Unknown filter: {name}")


class SurfaceSizeUnavailable(TermpixError, RuntimeError):
    def __init__(
        self,
        message: str = (
            "Neither --width or --height specified, "
            "and could not determine terminal size. Giving up."
        ),
    ):
        super().__init__(message)


class InvalidDimensionsError(TermpixError, ValueError):
    """A dimension that must be positive was zero or negative."""


class VectorBackendUnavailable(TermpixError, RuntimeError):
    """CairoSVG or the native cairo library could not be loaded."""
