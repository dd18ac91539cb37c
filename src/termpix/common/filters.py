"""Resampling kernels recognised by the renderer."""

from enum import StrEnum

from PIL import Image

from .errors import UnknownFilterName


class ResampleFilterKind(StrEnum):
    NEAREST = "nearest"
    TRIANGLE = "triangle"
    CATMULL_ROM = "catmullrom"
    GAUSSIAN = "gaussian"
    LANCZOS3 = "lanczos3"

    @classmethod
    def default(cls) -> "ResampleFilterKind":
        return cls.GAUSSIAN

    @classmethod
    def from_name(cls, name: str | None) -> "ResampleFilterKind":
        """Look up a filter by its command-line name.

        Args:
            name: One of ``nearest``, ``triangle``, ``catmullrom``,
                ``gaussian``, ``lanczos3``; None selects the default

        Raises:
            UnknownFilterName: If the name is not one of the five kernels
        """
        if name is None:
            return cls.default()
        try:
            return cls(name)
        except ValueError as exc:
            raise UnknownFilterName(name) from exc

    @property
    def resampling(self) -> Image.Resampling:
        """Pillow kernel used for the final resize.

        Pillow has no Gaussian kernel; GAUSSIAN blurs first and then
        resizes bilinearly (see ``needs_preblur``).
        """
        return _PIL_RESAMPLING[self]

    @property
    def needs_preblur(self) -> bool:
        return self is ResampleFilterKind.GAUSSIAN


_PIL_RESAMPLING: dict[ResampleFilterKind, Image.Resampling] = {
    ResampleFilterKind.NEAREST: Image.Resampling.NEAREST,
    ResampleFilterKind.TRIANGLE: Image.Resampling.BILINEAR,
    ResampleFilterKind.CATMULL_ROM: Image.Resampling.BICUBIC,
    ResampleFilterKind.GAUSSIAN: Image.Resampling.BILINEAR,
    ResampleFilterKind.LANCZOS3: Image.Resampling.LANCZOS,
}
