"""Image acquisition, size resolution and rendering algorithms."""

from .ansi_render import AnsiRenderer, Renderer, render_image
from .image_loader import ImageSource, PixelBuffer, load_image
from .size_resolver import determine_size, fit_to_size, scale_dimension

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
]
