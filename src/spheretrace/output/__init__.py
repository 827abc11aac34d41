"""Output module: gamma/clamp conversion and image files.

Components:
    color: Linear-to-8-bit channel conversion
    image: The Image container with PPM (P3) and Pillow-backed writers
"""

from .color import CHANNEL_SCALE, INTENSITY_MAX, INTENSITY_MIN, linear_to_gamma, to_rgb8
from .image import Image

__all__ = [
    "Image",
    "linear_to_gamma",
    "to_rgb8",
    "INTENSITY_MIN",
    "INTENSITY_MAX",
    "CHANNEL_SCALE",
]
