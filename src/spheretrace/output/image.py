"""Rendered images and writing them to disk.

An ``Image`` holds linear colors in a (height, width, 3) array, row-major
from the top-left pixel. Conversion to 8-bit values happens only when the
image is written.

Supported formats:
    - Plain-text PPM (P3), written with NumPy
    - PNG and anything else Pillow can encode

Example:
    >>> import numpy as np
    >>> from spheretrace.output.image import Image
    >>> image = Image.from_function(2, 1, lambda i, j: (i, 0.0, 0.0))
    >>> image.save("tiny.ppm")
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from spheretrace.output.color import to_rgb8

logger = logging.getLogger(__name__)

# Largest channel value written in the PPM header
PPM_MAX_VALUE = 255

ColorLike = Sequence[float]
PixelFunction = Callable[[int, int], ColorLike]


class Image:
    """A grid of linear colors.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        pixels: Linear colors, shape (height, width, 3), float64.
    """

    def __init__(self, width: int, height: int, pixels: npt.ArrayLike) -> None:
        """Wrap a pixel array.

        Args:
            width: Image width in pixels.
            height: Image height in pixels.
            pixels: Array of shape (height, width, 3).

        Raises:
            ValueError: If the array shape does not match the dimensions.
        """
        array = np.asarray(pixels, dtype=np.float64)
        if array.shape != (height, width, 3):
            raise ValueError(
                f"Pixel array shape {array.shape} does not match "
                f"image dimensions ({height}, {width}, 3)"
            )
        self.width = width
        self.height = height
        self.pixels = array

    @classmethod
    def from_pixels(cls, width: int, height: int, data: Sequence[ColorLike]) -> Image | None:
        """Build an image from a flat row-major sequence of colors.

        Args:
            width: Image width in pixels.
            height: Image height in pixels.
            data: width * height colors, each (R, G, B).

        Returns:
            The image, or None if the number of colors does not equal
            width * height.
        """
        array = np.asarray(data, dtype=np.float64).reshape(-1, 3)
        if width < 0 or height < 0 or array.shape[0] != width * height:
            return None
        return cls(width, height, array.reshape(height, width, 3))

    @classmethod
    def from_function(cls, width: int, height: int, fn: PixelFunction) -> Image:
        """Build an image by evaluating ``fn(i, j)`` for every pixel.

        Args:
            width: Image width in pixels.
            height: Image height in pixels.
            fn: Called with column i and row j (row 0 at the top), in
                row-major order. Returns an (R, G, B) color.
        """
        pixels = np.zeros((height, width, 3), dtype=np.float64)
        for j in range(height):
            for i in range(width):
                pixels[j, i] = fn(i, j)
        return cls(width, height, pixels)

    def to_rgb8(self) -> npt.NDArray[np.uint8]:
        """Gamma-correct, clamp and quantize the image.

        Returns:
            Array of shape (height, width, 3) with dtype uint8.
        """
        return to_rgb8(self.pixels)

    def write_ppm(self, path: str | Path) -> None:
        """Write the image as plain-text PPM (P3).

        Layout: "P3", "<width> <height>", "255", then one "r g b" line per
        pixel, row-major from the top-left.

        Raises:
            OSError: If the file cannot be written.
        """
        rows = self.to_rgb8().reshape(-1, 3)
        with open(path, "w", encoding="ascii") as fh:
            fh.write(f"P3\n{self.width} {self.height}\n{PPM_MAX_VALUE}\n")
            np.savetxt(fh, rows, fmt="%d", delimiter=" ")

    def save(self, path: str | Path) -> Path:
        """Save the image, choosing the format from the file suffix.

        ``.ppm`` is written as plain-text P3; every other suffix is handed to
        Pillow.

        Args:
            path: Output file path.

        Returns:
            The path written.

        Raises:
            OSError: If the file cannot be written.
            ValueError: If Pillow does not recognize the suffix.
        """
        output = Path(path)
        if output.suffix.lower() == ".ppm":
            self.write_ppm(output)
        else:
            PILImage.fromarray(self.to_rgb8()).save(output)
        logger.info("Wrote %dx%d image to %s", self.width, self.height, output)
        return output

    def __repr__(self) -> str:
        return f"Image(width={self.width}, height={self.height})"
