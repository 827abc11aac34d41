"""Conversion of linear colors to 8-bit display values.

Each channel goes through:
    1. square-root gamma (non-positive values map to 0)
    2. clamp to [0, 0.9999]
    3. scale by 255.999 and truncate

Computed in float64 so the truncation matches the arithmetic exactly:
linear 1.0 -> 0.9999 * 255.999 = 255.97... -> 255.
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

# Clamp range applied after gamma correction
INTENSITY_MIN = 0.0
INTENSITY_MAX = 0.9999

# Scale to [0, 256) before truncation
CHANNEL_SCALE = 255.999


def linear_to_gamma(linear: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """Apply gamma-2 correction.

    Args:
        linear: Linear channel values (any shape).

    Returns:
        sqrt(x) where x > 0, else 0.
    """
    values = np.asarray(linear, dtype=np.float64)
    return np.where(values > 0.0, np.sqrt(np.maximum(values, 0.0)), 0.0)


def to_rgb8(linear: npt.ArrayLike) -> npt.NDArray[np.uint8]:
    """Convert linear colors to 8-bit channel values.

    Args:
        linear: Linear colors, any shape (typically (..., 3)).

    Returns:
        Array of the same shape with dtype uint8.
    """
    gamma = linear_to_gamma(linear)
    clamped = np.clip(gamma, INTENSITY_MIN, INTENSITY_MAX)
    return (clamped * CHANNEL_SCALE).astype(np.uint8)
