"""Image export utilities for depth buffers.

A depth buffer holds the hit parameter ``t`` per pixel (NaN for a miss).
Export maps it to 8-bit greyscale as ``t * scale``, truncated and saturated
to [0, 255], with misses left black.

Supported formats:
    - PGM (binary ``P5`` greyscale via Pillow)
    - PNG (8-bit greyscale via Pillow)

Example:
    >>> from rayframe.preview.export import save_pgm
    >>> depth = renderer.render()
    >>> save_pgm(depth, "out.pgm")
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

# Maps t = 1 (the near surface of the default view) to mid-grey.
DEFAULT_DEPTH_SCALE = 128.0


def depth_to_uint8(
    depth: npt.NDArray[np.floating],
    scale: float = DEFAULT_DEPTH_SCALE,
) -> npt.NDArray[np.uint8]:
    """Convert a depth buffer to an 8-bit greyscale image.

    Args:
        depth: Array of shape (H, W) with hit parameters, NaN for misses.
        scale: Intensity per unit of ray parameter.

    Returns:
        Array of shape (H, W) with dtype uint8.

    Raises:
        ValueError: If depth is not two-dimensional.
    """
    if depth.ndim != 2:
        raise ValueError(f"Depth buffer must be 2-D, got shape {depth.shape}")

    values = np.nan_to_num(depth.astype(np.float64) * scale, nan=0.0)
    return np.clip(np.trunc(values), 0.0, 255.0).astype(np.uint8)


def _save(
    depth: npt.NDArray[np.floating],
    filepath: str | Path,
    image_format: str,
    scale: float,
) -> None:
    image_uint8 = depth_to_uint8(depth, scale)
    pil_image = PILImage.fromarray(image_uint8)
    pil_image.save(filepath, format=image_format)


def save_pgm(
    depth: npt.NDArray[np.floating],
    filepath: str | Path,
    *,
    scale: float = DEFAULT_DEPTH_SCALE,
) -> None:
    """Save a depth buffer as a binary greyscale PGM (P5) file.

    Args:
        depth: Array of shape (H, W) with hit parameters, NaN for misses.
        filepath: Output file path (should end in .pgm).
        scale: Intensity per unit of ray parameter.
    """
    _save(depth, filepath, "PPM", scale)


def save_png(
    depth: npt.NDArray[np.floating],
    filepath: str | Path,
    *,
    scale: float = DEFAULT_DEPTH_SCALE,
) -> None:
    """Save a depth buffer as an 8-bit greyscale PNG file.

    Args:
        depth: Array of shape (H, W) with hit parameters, NaN for misses.
        filepath: Output file path (should end in .png).
        scale: Intensity per unit of ray parameter.
    """
    _save(depth, filepath, "PNG", scale)


def save_image(
    depth: npt.NDArray[np.floating],
    filepath: str | Path,
    *,
    scale: float = DEFAULT_DEPTH_SCALE,
) -> None:
    """Save a depth buffer, picking PGM or PNG from the file suffix.

    Raises:
        ValueError: If the suffix is neither .pgm nor .png.
    """
    suffix = Path(filepath).suffix.lower()
    if suffix == ".pgm":
        save_pgm(depth, filepath, scale=scale)
    elif suffix == ".png":
        save_png(depth, filepath, scale=scale)
    else:
        raise ValueError(f"Unsupported image format: {suffix!r} (use .pgm or .png)")
