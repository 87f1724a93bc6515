"""Image loading, saving and pixel access for the repagination pipeline.

Strips and pages are handled as BGRA ``uint8`` NumPy arrays of shape
``(height, width, 4)`` so that transparency survives a merge/split round trip.
OpenCV does the decoding and encoding.
"""

import logging
from pathlib import Path

import cv2
import numpy as np

from score_paginator.exceptions import ImageReadError, ImageWriteError

logger = logging.getLogger(__name__)

OPAQUE = 255


def to_bgra(image: np.ndarray) -> np.ndarray:
    """Normalize a decoded image to a 4-channel 8-bit BGRA array.

    Args:
        image: Grayscale (H×W or H×W×1), BGR (H×W×3) or BGRA (H×W×4) array,
            8 or 16 bits per channel.

    Returns:
        BGRA image as an H×W×4 uint8 array. Images without an alpha
        channel come back fully opaque.

    Raises:
        ValueError: If the array does not look like an image.
    """
    if image.dtype == np.uint16:
        image = (image >> 8).astype(np.uint8)
    elif image.dtype != np.uint8:
        image = np.clip(image, 0, 255).astype(np.uint8)

    if image.ndim == 3 and image.shape[2] == 1:
        image = image[:, :, 0]

    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGRA)
    if image.ndim == 3 and image.shape[2] == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2BGRA)
    if image.ndim == 3 and image.shape[2] == 4:
        return image
    raise ValueError(f"Unsupported image shape {image.shape}")


def load_image(path: str | Path) -> np.ndarray:
    """Load an image file as a BGRA array, keeping its alpha channel.

    Args:
        path: File path of the image.

    Returns:
        BGRA image as an H×W×4 uint8 array.

    Raises:
        ImageReadError: If OpenCV cannot decode the file or its channel
            layout is not an image.
    """
    image = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if image is None:
        raise ImageReadError(f"Cannot read image {path}")
    try:
        return to_bgra(image)
    except ValueError as e:
        raise ImageReadError(f"Cannot read image {path}: {e}") from e


def save_png(path: str | Path, image: np.ndarray) -> Path:
    """Write an image to disk as PNG, preserving its alpha channel.

    Args:
        path: Destination file path; should end in ``.png``.
        image: BGRA image array.

    Returns:
        The path written, as a Path.

    Raises:
        ImageWriteError: If OpenCV cannot encode or write the file.
    """
    path = Path(path)
    try:
        written = cv2.imwrite(str(path), image)
    except cv2.error as e:
        raise ImageWriteError(f"Cannot write image {path}: {e}") from e
    if not written:
        raise ImageWriteError(f"Cannot write image {path}")
    logger.debug(f"Wrote {path} ({image.shape[1]}x{image.shape[0]})")
    return path


def transparent_canvas(width: int, height: int) -> np.ndarray:
    """Create a fully transparent BGRA canvas."""
    return np.zeros((height, width, 4), dtype=np.uint8)


def carries_alpha(image: np.ndarray) -> bool:
    """Return True when the alpha channel of a BGRA image varies.

    A uniformly opaque alpha channel says nothing about the content.
    """
    return bool(np.any(image[:, :, 3] != OPAQUE))


def intensity_channel(image: np.ndarray) -> np.ndarray:
    """Return the per-pixel "ink" intensity used for barline detection.

    For strips rendered with transparency the alpha channel is the ink: fully
    drawn pixels are 255 and empty background is 0. Opaque strips (scans,
    JPEG conversions) have no usable alpha, so ink darkness
    (``255 - grayscale``) takes its place.

    Args:
        image: BGRA image array.

    Returns:
        H×W uint8 array of intensities.
    """
    if carries_alpha(image):
        return image[:, :, 3]
    gray = cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    return OPAQUE - gray


def pixel_intensity_at(
    image: np.ndarray, x: int, y: int, uses_alpha: bool | None = None
) -> int:
    """Return the ink intensity of a single pixel.

    Args:
        image: BGRA image array.
        x: Column of the pixel.
        y: Row of the pixel.
        uses_alpha: Result of :func:`carries_alpha` for ``image``. Pass it
            when reading many pixels of one image; it is computed (a full
            scan of the alpha channel) when omitted.

    Returns:
        Intensity in the range 0-255, equal to
        ``intensity_channel(image)[y, x]``.
    """
    if uses_alpha is None:
        uses_alpha = carries_alpha(image)
    if uses_alpha:
        return int(image[y, x, 3])
    pixel = np.ascontiguousarray(image[y : y + 1, x : x + 1])
    gray = cv2.cvtColor(pixel, cv2.COLOR_BGRA2GRAY)
    return OPAQUE - int(gray[0, 0])
