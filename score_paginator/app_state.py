"""Application state management for strip registration.

The preview UI refers to uploaded strips by identifier so that the cached
pipeline stages can be keyed on plain strings. Strips are identified by the
CRC32 checksum of their pixel data.
"""

import zlib

import cv2
import numpy as np

from score_paginator.image_io import load_image, to_bgra
from score_paginator.exceptions import ImageReadError

# In-memory registry of BGRA strips by ID
_strip_registry: dict[str, np.ndarray] = {}


def load_strip(path: str) -> np.ndarray | None:
    """Load a strip image file as a BGRA NumPy array.

    Args:
        path: File path of the strip.

    Returns:
        BGRA strip, or None if the file cannot be read.
    """
    try:
        return load_image(path)
    except ImageReadError:
        return None


def from_upload(image: np.ndarray) -> np.ndarray:
    """Convert an RGB or RGBA array from the UI to the BGRA layout used here.

    Args:
        image: Grayscale, RGB or RGBA array as delivered by Gradio.

    Returns:
        BGRA strip as an H×W×4 uint8 array.
    """
    if image.ndim == 3 and image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_RGBA2BGRA)
    if image.ndim == 3 and image.shape[2] == 3:
        return to_bgra(cv2.cvtColor(image, cv2.COLOR_RGB2BGR))
    return to_bgra(image)


def register_strip(strip: np.ndarray, strip_id: str | None = None) -> str:
    """Register a strip in the global registry with a unique identifier.

    Args:
        strip: BGRA strip.
        strip_id: Optional identifier. If None, a CRC32-based ID is generated.

    Returns:
        The strip identifier (either provided or generated).
    """
    if strip_id is None:
        crc = zlib.crc32(strip.tobytes()) & 0xFFFFFFFF
        strip_id = f"strip_{crc:08x}_{strip.shape[1]}x{strip.shape[0]}"

    _strip_registry[strip_id] = strip
    return strip_id


def get_strip_by_id(strip_id: str | None) -> np.ndarray | None:
    """Retrieve a registered strip by its identifier.

    Args:
        strip_id: Identifier returned by :func:`register_strip`.

    Returns:
        The registered strip, or None if not found.
    """
    if strip_id is None:
        return None
    return _strip_registry.get(strip_id)
