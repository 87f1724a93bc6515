"""Merging of numbered strip images into one continuous strip.

A strip set is a directory of ``0.png``, ``1.png``, ... ``N-1.png``. The
strips are concatenated left to right into a single long image that the
measure detector can scan.
"""

import logging
import re
from pathlib import Path

import numpy as np

from score_paginator.exceptions import EmptyStripSetError, MissingStripError
from score_paginator.image_io import load_image, save_png, transparent_canvas
from score_paginator.models.core_models import NumberedStrip

logger = logging.getLogger(__name__)

STRIP_EXTENSION = ".png"
# Optional sign and surrounding blanks are accepted
_NUMBER_RE = re.compile(r"\s*[+-]?[0-9]+\s*")


def parse_strip_number(path: Path) -> int | None:
    """Return the strip number encoded in a file name.

    Args:
        path: Candidate strip file.

    Returns:
        The non-negative integer stem of a ``.png`` file, or None if the
        file is not a numbered strip. A sign is allowed, so ``+3.png`` is
        strip 3 and ``-0.png`` is strip 0.
    """
    if path.suffix != STRIP_EXTENSION or not _NUMBER_RE.fullmatch(path.stem):
        return None
    number = int(path.stem)
    return number if number >= 0 else None


def list_numbered_strips(directory: str | Path) -> list[NumberedStrip]:
    """List the numbered strips of a directory in ascending numeric order.

    Files that are not ``<non-negative integer>.png`` are ignored.

    Args:
        directory: Directory holding the strip set.

    Returns:
        List of NumberedStrip models sorted by number.
    """
    strips = []
    for path in Path(directory).iterdir():
        if not path.is_file():
            continue
        number = parse_strip_number(path)
        if number is not None:
            strips.append(NumberedStrip(number=number, path=path))
    return sorted(strips, key=lambda s: s.number)


def find_missing_strips(strips: list[NumberedStrip]) -> list[int]:
    """Return the positions whose strip number does not match the position.

    A valid set numbered ``0..N-1`` returns an empty list. A gap or a
    duplicate shifts every later strip, so all of those positions are
    reported.

    Args:
        strips: Strips sorted by number.

    Returns:
        Positions ``idx`` where ``strips[idx].number != idx``.
    """
    return [idx for idx, strip in enumerate(strips) if strip.number != idx]


def calculate_merged_size(images: list[np.ndarray]) -> tuple[int, int, bool]:
    """Compute the size of the continuous strip built from ``images``.

    Args:
        images: Strip images in merge order.

    Returns:
        Tuple of (width, height, heights_match) where width is the sum of the
        image widths, height is the tallest image and heights_match tells
        whether every image had that height.
    """
    width = sum(image.shape[1] for image in images)
    height = max(image.shape[0] for image in images)
    heights_match = all(image.shape[0] == height for image in images)
    return width, height, heights_match


def merge_images(images: list[np.ndarray]) -> np.ndarray:
    """Concatenate strip images horizontally.

    Shorter images are top-aligned; the area below them stays transparent.

    Args:
        images: BGRA strip images in merge order.

    Returns:
        BGRA continuous strip.
    """
    width, height, _ = calculate_merged_size(images)
    canvas = transparent_canvas(width, height)

    x = 0
    for image in images:
        h, w = image.shape[:2]
        canvas[0:h, x : x + w] = image
        x += w

    return canvas


def merged_output_path(directory: str | Path) -> Path:
    """Return where the merged strip of ``directory`` is written.

    The merged strip sits next to its directory: ``scores/op1`` becomes
    ``scores/op1.png``.
    """
    directory = Path(directory)
    return directory.parent / f"{directory.name}{STRIP_EXTENSION}"


def merge_strip_set(directory: str | Path) -> tuple[Path, np.ndarray, int, bool]:
    """Merge the numbered strips of a directory and write the result.

    Args:
        directory: Directory holding ``0.png`` .. ``N-1.png``.

    Returns:
        Tuple of (output_path, strip, strip_count, heights_match).

    Raises:
        EmptyStripSetError: If the directory holds no numbered strips.
        MissingStripError: If the numbering has a gap or a duplicate. No file
            is written in that case.
        ImageReadError: If a strip cannot be decoded.
        ImageWriteError: If the merged strip cannot be written.
    """
    directory = Path(directory)
    strips = list_numbered_strips(directory)
    if not strips:
        raise EmptyStripSetError(f"No numbered strips in {directory}")

    missing = find_missing_strips(strips)
    if missing:
        raise MissingStripError(
            directory,
            expected=missing,
            found=[strips[idx].number for idx in missing],
        )

    images = [load_image(strip.path) for strip in strips]
    _, _, heights_match = calculate_merged_size(images)
    if not heights_match:
        logger.warning(f"Different heights in {directory}")

    merged = merge_images(images)
    output_path = save_png(merged_output_path(directory), merged)
    return output_path, merged, len(strips), heights_match
