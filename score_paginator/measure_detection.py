"""Measure (barline) detection in a continuous strip.

A barline is a vertical stroke crossing the middle of the staff. The detector
samples a "leading line" at half the strip height and four probe lines above
and below it. A column is a candidate when the leading line is inked and the
probe lines are at least as strongly inked, which rejects note heads and other
clutter that only touches the centre line. Runs of neighbouring candidates
(one thick barline gives several) are then collapsed to a single column by
two passes of fixed-window bucketing.
"""

import numpy as np

from score_paginator.image_io import intensity_channel


def probe_rows(height: int, probe_divisions: int = 5) -> tuple[int, list[int]]:
    """Return the leading line row and the four probe rows of a strip.

    Args:
        height: Strip height in pixels.
        probe_divisions: Half the height divided by this gives the probe spacing.

    Returns:
        Tuple of (leading_row, probe_rows) where probe_rows are at
        -2, -1, +1 and +2 probe spacings from the leading row.
    """
    leading = height // 2
    spacing = leading // probe_divisions
    return leading, [
        leading - spacing * 2,
        leading - spacing,
        leading + spacing,
        leading + spacing * 2,
    ]


def detect_candidate_columns(
    intensity: np.ndarray,
    acceptance_level: int = 255 // 2,
    probe_divisions: int = 5,
) -> np.ndarray:
    """Find columns that look like they are crossed by a vertical stroke.

    Args:
        intensity: H×W array of ink intensities (see
            :func:`score_paginator.image_io.intensity_channel`).
        acceptance_level: Minimum leading-line intensity for a candidate.
        probe_divisions: Divisor of half-height giving the probe spacing.

    Returns:
        Ascending 1D integer array of candidate column indices.
    """
    height, width = intensity.shape[:2]
    if height == 0 or width == 0:
        return np.array([], dtype=int)

    leading_row, rows = probe_rows(height, probe_divisions)
    leading = intensity[leading_row].astype(np.int32)

    mask = leading >= acceptance_level
    for row in rows:
        mask &= leading <= intensity[row].astype(np.int32)

    return np.flatnonzero(mask)


def _bucket_keys(columns: np.ndarray, window: int, offset: int) -> np.ndarray:
    # Integer division truncating toward zero: columns left of the offset
    # land in bucket 0 together with the first full window.
    shifted = columns - offset
    return np.where(shifted < 0, -(-shifted // window), shifted // window)


def coarsen_columns(columns: np.ndarray, window: int, offset: int = 0) -> np.ndarray:
    """Keep the right-most column of each ``window``-wide bucket.

    Args:
        columns: Ascending 1D array of column indices.
        window: Bucket width in columns.
        offset: Shift applied to columns before bucketing.

    Returns:
        Ascending 1D array with one column per occupied bucket.
    """
    columns = np.asarray(columns, dtype=int)
    if columns.size == 0:
        return columns

    keys = _bucket_keys(columns, window, offset)
    # Input is ascending, so the last column of each run of equal keys is
    # the bucket maximum.
    last_in_bucket = np.append(keys[1:] != keys[:-1], True)
    return columns[last_in_bucket]


def detect_measures(
    strip: np.ndarray,
    acceptance_level: int = 255 // 2,
    window: int = 50,
    probe_divisions: int = 5,
) -> tuple[list[int], int]:
    """Detect measure boundaries in a continuous strip.

    Args:
        strip: BGRA continuous strip.
        acceptance_level: Minimum leading-line intensity for a candidate.
        window: Coarsening window; the second pass is offset by half of it.
        probe_divisions: Divisor of half-height giving the probe spacing.

    Returns:
        Tuple of (break_points, candidate_count) where break_points is the
        ascending list of measure boundary columns.
    """
    if strip.size == 0:
        return [], 0

    intensity = intensity_channel(strip)
    candidates = detect_candidate_columns(intensity, acceptance_level, probe_divisions)

    survivors = coarsen_columns(candidates, window)
    survivors = coarsen_columns(survivors, window, offset=window // 2)

    return [int(x) for x in survivors], int(candidates.size)
