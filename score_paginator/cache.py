"""Caching of pipeline stages for the preview UI.

Detection is the expensive stage, and changing only the page width or the
row count should not rescan the strip. Each stage is LRU-cached on the strip
ID plus the parameters it depends on, and later stages build on the cached
earlier ones.
"""

from functools import lru_cache

from score_paginator.app_state import get_strip_by_id
from score_paginator.models import DetectionParams, LayoutParams
from score_paginator.pipeline import detect_breaks, layout_pages

DETECTION_CACHE_SIZE = 32
LAYOUT_CACHE_SIZE = 64


# Stage 1: Measure detection
@lru_cache(maxsize=DETECTION_CACHE_SIZE)
def cached_detection(
    strip_id: str,
    acceptance_level: int,
    window: int,
    probe_divisions: int,
):
    """Cached version of measure detection.

    Args:
        strip_id: Identifier of the registered strip.
        acceptance_level: Minimum leading-line intensity.
        window: Coarsening window in columns.
        probe_divisions: Divisor of half-height giving the probe spacing.

    Returns:
        DetectionResult for the strip.
    """
    strip = get_strip_by_id(strip_id)
    params = DetectionParams(
        acceptance_level=acceptance_level,
        window=window,
        probe_divisions=probe_divisions,
    )
    return detect_breaks(strip, params)


# Stage 2: Page layout
@lru_cache(maxsize=LAYOUT_CACHE_SIZE)
def cached_layout(
    strip_id: str,
    acceptance_level: int,
    window: int,
    probe_divisions: int,
    page_width: int,
    rows_per_page: int,
):
    """Cached version of wrap point packing and page grouping.

    Args:
        strip_id: Identifier of the registered strip.
        acceptance_level: Minimum leading-line intensity, from detection.
        window: Coarsening window, from detection.
        probe_divisions: Probe spacing divisor, from detection.
        page_width: Page width in pixels.
        rows_per_page: Rows on each page.

    Returns:
        LayoutResult for the strip.
    """
    detection_result = cached_detection(
        strip_id, acceptance_level, window, probe_divisions
    )
    params = LayoutParams(page_width=page_width, rows_per_page=rows_per_page)
    return layout_pages(detection_result, params)


def clear_all_caches() -> None:
    """Clear the LRU caches of every pipeline stage."""
    cached_detection.cache_clear()
    cached_layout.cache_clear()
