"""
Visualization functions for the repagination pipeline.

This module turns strips and pages into RGB images for display, and draws the
detected measure boundaries and the chosen row cuts over the strip.
"""

from collections.abc import Sequence

import cv2
import numpy as np

from score_paginator.models.pipeline_models import DetectionResult, LayoutResult
from score_paginator.models.visualization_models import PreviewSet

BREAK_COLOR = (0, 0, 255)  # blue, RGB
WRAP_COLOR = (255, 0, 0)  # red, RGB


def composite_on_white(image: np.ndarray | None) -> np.ndarray | None:
    """Flatten a BGRA image onto a white background.

    Args:
        image: BGRA image array, or None.

    Returns:
        RGB uint8 image of the same height and width, or None if input is None.
    """
    if image is None:
        return None

    alpha = image[:, :, 3:4].astype(np.float32) / 255.0
    bgr = image[:, :, :3].astype(np.float32)
    flat = bgr * alpha + 255.0 * (1.0 - alpha)
    return cv2.cvtColor(np.rint(flat).astype(np.uint8), cv2.COLOR_BGR2RGB)


def create_detection_visualization(
    strip: np.ndarray | None,
    break_points: Sequence[int],
    wrap_points: Sequence[int] = (),
) -> np.ndarray | None:
    """Draw measure boundaries and row cuts over a strip.

    Break points are drawn as thin blue lines, wrap points as thick red ones.

    Args:
        strip: BGRA continuous strip, or None.
        break_points: Detected measure boundary columns.
        wrap_points: Columns where page rows are cut.

    Returns:
        RGB image of the strip with the lines drawn, or None if strip is None.
    """
    viz = composite_on_white(strip)
    if viz is None:
        return None

    bottom = viz.shape[0] - 1
    for x in break_points:
        cv2.line(viz, (int(x), 0), (int(x), bottom), BREAK_COLOR, 1)
    for x in wrap_points:
        cv2.line(viz, (int(x), 0), (int(x), bottom), WRAP_COLOR, 3)

    return viz


def create_page_previews(page_images: Sequence[np.ndarray]) -> list[np.ndarray]:
    """Convert rendered BGRA pages to RGB previews on white."""
    return [composite_on_white(page) for page in page_images]


def create_all_visualizations(
    strip: np.ndarray | None,
    detection_result: DetectionResult | None,
    layout_result: LayoutResult | None,
    page_images: Sequence[np.ndarray] = (),
) -> PreviewSet:
    """Create the complete set of visualizations for one split.

    Args:
        strip: BGRA continuous strip, or None.
        detection_result: Measure detection result, or None.
        layout_result: Page layout result, or None.
        page_images: Rendered BGRA pages.

    Returns:
        PreviewSet with every visualization; fields are empty when their
        inputs are missing.
    """
    if strip is None:
        return PreviewSet()

    break_points = detection_result.break_points if detection_result else []
    wrap_points = layout_result.wrap_points if layout_result else []

    return PreviewSet(
        strip=composite_on_white(strip),
        detection=create_detection_visualization(strip, break_points, wrap_points),
        pages=create_page_previews(page_images),
    )
