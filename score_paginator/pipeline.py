"""
Pipeline processing functions for merging strips and splitting them into pages.

This module composes the merger, detector, packer, grouper and renderer into
per-file operations and batch runs. Core functions raise PipelineError
subclasses; the functions here catch them per directory or per file, log them
and record them on the result, so one bad input never stops a batch.
"""

import logging
from pathlib import Path

import numpy as np

from score_paginator.exceptions import PipelineError
from score_paginator.image_io import load_image
from score_paginator.measure_detection import detect_measures
from score_paginator.page_layout import calculate_pages
from score_paginator.page_renderer import render_pages, write_pages
from score_paginator.strip_merger import merge_strip_set, merged_output_path
from score_paginator.models.pipeline_models import (
    BatchResult,
    DetectionResult,
    LayoutResult,
    MergeResult,
    SplitResult,
)
from score_paginator.models.settings_models import (
    DetectionParams,
    LayoutParams,
    ProcessingParameters,
)


logger = logging.getLogger(__name__)


def detect_breaks(strip: np.ndarray | None, params: DetectionParams) -> DetectionResult:
    """Detect measure boundaries in a continuous strip.

    Args:
        strip: BGRA continuous strip, or None.
        params: Measure detection parameters.

    Returns:
        DetectionResult with the break points, empty if there is no strip.
    """
    if strip is None:
        logger.warning("No strip provided for measure detection")
        return DetectionResult()

    break_points, candidate_count = detect_measures(
        strip,
        params.acceptance_level,
        params.window,
        params.probe_divisions,
    )
    logger.debug(
        f"{candidate_count} candidate columns reduced to {len(break_points)} measures"
    )
    return DetectionResult(break_points=break_points, candidate_count=candidate_count)


def layout_pages(detection_result: DetectionResult, params: LayoutParams) -> LayoutResult:
    """Pack detected measures into rows and pages.

    Args:
        detection_result: Break points from detection.
        params: Page layout parameters.

    Returns:
        LayoutResult with wrap points and page groups.
    """
    if not detection_result.break_points:
        logger.warning("No measure boundaries available for page layout")
        return LayoutResult()

    wrap_points, pages = calculate_pages(
        detection_result.break_points, params.page_width, params.rows_per_page
    )
    return LayoutResult(wrap_points=wrap_points, pages=pages)


def merge_directory(directory: str | Path) -> MergeResult:
    """Merge one numbered strip directory into ``<directory>.png``.

    Args:
        directory: Directory holding ``0.png`` .. ``N-1.png``.

    Returns:
        MergeResult describing the merged strip, or carrying the error.
    """
    directory = Path(directory)
    logger.info(f"Processing: {directory}")
    try:
        output_path, merged, count, heights_match = merge_strip_set(directory)
    except PipelineError as e:
        logger.error(str(e))
        return MergeResult(directory=directory, error=str(e))

    height, width = merged.shape[:2]
    logger.info(f"Merged {count} strips of {directory} into {output_path}")
    return MergeResult(
        directory=directory,
        output_path=output_path,
        strip_count=count,
        width=width,
        height=height,
        heights_match=heights_match,
    )


def split_strip(
    source: str | Path, params: ProcessingParameters | None = None
) -> SplitResult:
    """Split one continuous strip into page images.

    Pages are written as ``<stem>-page_<N>.png`` next to ``source``. If any
    row would be wider than the page, no page is written.

    Args:
        source: Continuous strip image file.
        params: Pipeline parameters; defaults are used when omitted.

    Returns:
        SplitResult listing the pages written, or carrying the error.
    """
    source = Path(source)
    params = params or ProcessingParameters()
    logger.info(f"Splitting: {source}")

    try:
        strip = load_image(source)
        detection_result = detect_breaks(strip, params.detection)
        layout_result = layout_pages(detection_result, params.layout)
        page_images = render_pages(
            strip,
            layout_result.pages,
            params.layout.page_width,
            params.layout.rows_per_page,
            source=str(source),
        )
        page_paths = write_pages(source, page_images)
    except PipelineError as e:
        logger.error(str(e))
        return SplitResult(source=source, error=str(e))

    if not page_paths:
        logger.info(f"No measures detected in {source}, no pages written")

    return SplitResult(
        source=source,
        page_paths=page_paths,
        break_count=len(detection_result.break_points),
        wrap_count=len(layout_result.wrap_points),
    )


def list_strip_directories(root: str | Path) -> list[Path]:
    """Return the subdirectories of ``root`` in name order."""
    return sorted(path for path in Path(root).iterdir() if path.is_dir())


def merge_all(root: str | Path) -> BatchResult:
    """Merge every strip directory directly under ``root``.

    Args:
        root: Directory whose subdirectories are strip sets.

    Returns:
        BatchResult with one MergeResult per subdirectory.
    """
    return BatchResult(
        merges=[merge_directory(directory) for directory in list_strip_directories(root)]
    )


def process_all(
    root: str | Path, params: ProcessingParameters | None = None
) -> BatchResult:
    """Merge every strip directory under ``root`` and split each merged strip.

    Directories whose merge failed are not split.

    Args:
        root: Directory whose subdirectories are strip sets.
        params: Pipeline parameters; defaults are used when omitted.

    Returns:
        BatchResult with the merge and split results.
    """
    batch = merge_all(root)
    for merge in batch.merges:
        if merge.ok:
            batch.splits.append(split_strip(merge.output_path, params))
        else:
            logger.info(
                f"Skipping split of {merged_output_path(merge.directory)}: merge failed"
            )
    return batch
