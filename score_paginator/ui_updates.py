"""UI update functions for the Gradio preview.

These callbacks sit between the Gradio components and the cached pipeline
stages. Each returns the images and text the interface displays for one
stage of the split.
"""

import logging

from score_paginator.app_state import (
    from_upload,
    get_strip_by_id,
    load_strip,
    register_strip,
)
from score_paginator.cache import cached_detection, cached_layout
from score_paginator.exceptions import PipelineError
from score_paginator.file_manager import SessionFileManager
from score_paginator.models import DetectionParams
from score_paginator.page_renderer import render_pages
from score_paginator.visualization import (
    composite_on_white,
    create_all_visualizations,
    create_detection_visualization,
)

logger = logging.getLogger(__name__)

# Detection window and probe spacing are not exposed in the UI
_DEFAULT_DETECTION = DetectionParams()

# Active file managers by session ID
_file_managers: dict[str, SessionFileManager] = {}


def get_or_create_file_manager(session_id: str) -> SessionFileManager:
    """Return the file manager of a session, creating it on first use."""
    if session_id not in _file_managers:
        _file_managers[session_id] = SessionFileManager(session_id)
    return _file_managers[session_id]


def cleanup_session(session_id: str) -> None:
    """Remove a session's page files and forget its file manager."""
    manager = _file_managers.pop(session_id, None)
    if manager is not None:
        manager.cleanup_all()


def cleanup_cache(session_id: str | None = None) -> None:
    """Clean up one session, or every session when ``session_id`` is None."""
    if session_id is not None:
        cleanup_session(session_id)
        return
    for active in list(_file_managers):
        cleanup_session(active)


def load_uploaded_strip(image) -> tuple:
    """Register an uploaded strip and return its ID and a white-backed view.

    Args:
        image: RGB or RGBA array from the Gradio image component, or None.

    Returns:
        Tuple of (strip_id, strip_view); both are None when nothing was
        uploaded.
    """
    if image is None:
        return None, None
    strip = from_upload(image)
    strip_id = register_strip(strip)
    return strip_id, composite_on_white(strip)


def load_strip_file(path: str | None) -> tuple:
    """Register a strip read from disk and return its ID and a white-backed view.

    Args:
        path: File path of a strip image, as given by a file component.

    Returns:
        Tuple of (strip_id, strip_view); both are None when no path was given
        or the file cannot be read.
    """
    if not path:
        return None, None
    strip = load_strip(path)
    if strip is None:
        logger.warning(f"Could not read strip file {path}")
        return None, None
    strip_id = register_strip(strip)
    return strip_id, composite_on_white(strip)


def update_detection_view(strip_id: str | None, acceptance_level: int) -> tuple:
    """Update the measure detection overlay.

    Args:
        strip_id: Identifier of the registered strip.
        acceptance_level: Minimum leading-line intensity.

    Returns:
        Tuple of (overlay, measure_count_text).
    """
    strip = get_strip_by_id(strip_id)
    if strip is None:
        return None, "No strip loaded"

    acceptance_level = int(acceptance_level)
    detection_result = cached_detection(
        strip_id,
        acceptance_level,
        _DEFAULT_DETECTION.window,
        _DEFAULT_DETECTION.probe_divisions,
    )
    overlay = create_detection_visualization(strip, detection_result.break_points)
    count = (
        f"{len(detection_result.break_points)} measures detected "
        f"({detection_result.candidate_count} candidate columns)"
    )
    return overlay, count


def update_pages_view(
    strip_id: str | None,
    session_id: str,
    acceptance_level: int,
    page_width: int,
    rows_per_page: int,
) -> tuple:
    """Lay out and render the pages of the current strip.

    Args:
        strip_id: Identifier of the registered strip.
        session_id: Session whose file manager receives the page files.
        acceptance_level: Minimum leading-line intensity.
        page_width: Page width in pixels.
        rows_per_page: Rows on each page.

    Returns:
        Tuple of (layout_overlay, page_previews, page_paths, status_text).
        On a span overflow the previews and paths are empty and the status
        explains the failure.
    """
    strip = get_strip_by_id(strip_id)
    if strip is None:
        return None, [], [], "No strip loaded"

    acceptance_level = int(acceptance_level)
    page_width = int(page_width)
    rows_per_page = int(rows_per_page)
    detection_result = cached_detection(
        strip_id,
        acceptance_level,
        _DEFAULT_DETECTION.window,
        _DEFAULT_DETECTION.probe_divisions,
    )
    layout_result = cached_layout(
        strip_id,
        acceptance_level,
        _DEFAULT_DETECTION.window,
        _DEFAULT_DETECTION.probe_divisions,
        page_width,
        rows_per_page,
    )

    manager = get_or_create_file_manager(session_id)
    try:
        page_images = render_pages(
            strip, layout_result.pages, page_width, rows_per_page, source=strip_id
        )
        page_paths = manager.write_pages(page_images)
    except PipelineError as e:
        logger.warning(f"Page rendering failed for {strip_id}: {e}")
        manager.cleanup_pages()
        previews = create_all_visualizations(strip, detection_result, layout_result)
        return previews.detection, previews.pages, [], str(e)

    previews = create_all_visualizations(
        strip, detection_result, layout_result, page_images
    )
    status = (
        f"{len(layout_result.wrap_points)} rows on {len(page_images)} page(s) "
        f"of {page_width}px"
    )
    return previews.detection, previews.pages, page_paths, status
