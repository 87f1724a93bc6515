"""Rendering of page groups into page images.

Each page is a transparent canvas ``page_width`` wide and ``rows_per_page``
strip-heights tall. Row ``i`` receives the strip columns between the previous
wrap point and wrap point ``i``, left-aligned.
"""

import logging
from pathlib import Path

import numpy as np

from score_paginator.exceptions import SpanOverflowError
from score_paginator.image_io import save_png, transparent_canvas
from score_paginator.models.core_models import PageGroup

logger = logging.getLogger(__name__)


def check_spans(pages: list[PageGroup], page_width: int, source: str = "strip") -> None:
    """Verify that every row of every page fits the page width.

    Args:
        pages: Page groups in page order.
        page_width: Page width in pixels.
        source: Name of the strip, used in the error message.

    Raises:
        SpanOverflowError: On the first row wider than ``page_width``.
    """
    for page in pages:
        for width in page.row_widths:
            if width > page_width:
                raise SpanOverflowError(source, width, page_width)


def render_page(
    strip: np.ndarray,
    page: PageGroup,
    page_width: int,
    rows_per_page: int,
    source: str = "strip",
) -> np.ndarray:
    """Copy the rows of one page group out of the strip.

    Args:
        strip: BGRA continuous strip.
        page: Page group to render.
        page_width: Page width in pixels.
        rows_per_page: Row slots on the page; unused slots stay transparent.
        source: Name of the strip, used in error messages.

    Returns:
        BGRA page image of shape (rows_per_page * strip height, page_width, 4).

    Raises:
        SpanOverflowError: If a row is wider than ``page_width``.
    """
    height = strip.shape[0]
    canvas = transparent_canvas(page_width, height * rows_per_page)

    for row, (left, right) in enumerate(page.row_spans):
        width = right - left
        if width > page_width:
            raise SpanOverflowError(source, width, page_width)
        top = row * height
        canvas[top : top + height, 0:width] = strip[:, left:right]

    return canvas


def render_pages(
    strip: np.ndarray,
    pages: list[PageGroup],
    page_width: int,
    rows_per_page: int,
    source: str = "strip",
) -> list[np.ndarray]:
    """Render every page of a strip.

    All rows are checked before anything is drawn, so an overflow anywhere
    yields no pages at all.

    Args:
        strip: BGRA continuous strip.
        pages: Page groups in page order.
        page_width: Page width in pixels.
        rows_per_page: Row slots per page.
        source: Name of the strip, used in error messages.

    Returns:
        List of BGRA page images in page order.

    Raises:
        SpanOverflowError: If any row is wider than ``page_width``.
    """
    check_spans(pages, page_width, source)
    return [
        render_page(strip, page, page_width, rows_per_page, source) for page in pages
    ]


def page_output_path(source: str | Path, number: int) -> Path:
    """Return the file name of page ``number`` of ``source``.

    ``scores/op1.png`` page 2 becomes ``scores/op1-page_2.png``.
    """
    source = Path(source)
    return source.parent / f"{source.stem}-page_{number}.png"


def write_pages(source: str | Path, page_images: list[np.ndarray]) -> list[Path]:
    """Write rendered pages next to their source strip.

    Args:
        source: Continuous strip the pages were cut from.
        page_images: BGRA pages in page order.

    Returns:
        Paths of the written pages, in page order.
    """
    paths = []
    for number, image in enumerate(page_images, start=1):
        path = save_png(page_output_path(source, number), image)
        logger.info(f"Saved page {number} of {Path(source).name} to {path}")
        paths.append(path)
    return paths
