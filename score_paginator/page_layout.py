"""Packing of measure boundaries into page rows and pages.

The packer walks the break points once, greedily stretching the current row
to the right-most break point that still fits the page width. The grouper
then cuts the resulting wrap points into pages of a fixed number of rows.
"""

from score_paginator.models.core_models import PageGroup


def calculate_wrap_points(break_points: list[int], page_width: int) -> list[int]:
    """Choose the break points where page rows are cut.

    The first break point always opens the output. Every later break point
    ``x`` either replaces the last wrap point, when the row it would close
    (measured from the wrap point before it) stays under ``page_width``, or
    starts a new row.

    A row with no break point inside the page width is still emitted; the
    renderer rejects it.

    Args:
        break_points: Ascending measure boundary columns.
        page_width: Page width in pixels.

    Returns:
        Ascending list of wrap point columns, a subsequence of
        ``break_points``.
    """
    wrap_points: list[int] = []
    for x in break_points:
        if not wrap_points:
            wrap_points.append(x)
            continue

        edge = wrap_points[-2] if len(wrap_points) > 1 else 0
        if x - edge < page_width:
            wrap_points[-1] = x
        else:
            wrap_points.append(x)

    return wrap_points


def group_pages(wrap_points: list[int], rows_per_page: int) -> list[PageGroup]:
    """Split wrap points into pages of ``rows_per_page`` rows.

    Args:
        wrap_points: Ascending wrap point columns.
        rows_per_page: Rows on each page; the last page may hold fewer.

    Returns:
        PageGroup list in page order. Concatenating their wrap points gives
        back ``wrap_points``.

    Raises:
        ValueError: If ``rows_per_page`` is not positive.
    """
    if rows_per_page <= 0:
        raise ValueError(f"rows_per_page must be positive, got {rows_per_page}")

    pages: list[PageGroup] = []
    start = 0
    for first in range(0, len(wrap_points), rows_per_page):
        group = wrap_points[first : first + rows_per_page]
        pages.append(
            PageGroup(number=len(pages) + 1, start=start, wrap_points=group)
        )
        start = group[-1]

    return pages


def calculate_pages(
    break_points: list[int], page_width: int, rows_per_page: int
) -> tuple[list[int], list[PageGroup]]:
    """Pack break points into rows and group the rows into pages.

    Args:
        break_points: Ascending measure boundary columns.
        page_width: Page width in pixels.
        rows_per_page: Rows on each page.

    Returns:
        Tuple of (wrap_points, pages).
    """
    wrap_points = calculate_wrap_points(break_points, page_width)
    return wrap_points, group_pages(wrap_points, rows_per_page)
