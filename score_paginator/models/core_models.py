"""Core domain models for score repagination."""

from pathlib import Path

from pydantic import BaseModel, Field


class NumberedStrip(BaseModel):
    """One member of a numbered strip set.

    A strip set is a directory of ``0.png``, ``1.png``, ... images, one per
    line of the score, that are concatenated left to right when merged.

    Attributes:
        number: Position of the strip in the set (non-negative integer).
        path: Location of the strip image on disk.
    """

    number: int = Field(..., ge=0, description="Position of the strip in the set")
    path: Path = Field(..., description="Strip image file")


class PageGroup(BaseModel):
    """The wrap points that make up one output page.

    Each wrap point closes one row of the page. The first row starts at
    ``start``, which is the last wrap point of the previous page (or 0 for
    the first page).

    Attributes:
        number: 1-based page number.
        start: Strip column where the first row of this page begins.
        wrap_points: Strip columns where each row of this page ends.
    """

    number: int = Field(..., ge=1, description="1-based page number")
    start: int = Field(0, ge=0, description="Column where the first row starts")
    wrap_points: list[int] = Field(
        default_factory=list, description="Columns where each row ends"
    )

    @property
    def row_spans(self) -> list[tuple[int, int]]:
        """Return the ``(left, right)`` strip columns copied into each row."""
        lefts = [self.start] + self.wrap_points[:-1]
        return list(zip(lefts, self.wrap_points))

    @property
    def row_widths(self) -> list[int]:
        """Return the width in pixels of each row of the page."""
        return [right - left for left, right in self.row_spans]
