"""Models for representing pipeline processing stages.

Each model holds the output of one stage of the merge/split pipeline so that
stages can be tested and cached independently. Failed stages return a model
with an ``error`` message instead of raising across file boundaries.
"""

from pathlib import Path

from pydantic import BaseModel, Field

from score_paginator.models.core_models import PageGroup


class MergeResult(BaseModel):
    """Result of merging one numbered strip set.

    Attributes:
        directory: Directory holding the strip set.
        output_path: Path of the merged strip, or None if the merge failed.
        strip_count: Number of strips merged.
        width: Width of the merged strip in pixels.
        height: Height of the merged strip in pixels.
        heights_match: False when the strips had different heights.
        error: Description of the failure, or None on success.
    """

    directory: Path = Field(..., description="Source strip directory")
    output_path: Path | None = Field(None, description="Merged strip file")
    strip_count: int = Field(0, ge=0, description="Number of strips merged")
    width: int = Field(0, ge=0, description="Merged width in pixels")
    height: int = Field(0, ge=0, description="Merged height in pixels")
    heights_match: bool = Field(True, description="All strips had equal height")
    error: str | None = Field(None, description="Failure description")

    @property
    def ok(self) -> bool:
        return self.error is None and self.output_path is not None


class DetectionResult(BaseModel):
    """Results from the measure detection stage.

    Attributes:
        break_points: Ascending strip columns of detected measure boundaries.
        candidate_count: Number of columns that passed the probe test before
            coarsening.
    """

    break_points: list[int] = Field(
        default_factory=list, description="Detected measure boundaries"
    )
    candidate_count: int = Field(0, ge=0, description="Candidate columns found")


class LayoutResult(BaseModel):
    """Wrap points and their grouping into pages.

    Attributes:
        wrap_points: Ascending strip columns where rows are cut.
        pages: Wrap points grouped into pages, in order.
    """

    wrap_points: list[int] = Field(
        default_factory=list, description="Columns where rows are cut"
    )
    pages: list[PageGroup] = Field(
        default_factory=list, description="Wrap points grouped by page"
    )


class SplitResult(BaseModel):
    """Result of splitting one continuous strip into pages.

    Attributes:
        source: The continuous strip that was split.
        page_paths: Page images written, in page order.
        break_count: Number of measure boundaries detected.
        wrap_count: Number of rows laid out.
        error: Description of the failure, or None on success.
    """

    source: Path = Field(..., description="Continuous strip file")
    page_paths: list[Path] = Field(
        default_factory=list, description="Page images written"
    )
    break_count: int = Field(0, ge=0, description="Detected measure boundaries")
    wrap_count: int = Field(0, ge=0, description="Rows laid out")
    error: str | None = Field(None, description="Failure description")

    @property
    def ok(self) -> bool:
        return self.error is None


class BatchResult(BaseModel):
    """Results of a batch run over several directories or strips.

    Attributes:
        merges: One result per strip directory merged.
        splits: One result per continuous strip split.
    """

    merges: list[MergeResult] = Field(default_factory=list)
    splits: list[SplitResult] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when every merge and split in the batch succeeded."""
        return all(m.ok for m in self.merges) and all(s.ok for s in self.splits)
