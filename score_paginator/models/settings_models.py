"""Parameter models for pipeline configuration.

This module defines Pydantic models that hold every configurable parameter
of the repagination pipeline. Defaults reproduce the reference policy: a
1100 px page of 10 rows, measures detected with a 50 column window.
"""

from pydantic import BaseModel, Field


class DetectionParams(BaseModel):
    """Configuration parameters for measure (barline) detection.

    Attributes:
        acceptance_level: Minimum intensity (0-255) a leading-line pixel needs
            before its column can be a barline candidate (default 127).
        window: Width in columns of the coarsening buckets (default 50). The
            second pass uses buckets offset by half a window.
        probe_divisions: The half-height of the strip is divided by this to get
            the spacing of the auxiliary probe lines (default 5).
    """

    acceptance_level: int = Field(
        255 // 2, ge=0, le=255, description="Minimum leading-line intensity"
    )
    window: int = Field(50, ge=2, description="Coarsening window in columns")
    probe_divisions: int = Field(
        5, ge=1, description="Divisor of half-height giving the probe spacing"
    )


class LayoutParams(BaseModel):
    """Configuration parameters for page packing and rendering.

    Attributes:
        page_width: Width of each output page in pixels (default 1100).
        rows_per_page: Number of strip rows stacked on one page (default 10).
    """

    page_width: int = Field(1100, ge=1, description="Page width in pixels")
    rows_per_page: int = Field(10, ge=1, description="Rows stacked on each page")


class ProcessingParameters(BaseModel):
    """Complete configuration for the merge/split pipeline.

    Attributes:
        detection: Parameters for measure detection.
        layout: Parameters for page packing and rendering.
    """

    detection: DetectionParams = Field(
        default_factory=DetectionParams, description="Measure detection parameters"
    )
    layout: LayoutParams = Field(
        default_factory=LayoutParams, description="Page layout parameters"
    )
