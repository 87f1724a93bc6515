"""Models for visualization outputs.

The PreviewSet model gathers every image the preview UI shows for one split,
so it can be passed around as a single object.
"""

import numpy as np
from pydantic import BaseModel, Field


class PreviewSet(BaseModel):
    """Complete set of visualizations for the user interface.

    Attributes:
        strip: The continuous strip flattened onto white, or None.
        detection: Strip with break points and wrap points drawn, or None.
        pages: RGB preview of every rendered page, in page order.
    """

    strip: np.ndarray | None = Field(None, description="Strip on white")
    detection: np.ndarray | None = Field(
        None, description="Strip with break and wrap points"
    )
    pages: list[np.ndarray] = Field(
        default_factory=list, description="Rendered page previews"
    )

    class Config:
        arbitrary_types_allowed = True
