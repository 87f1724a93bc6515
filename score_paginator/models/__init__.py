"""Domain models for the score-paginator application.

This module provides a single import location for the data models used
throughout the merge/split pipeline:

- Core domain models (NumberedStrip, PageGroup)
- Pipeline stage results (MergeResult, DetectionResult, etc.)
- Configuration parameters for each stage
- Visualization data containers

All models are built using Pydantic for validation.
"""

# Re-export core models
from score_paginator.models.core_models import NumberedStrip, PageGroup

# Re-export pipeline models
from score_paginator.models.pipeline_models import (
    MergeResult,
    DetectionResult,
    LayoutResult,
    SplitResult,
    BatchResult,
)

# Re-export setting models
from score_paginator.models.settings_models import (
    DetectionParams,
    LayoutParams,
    ProcessingParameters,
)

# Re-export visualization models
from score_paginator.models.visualization_models import PreviewSet
