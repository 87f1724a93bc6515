"""Exceptions raised by the repagination pipeline.

Core functions raise these; the batch-level functions in
:mod:`score_paginator.pipeline` catch :class:`PipelineError` per file or
directory so that one bad input never stops a batch.
"""


class PipelineError(Exception):
    """Base exception for pipeline processing errors."""

    pass


class ImageReadError(PipelineError):
    """Exception raised when an image file cannot be decoded."""

    pass


class ImageWriteError(PipelineError):
    """Exception raised when an image file cannot be encoded or saved."""

    pass


class MergeError(PipelineError):
    """Exception raised when a numbered strip set cannot be merged."""

    pass


class EmptyStripSetError(MergeError):
    """Exception raised when a directory holds no numbered strips."""

    pass


class MissingStripError(MergeError):
    """Exception raised when strip numbering is not a contiguous 0..N-1 run.

    Attributes:
        directory: Directory holding the strip set.
        expected: Strip numbers that were expected at the offending positions.
        found: Strip numbers actually found at those positions.
    """

    def __init__(self, directory, expected: list[int], found: list[int]):
        self.directory = directory
        self.expected = expected
        self.found = found
        super().__init__(
            f"Missing part in {directory}: expected strip(s) {expected}, "
            f"found {found}"
        )


class SpanOverflowError(PipelineError):
    """Exception raised when a row span is wider than the page.

    Attributes:
        source: Name of the strip being split.
        width: Width of the offending span in pixels.
        page_width: Configured page width in pixels.
    """

    def __init__(self, source: str, width: int, page_width: int):
        self.source = source
        self.width = width
        self.page_width = page_width
        super().__init__(
            f"Width {width} is too big for page width {page_width}. "
            f"Generation has been stopped for file {source}."
        )
