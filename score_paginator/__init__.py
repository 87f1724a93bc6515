"""Score strip merging and repagination library.

This package turns the per-line images of a rendered music score into
printable pages. It provides:

1. Merging of numbered strip images (``0.png``, ``1.png``, ...) into one
   continuous strip
2. Measure detection by probing for vertical barlines
3. Greedy packing of measures into page rows of bounded width
4. Grouping of rows into pages and rendering of the page images
5. Visualization and an interactive preview of the layout

Example:
    Split a continuous strip through the pipeline API:

    >>> from score_paginator.pipeline import split_strip
    >>> from score_paginator.models import ProcessingParameters, LayoutParams
    >>>
    >>> params = ProcessingParameters(layout=LayoutParams(page_width=1200))
    >>> result = split_strip("scores/op1.png", params)
    >>> result.page_paths
"""
