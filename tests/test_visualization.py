import numpy as np

from score_paginator.models.pipeline_models import DetectionResult, LayoutResult
from score_paginator.models.visualization_models import PreviewSet
from score_paginator.visualization import (
    BREAK_COLOR,
    WRAP_COLOR,
    composite_on_white,
    create_all_visualizations,
    create_detection_visualization,
    create_page_previews,
)


def test_composite_on_white_none():
    assert composite_on_white(None) is None


def test_composite_on_white(strip_factory):
    strip = strip_factory(10, 4, barlines=[3])
    rgb = composite_on_white(strip)
    assert rgb.shape == (4, 10, 3)
    assert rgb[0, 0].tolist() == [255, 255, 255]
    assert rgb[0, 3].tolist() == [0, 0, 0]


def test_composite_on_white_converts_to_rgb():
    pixel = np.array([[[255, 0, 0, 255]]], dtype=np.uint8)  # opaque blue, BGRA
    assert composite_on_white(pixel)[0, 0].tolist() == [0, 0, 255]


def test_create_detection_visualization_none():
    assert create_detection_visualization(None, [1, 2]) is None


def test_create_detection_visualization_draws_lines(strip_factory):
    strip = strip_factory(60, 20)
    viz = create_detection_visualization(strip, [10, 40], [40])
    assert viz.shape == (20, 60, 3)
    assert tuple(viz[5, 10]) == BREAK_COLOR
    assert tuple(viz[5, 40]) == WRAP_COLOR
    assert viz[5, 25].tolist() == [255, 255, 255]


def test_create_page_previews():
    pages = [np.zeros((8, 6, 4), dtype=np.uint8) for _ in range(2)]
    previews = create_page_previews(pages)
    assert len(previews) == 2
    assert all(p.shape == (8, 6, 3) for p in previews)


def test_create_all_visualizations_none():
    vs = create_all_visualizations(None, None, None)
    assert isinstance(vs, PreviewSet)
    assert vs.strip is None and vs.pages == []


def test_create_all_visualizations(strip_factory):
    strip = strip_factory(60, 20, barlines=[10, 40])
    vs = create_all_visualizations(
        strip,
        DetectionResult(break_points=[10, 40]),
        LayoutResult(wrap_points=[40]),
        [np.zeros((40, 50, 4), dtype=np.uint8)],
    )
    assert vs.strip.shape == (20, 60, 3)
    assert tuple(vs.detection[0, 40]) == WRAP_COLOR
    assert len(vs.pages) == 1
