import pytest
from pydantic import ValidationError
from score_paginator.models import NumberedStrip, PageGroup


def test_page_group_row_spans(two_page_groups):
    first, second = two_page_groups
    assert first.row_spans == [(0, 100), (100, 250), (250, 300)]
    assert second.row_spans == [(300, 420)]


def test_page_group_row_widths(two_page_groups):
    assert two_page_groups[0].row_widths == [100, 150, 50]
    assert two_page_groups[1].row_widths == [120]


def test_page_group_empty():
    assert PageGroup(number=1).row_widths == []


@pytest.mark.parametrize(
    "kwargs",
    [
        {"number": 0},
        {"number": 1, "start": -1},
    ],
)
def test_page_group_validation_raises(kwargs):
    with pytest.raises(ValidationError):
        PageGroup(**kwargs)


def test_numbered_strip_rejects_negative_number():
    with pytest.raises(ValidationError):
        NumberedStrip(number=-1, path="x.png")
