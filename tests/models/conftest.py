import pytest
from score_paginator.models import PageGroup


@pytest.fixture
def two_page_groups():
    return [
        PageGroup(number=1, start=0, wrap_points=[100, 250, 300]),
        PageGroup(number=2, start=300, wrap_points=[420]),
    ]
