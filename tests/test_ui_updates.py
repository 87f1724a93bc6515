"""Tests for the preview UI callbacks and session management."""

import numpy as np
import pytest

from score_paginator.app_state import (
    from_upload,
    get_strip_by_id,
    load_strip,
    register_strip,
)
from score_paginator.cache import cached_detection, cached_layout, clear_all_caches
from score_paginator.file_manager import SessionFileManager
from score_paginator.ui_updates import (
    _file_managers,
    cleanup_cache,
    cleanup_session,
    get_or_create_file_manager,
    load_strip_file,
    load_uploaded_strip,
    update_detection_view,
    update_pages_view,
)


@pytest.fixture(autouse=True)
def clean_registry(tmp_path, monkeypatch):
    """Isolate session files and caches between tests."""
    monkeypatch.setenv("GRADIO_TEMP_DIR", str(tmp_path))
    _file_managers.clear()
    clear_all_caches()
    yield
    cleanup_cache()
    clear_all_caches()


@pytest.fixture
def layout_strip_id(strip_factory):
    return register_strip(strip_factory(3200, 40, barlines=[100, 1050, 2100, 3100]))


def test_register_strip_id_is_stable(strip_factory):
    strip = strip_factory(50, 10, barlines=[5])
    first = register_strip(strip)
    assert register_strip(strip.copy()) == first
    assert get_strip_by_id(first) is not None
    assert get_strip_by_id("unknown") is None
    assert get_strip_by_id(None) is None


def test_load_strip_missing_file(tmp_path):
    assert load_strip(str(tmp_path / "nope.png")) is None


def test_from_upload_swaps_channels():
    rgba = np.array([[[10, 20, 30, 40]]], dtype=np.uint8)
    assert from_upload(rgba)[0, 0].tolist() == [30, 20, 10, 40]
    rgb = np.array([[[10, 20, 30]]], dtype=np.uint8)
    assert from_upload(rgb)[0, 0].tolist() == [30, 20, 10, 255]


def test_cached_stages_reuse_results(layout_strip_id):
    first = cached_detection(layout_strip_id, 127, 50, 5)
    assert cached_detection(layout_strip_id, 127, 50, 5) is first
    assert first.break_points == [100, 1050, 2100, 3100]

    layout = cached_layout(layout_strip_id, 127, 50, 5, 1100, 10)
    assert layout.wrap_points == [1050, 2100, 3100]


def test_load_uploaded_strip_none():
    assert load_uploaded_strip(None) == (None, None)


def test_update_detection_view(layout_strip_id):
    overlay, count = update_detection_view(layout_strip_id, 127)
    assert overlay.shape == (40, 3200, 3)
    assert count.startswith("4 measures detected")


def test_update_detection_view_without_strip():
    assert update_detection_view(None, 127) == (None, "No strip loaded")


def test_update_pages_view_writes_pages(layout_strip_id):
    overlay, previews, paths, status = update_pages_view(
        layout_strip_id, "session-x", 127, 1100, 2
    )
    assert overlay.shape == (40, 3200, 3)
    assert len(previews) == 2
    assert previews[0].shape == (80, 1100, 3)
    assert [p.rsplit("/", 1)[-1] for p in paths] == ["page_1.png", "page_2.png"]
    assert status.startswith("3 rows on 2 page(s)")


def test_update_pages_view_overflow_clears_pages(layout_strip_id):
    update_pages_view(layout_strip_id, "session-y", 127, 1100, 2)
    _, previews, paths, status = update_pages_view(
        layout_strip_id, "session-y", 127, 900, 2
    )
    assert previews == [] and paths == []
    assert "too big" in status
    manager = get_or_create_file_manager("session-y")
    assert list(manager.session_dir.glob("page_*.png")) == []


def test_get_or_create_returns_consistent_manager():
    assert get_or_create_file_manager("s1") is get_or_create_file_manager("s1")
    assert get_or_create_file_manager("s1") is not get_or_create_file_manager("s2")


def test_cleanup_session_removes_from_registry():
    get_or_create_file_manager("s3")
    cleanup_session("s3")
    assert "s3" not in _file_managers
    cleanup_session("never-existed")


def test_cleanup_cache_with_specific_session():
    get_or_create_file_manager("keep-this")
    get_or_create_file_manager("remove-this")
    cleanup_cache(session_id="remove-this")
    assert "keep-this" in _file_managers
    assert "remove-this" not in _file_managers


def test_file_manager_replaces_stale_pages(tmp_path):
    manager = SessionFileManager("pages")
    pages = [np.zeros((4, 4, 4), dtype=np.uint8) for _ in range(3)]
    assert len(manager.write_pages(pages)) == 3
    manager.write_pages(pages[:1])
    assert sorted(p.name for p in manager.session_dir.glob("*.png")) == ["page_1.png"]
    manager.cleanup_all()
    assert not manager.session_dir.exists()


def test_load_strip_file_registers_strip(paginated_strip_file):
    strip_id, strip_view = load_strip_file(str(paginated_strip_file))
    assert get_strip_by_id(strip_id).shape == (40, 3200, 4)
    assert strip_view.shape == (40, 3200, 3)

    overlay, count = update_detection_view(strip_id, 127)
    assert count.startswith("4 measures detected")


def test_load_strip_file_unreadable(tmp_path):
    assert load_strip_file(None) == (None, None)
    assert load_strip_file(str(tmp_path / "nope.png")) == (None, None)


def test_update_pages_view_overflow_keeps_overlay(layout_strip_id):
    overlay, previews, _, _ = update_pages_view(
        layout_strip_id, "session-z", 127, 900, 2
    )
    assert overlay.shape == (40, 3200, 3)
    assert previews == []
