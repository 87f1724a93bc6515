import cv2
import numpy as np
import pytest


def make_strip(width, height, barlines=(), stroke=1, alpha=255):
    """Transparent BGRA strip with full-height black barlines at ``barlines``."""
    strip = np.zeros((height, width, 4), dtype=np.uint8)
    for x in barlines:
        strip[:, x : x + stroke] = (0, 0, 0, alpha)
    return strip


def write_png(path, image):
    assert cv2.imwrite(str(path), image)
    return path


@pytest.fixture
def strip_factory():
    return make_strip


@pytest.fixture
def gradient_strip():
    # 40×3200 opaque strip whose blue channel encodes the column (mod 256)
    # and whose green channel encodes the column // 256.
    width, height = 3200, 40
    cols = np.arange(width)
    strip = np.zeros((height, width, 4), dtype=np.uint8)
    strip[:, :, 0] = cols % 256
    strip[:, :, 1] = cols // 256
    strip[:, :, 3] = 255
    return strip


@pytest.fixture
def paginated_strip_file(tmp_path):
    # Barlines chosen so the default 1100 px layout gives 3 rows on 1 page
    strip = make_strip(3200, 40, barlines=[100, 1050, 2100, 3100])
    return write_png(tmp_path / "score.png", strip)


@pytest.fixture
def strip_set_factory(tmp_path):
    """Create a numbered strip directory from a list of (name, width, height)."""

    def _make(name, members, barlines=(20,)):
        directory = tmp_path / name
        directory.mkdir()
        for file_name, width, height in members:
            write_png(directory / file_name, make_strip(width, height, barlines))
        return directory

    return _make
