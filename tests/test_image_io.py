import cv2
import numpy as np
import pytest

from score_paginator.exceptions import ImageReadError
from score_paginator.image_io import (
    carries_alpha,
    intensity_channel,
    load_image,
    pixel_intensity_at,
    save_png,
    to_bgra,
    transparent_canvas,
)


def test_to_bgra_from_gray_and_bgr():
    gray = np.full((4, 5), 200, dtype=np.uint8)
    bgr = np.zeros((4, 5, 3), dtype=np.uint8)
    for img in (gray, bgr):
        out = to_bgra(img)
        assert out.shape == (4, 5, 4)
        assert out.dtype == np.uint8
        assert np.all(out[:, :, 3] == 255)


def test_to_bgra_keeps_alpha():
    img = np.zeros((2, 2, 4), dtype=np.uint8)
    img[0, 0] = (1, 2, 3, 4)
    assert to_bgra(img)[0, 0].tolist() == [1, 2, 3, 4]


def test_to_bgra_reduces_16_bit():
    img = np.full((2, 2, 4), 0xFFFF, dtype=np.uint16)
    out = to_bgra(img)
    assert out.dtype == np.uint8
    assert np.all(out == 255)


def test_load_image_missing_file(tmp_path):
    with pytest.raises(ImageReadError):
        load_image(tmp_path / "nope.png")


def test_save_and_load_preserves_alpha(tmp_path, strip_factory):
    strip = strip_factory(30, 10, barlines=[5], alpha=128)
    path = save_png(tmp_path / "s.png", strip)
    loaded = load_image(path)
    assert loaded.shape == (10, 30, 4)
    assert np.array_equal(loaded, strip)


def test_load_opaque_png_gets_alpha(tmp_path):
    path = tmp_path / "bgr.png"
    cv2.imwrite(str(path), np.full((6, 7, 3), 255, dtype=np.uint8))
    loaded = load_image(path)
    assert loaded.shape == (6, 7, 4)
    assert np.all(loaded[:, :, 3] == 255)


def test_transparent_canvas():
    canvas = transparent_canvas(8, 3)
    assert canvas.shape == (3, 8, 4)
    assert not canvas.any()


def test_intensity_channel_uses_alpha(strip_factory):
    strip = strip_factory(20, 10, barlines=[4], alpha=200)
    intensity = intensity_channel(strip)
    assert intensity[5, 4] == 200
    assert intensity[5, 0] == 0


def test_intensity_channel_uses_darkness_for_opaque_images():
    strip = np.full((10, 20, 4), 255, dtype=np.uint8)  # opaque white
    strip[:, 7, :3] = 0  # black line
    intensity = intensity_channel(strip)
    assert intensity[3, 7] == 255
    assert intensity[3, 0] == 0


def test_pixel_intensity_at_alpha_strip(strip_factory):
    strip = strip_factory(20, 10, barlines=[4], alpha=90)
    assert carries_alpha(strip)
    assert pixel_intensity_at(strip, 4, 2) == 90
    assert pixel_intensity_at(strip, 5, 2, uses_alpha=True) == 0


@pytest.mark.parametrize("opaque", [True, False])
def test_pixel_intensity_at_matches_channel_everywhere(opaque):
    rng = np.random.default_rng(11)
    image = rng.integers(0, 256, size=(8, 2500, 4), dtype=np.uint8)
    if opaque:
        image[:, :, 3] = 255

    uses_alpha = carries_alpha(image)
    assert uses_alpha == (not opaque)
    channel = intensity_channel(image)
    read = np.array(
        [
            [pixel_intensity_at(image, x, y, uses_alpha) for x in range(image.shape[1])]
            for y in range(image.shape[0])
        ],
        dtype=np.uint8,
    )
    assert np.array_equal(read, channel)


def test_load_image_rejects_unsupported_layout(tmp_path, monkeypatch):
    path = tmp_path / "odd.png"
    path.write_bytes(b"")
    monkeypatch.setattr(
        cv2, "imread", lambda *args: np.zeros((4, 4, 5), dtype=np.uint8)
    )
    with pytest.raises(ImageReadError):
        load_image(path)
