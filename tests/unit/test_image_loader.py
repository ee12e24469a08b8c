from __future__ import annotations

from pathlib import Path

import cv2
import numpy as np
import pytest

from imgsearch import ExactMatcher, Rectangle, ToleranceMatcher
from imgsearch.io import decode_rgba, load_rgba, load_searchable_png


def write_rgba(path: Path, rgba: np.ndarray) -> Path:
    cv2.imwrite(str(path), cv2.cvtColor(rgba, cv2.COLOR_RGBA2BGRA))
    return path


def sample_rgba() -> np.ndarray:
    image = np.zeros((3, 4, 4), dtype=np.uint8)
    image[..., 0] = 200
    image[..., 1] = 100
    image[..., 2] = 50
    image[..., 3] = 255
    image[1, 2] = [1, 2, 3, 128]
    return image


def test_load_rgba_returns_channels_in_rgba_order(tmp_path: Path) -> None:
    path = write_rgba(tmp_path / "sample.png", sample_rgba())

    buffer = load_rgba(path)

    assert (buffer.width, buffer.height) == (4, 3)
    assert buffer.pixel_at(0, 0) == (200, 100, 50, 255)
    assert buffer.pixel_at(2, 1) == (1, 2, 3, 128)


def test_load_rgba_handles_rgb_and_grayscale_files(tmp_path: Path) -> None:
    rgb = sample_rgba()[..., :3]
    cv2.imwrite(str(tmp_path / "rgb.png"), cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR))
    cv2.imwrite(str(tmp_path / "gray.png"), np.full((2, 2), 77, dtype=np.uint8))

    assert load_rgba(tmp_path / "rgb.png").pixel_at(0, 0) == (200, 100, 50, 255)
    assert load_rgba(tmp_path / "gray.png").pixel_at(1, 1) == (77, 77, 77, 255)


def test_load_rgba_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_rgba(tmp_path / "absent.png")


def test_load_rgba_malformed_file(tmp_path: Path) -> None:
    path = tmp_path / "broken.png"
    path.write_bytes(b"\x89PNG not really")

    with pytest.raises(ValueError):
        load_rgba(path)


def test_decode_rgba_from_bytes() -> None:
    ok, encoded = cv2.imencode(".png", cv2.cvtColor(sample_rgba(), cv2.COLOR_RGBA2BGRA))
    assert ok

    buffer = decode_rgba(encoded.tobytes())

    assert buffer.pixel_at(2, 1) == (1, 2, 3, 128)
    with pytest.raises(ValueError):
        decode_rgba(b"")


def test_load_searchable_png_dispatches_on_tolerance(tmp_path: Path) -> None:
    needle = sample_rgba()
    path = write_rgba(tmp_path / "needle.png", needle)
    canvas = np.zeros((10, 10, 4), dtype=np.uint8)
    canvas[5:8, 6:10] = needle

    exact = load_searchable_png(path)
    banded = load_searchable_png(path, tolerance=3)
    haystack = load_rgba(write_rgba(tmp_path / "haystack.png", canvas))

    assert isinstance(exact, ExactMatcher)
    assert isinstance(banded, ToleranceMatcher)
    assert exact.search_in(haystack) == Rectangle(6, 5, 10, 8)
    assert banded.search_in(haystack) == Rectangle(6, 5, 10, 8)
