import numpy as np
import pytest

from nobg.chroma import NothingLeftError, PixelBuffer, content_bbox, trim


def _with_visible(h, w, points):
    px = np.zeros((h, w, 4), dtype=np.uint8)
    for (y, x) in points:
        px[y, x] = (10, 20, 30, 255)
    return PixelBuffer(pixels=px)


def test_content_bbox_spans_visible_pixels():
    buf = _with_visible(6, 8, [(1, 2), (4, 5)])
    assert content_bbox(buf) == (2, 1, 6, 5)
    out = trim(buf)
    assert (out.width, out.height) == (4, 4)
    assert out.alpha[0, 0] == 255 and out.alpha[3, 3] == 255


def test_partial_alpha_counts_as_visible():
    buf = _with_visible(4, 4, [])
    buf.pixels[3, 0, 3] = 1
    assert content_bbox(buf) == (0, 3, 1, 4)


def test_trim_returns_independent_copy():
    buf = _with_visible(3, 3, [(1, 1)])
    out = trim(buf)
    out.pixels[0, 0, 0] = 99
    assert buf.pixels[1, 1, 0] == 10


def test_fully_transparent_raises_nothing_left():
    buf = _with_visible(3, 3, [])
    with pytest.raises(NothingLeftError):
        trim(buf)
