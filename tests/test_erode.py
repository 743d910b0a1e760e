import numpy as np

from nobg.chroma import PixelBuffer, describe_key, erode_fringe

GREEN_KEY = describe_key(0, 255, 0)


def _transparent(h, w):
    return np.zeros((h, w, 4), dtype=np.uint8)


def test_partial_pixel_next_to_transparency_is_faded_and_despilled():
    px = _transparent(5, 5)
    px[2, 2] = (200, 255, 100, 200)
    buf = PixelBuffer(pixels=px)
    eroded = erode_fringe(buf, GREEN_KEY)
    assert eroded == 1
    assert buf.alpha[2, 2] == 60
    assert buf.pixels[2, 2, 1] == 200


def test_opaque_spill_free_subject_is_kept():
    px = _transparent(5, 5)
    px[2, 2] = (255, 0, 0, 255)
    buf = PixelBuffer(pixels=px)
    assert erode_fringe(buf, GREEN_KEY) == 0
    assert buf.alpha[2, 2] == 255


def test_opaque_pixel_with_spill_is_eroded():
    px = _transparent(3, 3)
    px[1, 1] = (90, 180, 60, 255)
    buf = PixelBuffer(pixels=px)
    assert erode_fringe(buf, GREEN_KEY) == 1
    assert buf.alpha[1, 1] == 77
    assert buf.pixels[1, 1, 1] == 90


def test_border_pixels_skipped_by_default():
    px = _transparent(3, 3)
    px[0, 1] = (10, 200, 10, 100)
    buf = PixelBuffer(pixels=px)
    assert erode_fringe(buf, GREEN_KEY) == 0
    assert buf.alpha[0, 1] == 100
    assert buf.pixels[0, 1, 1] == 200


def test_border_pixels_eroded_with_clamped_neighbours():
    px = _transparent(3, 3)
    px[0, 1] = (10, 200, 10, 100)
    buf = PixelBuffer(pixels=px)
    assert erode_fringe(buf, GREEN_KEY, erode_borders=True) == 1
    assert buf.alpha[0, 1] == 30
    assert buf.pixels[0, 1, 1] == 10


def test_neighbours_read_from_snapshot_not_cascading():
    px = np.zeros((5, 5, 4), dtype=np.uint8)
    px[:, :] = (120, 160, 110, 200)
    px[:, 0, 3] = 0
    buf = PixelBuffer(pixels=px)
    eroded = erode_fringe(buf, GREEN_KEY)
    # only interior pixels in column 1 touch the transparent column
    assert eroded == 3
    assert (buf.alpha[1:4, 1] == 60).all()
    assert (buf.alpha[1:4, 2] == 200).all()
    assert buf.alpha[0, 1] == 200 and buf.alpha[4, 1] == 200


def test_erosion_never_raises_alpha_and_only_touches_fringe():
    rng = np.random.default_rng(7)
    px = rng.integers(0, 256, size=(12, 15, 4), dtype=np.uint8)
    px[:, :, 3][rng.random((12, 15)) < 0.3] = 0
    before = px.copy()
    buf = PixelBuffer(pixels=px)
    erode_fringe(buf, GREEN_KEY)
    after = buf.pixels
    assert (after[:, :, 3] <= before[:, :, 3]).all()

    changed = (after != before).any(axis=2)
    alpha0 = before[:, :, 3] == 0
    for y, x in zip(*np.nonzero(changed)):
        assert 0 < y < 11 and 0 < x < 14
        assert alpha0[y - 1, x] or alpha0[y + 1, x] or alpha0[y, x - 1] or alpha0[y, x + 1]


def test_tiny_buffers_have_no_interior():
    px = _transparent(2, 2)
    px[0, 0] = (0, 255, 0, 128)
    buf = PixelBuffer(pixels=px)
    assert erode_fringe(buf, GREEN_KEY) == 0


def test_banded_erosion_matches_single_pass():
    rng = np.random.default_rng(11)
    px = rng.integers(0, 256, size=(19, 13, 4), dtype=np.uint8)
    px[rng.random((19, 13)) < 0.3, 3] = 0
    for erode_borders in (False, True):
        whole = PixelBuffer(pixels=px.copy())
        expected = erode_fringe(whole, GREEN_KEY, erode_borders=erode_borders, band_rows=19)
        for rows in (1, 2, 5):
            banded = PixelBuffer(pixels=px.copy())
            assert erode_fringe(banded, GREEN_KEY, erode_borders=erode_borders, band_rows=rows) == expected
            assert (banded.pixels == whole.pixels).all()
