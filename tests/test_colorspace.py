import numpy as np

from nobg.chroma.colorspace import hue_distance, hue_distance_array, rgb_to_hsv, rgb_to_hsv_array


def test_hue_distance_wraps_around():
    assert hue_distance(10, 350) == 20
    assert hue_distance(0, 180) == 180
    assert hue_distance(90, 300) == 150


def test_hue_distance_symmetric_and_zero_on_self():
    for a in range(0, 360, 15):
        assert hue_distance(a, a) == 0
        for b in range(0, 360, 45):
            assert hue_distance(a, b) == hue_distance(b, a)
            assert 0 <= hue_distance(a, b) <= 180


def test_rgb_to_hsv_achromatic_has_zero_saturation():
    hsv = rgb_to_hsv(128, 128, 128)
    assert hsv.saturation == 0
    assert hsv.hue == 0
    assert rgb_to_hsv(0, 0, 0).value == 0


def test_rgb_to_hsv_primaries():
    green = rgb_to_hsv(0, 255, 0)
    assert green.hue == 120
    assert green.saturation == 100
    assert green.value == 100
    assert rgb_to_hsv(255, 0, 0).hue == 0
    assert rgb_to_hsv(0, 0, 255).hue == 240
    # R and B tie at max: hue is taken from the red branch
    assert rgb_to_hsv(255, 0, 255).hue == 300


def test_array_conversion_matches_scalar():
    colors = [(0, 255, 0), (255, 128, 0), (12, 34, 200), (200, 200, 200), (255, 0, 128), (90, 255, 30)]
    arr = np.array(colors, dtype=np.uint8).reshape(2, 3, 3)
    hue, sat, val = rgb_to_hsv_array(arr)
    for i, (r, g, b) in enumerate(colors):
        expected = rgb_to_hsv(r, g, b)
        y, x = divmod(i, 3)
        assert abs(hue[y, x] - expected.hue) < 1e-3
        assert abs(sat[y, x] - expected.saturation) < 1e-3
        assert abs(val[y, x] - expected.value) < 1e-3


def test_hue_distance_array_matches_scalar():
    hues = np.array([0.0, 10.0, 200.0, 350.0])
    out = hue_distance_array(hues, 120.0)
    assert out.tolist() == [hue_distance(h, 120.0) for h in hues]
