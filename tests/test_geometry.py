import pytest

from radartrack.geometry import (
    f_max,
    f_min,
    hsv_to_bgr,
    make_rect_safe,
    rect_center_scale,
    remap_rect,
    sum_conf_average,
)
from radartrack.models import ArmorBoundingBox, BoxAndRect, Rect


@pytest.mark.parametrize("x, y", [(3, 5), (5, 3), (-2, 7), (4, 4)])
def test_f_min_f_max_integers(x, y):
    assert f_min(x, y) == min(x, y)
    assert f_max(x, y) == max(x, y)


def test_f_min_floors_result():
    result = f_min(3.7, 8.9)
    assert result <= 3.7
    assert result == int(result)


def test_make_rect_safe_clips():
    assert make_rect_safe(Rect(-5, -5, 20, 20), 10, 10) == Rect(0, 0, 10, 10)


def test_make_rect_safe_outside_is_empty():
    assert make_rect_safe(Rect(50, 50, 5, 5), 10, 10) == Rect()


def test_rect_center_scale_keeps_center():
    rect = Rect(10, 10, 20, 20)
    scaled = rect_center_scale(rect, 10, 10)
    assert scaled.width == 30 and scaled.height == 30
    assert scaled.x + scaled.width / 2 == rect.x + rect.width / 2
    assert scaled.y + scaled.height / 2 == rect.y + rect.height / 2


def test_remap_rect_scales_every_field():
    assert remap_rect(Rect(1, 2, 3, 4), 8, 8) == Rect(8, 16, 24, 32)


def test_sum_conf_average():
    items = [BoxAndRect(armor=ArmorBoundingBox(conf=0.4)) for _ in range(3)]
    assert sum_conf_average(items) == pytest.approx(0.4)


def test_sum_conf_average_empty():
    assert sum_conf_average([]) == 0.0


@pytest.mark.parametrize("h", [0, 40, 100, 200, 255])
def test_hsv_zero_saturation_is_gray(h):
    assert hsv_to_bgr(h, 0, 120) == (120, 120, 120)


def test_hsv_pure_red():
    assert hsv_to_bgr(0, 255, 255) == (0, 0, 255)


def test_hsv_clamps_inputs():
    assert hsv_to_bgr(-5, 300, 300) == hsv_to_bgr(0, 255, 255)


@pytest.mark.parametrize("h", range(0, 256, 17))
def test_hsv_value_is_max_channel(h):
    assert max(hsv_to_bgr(h, 200, 180)) == 180
    assert all(0 <= c <= 180 for c in hsv_to_bgr(h, 200, 180))